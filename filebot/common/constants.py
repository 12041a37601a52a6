"""Constants used throughout the application."""

# Embed colors for Discord responses
STATUS_COLORS = {
    "success": 0x2ECC71,
    "failed": 0xE74C3C,
}

# Declared-size limit for compression requests (inclusive)
DEFAULT_COMPRESS_MAX_SIZE = 10 * 1024 * 1024

# Decompression is unbounded unless configured
DEFAULT_DECOMPRESS_MAX_SIZE = None

# Worker threads available for codec work
DEFAULT_CODEC_WORKERS = 4

DEFAULT_COMMAND_PREFIX = "!"

# Scratch file operation tags
COMPRESS_TAG = "compressed"
DECOMPRESS_TAG = "decompressed"

# Fallback name when nothing usable is left of the source filename
FALLBACK_OUTPUT_NAME = "decompressed_file"

# Codec tuning
GZIP_LEVEL = 6
BZIP2_LEVEL = 9
ZSTD_LEVEL = 3
ZIP_ENTRY_MODE = 0o755
TAR_ENTRY_MODE = 0o644
ZIP_EPOCH = (1980, 1, 1, 0, 0, 0)
