"""Format resolution and output naming from filenames."""

from __future__ import annotations

from pathlib import PurePosixPath
from typing import Optional, Tuple, Union

from ..common.constants import COMPRESS_TAG, DECOMPRESS_TAG, FALLBACK_OUTPUT_NAME
from ..common.types import CompressionFormat, DecompressionFormat
from ..utils import AmbiguousFormat, UnknownFormat, base_name, sanitize_filename, strip_all_extensions

# Checked in order; the first matching suffix wins.
SUFFIX_RULES = (
    ((".zip",), CompressionFormat.ZIP),
    ((".tar.gz", ".tgz"), CompressionFormat.TAR_GZ),
    ((".bz2",), CompressionFormat.BZ2),
    ((".zst",), CompressionFormat.ZST),
    ((".lz4",), CompressionFormat.LZ4),
)

FORMAT_ALIASES = {
    "zip": CompressionFormat.ZIP,
    "tar.gz": CompressionFormat.TAR_GZ,
    "targz": CompressionFormat.TAR_GZ,
    "tgz": CompressionFormat.TAR_GZ,
    "bz2": CompressionFormat.BZ2,
    "bzip2": CompressionFormat.BZ2,
    "zst": CompressionFormat.ZST,
    "zstd": CompressionFormat.ZST,
    "lz4": CompressionFormat.LZ4,
}


def detect_format(filename: str) -> Optional[CompressionFormat]:
    """Return the format implied by a filename suffix, or None."""
    lowered = filename.lower()
    for suffixes, fmt in SUFFIX_RULES:
        if lowered.endswith(suffixes):
            return fmt
    return None


def resolve_for_decompression(
    filename: str,
    requested: Union[DecompressionFormat, CompressionFormat, None] = DecompressionFormat.AUTO,
) -> CompressionFormat:
    """
    Decide which codec decodes a file.

    An explicit request always wins. Otherwise the filename suffix is
    inspected; file contents are never sniffed.

    Args:
        filename: Name of the uploaded file.
        requested: User-chosen format, AUTO or None to detect.

    Returns:
        Concrete compression format.

    Raises:
        AmbiguousFormat: If no suffix rule matches.
    """
    if isinstance(requested, CompressionFormat):
        return requested
    if requested is not None:
        concrete = requested.concrete()
        if concrete is not None:
            return concrete

    detected = detect_format(filename)
    if detected is None:
        raise AmbiguousFormat(
            f"Could not detect compression format from filename `{filename}`."
        )
    return detected


def resolve_output_paths(filename: str, fmt: CompressionFormat) -> Tuple[str, str]:
    """
    Derive the decompressed output name and its scratch name.

    Args:
        filename: Name of the compressed upload.
        fmt: Resolved format.

    Returns:
        Tuple of (output filename, scratch file name).
    """
    stem = PurePosixPath(base_name(filename)).stem
    if fmt is CompressionFormat.TAR_GZ and stem.lower().endswith(".tar"):
        stem = stem[: -len(".tar")]
    output_filename = stem or FALLBACK_OUTPUT_NAME
    return output_filename, f"temp_{DECOMPRESS_TAG}_{output_filename}"


def compression_output_paths(filename: str, fmt: CompressionFormat) -> Tuple[str, str]:
    """
    Derive the compressed output name and its scratch name.

    Only the last extension is replaced, so ``notes.txt`` becomes
    ``notes.zip`` and ``dump.tar`` becomes ``dump.tar.gz``.
    """
    stem = PurePosixPath(base_name(filename)).stem or "file"
    output_filename = f"{stem}{fmt.extension}"
    return output_filename, f"temp_{COMPRESS_TAG}_{output_filename}"


def archive_entry_name(filename: str, fmt: CompressionFormat) -> str:
    """
    Name under which a payload is stored inside a container format.

    Zip entries carry no extensions at all; tar entries keep the sanitized
    basename.
    """
    if fmt is CompressionFormat.ZIP:
        return sanitize_filename(strip_all_extensions(filename))
    return sanitize_filename(filename)


def parse_compression_format(text: str) -> CompressionFormat:
    """
    Parse a user-typed compression format name.

    Raises:
        UnknownFormat: If the name is not recognised.
    """
    key = text.strip().lower().lstrip(".")
    try:
        return FORMAT_ALIASES[key]
    except KeyError as exc:
        raise UnknownFormat(f"Unknown format `{text}`.") from exc


def parse_decompression_format(text: Optional[str]) -> DecompressionFormat:
    """Parse a user-typed decompression format; empty input means auto."""
    if text is None or not text.strip() or text.strip().lower() == DecompressionFormat.AUTO.value:
        return DecompressionFormat.AUTO
    return DecompressionFormat(parse_compression_format(text).value)
