"""Core transcoding logic (pure Python, no Discord code)."""

from .registry import available_formats, compress, decompress, get_codec
from .resolver import (
    archive_entry_name,
    compression_output_paths,
    parse_compression_format,
    parse_decompression_format,
    resolve_for_decompression,
    resolve_output_paths,
)

__all__ = [
    "available_formats",
    "compress",
    "decompress",
    "get_codec",
    "archive_entry_name",
    "compression_output_paths",
    "parse_compression_format",
    "parse_decompression_format",
    "resolve_for_decompression",
    "resolve_output_paths",
]
