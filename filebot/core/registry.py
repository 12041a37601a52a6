"""Codec registry: uniform compress/decompress dispatch over a closed set of formats."""

from __future__ import annotations

import io
from typing import BinaryIO, Dict, List, Optional, Tuple, Union

from ..common.types import CompressionFormat, DecompressionFormat
from ..utils import AmbiguousFormat, UnknownFormat
from .adapters import (
    Bz2Adapter,
    CodecAdapter,
    Lz4Adapter,
    TarGzAdapter,
    ZipAdapter,
    ZstAdapter,
)

FormatLike = Union[CompressionFormat, DecompressionFormat, str]

# Bz2 is the raw single-stream variant: no filename is recovered from it.
CODECS: Dict[CompressionFormat, CodecAdapter] = {
    CompressionFormat.ZIP: ZipAdapter(),
    CompressionFormat.TAR_GZ: TarGzAdapter(),
    CompressionFormat.BZ2: Bz2Adapter(),
    CompressionFormat.ZST: ZstAdapter(),
    CompressionFormat.LZ4: Lz4Adapter(),
}


def available_formats() -> List[CompressionFormat]:
    """Return every format the registry can handle."""
    return list(CODECS)


def get_codec(fmt: FormatLike) -> CodecAdapter:
    """
    Look up the adapter for a format.

    Args:
        fmt: Concrete format, or its string value.

    Returns:
        Codec adapter.

    Raises:
        AmbiguousFormat: If ``fmt`` is the auto-detect placeholder.
        UnknownFormat: If ``fmt`` names no registered format.
    """
    if isinstance(fmt, DecompressionFormat):
        concrete = fmt.concrete()
        if concrete is None:
            raise AmbiguousFormat("Format must be resolved before decoding.")
        fmt = concrete
    elif not isinstance(fmt, CompressionFormat):
        if str(fmt).lower() == DecompressionFormat.AUTO.value:
            raise AmbiguousFormat("Format must be resolved before decoding.")
        try:
            fmt = CompressionFormat(str(fmt).lower())
        except ValueError as exc:
            raise UnknownFormat(f"Unsupported format: {fmt}") from exc
    return CODECS[fmt]


def compress_to(fmt: FormatLike, payload_name: str, data: bytes, dest: BinaryIO) -> None:
    """Compress ``data`` into a writable file object."""
    get_codec(fmt).write(payload_name, data, dest)


def decompress_to(fmt: FormatLike, data: bytes, dest: BinaryIO) -> Optional[str]:
    """Decompress ``data`` into a writable file object and return the stored filename."""
    return get_codec(fmt).read(io.BytesIO(data), dest)


def compress(fmt: FormatLike, payload_name: str, data: bytes) -> bytes:
    """
    Compress a payload in memory.

    Args:
        fmt: Target format.
        payload_name: Entry name for container formats. Adapters sanitize it;
            zip also strips every extension.
        data: Payload bytes.

    Returns:
        Compressed bytes.
    """
    buffer = io.BytesIO()
    compress_to(fmt, payload_name, data, buffer)
    return buffer.getvalue()


def decompress(fmt: FormatLike, data: bytes) -> Tuple[bytes, Optional[str]]:
    """
    Decompress a payload in memory.

    Args:
        fmt: Source format.
        data: Compressed bytes.

    Returns:
        Tuple of (decompressed bytes, recovered filename or None).
    """
    buffer = io.BytesIO()
    original_name = decompress_to(fmt, data, buffer)
    return buffer.getvalue(), original_name
