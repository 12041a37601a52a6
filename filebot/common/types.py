"""Type definitions and data models."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Awaitable, Callable, Optional, Protocol


class CompressionFormat(str, Enum):
    """Concrete formats the codec registry can produce and read."""

    ZIP = "zip"
    TAR_GZ = "tar.gz"
    BZ2 = "bz2"
    ZST = "zst"
    LZ4 = "lz4"

    @property
    def extension(self) -> str:
        return f".{self.value}"


class DecompressionFormat(str, Enum):
    """Formats a user may request for decompression."""

    ZIP = "zip"
    TAR_GZ = "tar.gz"
    BZ2 = "bz2"
    ZST = "zst"
    LZ4 = "lz4"
    AUTO = "auto"

    def concrete(self) -> Optional[CompressionFormat]:
        """Return the matching concrete format, or None for AUTO."""
        if self is DecompressionFormat.AUTO:
            return None
        return CompressionFormat(self.value)


@dataclass(frozen=True)
class TranscodeResult:
    """Outcome of a successful compress or decompress request."""

    operation: str
    format: CompressionFormat
    source_filename: str
    data: bytes
    filename: str
    original_size: int
    output_size: int

    @property
    def ratio(self) -> float:
        """Percentage saved (compression) or expanded (decompression)."""
        if self.original_size == 0:
            return 0.0
        if self.operation == "compress":
            delta = self.original_size - self.output_size
        else:
            delta = self.output_size - self.original_size
        return max(0.0, delta / self.original_size * 100)


@dataclass(frozen=True)
class ResponsePayload:
    """Message handed to the command layer for delivery."""

    title: str
    description: str
    color: int
    footer: Optional[str] = None
    data: Optional[bytes] = None
    filename: Optional[str] = None

    @property
    def has_attachment(self) -> bool:
        return self.data is not None and self.filename is not None


class AttachmentSource(Protocol):
    """A user upload the transcoder can size-check and download."""

    filename: str
    size: int

    async def download(self) -> bytes:
        ...


Responder = Callable[[ResponsePayload], Awaitable[None]]
