"""Common types and constants."""

from .constants import STATUS_COLORS
from .types import (
    AttachmentSource,
    CompressionFormat,
    DecompressionFormat,
    Responder,
    ResponsePayload,
    TranscodeResult,
)

__all__ = [
    "STATUS_COLORS",
    "AttachmentSource",
    "CompressionFormat",
    "DecompressionFormat",
    "Responder",
    "ResponsePayload",
    "TranscodeResult",
]
