"""Response payloads describing transcoder outcomes."""

from __future__ import annotations

from ..common.constants import STATUS_COLORS
from ..common.types import ResponsePayload, TranscodeResult
from ..utils import CodecFailed, CodecPanic, TranscodeError, format_bytes


OPERATION_LABELS = {
    "compress": ("Compression", "Original", "Compressed", "Saved"),
    "decompress": ("Decompression", "Compressed", "Extracted", "Expansion"),
}


def build_success_payload(result: TranscodeResult) -> ResponsePayload:
    """
    Describe a successful transcode and attach its output.

    Args:
        result: Transcode result.

    Returns:
        Response payload carrying the output bytes.
    """
    noun, source_label, output_label, ratio_label = OPERATION_LABELS[result.operation]
    description = (
        f"**{source_label}:** `{result.source_filename}` ({format_bytes(result.original_size)})\n"
        f"**{output_label}:** `{result.filename}` ({format_bytes(result.output_size)})\n"
        f"**{ratio_label}:** {result.ratio:.1f}%"
    )
    return ResponsePayload(
        title=f"✅ {noun} Complete",
        description=description,
        color=STATUS_COLORS["success"],
        footer=f"Format: {result.format.value}",
        data=result.data,
        filename=result.filename,
    )


def build_failure_payload(operation: str, error: TranscodeError) -> ResponsePayload:
    """
    Describe a failed request. No attachment is ever included.

    Codec failures and codec crashes read the same to the user.
    """
    noun = OPERATION_LABELS[operation][0]
    if isinstance(error, (CodecFailed, CodecPanic)):
        title = f"{noun} Failed"
    else:
        title = error.title
    return ResponsePayload(
        title=f"❌ {title}",
        description=str(error) or f"{noun} failed.",
        color=STATUS_COLORS["failed"],
    )
