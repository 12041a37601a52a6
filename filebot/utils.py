"""Shared utilities for the file utility bot."""

from __future__ import annotations

import logging
import os
import re
from pathlib import PurePosixPath, PureWindowsPath


class FileBotError(Exception):
    """Base exception for file bot errors."""


class ConfigError(FileBotError):
    """Raised when configuration is invalid or missing."""


class DownloadError(FileBotError):
    """Raised when an attachment cannot be fetched."""


class CodecError(FileBotError):
    """Raised when a codec cannot encode or decode a payload."""

    def __init__(self, format_name: str, message: str) -> None:
        super().__init__(f"{format_name}: {message}")
        self.format_name = format_name
        self.message = message


class TranscodeError(FileBotError):
    """Base class for failures reported by the transcoder."""

    title = "Transcoding Failed"


class PayloadTooLarge(TranscodeError):
    """Raised when the declared attachment size exceeds the limit."""

    title = "File Too Large"

    def __init__(self, size: int, limit: int) -> None:
        super().__init__(
            f"File is {format_bytes(size)}; the limit is {format_bytes(limit)}."
        )
        self.size = size
        self.limit = limit


class DownloadFailed(TranscodeError):
    """Raised when the source payload could not be downloaded."""

    title = "Download Failed"


class UnknownFormat(TranscodeError):
    """Raised when a user-supplied format name is not recognised."""

    title = "Unknown Format"


class AmbiguousFormat(TranscodeError):
    """Raised when no compression format can be detected from a filename."""

    title = "Format Detection Failed"


class CodecFailed(TranscodeError):
    """Raised when the payload is not valid data for the chosen format."""


class CodecPanic(TranscodeError):
    """Raised when the codec worker fails unexpectedly."""


class ScratchUnavailable(TranscodeError):
    """Raised when no scratch file could be created for a request."""

    title = "Workspace Error"


class ReadBackFailed(TranscodeError):
    """Raised when the transcoded scratch file cannot be read back."""

    title = "File Read Error"


def setup_logging(log_level: int = logging.INFO) -> None:
    """
    Configure global logging.

    Args:
        log_level: Logging verbosity level.
    """
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
    )


def format_bytes(size: int) -> str:
    """
    Convert bytes to a human-readable string.

    Args:
        size: Size in bytes.

    Returns:
        Human-readable size string.
    """
    if size < 0:
        raise ValueError("Size must be non-negative.")

    units = ["B", "KB", "MB", "GB", "TB", "PB"]
    value = float(size)
    for unit in units:
        if value < 1024 or unit == units[-1]:
            if unit == "B":
                return f"{int(value)} {unit}"
            return f"{value:.2f} {unit}"
        value /= 1024
    return f"{value:.2f} PB"


def base_name(name: str) -> str:
    """Return the final path component, accepting both separator styles."""
    return PureWindowsPath(PurePosixPath(name).name).name


def sanitize_filename(name: str) -> str:
    """
    Sanitize filename to remove unsafe characters.

    Args:
        name: Original filename.

    Returns:
        Sanitized filename.
    """
    name = base_name(name.strip()).replace(os.sep, "_").replace("/", "_")
    name = re.sub(r"[^A-Za-z0-9._-]+", "_", name)
    if name in {"", ".", ".."}:
        return "file"
    return name


def strip_all_extensions(filename: str) -> str:
    """
    Strip every chained extension from a filename.

    ``report.tar.gz`` becomes ``report``. A leading dot is kept so hidden
    files such as ``.bashrc`` keep their name.

    Args:
        filename: Filename, optionally with a directory part.

    Returns:
        Filename without extensions.
    """
    stem = base_name(filename)
    while True:
        new_stem = PurePosixPath(stem).stem
        if new_stem == stem or not new_stem:
            return stem
        stem = new_stem
