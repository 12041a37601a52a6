"""Request-scoped scratch files for codec output."""

from __future__ import annotations

import logging
import os
import secrets
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional, Union

from ..utils import ScratchUnavailable, sanitize_filename


logger = logging.getLogger(__name__)

MAX_ALLOCATION_ATTEMPTS = 8


class ScratchWorkspace:
    """Allocates uniquely named scratch files and always removes them."""

    def __init__(self, base_dir: Optional[Union[str, Path]] = None) -> None:
        self.base_dir = Path(base_dir) if base_dir else Path(tempfile.gettempdir())

    def _allocate(self, scratch_name: str) -> Path:
        safe_name = sanitize_filename(scratch_name)
        try:
            self.base_dir.mkdir(parents=True, exist_ok=True, mode=0o700)
            for _ in range(MAX_ALLOCATION_ATTEMPTS):
                token = secrets.token_hex(4)
                path = self.base_dir / f"{token}_{safe_name}"
                try:
                    fd = os.open(path, os.O_CREAT | os.O_EXCL | os.O_WRONLY, 0o600)
                except FileExistsError:
                    continue
                os.close(fd)
                return path
        except OSError as exc:
            raise ScratchUnavailable(f"Could not create a scratch file: {exc}") from exc
        raise ScratchUnavailable(f"Could not allocate a scratch file for {scratch_name}.")

    @staticmethod
    def release(path: Path) -> bool:
        """
        Remove a scratch file.

        Failures are logged and reported through the return value only.

        Returns:
            True if the file is gone afterwards.
        """
        try:
            path.unlink()
        except FileNotFoundError:
            return True
        except OSError as exc:
            logger.warning("Scratch cleanup failed for %s: %s", path, exc)
            return False
        return True

    @contextmanager
    def acquire(self, scratch_name: str) -> Iterator[Path]:
        """
        Create an empty scratch file and remove it when the block exits.

        Args:
            scratch_name: Operation-tagged name, e.g. ``temp_compressed_notes.zip``.

        Yields:
            Path to the created file.
        """
        path = self._allocate(scratch_name)
        logger.debug("Allocated scratch file %s", path)
        try:
            yield path
        finally:
            self.release(path)
