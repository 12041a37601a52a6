"""Transcode orchestration: size gate, download, codec offload, read-back, respond."""

from __future__ import annotations

import asyncio
import functools
import logging
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Awaitable, Callable, Optional, Union

import aiofiles

from ..common.constants import (
    DEFAULT_CODEC_WORKERS,
    DEFAULT_COMPRESS_MAX_SIZE,
    DEFAULT_DECOMPRESS_MAX_SIZE,
)
from ..common.types import (
    AttachmentSource,
    CompressionFormat,
    DecompressionFormat,
    Responder,
    TranscodeResult,
)
from ..core import registry
from ..core.resolver import (
    archive_entry_name,
    compression_output_paths,
    parse_compression_format,
    parse_decompression_format,
    resolve_for_decompression,
    resolve_output_paths,
)
from ..utils import (
    CodecError,
    CodecFailed,
    CodecPanic,
    DownloadFailed,
    PayloadTooLarge,
    ReadBackFailed,
    TranscodeError,
)
from .responses import build_failure_payload, build_success_payload
from .scratch import ScratchWorkspace


logger = logging.getLogger(__name__)


def _compress_into(
    path: Path, fmt: CompressionFormat, entry_name: str, data: bytes
) -> None:
    with open(path, "wb") as dest:
        registry.compress_to(fmt, entry_name, data, dest)


def _decompress_into(path: Path, fmt: CompressionFormat, data: bytes) -> Optional[str]:
    with open(path, "wb") as dest:
        return registry.decompress_to(fmt, data, dest)


def _compression_format(fmt: Union[CompressionFormat, str]) -> CompressionFormat:
    if isinstance(fmt, CompressionFormat):
        return fmt
    return parse_compression_format(fmt)


def _decompression_format(
    fmt: Union[DecompressionFormat, CompressionFormat, str, None],
) -> Union[DecompressionFormat, CompressionFormat, None]:
    if fmt is None or isinstance(fmt, (CompressionFormat, DecompressionFormat)):
        return fmt
    return parse_decompression_format(fmt)


class Transcoder:
    """Runs compress and decompress requests end to end."""

    def __init__(
        self,
        scratch: Optional[ScratchWorkspace] = None,
        compress_max_size: Optional[int] = DEFAULT_COMPRESS_MAX_SIZE,
        decompress_max_size: Optional[int] = DEFAULT_DECOMPRESS_MAX_SIZE,
        max_workers: int = DEFAULT_CODEC_WORKERS,
    ) -> None:
        self.scratch = scratch or ScratchWorkspace()
        self.compress_max_size = compress_max_size
        self.decompress_max_size = decompress_max_size
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="codec"
        )
        logger.info("Transcoder initialized with max_workers=%s", max_workers)

    @classmethod
    def from_config(cls, config) -> "Transcoder":
        """Build a transcoder from a :class:`filebot.config.Config`."""
        return cls(
            scratch=ScratchWorkspace(config.scratch_dir),
            compress_max_size=config.compress_max_size,
            decompress_max_size=config.decompress_max_size,
            max_workers=config.codec_workers,
        )

    def close(self) -> None:
        """Shut the codec worker pool down."""
        self._executor.shutdown(wait=True)

    async def __aenter__(self) -> "Transcoder":
        return self

    async def __aexit__(self, *exc_info) -> None:
        self.close()

    # Core operations

    async def compress(
        self,
        filename: str,
        data: bytes,
        fmt: Union[CompressionFormat, str],
    ) -> TranscodeResult:
        """
        Compress a payload into ``fmt``.

        Args:
            filename: Source filename.
            data: Source bytes.
            fmt: Target format, as a member or a user-typed name.

        Returns:
            Transcode result with the compressed bytes.

        Raises:
            UnknownFormat: If ``fmt`` names no supported format.
            TranscodeError: On codec, panic or read-back failure.
        """
        fmt = _compression_format(fmt)
        output_filename, scratch_name = compression_output_paths(filename, fmt)
        entry_name = archive_entry_name(filename, fmt)
        logger.info("Compressing %s (%d bytes) to %s", filename, len(data), fmt.value)

        with self.scratch.acquire(scratch_name) as path:
            await self._run_codec(fmt, _compress_into, path, fmt, entry_name, data)
            output = await self._read_back(path)

        return TranscodeResult(
            operation="compress",
            format=fmt,
            source_filename=filename,
            data=output,
            filename=output_filename,
            original_size=len(data),
            output_size=len(output),
        )

    async def decompress(
        self,
        filename: str,
        data: bytes,
        fmt: Union[DecompressionFormat, CompressionFormat, str, None] = DecompressionFormat.AUTO,
    ) -> TranscodeResult:
        """
        Decompress a payload, detecting the format from ``filename`` if needed.

        Args:
            filename: Compressed filename.
            data: Compressed bytes.
            fmt: Explicit format or user-typed name, or AUTO.

        Returns:
            Transcode result with the decompressed bytes.

        Raises:
            UnknownFormat: If ``fmt`` names no supported format.
            AmbiguousFormat: Before any scratch file exists, if detection fails.
            TranscodeError: On codec, panic or read-back failure.
        """
        concrete = resolve_for_decompression(filename, _decompression_format(fmt))
        output_filename, scratch_name = resolve_output_paths(filename, concrete)
        logger.info(
            "Decompressing %s (%d bytes) as %s", filename, len(data), concrete.value
        )

        with self.scratch.acquire(scratch_name) as path:
            original_name = await self._run_codec(
                concrete, _decompress_into, path, concrete, data
            )
            output = await self._read_back(path)

        return TranscodeResult(
            operation="decompress",
            format=concrete,
            source_filename=filename,
            data=output,
            filename=original_name or output_filename,
            original_size=len(data),
            output_size=len(output),
        )

    # Request handling

    def check_size(self, operation: str, size: int) -> None:
        """
        Reject payloads whose declared size exceeds the operation's limit.

        Raises:
            PayloadTooLarge: If ``size`` is over the limit.
        """
        limit = (
            self.compress_max_size if operation == "compress" else self.decompress_max_size
        )
        if limit is not None and size > limit:
            raise PayloadTooLarge(size, limit)

    @staticmethod
    async def fetch(source: AttachmentSource) -> bytes:
        """Download the source payload."""
        try:
            return await source.download()
        except Exception as exc:
            raise DownloadFailed(f"Failed to download file: {exc}") from exc

    async def handle_compress(
        self,
        source: AttachmentSource,
        fmt: Union[CompressionFormat, str],
        respond: Responder,
    ) -> Optional[TranscodeResult]:
        """Run a full compression request and respond exactly once."""
        return await self._handle(
            "compress",
            source,
            lambda: _compression_format(fmt),
            lambda data, target: self.compress(source.filename, data, target),
            respond,
        )

    async def handle_decompress(
        self,
        source: AttachmentSource,
        fmt: Union[DecompressionFormat, CompressionFormat, str, None],
        respond: Responder,
    ) -> Optional[TranscodeResult]:
        """Run a full decompression request and respond exactly once."""
        return await self._handle(
            "decompress",
            source,
            lambda: _decompression_format(fmt),
            lambda data, target: self.decompress(source.filename, data, target),
            respond,
        )

    async def _handle(
        self,
        operation: str,
        source: AttachmentSource,
        parse_format: Callable[[], object],
        run: Callable[[bytes, object], Awaitable[TranscodeResult]],
        respond: Responder,
    ) -> Optional[TranscodeResult]:
        try:
            # Format names are checked before anything is downloaded.
            target = parse_format()
            self.check_size(operation, source.size)
            data = await self.fetch(source)
            result = await run(data, target)
        except TranscodeError as exc:
            logger.warning(
                "%s of %s failed (%s): %s",
                operation, source.filename, type(exc).__name__, exc,
            )
            await respond(build_failure_payload(operation, exc))
            return None

        logger.info(
            "%s of %s complete: %d -> %d bytes",
            operation, source.filename, result.original_size, result.output_size,
        )
        await respond(build_success_payload(result))
        return result

    # Internals

    async def _run_codec(self, fmt: CompressionFormat, func, *args):
        loop = asyncio.get_running_loop()
        try:
            return await loop.run_in_executor(
                self._executor, functools.partial(func, *args)
            )
        except CodecError as exc:
            raise CodecFailed(f"Failed to process {fmt.value} data: {exc.message}") from exc
        except Exception as exc:
            logger.exception("Codec worker crashed while handling %s", fmt.value)
            raise CodecPanic("Unexpected internal error while transcoding.") from exc

    @staticmethod
    async def _read_back(path: Path) -> bytes:
        try:
            async with aiofiles.open(path, "rb") as infile:
                return await infile.read()
        except OSError as exc:
            raise ReadBackFailed(f"Failed to read transcoded file: {exc}") from exc
