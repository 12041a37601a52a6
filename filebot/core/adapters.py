"""Archive codec adapters: one class per supported compression format.

Adapters work on binary file objects so the same code can target an
in-memory buffer or a scratch file on disk. Every library failure is
re-raised as :class:`CodecError` carrying the format name.
"""

from __future__ import annotations

import bz2
import gzip
import io
import shutil
import stat
import tarfile
import zipfile
import zlib
from typing import BinaryIO, Optional, Tuple, Type

import lz4.frame
import zstandard as zstd

from ..common.constants import (
    BZIP2_LEVEL,
    GZIP_LEVEL,
    TAR_ENTRY_MODE,
    ZIP_ENTRY_MODE,
    ZIP_EPOCH,
    ZSTD_LEVEL,
)
from ..common.types import CompressionFormat
from ..utils import CodecError, base_name, sanitize_filename, strip_all_extensions


class CodecAdapter:
    """Uniform write/read contract over one compression algorithm."""

    format: CompressionFormat
    preserves_filename = False
    errors: Tuple[Type[BaseException], ...] = (OSError, EOFError, ValueError)

    @property
    def name(self) -> str:
        return self.format.value

    @property
    def extension(self) -> str:
        return self.format.extension

    def write(self, entry_name: str, data: bytes, dest: BinaryIO) -> None:
        """
        Compress ``data`` into ``dest``.

        Args:
            entry_name: Name stored for the payload where the format has one.
            data: Payload bytes.
            dest: Writable binary file object.
        """
        try:
            self._write(entry_name, data, dest)
        except CodecError:
            raise
        except self.errors as exc:
            raise CodecError(self.name, _describe(exc)) from exc

    def read(self, source: BinaryIO, dest: BinaryIO) -> Optional[str]:
        """
        Decompress ``source`` into ``dest``.

        Args:
            source: Readable binary file object holding compressed data.
            dest: Writable binary file object.

        Returns:
            Filename recorded in the archive, or None if the format has none.
        """
        try:
            return self._read(source, dest)
        except CodecError:
            raise
        except self.errors as exc:
            raise CodecError(self.name, _describe(exc)) from exc

    def _write(self, entry_name: str, data: bytes, dest: BinaryIO) -> None:
        raise NotImplementedError

    def _read(self, source: BinaryIO, dest: BinaryIO) -> Optional[str]:
        raise NotImplementedError


class ZipAdapter(CodecAdapter):
    """Single-entry deflate zip archive.

    The entry is stored under the sanitized name with every extension
    stripped, so ``report.final.txt`` is archived as ``report``.
    """

    format = CompressionFormat.ZIP
    preserves_filename = True
    errors = CodecAdapter.errors + (
        zipfile.BadZipFile,
        zipfile.LargeZipFile,
        zlib.error,
        NotImplementedError,
    )

    def _write(self, entry_name: str, data: bytes, dest: BinaryIO) -> None:
        entry_name = sanitize_filename(strip_all_extensions(entry_name))
        info = zipfile.ZipInfo(entry_name, date_time=ZIP_EPOCH)
        info.compress_type = zipfile.ZIP_DEFLATED
        info.create_system = 3  # unix, so external_attr holds a mode
        info.external_attr = (stat.S_IFREG | ZIP_ENTRY_MODE) << 16
        with zipfile.ZipFile(dest, "w", compression=zipfile.ZIP_DEFLATED) as archive:
            archive.writestr(info, data)

    def _read(self, source: BinaryIO, dest: BinaryIO) -> Optional[str]:
        with zipfile.ZipFile(source) as archive:
            for info in archive.infolist():
                if info.is_dir():
                    continue
                with archive.open(info) as entry:
                    shutil.copyfileobj(entry, dest)
                return base_name(info.filename) or None
        raise CodecError(self.name, "Empty archive")


class TarGzAdapter(CodecAdapter):
    """Single-entry tar archive inside a gzip stream."""

    format = CompressionFormat.TAR_GZ
    preserves_filename = True
    errors = CodecAdapter.errors + (tarfile.TarError, zlib.error)

    def _write(self, entry_name: str, data: bytes, dest: BinaryIO) -> None:
        info = tarfile.TarInfo(sanitize_filename(entry_name))
        info.size = len(data)
        info.mode = TAR_ENTRY_MODE
        info.mtime = 0
        info.uid = info.gid = 0
        info.uname = info.gname = ""
        # An empty filename keeps the scratch path out of the gzip header.
        with gzip.GzipFile(
            filename="", mode="wb", fileobj=dest, compresslevel=GZIP_LEVEL, mtime=0
        ) as stream:
            with tarfile.open(fileobj=stream, mode="w", format=tarfile.GNU_FORMAT) as tar:
                tar.addfile(info, io.BytesIO(data))

    def _read(self, source: BinaryIO, dest: BinaryIO) -> Optional[str]:
        with tarfile.open(fileobj=source, mode="r:gz") as tar:
            for member in tar:
                if not member.isfile():
                    continue
                entry = tar.extractfile(member)
                if entry is None:
                    continue
                shutil.copyfileobj(entry, dest)
                return base_name(member.name) or None
        raise CodecError(self.name, "Empty archive")


class Bz2Adapter(CodecAdapter):
    """Raw bzip2 stream. The filename is not stored."""

    format = CompressionFormat.BZ2

    def _write(self, entry_name: str, data: bytes, dest: BinaryIO) -> None:
        dest.write(bz2.compress(data, compresslevel=BZIP2_LEVEL))

    def _read(self, source: BinaryIO, dest: BinaryIO) -> Optional[str]:
        dest.write(bz2.decompress(source.read()))
        return None


class ZstAdapter(CodecAdapter):
    """Raw zstd frame."""

    format = CompressionFormat.ZST
    errors = CodecAdapter.errors + (zstd.ZstdError,)

    def _write(self, entry_name: str, data: bytes, dest: BinaryIO) -> None:
        dest.write(zstd.ZstdCompressor(level=ZSTD_LEVEL).compress(data))

    def _read(self, source: BinaryIO, dest: BinaryIO) -> Optional[str]:
        # copy_stream also handles frames written without a content size.
        zstd.ZstdDecompressor().copy_stream(source, dest)
        return None


class Lz4Adapter(CodecAdapter):
    """LZ4 frame stream."""

    format = CompressionFormat.LZ4
    errors = CodecAdapter.errors + (RuntimeError,)

    def _write(self, entry_name: str, data: bytes, dest: BinaryIO) -> None:
        dest.write(lz4.frame.compress(data))

    def _read(self, source: BinaryIO, dest: BinaryIO) -> Optional[str]:
        dest.write(lz4.frame.decompress(source.read()))
        return None


def _describe(exc: BaseException) -> str:
    return str(exc) or type(exc).__name__
