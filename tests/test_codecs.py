"""Tests for the codec registry and archive adapters."""

from __future__ import annotations

import gzip
import io
import os
import stat
import tarfile
import unittest
import zipfile

from filebot.common.types import CompressionFormat, DecompressionFormat
from filebot.core import registry
from filebot.utils import AmbiguousFormat, CodecError, UnknownFormat


LARGE_PAYLOAD = (b"transcode me " * 50_000) + os.urandom(512 * 1024)
PAYLOADS = {
    "empty": b"",
    "single": b"x",
    "large": LARGE_PAYLOAD,
}


class TestRoundTrip(unittest.TestCase):
    def test_every_format_recovers_payload(self) -> None:
        self.assertGreater(len(LARGE_PAYLOAD), 1024 * 1024)
        for fmt in registry.available_formats():
            for label, payload in PAYLOADS.items():
                with self.subTest(format=fmt.value, payload=label):
                    compressed = registry.compress(fmt, "payload", payload)
                    restored, _ = registry.decompress(fmt, compressed)
                    self.assertEqual(restored, payload)

    def test_container_formats_recover_entry_name(self) -> None:
        for fmt in (CompressionFormat.ZIP, CompressionFormat.TAR_GZ):
            with self.subTest(format=fmt.value):
                compressed = registry.compress(fmt, "notes", b"hello")
                _, name = registry.decompress(fmt, compressed)
                self.assertEqual(name, "notes")

    def test_stream_formats_recover_no_name(self) -> None:
        for fmt in (CompressionFormat.BZ2, CompressionFormat.ZST, CompressionFormat.LZ4):
            with self.subTest(format=fmt.value):
                compressed = registry.compress(fmt, "notes", b"hello")
                _, name = registry.decompress(fmt, compressed)
                self.assertIsNone(name)

    def test_output_is_deterministic(self) -> None:
        for fmt in registry.available_formats():
            with self.subTest(format=fmt.value):
                first = registry.compress(fmt, "same", b"same payload")
                second = registry.compress(fmt, "same", b"same payload")
                self.assertEqual(first, second)

    def test_accepts_string_formats(self) -> None:
        compressed = registry.compress("tar.gz", "a", b"abc")
        self.assertEqual(registry.decompress("TAR.GZ", compressed)[0], b"abc")


class TestArchiveMetadata(unittest.TestCase):
    def test_zip_entry_settings(self) -> None:
        compressed = registry.compress(CompressionFormat.ZIP, "report", b"data" * 100)
        with zipfile.ZipFile(io.BytesIO(compressed)) as archive:
            infos = archive.infolist()
        self.assertEqual(len(infos), 1)
        info = infos[0]
        self.assertEqual(info.filename, "report")
        self.assertEqual(info.compress_type, zipfile.ZIP_DEFLATED)
        self.assertEqual(stat.S_IMODE(info.external_attr >> 16), 0o755)
        self.assertEqual(info.date_time, (1980, 1, 1, 0, 0, 0))

    def test_zip_entry_name_is_cleaned(self) -> None:
        compressed = registry.compress(CompressionFormat.ZIP, "report.final.txt", b"x")
        self.assertEqual(registry.decompress(CompressionFormat.ZIP, compressed), (b"x", "report"))

        compressed = registry.compress(CompressionFormat.ZIP, "../my notes.tar.gz", b"x")
        with zipfile.ZipFile(io.BytesIO(compressed)) as archive:
            self.assertEqual(archive.namelist(), ["my_notes"])

    def test_tar_entry_name_is_sanitized(self) -> None:
        compressed = registry.compress(CompressionFormat.TAR_GZ, "../my notes.txt", b"x")
        self.assertEqual(registry.decompress(CompressionFormat.TAR_GZ, compressed), (b"x", "my_notes.txt"))

    def test_tar_gz_entry_settings(self) -> None:
        compressed = registry.compress(CompressionFormat.TAR_GZ, "report.txt", b"data")
        self.assertEqual(compressed[4:8], b"\x00\x00\x00\x00")  # gzip mtime
        with tarfile.open(fileobj=io.BytesIO(compressed), mode="r:gz") as tar:
            members = tar.getmembers()
        self.assertEqual(len(members), 1)
        member = members[0]
        self.assertEqual(member.name, "report.txt")
        self.assertEqual(member.size, 4)
        self.assertEqual(member.mtime, 0)
        self.assertEqual((member.uid, member.gid), (0, 0))

    def test_reads_archives_from_other_tools(self) -> None:
        buffer = io.BytesIO()
        with zipfile.ZipFile(buffer, "w") as archive:
            archive.writestr("folder/", b"")
            archive.writestr("folder/inner.txt", b"inner")
        restored, name = registry.decompress(CompressionFormat.ZIP, buffer.getvalue())
        self.assertEqual((restored, name), (b"inner", "inner.txt"))

        raw = io.BytesIO()
        with gzip.GzipFile(fileobj=raw, mode="wb") as stream:
            with tarfile.open(fileobj=stream, mode="w") as tar:
                info = tarfile.TarInfo("nested/path/file.bin")
                info.size = 3
                tar.addfile(info, io.BytesIO(b"abc"))
        restored, name = registry.decompress(CompressionFormat.TAR_GZ, raw.getvalue())
        self.assertEqual((restored, name), (b"abc", "file.bin"))


class TestCodecErrors(unittest.TestCase):
    def test_corrupt_input_raises_codec_error(self) -> None:
        garbage = b"this is definitely not compressed data"
        for fmt in registry.available_formats():
            with self.subTest(format=fmt.value):
                with self.assertRaises(CodecError) as ctx:
                    registry.decompress(fmt, garbage)
                self.assertEqual(ctx.exception.format_name, fmt.value)

    def test_empty_zip_archive(self) -> None:
        buffer = io.BytesIO()
        with zipfile.ZipFile(buffer, "w"):
            pass
        with self.assertRaises(CodecError) as ctx:
            registry.decompress(CompressionFormat.ZIP, buffer.getvalue())
        self.assertIn("Empty archive", str(ctx.exception))

    def test_auto_is_rejected(self) -> None:
        with self.assertRaises(AmbiguousFormat):
            registry.get_codec(DecompressionFormat.AUTO)
        with self.assertRaises(AmbiguousFormat):
            registry.get_codec("auto")

    def test_unknown_format(self) -> None:
        with self.assertRaises(UnknownFormat):
            registry.get_codec("rar")


if __name__ == "__main__":
    unittest.main()
