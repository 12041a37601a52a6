"""Tests for configuration loading."""

from __future__ import annotations

import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from filebot.common.constants import DEFAULT_DECOMPRESS_MAX_SIZE
from filebot.config import Config, load_config, validate_token
from filebot.utils import ConfigError

VALID_TOKEN = "A" * 24 + "." + "B" * 6 + "." + "C" * 27


class TestConfig(unittest.TestCase):
    def setUp(self) -> None:
        self.temp_dir = tempfile.TemporaryDirectory()
        self.env_file = Path(self.temp_dir.name) / ".env"

    def tearDown(self) -> None:
        self.temp_dir.cleanup()

    def test_validate_token(self) -> None:
        self.assertTrue(validate_token(VALID_TOKEN))
        self.assertFalse(validate_token("not-a-token"))
        self.assertFalse(validate_token(""))

    def test_defaults(self) -> None:
        with mock.patch.dict(os.environ, {"DISCORD_BOT_TOKEN": VALID_TOKEN}, clear=True):
            config = load_config(self.env_file)
        self.assertEqual(config.command_prefix, "!")
        self.assertEqual(config.compress_max_size, 10 * 1024 * 1024)
        self.assertIsNone(config.decompress_max_size)
        self.assertEqual(config.codec_workers, 4)
        self.assertIsNone(config.scratch_dir)

    def test_reads_env_file(self) -> None:
        self.env_file.write_text(
            f"DISCORD_BOT_TOKEN={VALID_TOKEN}\n"
            "COMPRESS_MAX_SIZE=2048\n"
            "DECOMPRESS_MAX_SIZE=4096\n"
            "CODEC_WORKERS=2\n"
            f"SCRATCH_DIR={self.temp_dir.name}\n",
            encoding="utf-8",
        )
        with mock.patch.dict(os.environ, {}, clear=True):
            config = load_config(self.env_file)
        self.assertEqual(config.compress_max_size, 2048)
        self.assertEqual(config.decompress_max_size, 4096)
        self.assertEqual(config.codec_workers, 2)
        self.assertEqual(config.scratch_dir, Path(self.temp_dir.name))

    def test_missing_token(self) -> None:
        with mock.patch.dict(os.environ, {}, clear=True):
            with self.assertRaises(ConfigError):
                load_config(self.env_file)
            config = load_config(self.env_file, require_token=False)
        self.assertEqual(config.discord_bot_token, "")

    def test_invalid_integers(self) -> None:
        env = {"DISCORD_BOT_TOKEN": VALID_TOKEN, "CODEC_WORKERS": "many"}
        with mock.patch.dict(os.environ, env, clear=True):
            with self.assertRaises(ConfigError):
                load_config(self.env_file)
        env["CODEC_WORKERS"] = "0"
        with mock.patch.dict(os.environ, env, clear=True):
            with self.assertRaises(ConfigError):
                load_config(self.env_file)

    def test_zero_limit_disables_gate(self) -> None:
        env = {"DISCORD_BOT_TOKEN": VALID_TOKEN, "COMPRESS_MAX_SIZE": "0"}
        with mock.patch.dict(os.environ, env, clear=True):
            config = load_config(self.env_file)
        self.assertIsNone(config.compress_max_size)

    def test_decompress_limit_follows_shared_default(self) -> None:
        self.assertEqual(
            Config(discord_bot_token="").decompress_max_size, DEFAULT_DECOMPRESS_MAX_SIZE
        )
        env = {"DISCORD_BOT_TOKEN": VALID_TOKEN}
        with mock.patch.dict(os.environ, env, clear=True):
            with mock.patch("filebot.config.DEFAULT_DECOMPRESS_MAX_SIZE", 4096):
                config = load_config(self.env_file)
        self.assertEqual(config.decompress_max_size, 4096)


if __name__ == "__main__":
    unittest.main()
