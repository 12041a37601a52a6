"""Configuration management for the file utility bot."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import ClassVar, Optional

from dotenv import load_dotenv

from .common.constants import (
    DEFAULT_CODEC_WORKERS,
    DEFAULT_COMMAND_PREFIX,
    DEFAULT_COMPRESS_MAX_SIZE,
    DEFAULT_DECOMPRESS_MAX_SIZE,
)
from .utils import ConfigError

ENV_TOKEN = "DISCORD_BOT_TOKEN"
ENV_PREFIX = "COMMAND_PREFIX"
ENV_COMPRESS_MAX = "COMPRESS_MAX_SIZE"
ENV_DECOMPRESS_MAX = "DECOMPRESS_MAX_SIZE"
ENV_WORKERS = "CODEC_WORKERS"
ENV_SCRATCH_DIR = "SCRATCH_DIR"


def _base_dir() -> Path:
    return Path(__file__).resolve().parents[1]


def _env_path() -> Path:
    return _base_dir() / ".env"


def validate_token(token: str) -> bool:
    """
    Validate Discord bot token format.

    Args:
        token: Bot token string.

    Returns:
        True if the token looks valid.
    """
    if not token or token.count(".") != 2:
        return False
    pattern = re.compile(
        r"^[A-Za-z0-9_\-]{20,}\.[A-Za-z0-9_\-]{6,}\.[A-Za-z0-9_\-]{20,}$")
    return bool(pattern.match(token))


@dataclass(frozen=True)
class Config:
    """Singleton configuration object."""

    discord_bot_token: str
    command_prefix: str = DEFAULT_COMMAND_PREFIX
    compress_max_size: Optional[int] = DEFAULT_COMPRESS_MAX_SIZE
    decompress_max_size: Optional[int] = DEFAULT_DECOMPRESS_MAX_SIZE
    codec_workers: int = DEFAULT_CODEC_WORKERS
    scratch_dir: Optional[Path] = None

    _instance: ClassVar[Optional["Config"]] = None

    @classmethod
    def get_instance(cls) -> "Config":
        """
        Retrieve a singleton instance of Config.

        Returns:
            Config singleton instance.
        """
        if cls._instance is None:
            cls._instance = load_config()
        return cls._instance


def _parse_int(value: str, name: str) -> int:
    try:
        parsed = int(value)
    except ValueError as exc:
        raise ConfigError(f"Invalid integer for {name}.") from exc
    if parsed <= 0:
        raise ConfigError(f"{name} must be greater than 0.")
    return parsed


def _parse_limit(value: str, name: str) -> Optional[int]:
    # Empty or "0" disables the limit.
    if not value or value == "0":
        return None
    return _parse_int(value, name)


def load_config(env_file: Optional[Path] = None, require_token: bool = True) -> Config:
    """
    Load and validate configuration from the environment and a .env file.

    Args:
        env_file: Optional .env path; defaults to the project root.
        require_token: Whether a valid bot token must be present.

    Returns:
        Config instance.
    """
    env_file = env_file or _env_path()
    if env_file.exists():
        load_dotenv(env_file)

    token = os.getenv(ENV_TOKEN, "").strip()
    prefix = os.getenv(ENV_PREFIX, DEFAULT_COMMAND_PREFIX).strip()
    compress_max = os.getenv(ENV_COMPRESS_MAX, str(DEFAULT_COMPRESS_MAX_SIZE)).strip()
    decompress_max = os.getenv(ENV_DECOMPRESS_MAX, str(DEFAULT_DECOMPRESS_MAX_SIZE or "")).strip()
    workers = os.getenv(ENV_WORKERS, str(DEFAULT_CODEC_WORKERS)).strip()
    scratch_dir = os.getenv(ENV_SCRATCH_DIR, "").strip()

    if require_token:
        if not token:
            raise ConfigError(f"{ENV_TOKEN} is required. Add it to your .env file.")
        if not validate_token(token):
            raise ConfigError(f"{ENV_TOKEN} format is invalid.")
    if not prefix:
        raise ConfigError(f"{ENV_PREFIX} must not be empty.")

    return Config(
        discord_bot_token=token,
        command_prefix=prefix,
        compress_max_size=_parse_limit(compress_max, ENV_COMPRESS_MAX),
        decompress_max_size=_parse_limit(decompress_max, ENV_DECOMPRESS_MAX),
        codec_workers=_parse_int(workers, ENV_WORKERS),
        scratch_dir=Path(scratch_dir).expanduser() if scratch_dir else None,
    )
