"""File utility bot: compress and decompress user uploads."""

__version__ = "0.1.0"
