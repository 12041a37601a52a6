"""Discord UI helpers."""

from .embeds import build_response_embed, build_response_file

__all__ = ["build_response_embed", "build_response_file"]
