"""Discord rendering of transcoder responses."""

from __future__ import annotations

import io
from typing import Optional

import discord

from ...common.types import ResponsePayload


def build_response_embed(payload: ResponsePayload) -> discord.Embed:
    """
    Build a Discord embed for a response payload.

    Args:
        payload: Response payload.

    Returns:
        Discord Embed object
    """
    embed = discord.Embed(
        title=payload.title,
        description=payload.description,
        color=payload.color,
    )
    if payload.footer:
        embed.set_footer(text=payload.footer)
    return embed


def build_response_file(payload: ResponsePayload) -> Optional[discord.File]:
    """Wrap the payload's output bytes as an upload, if it has any."""
    if not payload.has_attachment:
        return None
    return discord.File(io.BytesIO(payload.data), filename=payload.filename)
