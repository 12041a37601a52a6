"""Adapters between Discord objects and the transcoder's interfaces."""

from __future__ import annotations

import aiohttp
import discord

from ..utils import DownloadError


class DiscordAttachmentSource:
    """Exposes a Discord attachment as an ``AttachmentSource``."""

    def __init__(self, attachment: discord.Attachment, session: aiohttp.ClientSession) -> None:
        self.filename = attachment.filename
        self.size = attachment.size
        self.url = attachment.url
        self._session = session

    async def download(self) -> bytes:
        """
        Fetch the attachment bytes.

        Returns:
            Attachment content.
        """
        try:
            async with self._session.get(self.url) as resp:
                if resp.status != 200:
                    raise DownloadError(f"Attachment download returned HTTP {resp.status}.")
                return await resp.read()
        except aiohttp.ClientError as exc:
            raise DownloadError(str(exc) or "Attachment download failed.") from exc
