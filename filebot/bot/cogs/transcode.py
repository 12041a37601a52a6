"""Compress and decompress command cog."""

from __future__ import annotations

from typing import Optional

import discord
from discord.ext import commands

from ...common.types import CompressionFormat, ResponsePayload
from ...core.resolver import parse_compression_format, parse_decompression_format
from ...services.transcoder import Transcoder
from ...utils import UnknownFormat
from ..sources import DiscordAttachmentSource
from ..ui.embeds import build_response_embed, build_response_file


SUPPORTED_FORMATS = ", ".join(f"`{fmt.value}`" for fmt in CompressionFormat)


class TranscodeCog(commands.Cog):
    """Cog for the compress and decompress commands."""

    def __init__(self, bot, transcoder: Optional[Transcoder] = None):
        self.bot = bot
        self.transcoder = transcoder or bot.transcoder

    @commands.command(name="compress")
    async def compress_command(self, ctx, output_format: str):
        """Compress the attached file."""
        try:
            fmt = parse_compression_format(output_format)
        except UnknownFormat as exc:
            await ctx.send(f"⚠️ {exc} Supported formats: {SUPPORTED_FORMATS}.")
            return

        attachment = await self._first_attachment(ctx)
        if attachment is None:
            return
        print(f"🗜️ Compress ({fmt.value}) requested by {ctx.author}: {attachment.filename}")

        async with ctx.typing():
            await self.transcoder.handle_compress(
                self._source(attachment), fmt, self._responder(ctx)
            )

    @commands.command(name="decompress")
    async def decompress_command(self, ctx, input_format: Optional[str] = None):
        """Decompress the attached file, detecting the format if none is given."""
        try:
            fmt = parse_decompression_format(input_format)
        except UnknownFormat as exc:
            await ctx.send(
                f"⚠️ {exc} Supported formats: {SUPPORTED_FORMATS} or `auto`."
            )
            return

        attachment = await self._first_attachment(ctx)
        if attachment is None:
            return
        print(f"📂 Decompress ({fmt.value}) requested by {ctx.author}: {attachment.filename}")

        async with ctx.typing():
            await self.transcoder.handle_decompress(
                self._source(attachment), fmt, self._responder(ctx)
            )

    def _source(self, attachment: discord.Attachment) -> DiscordAttachmentSource:
        return DiscordAttachmentSource(attachment, self.bot.http_session)

    async def _first_attachment(self, ctx) -> Optional[discord.Attachment]:
        if not ctx.message.attachments:
            await ctx.send(
                "⚠️ Attach a file to your message.\n\n"
                f"Use `{self.bot.command_prefix}help` for command usage."
            )
            return None
        return ctx.message.attachments[0]

    @staticmethod
    def _responder(ctx):
        async def respond(payload: ResponsePayload) -> None:
            embed = build_response_embed(payload)
            file = build_response_file(payload)
            if file is None:
                await ctx.send(embed=embed)
            else:
                await ctx.send(embed=embed, file=file)

        return respond


async def setup(bot):
    """Setup function for loading the cog."""
    await bot.add_cog(TranscodeCog(bot))
