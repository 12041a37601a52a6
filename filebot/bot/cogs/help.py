"""Help command cog."""

from discord.ext import commands

from ...common.constants import DEFAULT_COMMAND_PREFIX, DEFAULT_COMPRESS_MAX_SIZE
from ...common.types import CompressionFormat
from ...utils import format_bytes


class HelpCog(commands.Cog):
    """Cog for help command."""

    def __init__(self, bot):
        self.bot = bot

    @commands.command(name="help")
    async def help_command(self, ctx):
        """Show help message."""
        help_text = self._build_help_text(
            self.bot.command_prefix, self.bot.transcoder.compress_max_size
        )
        await ctx.send(help_text)

    @staticmethod
    def _build_help_text(
        prefix=DEFAULT_COMMAND_PREFIX, compress_limit=DEFAULT_COMPRESS_MAX_SIZE
    ):
        """Build help text for the configured prefix and upload limit."""
        formats = ", ".join(f"`{fmt.value}`" for fmt in CompressionFormat)
        if compress_limit is None:
            limit_tip = "Uploads for compression have no size limit."
        else:
            limit_tip = f"Uploads for compression are limited to {format_bytes(compress_limit)}."
        return (
            "## File Utility Bot Help\n"
            "\n"
            "**Commands** (attach the file to the same message)\n"
            f"- `{prefix}compress <format>` — Compress the attached file.\n"
            f"- `{prefix}decompress [format]` — Decompress the attached file. "
            "The format is detected from the file extension when omitted.\n"
            f"- `{prefix}help` — Show this help message.\n"
            "\n"
            f"**Formats**: {formats}\n"
            "\n"
            "**Tips**\n"
            "- Zip and tar.gz archives keep the original filename; "
            "bz2, zst and lz4 output is named after the upload.\n"
            f"- {limit_tip}\n"
        )


async def setup(bot):
    """Setup function for loading the cog."""
    await bot.add_cog(HelpCog(bot))
