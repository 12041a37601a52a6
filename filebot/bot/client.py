"""Bot setup and event listeners."""

import discord
from discord.ext import commands

from ..config import Config
from ..services.transcoder import Transcoder

EXTENSIONS = (
    "filebot.bot.cogs.transcode",
    "filebot.bot.cogs.help",
)


def create_bot(config: Config):
    """Create and configure the Discord bot."""
    intents = discord.Intents.default()
    intents.message_content = True

    bot = commands.Bot(command_prefix=config.command_prefix, intents=intents)
    bot.remove_command("help")
    bot.transcoder = Transcoder.from_config(config)
    bot.http_session = None

    @bot.event
    async def on_ready():
        """Called when the bot is ready."""
        print(f"🟢 Bot online as {bot.user.name} (ID: {bot.user.id})")
        print("🤖 Ready and listening for commands.")

    @bot.event
    async def on_command_error(ctx, error):
        """Handle command errors."""
        if isinstance(error, commands.CommandNotFound):
            print(f"⚠️ Invalid command: {ctx.message.content}")
            await ctx.send(
                "⚠️ **Invalid command.**\n"
                "Use one of the commands below:\n\n"
                f"{_build_commands_markdown(config.command_prefix)}"
            )
            return
        if isinstance(error, commands.MissingRequiredArgument):
            await ctx.send(
                f"⚠️ Missing argument `{error.param.name}`.\n\n"
                f"Use `{config.command_prefix}help` for command usage."
            )
            return
        print(f"❌ Command error: {error}")
        raise error

    return bot


async def load_extensions(bot):
    """Load every command cog."""
    for extension in EXTENSIONS:
        await bot.load_extension(extension)


def _build_commands_markdown(prefix: str = "!"):
    """Build commands markdown."""
    return (
        "### Available Commands\n"
        f"- `{prefix}compress <zip|tar.gz|bz2|zst|lz4>`\n"
        f"- `{prefix}decompress [zip|tar.gz|bz2|zst|lz4|auto]`\n"
        f"- `{prefix}help`\n"
    )
