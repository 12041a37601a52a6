"""Main entry point for the file utility bot."""

import asyncio
import sys

import aiohttp

from filebot.bot.client import create_bot, load_extensions
from filebot.config import Config
from filebot.utils import ConfigError, setup_logging


def run_bot():
    """Run the Discord bot."""
    print("🚀 Starting File Utility Bot...")
    setup_logging()

    try:
        config = Config.get_instance()
    except ConfigError as exc:
        print(f"❌ Configuration error: {exc}")
        sys.exit(1)

    bot = create_bot(config)

    async def main():
        async with aiohttp.ClientSession() as session:
            bot.http_session = session
            async with bot:
                await load_extensions(bot)
                await bot.start(config.discord_bot_token)

    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        print("\n🛑 Bot stopped by user.")
    finally:
        # Blocks until codec workers finish; must run outside the event loop.
        bot.transcoder.close()


def main():
    """Main entry point."""
    if len(sys.argv) > 1:
        command = sys.argv[1].lower()
        if command == "bot":
            run_bot()
        else:
            print(f"Unknown command: {command}")
            print("Usage: python main.py [bot]")
            sys.exit(1)
    else:
        # Default to bot
        run_bot()


if __name__ == "__main__":
    main()
