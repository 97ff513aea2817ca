#!/usr/bin/env python3
"""
LevelBot - Entry Point
======================

Loads the environment, validates configuration and runs the bot.

Features:
- Slash commands (/level, /leaderboard, /role, /afk, /embed, /mute, ...)
- XP per message with level-up announcements
- Rank card images
- Graceful error handling
"""

import asyncio
import sys

from dotenv import load_dotenv

# src.core reads the environment at import time
load_dotenv()

from src.core.config import ConfigValidationError, get_config, validate_and_log_config  # noqa: E402
from src.core.logger import logger  # noqa: E402
from src.bot import LevelBot  # noqa: E402
from src.utils.error_handler import ErrorHandler  # noqa: E402


async def main() -> None:
    """
    Main entry point for LevelBot.

    Handles the complete bot lifecycle:
    1. Validates configuration (fails fast on missing DISCORD_TOKEN)
    2. Wires the error webhook into the logger
    3. Creates the bot and connects to Discord
    """
    try:
        validate_and_log_config()
    except ConfigValidationError as e:
        logger.error("Configuration Invalid", [("Error", str(e))])
        sys.exit(1)

    config = get_config()
    logger.set_webhook(config.error_webhook_url)

    logger.tree("LEVELBOT STARTING", [
        ("Guild", str(config.guild_id) if config.guild_id else "Global"),
        ("Run ID", logger.run_id),
    ], emoji="🔥")

    bot = LevelBot()
    try:
        async with bot:
            await bot.start(config.discord_token)
    except Exception as e:
        ErrorHandler.handle(e, location="main.main", critical=True)
        sys.exit(1)


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("Bot stopped by user (Ctrl+C)")
