"""
LevelBot - Error Handler
========================

Provides detailed error context and consistent logging.

Features:
- Error categorization (Discord, Store, Image, General)
- Recovery suggestions in the log line
- Discord-specific context capture
- Critical error file logging
"""

import json
import sys
import traceback
from datetime import datetime
from pathlib import Path
from typing import Any, Dict

import discord

from src.core.logger import logger, LOGS_DIR
from src.core.database import StoreError
from src.services.leveling import IdentityLookupError, ImageDecodeError


GENERIC_ERROR_MESSAGE = "An error occurred while processing your request."


class ErrorContext:
    """Captures and formats detailed error context"""

    @staticmethod
    def get_full_context(e: Exception, location: str, **kwargs) -> Dict[str, Any]:
        """
        Get comprehensive error context.

        Args:
            e: The exception
            location: Where the error occurred
            **kwargs: Additional context (user, message, etc.)

        Returns:
            Dictionary with full error context
        """
        context = {
            "timestamp": datetime.now().isoformat(),
            "location": location,
            "error_type": type(e).__name__,
            "error_message": str(e),
            "traceback": "".join(traceback.format_exception(type(e), e, e.__traceback__)),
            "python_version": sys.version,
            "additional_context": {k: str(v)[:100] for k, v in kwargs.items()},
        }

        msg = kwargs.get("message")
        if isinstance(msg, discord.Message):
            context["discord_context"] = {
                "guild": msg.guild.name if msg.guild else "DM",
                "channel": getattr(msg.channel, "name", str(msg.channel)),
                "author": str(msg.author),
                "author_id": msg.author.id,
            }

        return context


class ErrorHandler:
    """Categorized error logging with recovery hints"""

    ERROR_CATEGORIES = (
        ("discord", (discord.DiscordException,)),
        ("store", (StoreError,)),
        ("image", (ImageDecodeError, OSError)),
        ("identity", (IdentityLookupError,)),
    )

    SUGGESTIONS = {
        "discord": {
            discord.Forbidden: "Check bot permissions in server settings",
            discord.NotFound: "Resource not found - check IDs and channels",
            discord.HTTPException: "Discord API issue - try again shortly",
        },
        "store": {
            StoreError: "Database unavailable - check the data directory",
        },
        "image": {
            ImageDecodeError: "Avatar could not be decoded - card rendered without it",
            OSError: "Image resource issue - check fonts and disk",
        },
        "identity": {
            IdentityLookupError: "User left or is unknown - fallback label used",
        },
    }

    @classmethod
    def categorize_error(cls, e: Exception) -> str:
        """Return the first matching category name, or 'general'."""
        for category, error_types in cls.ERROR_CATEGORIES:
            if isinstance(e, error_types):
                return category
        return "general"

    @classmethod
    def get_recovery_suggestion(cls, e: Exception, category: str) -> str:
        for error_type, suggestion in cls.SUGGESTIONS.get(category, {}).items():
            if isinstance(e, error_type):
                return suggestion
        return "Unexpected error - check logs for details"

    @classmethod
    def handle(cls, e: Exception, location: str, critical: bool = False, **context) -> None:
        """
        Handle an error with full context.

        Args:
            e: The exception
            location: Where the error occurred
            critical: Whether the error is fatal to the current operation
            **context: Additional context
        """
        category = cls.categorize_error(e)
        suggestion = cls.get_recovery_suggestion(e, category)
        full_context = ErrorContext.get_full_context(e, location, **context)

        details = [
            ("Location", location),
            ("Category", category),
            ("Type", full_context["error_type"]),
            ("Error", str(e)[:100]),
            ("Recovery", suggestion),
        ]

        if critical:
            logger.error("Critical Error", details)
            logger.debug(f"Traceback:\n{full_context['traceback']}")
            cls._store_critical_error(full_context)
        else:
            logger.warning("Handled Error", details)

    @staticmethod
    def _store_critical_error(context: Dict[str, Any]) -> None:
        """Write the full context to logs/errors/ for later analysis."""
        error_dir = Path(LOGS_DIR) / "errors"
        try:
            error_dir.mkdir(exist_ok=True, parents=True)
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            error_file = error_dir / f"error_{timestamp}.json"
            with open(error_file, "w", encoding="utf-8") as f:
                json.dump(context, f, indent=2, default=str)
            logger.info(f"Critical error saved to {error_file}")
        except OSError as save_error:
            logger.warning("Failed to save error details", [("Error", str(save_error)[:100])])


__all__ = ["ErrorContext", "ErrorHandler", "GENERIC_ERROR_MESSAGE"]
