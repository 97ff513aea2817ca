"""
LevelBot - Core Package
=======================

Core components: configuration, logging, constants and the database.

DESIGN:
    Core modules are singletons or global instances to keep one
    consistent state across the application:
    - get_config() returns the same Config instance
    - get_db() returns the same DatabaseManager instance
    - logger is a global TreeLogger instance
"""

from .config import (
    Config,
    ConfigValidationError,
    EmbedColors,
    BOT_TZ,
    get_config,
    has_capability,
    require_capability,
)

from .database import DatabaseManager, StoreError, get_db

from .logger import logger, TreeLogger


__all__ = [
    # Config
    "Config",
    "ConfigValidationError",
    "EmbedColors",
    "BOT_TZ",
    "get_config",
    "has_capability",
    "require_capability",
    # Database
    "DatabaseManager",
    "StoreError",
    "get_db",
    # Logger
    "logger",
    "TreeLogger",
]
