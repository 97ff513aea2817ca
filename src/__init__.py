"""
LevelBot - Source Package
=========================

Package Structure:
- bot.py: Main Discord bot class
- commands/: Slash command cogs
- events/: Event listener cogs
- core/: Configuration, logging, constants and the database
- models/: Command option models
- services/: Leveling and AFK services
- utils/: Helper functions

Version: v1.0.0
"""
