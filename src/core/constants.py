"""
LevelBot - Centralized Constants
================================

All magic numbers and constants are defined here for maintainability.
Import from this module instead of hardcoding values.
"""

# =============================================================================
# Time Constants
# =============================================================================

MS_PER_SECOND = 1000
SECONDS_PER_MINUTE = 60
SECONDS_PER_HOUR = 3600
SECONDS_PER_DAY = 86400

# =============================================================================
# Database Constants
# =============================================================================

DB_CONNECTION_TIMEOUT = 30.0          # sqlite3.connect timeout (seconds)
SQLITE_BUSY_TIMEOUT = 5000            # PRAGMA busy_timeout (ms)

# =============================================================================
# Leveling Constants
# =============================================================================

BASE_LEVEL = 1                        # Level of a freshly created ledger entry
THRESHOLD_BASE = 100                  # threshold(level) = floor(100 * level ** 1.5)
THRESHOLD_EXPONENT = 1.5
DEFAULT_COOLDOWN_MS = 60_000          # One XP award per user per minute

# =============================================================================
# Rank Card Constants
# =============================================================================

CARD_WIDTH = 600
CARD_HEIGHT = 180
AVATAR_SIZE = 128
AVATAR_FETCH_TIMEOUT = 10             # Seconds

# =============================================================================
# Discord Limits
# =============================================================================

MAX_TIMEOUT_MINUTES = 40320           # 28 days
MAX_SLOWMODE_SECONDS = 21600          # 6 hours
EMBED_TITLE_MAX = 256
EMBED_DESCRIPTION_MAX = 4096
EMBED_FOOTER_MAX = 2048
ROLE_NAME_MAX = 100
AFK_STATUS_MAX = 200
