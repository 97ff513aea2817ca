"""
LevelBot - Rank Card Renderer
=============================

Draws a 600x180 PNG summarizing a user's level and progress.

Layout (pixel coordinates, text positioned on its baseline):
    - Background fills the canvas
    - Display name at (180, 50)
    - "Level: N" at (180, 90) in gold
    - Progress track at (180, 110), 350x30
    - Progress fill over the track, width 350 * min(xp / threshold, 1)
    - "{xp} / {threshold} XP" centered in the track, baseline y=130
    - Avatar clipped to a 128px circle centered at (90, 90)

Rendering is read-only with respect to the ledger.
"""

import io
from functools import lru_cache
from typing import Optional

from PIL import Image, ImageDraw, ImageFont, UnidentifiedImageError

from src.core.logger import logger
from src.core.constants import CARD_WIDTH, CARD_HEIGHT, AVATAR_SIZE
from src.services.leveling.ledger import LedgerEntry, threshold


# =============================================================================
# Constants
# =============================================================================

BACKGROUND_COLOR = (0x23, 0x27, 0x2A)
NAME_COLOR = (0xFF, 0xFF, 0xFF)
LEVEL_COLOR = (0xFF, 0xD7, 0x00)
TRACK_COLOR = (0x00, 0x00, 0x00)
FILL_COLOR = (0x1E, 0x70, 0x4F)
XP_TEXT_COLOR = (0xFF, 0xFF, 0xFF)

NAME_POS = (180, 50)
LEVEL_POS = (180, 90)

BAR_X = 180
BAR_Y = 110
BAR_WIDTH = 350
BAR_HEIGHT = 30
XP_TEXT_BASELINE = 130

AVATAR_CENTER = (90, 90)
AVATAR_ORIGIN = (AVATAR_CENTER[0] - AVATAR_SIZE // 2, AVATAR_CENTER[1] - AVATAR_SIZE // 2)

BOLD_FONT_PATHS = (
    "/usr/share/fonts/truetype/dejavu/DejaVuSans-Bold.ttf",
    "/System/Library/Fonts/Helvetica.ttc",
)
REGULAR_FONT_PATHS = (
    "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
    "/System/Library/Fonts/Helvetica.ttc",
)


# =============================================================================
# Errors
# =============================================================================

class ImageDecodeError(Exception):
    """Raised when avatar bytes cannot be decoded into an image."""

    pass


# =============================================================================
# Helpers
# =============================================================================

@lru_cache(maxsize=8)
def _load_font(size: int, bold: bool = False) -> ImageFont.FreeTypeFont:
    """Load a system font, falling back to Pillow's bundled font."""
    for path in (BOLD_FONT_PATHS if bold else REGULAR_FONT_PATHS):
        try:
            return ImageFont.truetype(path, size)
        except (OSError, IOError):
            continue
    return ImageFont.load_default(size=size)


def progress_ratio(entry: LedgerEntry) -> float:
    """Share of the current level completed, clamped to [0, 1]."""
    needed = threshold(entry.level)
    if needed <= 0:
        return 0.0
    return max(0.0, min(entry.xp / needed, 1.0))


def progress_fill_width(entry: LedgerEntry) -> int:
    """
    Pixel width of the progress fill.

    Args:
        entry: Ledger entry being drawn.

    Returns:
        Integer width in [0, 350]; never overflows the track.
    """
    return int(BAR_WIDTH * progress_ratio(entry))


def decode_avatar(avatar_bytes: bytes, size: int = AVATAR_SIZE) -> Image.Image:
    """
    Decode avatar bytes into an RGBA image of size x size.

    Raises:
        ImageDecodeError: If the bytes are empty or not a readable image.
    """
    if not avatar_bytes:
        raise ImageDecodeError("Empty avatar data")
    try:
        avatar = Image.open(io.BytesIO(avatar_bytes))
        avatar = avatar.convert("RGBA")
    except (UnidentifiedImageError, OSError, ValueError) as e:
        raise ImageDecodeError(str(e)) from e
    return avatar.resize((size, size), Image.Resampling.LANCZOS)


def _circle_mask(size: int) -> Image.Image:
    mask = Image.new("L", (size, size), 0)
    ImageDraw.Draw(mask).ellipse((0, 0, size - 1, size - 1), fill=255)
    return mask


# =============================================================================
# Rendering
# =============================================================================

def render_rank_card_image(
    display_name: str,
    avatar_bytes: Optional[bytes],
    entry: LedgerEntry,
) -> Image.Image:
    """
    Compose the rank card as a Pillow image.

    Avatar decode failures are logged and the card is drawn without it.
    """
    card = Image.new("RGB", (CARD_WIDTH, CARD_HEIGHT), BACKGROUND_COLOR)
    draw = ImageDraw.Draw(card)

    needed = threshold(entry.level)

    # -------------------------------------------------------------------------
    # Name & Level
    # -------------------------------------------------------------------------

    draw.text(NAME_POS, display_name, font=_load_font(28, bold=True), fill=NAME_COLOR, anchor="ls")
    draw.text(LEVEL_POS, f"Level: {entry.level}", font=_load_font(22, bold=True), fill=LEVEL_COLOR, anchor="ls")

    # -------------------------------------------------------------------------
    # Progress Bar
    # -------------------------------------------------------------------------

    draw.rectangle(
        (BAR_X, BAR_Y, BAR_X + BAR_WIDTH - 1, BAR_Y + BAR_HEIGHT - 1),
        fill=TRACK_COLOR,
    )
    fill_width = progress_fill_width(entry)
    if fill_width > 0:
        draw.rectangle(
            (BAR_X, BAR_Y, BAR_X + fill_width - 1, BAR_Y + BAR_HEIGHT - 1),
            fill=FILL_COLOR,
        )

    xp_font = _load_font(16)
    xp_text = f"{entry.xp} / {needed} XP"
    text_width = draw.textlength(xp_text, font=xp_font)
    xp_text_x = BAR_X + (BAR_WIDTH - text_width) / 2
    draw.text((xp_text_x, XP_TEXT_BASELINE), xp_text, font=xp_font, fill=XP_TEXT_COLOR, anchor="ls")

    # -------------------------------------------------------------------------
    # Avatar
    # -------------------------------------------------------------------------

    if avatar_bytes is not None:
        try:
            avatar = decode_avatar(avatar_bytes)
        except ImageDecodeError as e:
            logger.warning("Avatar Decode Failed", [
                ("User ID", entry.user_id),
                ("Error", str(e)[:50]),
            ])
        else:
            card.paste(avatar, AVATAR_ORIGIN, _circle_mask(AVATAR_SIZE))

    return card


def render_rank_card(
    display_name: str,
    avatar_bytes: Optional[bytes],
    entry: LedgerEntry,
) -> bytes:
    """
    Render the rank card to PNG bytes.

    Args:
        display_name: Name drawn at the top of the card.
        avatar_bytes: Raw avatar image, or None to skip the avatar.
        entry: Ledger snapshot to visualize.

    Returns:
        PNG encoded image.
    """
    card = render_rank_card_image(display_name, avatar_bytes, entry)
    buffer = io.BytesIO()
    card.save(buffer, format="PNG")
    return buffer.getvalue()


__all__ = [
    "ImageDecodeError",
    "decode_avatar",
    "progress_ratio",
    "progress_fill_width",
    "render_rank_card",
    "render_rank_card_image",
]
