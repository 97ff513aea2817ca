"""
LevelBot - Avatar Download
==========================

Fetches raw avatar bytes for the rank card renderer.
"""

import asyncio
from typing import Optional

import aiohttp

from src.core.logger import logger
from src.core.constants import AVATAR_FETCH_TIMEOUT


async def fetch_avatar_bytes(avatar_url: str, session: Optional[aiohttp.ClientSession] = None) -> Optional[bytes]:
    """
    Download an avatar image.

    Args:
        avatar_url: CDN URL of the avatar (PNG format preferred).
        session: Optional shared session; a temporary one is used otherwise.

    Returns:
        Raw bytes, or None if the download failed. Decoding is left to
        the renderer so a bad image only drops the avatar.
    """
    timeout = aiohttp.ClientTimeout(total=AVATAR_FETCH_TIMEOUT)
    try:
        if session is not None:
            return await _get(session, avatar_url, timeout)
        async with aiohttp.ClientSession() as own_session:
            return await _get(own_session, avatar_url, timeout)
    except (aiohttp.ClientError, asyncio.TimeoutError) as e:
        logger.warning("Avatar Fetch Failed", [
            ("URL", avatar_url[:50]),
            ("Error", str(e)[:50]),
        ])
        return None


async def _get(session: aiohttp.ClientSession, url: str, timeout: aiohttp.ClientTimeout) -> Optional[bytes]:
    async with session.get(url, timeout=timeout) as resp:
        if resp.status != 200:
            logger.warning("Avatar Fetch Failed", [
                ("URL", url[:50]),
                ("Status", str(resp.status)),
            ])
            return None
        return await resp.read()


__all__ = ["fetch_avatar_bytes"]
