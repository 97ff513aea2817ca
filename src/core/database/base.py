"""
LevelBot - Database Base Module
===============================

Store error type and the helper that maps sqlite failures onto it.
"""

import functools
import sqlite3
from typing import Any, Callable, TypeVar

from src.core.logger import logger


F = TypeVar("F", bound=Callable[..., Any])


# =============================================================================
# Errors
# =============================================================================

class StoreError(Exception):
    """
    Raised when the store is unreachable or rejects a read/write.

    DESIGN:
        Callers see one distinguishable error type regardless of the
        underlying sqlite failure. Operations are never retried here.
    """

    pass


# =============================================================================
# Helper Functions
# =============================================================================

def wraps_store_errors(operation: str) -> Callable[[F], F]:
    """
    Decorate a mixin method so sqlite errors surface as StoreError.

    Args:
        operation: Human readable operation name for logs.
    """
    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except sqlite3.Error as e:
                logger.error("Store Operation Failed", [
                    ("Operation", operation),
                    ("Error", str(e)[:100]),
                ])
                raise StoreError(f"{operation} failed: {e}") from e
        return wrapper  # type: ignore[return-value]
    return decorator


__all__ = ["StoreError", "wraps_store_errors"]
