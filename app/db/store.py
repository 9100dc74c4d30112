"""
In-memory page-session store

Nothing is persisted: page sessions live in a dict for the lifetime of the
process. This module handles:
- Store initialisation and shutdown
- Access to the store from request handlers

Idle sessions are evicted by PageSessionsRepository.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from app.services.page_service import PageController

logger = logging.getLogger(__name__)

# Global store, created on startup
_sessions: Optional[dict[str, "PageController"]] = None


async def init_store() -> None:
    """Create the page-session store"""
    global _sessions
    if _sessions is not None:
        return
    _sessions = {}


async def get_store() -> dict[str, "PageController"]:
    """
    Get the page-session store

    Returns:
        Mapping of session id to page controller

    Raises:
        RuntimeError: If the store is not initialized
    """
    if _sessions is None:
        raise RuntimeError("Session store is not initialized")
    return _sessions


async def close_store() -> None:
    """Close every page session and drop the store"""
    global _sessions
    if _sessions is not None:
        cancelled = sum(controller.close() for controller in _sessions.values())
        logger.info(f"Closed {len(_sessions)} page session(s), cancelled {cancelled} operation(s)")
    _sessions = None


def is_initialized() -> bool:
    return _sessions is not None
