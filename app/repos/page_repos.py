"""
Repository for page sessions

Data access layer over the in-memory store: creating, finding and closing
page controllers. Sessions idle for longer than the TTL are closed and
evicted whenever the store is accessed.
"""

from __future__ import annotations

import logging
import time
from typing import Optional

from app.services.page_service import PageController

logger = logging.getLogger(__name__)


class PageSessionsRepository:
    """Repository for page sessions"""

    def __init__(self, store: dict[str, PageController], ttl_seconds: Optional[float] = None) -> None:
        self._store = store
        self._ttl_seconds = ttl_seconds

    def _evict_expired(self, now: float) -> None:
        if self._ttl_seconds is None:
            return
        expired = [
            session_id for session_id, controller in self._store.items()
            if now - controller.last_active > self._ttl_seconds
        ]
        for session_id in expired:
            cancelled = self._store.pop(session_id).close()
            logger.info(f"Evicted idle session {session_id[:8]}..., cancelled {cancelled} operation(s)")

    async def find_by_id(self, session_id: str, now: Optional[float] = None) -> Optional[PageController]:
        """Find a live page session by ID and mark it active"""
        now = time.monotonic() if now is None else now
        self._evict_expired(now)
        controller = self._store.get(session_id)
        if controller is not None:
            controller.touch(now)
        return controller

    async def insert_one(self, controller: PageController, now: Optional[float] = None) -> None:
        """Register a new page session"""
        now = time.monotonic() if now is None else now
        self._evict_expired(now)
        controller.touch(now)
        self._store[controller.session_id] = controller

    async def delete_by_id(self, session_id: str) -> int:
        """
        Close and remove a page session

        Returns:
            Number of pending operations cancelled, 0 if the session was unknown
        """
        controller = self._store.pop(session_id, None)
        if controller is None:
            return 0
        return controller.close()
