"""
Mock Google sign-in

There is no OAuth exchange: signing in resolves a fixed user after a fixed
delay.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

from app.models.schemas import User
from app.utils.operations import Completion, PendingOperation, delayed

logger = logging.getLogger(__name__)


MOCK_USER = User(
    id="user123",
    name="John Doe",
    email="john.doe@university.edu",
    avatar="https://images.unsplash.com/photo-1507003211169-0a1dd7228f2d?w=100&h=100&fit=crop&crop=face",
)


class MockGoogleAuth:
    """Sign-in action producing MOCK_USER"""

    def __init__(self, delay_ms: int = 1000, completion: Optional[Completion[User]] = None) -> None:
        self._delay_ms = delay_ms
        self._completion = completion

    def sign_in(self, on_sign_in: Optional[Callable[[User], None]] = None) -> PendingOperation[User]:
        """
        Start the sign-in

        Args:
            on_sign_in: Receives the user once the delay has passed

        Returns:
            PendingOperation resolving to the signed-in user
        """
        completion = self._completion or delayed(MOCK_USER, self._delay_ms)
        logger.info(f"Sign-in started (delay {self._delay_ms} ms)")
        return PendingOperation("sign-in", completion, on_sign_in)
