"""
Page controller

One page session renders exactly one view, chosen by its state:

- AnonymousPage  -> landing view
- OnboardingPage -> profile wizard
- ActivePage     -> matches dashboard

Sign-in completion moves Anonymous -> Onboarding, profile completion moves
Onboarding -> Active. The controller owns the pending simulated operations
and cancels them on close(), so no completion reaches a torn-down page.
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Callable, Iterable, Optional

from app.models.match_models import Candidate, DashboardTab
from app.models.schemas import (
    ActivePage,
    AnonymousPage,
    OnboardingPage,
    PagePhase,
    PageState,
    PageView,
    User,
)
from app.services.auth_service import MockGoogleAuth
from app.services.match_service import MatchesDashboard
from app.services.profile_service import ProfileWizard, WizardResult
from app.utils.errors import (
    AuthenticationError,
    InvalidTransitionError,
    ProfileSaveError,
)
from app.utils.operations import Completion, OperationScope, PendingOperation

logger = logging.getLogger(__name__)


class PageController:
    """State of one page session"""

    def __init__(
        self,
        session_id: str,
        auth: MockGoogleAuth,
        load_candidates: Callable[[], Iterable[Candidate]],
        save_delay_ms: int = 1500,
        save_completion: Optional[Completion[None]] = None,
    ) -> None:
        self.session_id = session_id
        self.state: PageState = AnonymousPage()
        self.wizard: Optional[ProfileWizard] = None
        self.dashboard: Optional[MatchesDashboard] = None
        self._auth = auth
        self._load_candidates = load_candidates
        self._save_delay_ms = save_delay_ms
        self._save_completion = save_completion
        self._operations = OperationScope()
        self._sign_in: Optional[PendingOperation[User]] = None
        self._closed = False
        self.last_active = time.monotonic()

    @property
    def phase(self) -> PagePhase:
        return PagePhase(self.state.phase)

    @property
    def user(self) -> Optional[User]:
        return getattr(self.state, "user", None)

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def pending_operations(self) -> int:
        return self._operations.pending

    def touch(self, now: Optional[float] = None) -> None:
        """Record activity on the page"""
        self.last_active = time.monotonic() if now is None else now

    def _ensure_open(self) -> None:
        if self._closed:
            raise InvalidTransitionError(f"Page session {self.session_id} is closed")

    # ------------------------------------------------------------------
    # Anonymous -> Onboarding
    # ------------------------------------------------------------------

    def start_sign_in(self) -> PendingOperation[User]:
        """
        Start the mock sign-in; a sign-in already in flight is reused

        Raises:
            InvalidTransitionError: If somebody is already signed in
        """
        self._ensure_open()
        if not isinstance(self.state, AnonymousPage):
            raise InvalidTransitionError("Already signed in")
        if self._sign_in is None or self._sign_in.done:
            self._sign_in = self._operations.track(self._auth.sign_in(self._signed_in))
        return self._sign_in

    async def sign_in(self) -> User:
        """
        Sign in and wait for the completion

        Raises:
            InvalidTransitionError: Already signed in, or the page was closed meanwhile
            AuthenticationError: The sign-in operation failed
        """
        operation = self.start_sign_in()
        try:
            return await operation
        except asyncio.CancelledError:
            if operation.cancelled:
                raise InvalidTransitionError("Sign-in was cancelled") from None
            raise
        except Exception as e:
            raise AuthenticationError(f"Sign-in failed: {e}") from e

    def _signed_in(self, user: User) -> None:
        if self._closed or not isinstance(self.state, AnonymousPage):
            logger.warning(f"Ignoring stale sign-in for session {self.session_id}")
            return
        self.state = OnboardingPage(user=user)
        # Profile is always treated as incomplete right after sign-in
        self.wizard = ProfileWizard(
            user,
            on_complete=self._profile_completed,
            save_delay_ms=self._save_delay_ms,
            save_completion=self._save_completion,
        )
        logger.info(f"Session {self.session_id[:8]}... signed in as {user.id}")

    # ------------------------------------------------------------------
    # Onboarding -> Active
    # ------------------------------------------------------------------

    def require_wizard(self) -> ProfileWizard:
        self._ensure_open()
        if not isinstance(self.state, OnboardingPage) or self.wizard is None:
            raise InvalidTransitionError(f"Profile setup is not available in state {self.phase.value}")
        return self.wizard

    def submit_profile(self) -> WizardResult:
        """Submit the wizard; a started save is tracked for cancellation"""
        result = self.require_wizard().submit()
        if result.operation is not None:
            self._operations.track(result.operation)
        return result

    async def complete_profile(self) -> WizardResult:
        """
        Submit the wizard and wait for the simulated save

        Raises:
            InvalidTransitionError: Not onboarding, or the page was closed meanwhile
            ProfileSaveError: The save operation failed
        """
        result = self.submit_profile()
        if result.operation is None:
            return result
        try:
            await result.operation
        except asyncio.CancelledError:
            if result.operation.cancelled:
                raise InvalidTransitionError("Profile save was cancelled") from None
            raise
        except Exception as e:
            raise ProfileSaveError(f"Profile save failed: {e}") from e
        return result

    def _profile_completed(self) -> None:
        if self._closed or not isinstance(self.state, OnboardingPage):
            logger.warning(f"Ignoring stale profile completion for session {self.session_id}")
            return
        # A failing candidate load leaves the page onboarding with a failed save
        dashboard = MatchesDashboard(self._load_candidates())
        self.state = ActivePage(user=self.state.user)
        self.wizard = None
        self.dashboard = dashboard
        logger.info(f"Session {self.session_id[:8]}... completed profile setup")

    # ------------------------------------------------------------------
    # Active
    # ------------------------------------------------------------------

    def require_dashboard(self) -> MatchesDashboard:
        self._ensure_open()
        if not isinstance(self.state, ActivePage) or self.dashboard is None:
            raise InvalidTransitionError(f"Dashboard is not available in state {self.phase.value}")
        return self.dashboard

    # ------------------------------------------------------------------

    def close(self) -> int:
        """Tear the page down; returns how many pending operations were cancelled"""
        self._closed = True
        cancelled = self._operations.cancel_all()
        if cancelled:
            logger.info(f"Session {self.session_id[:8]}... closed, cancelled {cancelled} operation(s)")
        return cancelled

    def view(self, tab: DashboardTab = DashboardTab.discover) -> PageView:
        return PageView(
            session_id=self.session_id,
            page=self.state,
            wizard=self.wizard.view() if self.wizard is not None else None,
            dashboard=self.dashboard.view(tab) if self.dashboard is not None else None,
        )
