"""
Matches dashboard

Holds the in-memory candidate collection of one signed-in user and moves
candidates from pending to matched (connect) or declined (decline).
Declined candidates stay in the collection but are hidden from both tabs.
"""

from __future__ import annotations

import logging
from typing import Iterable, List

from app.models.match_models import (
    Candidate,
    CandidateCard,
    CandidateStatus,
    DashboardTab,
    DashboardView,
    EmptyState,
)
from app.models.schemas import Notice
from app.utils.errors import CandidateNotFoundError, CandidateStatusError

logger = logging.getLogger(__name__)


CONNECTION_SENT = Notice(
    title="Connection request sent!",
    description="We'll notify you when they respond.",
)

MATCH_DECLINED = Notice(
    title="Match declined",
    description="We'll find you more compatible partners.",
)

NO_NEW_MATCHES = EmptyState(
    title="No new matches",
    message="Check back later for new study partners!",
)

NO_CONNECTIONS = EmptyState(
    title="No connections yet",
    message="Start connecting with potential study partners!",
)

STUDY_TIMES_PREVIEW = 2


class MatchesDashboard:
    """Candidate collection with discover/connections views"""

    def __init__(self, candidates: Iterable[Candidate]) -> None:
        self._candidates: List[Candidate] = [c.model_copy(deep=True) for c in candidates]

    @property
    def candidates(self) -> List[Candidate]:
        """All candidates, including declined ones"""
        return list(self._candidates)

    def get(self, candidate_id: str) -> Candidate:
        for candidate in self._candidates:
            if candidate.id == candidate_id:
                return candidate
        raise CandidateNotFoundError(f"Candidate {candidate_id} not found")

    def discover(self) -> List[Candidate]:
        return [c for c in self._candidates if c.status == CandidateStatus.pending]

    def connections(self) -> List[Candidate]:
        return [c for c in self._candidates if c.status == CandidateStatus.matched]

    def _set_status(self, candidate_id: str, status: CandidateStatus) -> Candidate:
        current = self.get(candidate_id)
        if current.status == status:
            return current
        if current.status != CandidateStatus.pending:
            raise CandidateStatusError(
                f"Candidate {candidate_id} is already {current.status.value}"
            )

        updated = current.model_copy(update={"status": status})
        self._candidates = [updated if c.id == candidate_id else c for c in self._candidates]
        logger.info(f"Candidate {candidate_id}: {current.status.value} -> {status.value}")
        return updated

    def connect(self, candidate_id: str) -> tuple[Candidate, Notice]:
        """
        Mark a candidate as matched

        Idempotent for a candidate that is already matched.

        Raises:
            CandidateNotFoundError: Unknown id
            CandidateStatusError: Candidate was declined
        """
        return self._set_status(candidate_id, CandidateStatus.matched), CONNECTION_SENT

    def decline(self, candidate_id: str) -> tuple[Candidate, Notice]:
        """
        Mark a candidate as declined; there is no undo

        Raises:
            CandidateNotFoundError: Unknown id
            CandidateStatusError: Candidate is already matched
        """
        return self._set_status(candidate_id, CandidateStatus.declined), MATCH_DECLINED

    def view(self, tab: DashboardTab = DashboardTab.discover) -> DashboardView:
        """Render one tab with headline, cards and empty state"""
        discover = self.discover()
        connections = self.connections()

        if tab == DashboardTab.discover:
            shown = discover
            headline = f"{len(discover)} compatible study partners found"
            empty_state = NO_NEW_MATCHES
        else:
            shown = connections
            suffix = "" if len(connections) == 1 else "s"
            headline = f"{len(connections)} active study partnership{suffix}"
            empty_state = NO_CONNECTIONS

        return DashboardView(
            tab=tab,
            headline=headline,
            cards=[_card(c) for c in shown],
            discover_count=len(discover),
            connections_count=len(connections),
            empty_state=None if shown else empty_state,
        )


def _card(candidate: Candidate) -> CandidateCard:
    preview = candidate.study_times[:STUDY_TIMES_PREVIEW]
    return CandidateCard(
        candidate=candidate,
        initials="".join(part[0] for part in candidate.name.split() if part),
        study_times_preview=preview,
        more_study_times=len(candidate.study_times) - len(preview),
    )
