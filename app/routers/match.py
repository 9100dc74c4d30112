"""
Router for the matches dashboard

Candidates are listed per tab (discover = pending, connections = matched)
and can be connected or declined once.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from app.models import CandidateActionResponse, DashboardTab, DashboardView
from app.routers.sessions import get_page
from app.services.match_service import MatchesDashboard
from app.services.page_service import PageController

router = APIRouter()


async def get_dashboard(page: PageController = Depends(get_page)) -> MatchesDashboard:
    """Get the dashboard of an active page session"""
    return page.require_dashboard()


@router.get("/{session_id}", response_model=DashboardView)
async def get_matches(
    tab: DashboardTab = DashboardTab.discover,
    dashboard: MatchesDashboard = Depends(get_dashboard),
) -> DashboardView:
    """
    List candidates of one tab

    Args:
        tab: discover (pending candidates) or connections (matched ones)
        dashboard: Dashboard of the page session

    Returns:
        DashboardView with headline, cards and counts
    """
    return dashboard.view(tab)


@router.post("/{session_id}/{candidate_id}/connect", response_model=CandidateActionResponse)
async def connect(
    candidate_id: str,
    dashboard: MatchesDashboard = Depends(get_dashboard),
) -> CandidateActionResponse:
    """
    Send a connection request to a candidate

    Raises:
        CandidateNotFoundError: Unknown candidate (404)
        CandidateStatusError: Candidate was declined (409)
    """
    candidate, notice = dashboard.connect(candidate_id)
    return CandidateActionResponse(
        candidate=candidate,
        notice=notice,
        dashboard=dashboard.view(DashboardTab.connections),
    )


@router.post("/{session_id}/{candidate_id}/decline", response_model=CandidateActionResponse)
async def decline(
    candidate_id: str,
    dashboard: MatchesDashboard = Depends(get_dashboard),
) -> CandidateActionResponse:
    """
    Decline a candidate; declined candidates disappear from both tabs

    Raises:
        CandidateNotFoundError: Unknown candidate (404)
        CandidateStatusError: Candidate is already matched (409)
    """
    candidate, notice = dashboard.decline(candidate_id)
    return CandidateActionResponse(
        candidate=candidate,
        notice=notice,
        dashboard=dashboard.view(DashboardTab.discover),
    )
