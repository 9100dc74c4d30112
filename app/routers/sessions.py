"""
Router for page sessions

A page session is the server-side state of one open StudyMate page: it
starts anonymous, becomes onboarding after sign-in and active once the
profile is complete.
"""

from __future__ import annotations

import logging
from functools import partial
from typing import Callable
from uuid import uuid4

from fastapi import APIRouter, Depends

from app.config import Settings, get_settings
from app.db.store import get_store
from app.models import CreateSessionResponse, DashboardTab, PageView
from app.repos.page_repos import PageSessionsRepository
from app.services.auth_service import MockGoogleAuth
from app.services.page_service import PageController
from app.startup.seed_candidates import load_candidates
from app.utils.errors import SessionNotFoundError

logger = logging.getLogger(__name__)

router = APIRouter()

PageFactory = Callable[[str], PageController]


async def get_page_repo(
    store=Depends(get_store),  # noqa: ANN001
    settings: Settings = Depends(get_settings),
) -> PageSessionsRepository:
    """Get the page-session repository"""
    return PageSessionsRepository(store, ttl_seconds=settings.session_ttl_seconds)


def get_page_factory(settings: Settings = Depends(get_settings)) -> PageFactory:
    """Get a factory building page controllers from the settings"""
    def factory(session_id: str) -> PageController:
        return PageController(
            session_id,
            auth=MockGoogleAuth(delay_ms=settings.sign_in_delay_ms),
            load_candidates=partial(load_candidates, settings.candidates_fixture_path),
            save_delay_ms=settings.profile_save_delay_ms,
        )
    return factory


async def get_page(
    session_id: str,
    page_repo: PageSessionsRepository = Depends(get_page_repo),
) -> PageController:
    """Resolve the page session from the path, 404 if unknown"""
    page = await page_repo.find_by_id(session_id)
    if page is None:
        raise SessionNotFoundError(f"Session {session_id} not found")
    return page


@router.post("", response_model=CreateSessionResponse)
async def create_session(
    page_repo: PageSessionsRepository = Depends(get_page_repo),
    page_factory: PageFactory = Depends(get_page_factory),
) -> CreateSessionResponse:
    """
    Open a new anonymous page session

    Returns:
        CreateSessionResponse with the session ID and its initial page state
    """
    page = page_factory(str(uuid4()))
    await page_repo.insert_one(page)
    logger.info(f"Created page session {page.session_id[:8]}...")
    return CreateSessionResponse(session_id=page.session_id, page=page.state)


@router.get("/{session_id}", response_model=PageView)
async def get_session(
    tab: DashboardTab = DashboardTab.discover,
    page: PageController = Depends(get_page),
) -> PageView:
    """
    Get the view the page session currently renders

    Args:
        tab: Dashboard tab, used only once the profile is complete
        page: Page session

    Returns:
        PageView with the page state and the wizard or dashboard view
    """
    return page.view(tab)


@router.delete("/{session_id}")
async def delete_session(
    session_id: str,
    page_repo: PageSessionsRepository = Depends(get_page_repo),
) -> dict:
    """
    Close a page session, cancelling its pending operations

    Raises:
        SessionNotFoundError: If the session is not found (404)
    """
    page = await page_repo.find_by_id(session_id)
    if page is None:
        raise SessionNotFoundError(f"Session {session_id} not found")

    cancelled = await page_repo.delete_by_id(session_id)
    return {"status": "success", "message": "Session deleted successfully", "cancelled_operations": cancelled}
