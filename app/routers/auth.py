"""
Router for the mock Google sign-in
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from app.models import PageView
from app.routers.sessions import get_page
from app.services.page_service import PageController


router = APIRouter()


@router.post("/{session_id}/sign-in", response_model=PageView)
async def sign_in(page: PageController = Depends(get_page)) -> PageView:
    """
    Sign in with the mock Google account

    Waits for the simulated sign-in delay, then returns the page, which now
    renders the profile wizard.

    Raises:
        InvalidTransitionError: Already signed in (409)
        AuthenticationError: Sign-in operation failed (502)
    """
    await page.sign_in()
    return page.view()
