"""
Router for the profile setup wizard

Every action answers with the wizard view. Validation failures at a step
gate come back as accepted=false with a destructive notice; the user stays
on the current step.
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends

from app.models import (
    AddSkillRequest,
    GoalsRequest,
    Notice,
    PreferencesRequest,
    StudyTimeRequest,
    WizardActionResponse,
    WizardView,
)
from app.routers.sessions import get_page
from app.services.page_service import PageController
from app.services.profile_service import ProfileWizard


router = APIRouter()


async def get_wizard(page: PageController = Depends(get_page)) -> ProfileWizard:
    """Get the wizard of an onboarding page session"""
    return page.require_wizard()


def _respond(
    page: PageController,
    wizard: ProfileWizard,
    accepted: bool,
    notice: Optional[Notice] = None,
) -> WizardActionResponse:
    return WizardActionResponse(
        accepted=accepted,
        notice=notice,
        wizard=wizard.view(),
        phase=page.phase,
    )


@router.get("/{session_id}", response_model=WizardView)
async def get_wizard_view(wizard: ProfileWizard = Depends(get_wizard)) -> WizardView:
    """Current wizard step and draft"""
    return wizard.view()


@router.post("/{session_id}/skills", response_model=WizardActionResponse)
async def add_skill(
    payload: AddSkillRequest,
    page: PageController = Depends(get_page),
    wizard: ProfileWizard = Depends(get_wizard),
) -> WizardActionResponse:
    """Add a skill; blank and duplicate skills are ignored (accepted=false)"""
    return _respond(page, wizard, wizard.add_skill(payload.skill))


@router.delete("/{session_id}/skills/{skill:path}", response_model=WizardActionResponse)
async def remove_skill(
    skill: str,
    page: PageController = Depends(get_page),
    wizard: ProfileWizard = Depends(get_wizard),
) -> WizardActionResponse:
    """Remove a skill by exact name"""
    return _respond(page, wizard, wizard.remove_skill(skill))


@router.put("/{session_id}/goals", response_model=WizardActionResponse)
async def set_goals(
    payload: GoalsRequest,
    page: PageController = Depends(get_page),
    wizard: ProfileWizard = Depends(get_wizard),
) -> WizardActionResponse:
    """Set learning goals and/or subject focus"""
    if payload.goals is not None:
        wizard.set_goals(payload.goals)
    if payload.subjects is not None:
        wizard.set_subjects(payload.subjects)
    return _respond(page, wizard, True)


@router.put("/{session_id}/preferences", response_model=WizardActionResponse)
async def set_preferences(
    payload: PreferencesRequest,
    page: PageController = Depends(get_page),
    wizard: ProfileWizard = Depends(get_wizard),
) -> WizardActionResponse:
    """Set communication style and/or location preference"""
    if payload.communication_style is not None:
        wizard.set_communication_style(payload.communication_style)
    if payload.location is not None:
        wizard.set_location(payload.location)
    return _respond(page, wizard, True)


@router.post("/{session_id}/study-times", response_model=WizardActionResponse)
async def toggle_study_time(
    payload: StudyTimeRequest,
    page: PageController = Depends(get_page),
    wizard: ProfileWizard = Depends(get_wizard),
) -> WizardActionResponse:
    """
    Check or uncheck a study-time option

    Raises:
        WizardValidationError: Unknown option (400)
    """
    return _respond(page, wizard, wizard.toggle_study_time(payload.time, payload.checked))


@router.post("/{session_id}/next", response_model=WizardActionResponse)
async def next_step(
    page: PageController = Depends(get_page),
    wizard: ProfileWizard = Depends(get_wizard),
) -> WizardActionResponse:
    """Go to the next step if the current one is complete"""
    result = wizard.next_step()
    return _respond(page, wizard, result.accepted, result.notice)


@router.post("/{session_id}/back", response_model=WizardActionResponse)
async def previous_step(
    page: PageController = Depends(get_page),
    wizard: ProfileWizard = Depends(get_wizard),
) -> WizardActionResponse:
    """Go back one step"""
    result = wizard.previous_step()
    return _respond(page, wizard, result.accepted, result.notice)


@router.post("/{session_id}/submit", response_model=WizardActionResponse)
async def submit_profile(
    page: PageController = Depends(get_page),
    wizard: ProfileWizard = Depends(get_wizard),
) -> WizardActionResponse:
    """
    Submit the profile and wait for the simulated save

    On success the page moves to the dashboard (phase=active).

    Raises:
        InvalidTransitionError: Not on the preferences step (409)
        ProfileSaveError: Save operation failed (502)
    """
    result = await page.complete_profile()
    return _respond(page, wizard, result.accepted, result.notice)
