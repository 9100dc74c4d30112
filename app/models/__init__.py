"""
StudyMate data models

Models define which data the API accepts and returns.
"""

from app.models.schemas import (
    User,
    Notice,
    NoticeVariant,
    HealthResponse,
    PagePhase,
    AnonymousPage,
    OnboardingPage,
    ActivePage,
    PageState,
    WizardStep,
    ProfileDraft,
    WizardView,
    WizardActionResponse,
    AddSkillRequest,
    GoalsRequest,
    PreferencesRequest,
    StudyTimeRequest,
    CreateSessionResponse,
    PageView,
    LandingStep,
    LinkGroup,
    LandingPage,
    CandidateActionResponse,
)

from app.models.match_models import (
    Candidate,
    CandidateStatus,
    CandidateCard,
    DashboardTab,
    DashboardView,
    EmptyState,
)

__all__ = [
    "User",
    "Notice",
    "NoticeVariant",
    "HealthResponse",
    "PagePhase",
    "AnonymousPage",
    "OnboardingPage",
    "ActivePage",
    "PageState",
    "WizardStep",
    "ProfileDraft",
    "WizardView",
    "WizardActionResponse",
    "AddSkillRequest",
    "GoalsRequest",
    "PreferencesRequest",
    "StudyTimeRequest",
    "CreateSessionResponse",
    "PageView",
    "LandingStep",
    "LinkGroup",
    "LandingPage",
    "CandidateActionResponse",
    "Candidate",
    "CandidateStatus",
    "CandidateCard",
    "DashboardTab",
    "DashboardView",
    "EmptyState",
]
