"""
StudyMate data schemas

Models for the signed-in user, transient notices, the page state of a
session and the profile wizard requests/responses.
"""

from __future__ import annotations

from enum import Enum, IntEnum
from typing import Annotated, Literal, Optional, List, Union
from pydantic import BaseModel, ConfigDict, Field, computed_field

from app.models.match_models import Candidate, DashboardView


# ============================================================================
# USER AND NOTICES
# ============================================================================

class User(BaseModel):
    """Signed-in user, immutable once created by the sign-in action"""
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    email: str
    avatar: Optional[str] = None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def initials(self) -> str:
        """Avatar fallback: first letter of each name part"""
        return "".join(part[0] for part in self.name.split() if part)


class NoticeVariant(str, Enum):
    """Visual variant of a notice"""
    default = "default"
    destructive = "destructive"


class Notice(BaseModel):
    """Transient message shown to the user after an action"""
    model_config = ConfigDict(extra="forbid")

    title: str
    description: str = ""
    variant: NoticeVariant = NoticeVariant.default


class HealthResponse(BaseModel):
    """Health check response"""
    model_config = ConfigDict(extra="forbid")

    status: Literal["ok"]
    time: str


# ============================================================================
# PAGE STATE
# ============================================================================

class PagePhase(str, Enum):
    """Which view a page session currently renders"""
    anonymous = "anonymous"
    onboarding = "onboarding"
    active = "active"


class AnonymousPage(BaseModel):
    """Nobody signed in: landing view"""
    model_config = ConfigDict(extra="forbid", frozen=True)

    phase: Literal["anonymous"] = "anonymous"


class OnboardingPage(BaseModel):
    """Signed in, profile not complete: profile wizard"""
    model_config = ConfigDict(extra="forbid", frozen=True)

    phase: Literal["onboarding"] = "onboarding"
    user: User


class ActivePage(BaseModel):
    """Signed in with a complete profile: matches dashboard"""
    model_config = ConfigDict(extra="forbid", frozen=True)

    phase: Literal["active"] = "active"
    user: User


PageState = Annotated[
    Union[AnonymousPage, OnboardingPage, ActivePage],
    Field(discriminator="phase"),
]


# ============================================================================
# PROFILE WIZARD
# ============================================================================

class WizardStep(IntEnum):
    """Wizard steps in order"""
    skills = 1
    goals = 2
    preferences = 3


class ProfileDraft(BaseModel):
    """Profile built across the three wizard steps"""
    model_config = ConfigDict(extra="forbid")

    skills: List[str] = Field(default_factory=list)
    goals: str = ""
    subjects: str = ""
    study_times: List[str] = Field(default_factory=list)
    communication_style: str = ""
    location: str = ""


class WizardView(BaseModel):
    """Current wizard screen"""
    model_config = ConfigDict(extra="forbid")

    user: User
    step: WizardStep
    total_steps: int = len(WizardStep)
    progress_percent: int
    draft: ProfileDraft
    study_time_options: List[str]
    saving: bool = False


class WizardActionResponse(BaseModel):
    """Result of a wizard action"""
    model_config = ConfigDict(extra="forbid")

    accepted: bool
    notice: Optional[Notice] = None
    wizard: WizardView
    phase: PagePhase = PagePhase.onboarding


class AddSkillRequest(BaseModel):
    """Add one skill"""
    model_config = ConfigDict(extra="forbid")

    skill: str


class GoalsRequest(BaseModel):
    """Step 2 fields; omitted fields are left unchanged"""
    model_config = ConfigDict(extra="forbid")

    goals: Optional[str] = None
    subjects: Optional[str] = None


class PreferencesRequest(BaseModel):
    """Step 3 free-text fields; omitted fields are left unchanged"""
    model_config = ConfigDict(extra="forbid")

    communication_style: Optional[str] = None
    location: Optional[str] = None


class StudyTimeRequest(BaseModel):
    """Check or uncheck one study-time option"""
    model_config = ConfigDict(extra="forbid")

    time: str
    checked: bool = True


# ============================================================================
# SESSIONS AND LANDING
# ============================================================================

class CreateSessionResponse(BaseModel):
    """ID of the new page session"""
    model_config = ConfigDict(extra="forbid")

    session_id: str
    page: PageState


class PageView(BaseModel):
    """Whatever the page session currently renders"""
    model_config = ConfigDict(extra="forbid")

    session_id: str
    page: PageState
    wizard: Optional[WizardView] = None
    dashboard: Optional[DashboardView] = None


class LandingStep(BaseModel):
    model_config = ConfigDict(extra="forbid")

    title: str
    description: str


class LinkGroup(BaseModel):
    model_config = ConfigDict(extra="forbid")

    title: str
    links: List[str]


class LandingPage(BaseModel):
    """Marketing content of the landing view"""
    model_config = ConfigDict(extra="forbid")

    brand: str
    headline: str
    tagline: str
    how_it_works: List[LandingStep]
    benefits: List[LandingStep]
    call_to_action: LandingStep
    footer: List[LinkGroup]
    copyright: str
    sign_in_path: str


class CandidateActionResponse(BaseModel):
    """Result of connect/decline"""
    model_config = ConfigDict(extra="forbid")

    candidate: Candidate
    notice: Notice
    dashboard: DashboardView
