"""
Profile setup wizard

Three sequential steps collect a ProfileDraft:
1. Skills
2. Goals and subjects
3. Study preferences

Forward navigation is gated by per-step validation; failures are reported
as destructive notices and keep the user on the current step. Submission
starts a simulated save whose completion fires the "profile complete"
signal once.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional

from app.models.schemas import (
    Notice,
    NoticeVariant,
    ProfileDraft,
    User,
    WizardStep,
    WizardView,
)
from app.utils.errors import InvalidTransitionError, WizardValidationError
from app.utils.operations import Completion, PendingOperation, delayed

logger = logging.getLogger(__name__)


STUDY_TIME_OPTIONS: tuple[str, ...] = (
    "Early Morning (6-9 AM)",
    "Morning (9-12 PM)",
    "Afternoon (12-5 PM)",
    "Evening (5-8 PM)",
    "Night (8-11 PM)",
    "Late Night (11+ PM)",
    "Weekends",
)

SKILLS_REQUIRED = Notice(
    title="Add at least one skill",
    description="This helps us match you with compatible partners.",
    variant=NoticeVariant.destructive,
)

GOALS_REQUIRED = Notice(
    title="Please describe your learning goals",
    description="This helps us find partners with similar objectives.",
    variant=NoticeVariant.destructive,
)

PROFILE_CREATED = Notice(
    title="Profile created successfully!",
    description="We're finding your perfect study partners now.",
)


@dataclass
class WizardResult:
    """Outcome of next_step()/submit()"""
    accepted: bool
    notice: Optional[Notice] = None
    operation: Optional[PendingOperation[None]] = None


class ProfileWizard:
    """State machine behind the profile setup screens"""

    def __init__(
        self,
        user: User,
        on_complete: Optional[Callable[[], None]] = None,
        save_delay_ms: int = 1500,
        save_completion: Optional[Completion[None]] = None,
    ) -> None:
        self.user = user
        self.step = WizardStep.skills
        self.draft = ProfileDraft()
        self._on_complete = on_complete
        self._save_delay_ms = save_delay_ms
        self._save_completion = save_completion
        self._save: Optional[PendingOperation[None]] = None

    def _ensure_editable(self) -> None:
        if self.saving:
            raise InvalidTransitionError("Profile is being saved")

    # ------------------------------------------------------------------
    # Step 1: skills
    # ------------------------------------------------------------------

    def add_skill(self, skill: str) -> bool:
        """
        Append a trimmed skill

        Returns:
            False if the skill is blank or already present (exact match)
        """
        self._ensure_editable()
        value = skill.strip()
        if not value or value in self.draft.skills:
            return False
        self.draft.skills.append(value)
        return True

    def remove_skill(self, skill: str) -> bool:
        self._ensure_editable()
        if skill not in self.draft.skills:
            return False
        self.draft.skills = [s for s in self.draft.skills if s != skill]
        return True

    # ------------------------------------------------------------------
    # Step 2: goals
    # ------------------------------------------------------------------

    def set_goals(self, goals: str) -> None:
        self._ensure_editable()
        self.draft.goals = goals

    def set_subjects(self, subjects: str) -> None:
        self._ensure_editable()
        self.draft.subjects = subjects

    # ------------------------------------------------------------------
    # Step 3: preferences
    # ------------------------------------------------------------------

    def toggle_study_time(self, time: str, checked: bool) -> bool:
        """
        Check or uncheck one study-time option

        Returns:
            Whether the selection changed

        Raises:
            WizardValidationError: If ``time`` is not one of STUDY_TIME_OPTIONS
        """
        if time not in STUDY_TIME_OPTIONS:
            raise WizardValidationError(f"Unknown study time: {time}")
        self._ensure_editable()
        selected = time in self.draft.study_times
        if checked and not selected:
            self.draft.study_times.append(time)
            return True
        if not checked and selected:
            self.draft.study_times = [t for t in self.draft.study_times if t != time]
            return True
        return False

    def set_communication_style(self, style: str) -> None:
        self._ensure_editable()
        self.draft.communication_style = style

    def set_location(self, location: str) -> None:
        self._ensure_editable()
        self.draft.location = location

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    @property
    def progress_percent(self) -> int:
        return round(self.step / len(WizardStep) * 100)

    @property
    def saving(self) -> bool:
        return self._save is not None and not self._save.done

    def next_step(self) -> WizardResult:
        """
        Move forward one step if the current step is valid

        Raises:
            InvalidTransitionError: On the last step (use submit()) or while saving
        """
        self._ensure_editable()
        if self.step == WizardStep.skills and not self.draft.skills:
            return WizardResult(accepted=False, notice=SKILLS_REQUIRED)
        if self.step == WizardStep.goals and not self.draft.goals.strip():
            return WizardResult(accepted=False, notice=GOALS_REQUIRED)
        if self.step == WizardStep.preferences:
            raise InvalidTransitionError("Preferences is the last step; submit the profile instead")

        self.step = WizardStep(self.step + 1)
        logger.debug(f"Wizard for {self.user.id} moved to step {int(self.step)}")
        return WizardResult(accepted=True)

    def previous_step(self) -> WizardResult:
        """Move back one step; no validation, no-op on the first step"""
        self._ensure_editable()
        if self.step == WizardStep.skills:
            return WizardResult(accepted=False)
        self.step = WizardStep(self.step - 1)
        return WizardResult(accepted=True)

    def missing_fields(self) -> List[str]:
        """Required categories that are still empty"""
        missing = []
        if not self.draft.skills:
            missing.append("skills")
        if not self.draft.goals.strip():
            missing.append("goals")
        if not self.draft.study_times:
            missing.append("study times")
        return missing

    def submit(self) -> WizardResult:
        """
        Validate the whole draft and start the simulated save

        The completion signal fires once per wizard: repeated submits return
        the save already started.

        Raises:
            InvalidTransitionError: If called before the preferences step
        """
        if self.step != WizardStep.preferences:
            raise InvalidTransitionError("Profile can only be submitted from the preferences step")

        if self._save is not None and not (self._save.cancelled or self._save.failed):
            return WizardResult(accepted=True, notice=PROFILE_CREATED, operation=self._save)

        missing = self.missing_fields()
        if missing:
            return WizardResult(
                accepted=False,
                notice=Notice(
                    title="Please complete all required fields",
                    description=f"We need your {', '.join(missing)} to find great matches.",
                    variant=NoticeVariant.destructive,
                ),
            )

        completion = self._save_completion or delayed(None, self._save_delay_ms)
        self._save = PendingOperation("profile-save", completion, self._saved)
        logger.info(f"Profile submitted for {self.user.id}: {len(self.draft.skills)} skills")
        return WizardResult(accepted=True, notice=PROFILE_CREATED, operation=self._save)

    def _saved(self, _: None) -> None:
        # The draft is discarded; completion is the only effect of saving
        if self._on_complete is not None:
            self._on_complete()

    def view(self) -> WizardView:
        return WizardView(
            user=self.user,
            step=self.step,
            progress_percent=self.progress_percent,
            draft=self.draft.model_copy(deep=True),
            study_time_options=list(STUDY_TIME_OPTIONS),
            saving=self.saving,
        )
