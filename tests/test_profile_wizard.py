"""
Tests for the profile setup wizard state machine
"""

import asyncio

import pytest

from app.models import NoticeVariant, WizardStep
from app.services.profile_service import STUDY_TIME_OPTIONS, ProfileWizard
from app.utils.errors import InvalidTransitionError, WizardValidationError
from app.utils.operations import delayed, failing, immediate


def make_wizard(user, **kwargs) -> ProfileWizard:
    kwargs.setdefault("save_completion", immediate(None))
    return ProfileWizard(user, **kwargs)


def advance_to_preferences(wizard: ProfileWizard) -> None:
    wizard.add_skill("Python")
    assert wizard.next_step().accepted
    wizard.set_goals("Pass finals")
    assert wizard.next_step().accepted
    assert wizard.step == WizardStep.preferences


class TestSkills:
    def test_add_skill_trims_value(self, user):
        wizard = make_wizard(user)
        assert wizard.add_skill("  Python  ") is True
        assert wizard.draft.skills == ["Python"]

    def test_duplicate_skill_is_ignored(self, user):
        wizard = make_wizard(user)
        wizard.add_skill("Python")

        assert wizard.add_skill("Python") is False
        assert wizard.add_skill(" Python ") is False
        assert len(wizard.draft.skills) == 1

    def test_duplicates_are_case_sensitive(self, user):
        wizard = make_wizard(user)
        wizard.add_skill("Python")

        assert wizard.add_skill("python") is True
        assert wizard.draft.skills == ["Python", "python"]

    @pytest.mark.parametrize("blank", ["", " ", "\t\n"])
    def test_blank_skill_is_ignored(self, user, blank):
        wizard = make_wizard(user)
        assert wizard.add_skill(blank) is False
        assert wizard.draft.skills == []

    def test_skills_keep_insertion_order(self, user):
        wizard = make_wizard(user)
        for skill in ["Calculus", "Python", "Essay Writing"]:
            wizard.add_skill(skill)
        assert wizard.draft.skills == ["Calculus", "Python", "Essay Writing"]

    def test_remove_skill(self, user):
        wizard = make_wizard(user)
        wizard.add_skill("Python")
        wizard.add_skill("Calculus")

        assert wizard.remove_skill("Python") is True
        assert wizard.remove_skill("Python") is False
        assert wizard.draft.skills == ["Calculus"]


class TestNavigation:
    def test_starts_on_skills_step(self, user):
        wizard = make_wizard(user)
        assert wizard.step == WizardStep.skills
        assert wizard.progress_percent == 33

    def test_cannot_leave_step_one_without_skills(self, user):
        wizard = make_wizard(user)
        result = wizard.next_step()

        assert result.accepted is False
        assert result.notice.title == "Add at least one skill"
        assert result.notice.variant == NoticeVariant.destructive
        assert wizard.step == WizardStep.skills

    @pytest.mark.parametrize("goals", ["", "   "])
    def test_cannot_leave_step_two_with_blank_goals(self, user, goals):
        wizard = make_wizard(user)
        wizard.add_skill("Python")
        wizard.next_step()
        wizard.set_goals(goals)

        result = wizard.next_step()
        assert result.accepted is False
        assert result.notice.title == "Please describe your learning goals"
        assert wizard.step == WizardStep.goals

    def test_forward_to_preferences(self, user):
        wizard = make_wizard(user)
        advance_to_preferences(wizard)
        assert wizard.progress_percent == 100

    def test_no_next_step_after_preferences(self, user):
        wizard = make_wizard(user)
        advance_to_preferences(wizard)
        with pytest.raises(InvalidTransitionError):
            wizard.next_step()

    def test_back_is_unconditional(self, user):
        wizard = make_wizard(user)
        advance_to_preferences(wizard)
        wizard.remove_skill("Python")
        wizard.set_goals("")

        assert wizard.previous_step().accepted
        assert wizard.step == WizardStep.goals
        assert wizard.previous_step().accepted
        assert wizard.step == WizardStep.skills

    def test_back_on_first_step_is_noop(self, user):
        wizard = make_wizard(user)
        assert wizard.previous_step().accepted is False
        assert wizard.step == WizardStep.skills


class TestStudyTimes:
    def test_toggle_on_and_off(self, user):
        wizard = make_wizard(user)
        assert wizard.toggle_study_time("Weekends", True) is True
        assert wizard.toggle_study_time("Weekends", True) is False
        assert wizard.draft.study_times == ["Weekends"]

        assert wizard.toggle_study_time("Weekends", False) is True
        assert wizard.draft.study_times == []

    def test_unknown_option_rejected(self, user):
        wizard = make_wizard(user)
        with pytest.raises(WizardValidationError):
            wizard.toggle_study_time("Lunch break", True)

    def test_options_are_fixed(self, user):
        view = make_wizard(user).view()
        assert view.study_time_options == list(STUDY_TIME_OPTIONS)
        assert len(view.study_time_options) == 7


class TestSubmit:
    def test_submit_only_from_preferences(self, user):
        wizard = make_wizard(user)
        with pytest.raises(InvalidTransitionError):
            wizard.submit()

    @pytest.mark.asyncio
    async def test_submit_without_study_times_never_completes(self, user):
        completed = []
        wizard = make_wizard(user, on_complete=lambda: completed.append(True))
        advance_to_preferences(wizard)

        result = wizard.submit()
        assert result.accepted is False
        assert result.operation is None
        assert "study times" in result.notice.description
        assert completed == []

    @pytest.mark.asyncio
    async def test_submit_names_every_missing_category(self, user):
        wizard = make_wizard(user)
        advance_to_preferences(wizard)
        wizard.remove_skill("Python")
        wizard.set_goals(" ")

        result = wizard.submit()
        assert result.notice.title == "Please complete all required fields"
        for category in ("skills", "goals", "study times"):
            assert category in result.notice.description

    @pytest.mark.asyncio
    async def test_complete_flow_signals_exactly_once(self, user):
        """skills=[Python], goals='Pass finals', study times=[Weekends] completes once"""
        completed = []
        wizard = make_wizard(user, on_complete=lambda: completed.append(True))
        advance_to_preferences(wizard)
        wizard.toggle_study_time("Weekends", True)

        result = wizard.submit()
        assert result.accepted is True
        assert result.notice.title == "Profile created successfully!"
        await result.operation

        again = wizard.submit()
        assert again.operation is result.operation
        await again.operation

        assert completed == [True]

    @pytest.mark.asyncio
    async def test_failed_save_can_be_resubmitted(self, user):
        completed = []
        wizard = make_wizard(
            user,
            on_complete=lambda: completed.append(True),
            save_completion=failing(RuntimeError("save failed")),
        )
        advance_to_preferences(wizard)
        wizard.toggle_study_time("Weekends", True)

        first = wizard.submit()
        with pytest.raises(RuntimeError):
            await first.operation

        second = wizard.submit()
        assert second.operation is not first.operation
        with pytest.raises(RuntimeError):
            await second.operation
        assert completed == []

    @pytest.mark.asyncio
    async def test_wizard_is_locked_while_saving(self, user):
        wizard = make_wizard(user, save_completion=delayed(None, 10_000))
        advance_to_preferences(wizard)
        wizard.toggle_study_time("Weekends", True)

        result = wizard.submit()
        assert wizard.saving is True
        with pytest.raises(InvalidTransitionError):
            wizard.previous_step()
        with pytest.raises(InvalidTransitionError):
            wizard.add_skill("Calculus")
        with pytest.raises(InvalidTransitionError):
            wizard.toggle_study_time("Weekends", False)
        assert wizard.step == WizardStep.preferences
        assert wizard.draft.skills == ["Python"]

        assert wizard.submit().operation is result.operation
        result.operation.cancel()
        with pytest.raises(asyncio.CancelledError):
            await result.operation
