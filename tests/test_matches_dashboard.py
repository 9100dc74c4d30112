"""
Tests for the matches dashboard state
"""

import pytest

from app.models import CandidateStatus, DashboardTab
from app.services.match_service import MatchesDashboard
from app.utils.errors import CandidateNotFoundError, CandidateStatusError


@pytest.fixture
def dashboard(candidates):
    return MatchesDashboard(candidates)


def statuses(dashboard: MatchesDashboard) -> dict:
    return {c.id: c.status for c in dashboard.candidates}


def test_fixture_scenario(dashboard):
    """Sarah and Marcus are pending, Emily is already matched"""
    assert [c.name for c in dashboard.discover()] == ["Sarah Chen", "Marcus Johnson"]
    assert [c.name for c in dashboard.connections()] == ["Emily Rodriguez"]


def test_connect_pending_candidate(dashboard):
    before = statuses(dashboard)
    candidate, notice = dashboard.connect("1")

    assert candidate.status == CandidateStatus.matched
    assert notice.title == "Connection request sent!"
    after = statuses(dashboard)
    assert after["1"] == CandidateStatus.matched
    assert {k: v for k, v in after.items() if k != "1"} == {k: v for k, v in before.items() if k != "1"}


def test_connect_is_idempotent(dashboard):
    dashboard.connect("1")
    candidate, _ = dashboard.connect("1")

    assert candidate.status == CandidateStatus.matched
    assert len(dashboard.connections()) == 2


def test_decline_hides_from_both_views(dashboard):
    candidate, notice = dashboard.decline("2")

    assert candidate.status == CandidateStatus.declined
    assert notice.title == "Match declined"
    assert "2" not in [c.id for c in dashboard.discover()]
    assert "2" not in [c.id for c in dashboard.connections()]
    # retained in the underlying collection
    assert "2" in [c.id for c in dashboard.candidates]


def test_declined_is_terminal(dashboard):
    dashboard.decline("1")
    with pytest.raises(CandidateStatusError):
        dashboard.connect("1")
    assert dashboard.get("1").status == CandidateStatus.declined


def test_matched_cannot_be_declined(dashboard):
    with pytest.raises(CandidateStatusError):
        dashboard.decline("3")
    assert dashboard.get("3").status == CandidateStatus.matched


def test_unknown_candidate(dashboard):
    with pytest.raises(CandidateNotFoundError):
        dashboard.connect("missing")
    with pytest.raises(CandidateNotFoundError):
        dashboard.decline("missing")


def test_dashboards_do_not_share_state(candidates):
    first = MatchesDashboard(candidates)
    second = MatchesDashboard(candidates)

    first.decline("1")
    assert second.get("1").status == CandidateStatus.pending


def test_discover_view(dashboard):
    view = dashboard.view(DashboardTab.discover)

    assert view.headline == "2 compatible study partners found"
    assert view.discover_count == 2
    assert view.connections_count == 1
    assert view.empty_state is None
    sarah = view.cards[0]
    assert sarah.initials == "SC"
    assert sarah.study_times_preview == ["Evening (5-8 PM)", "Weekends"]
    assert sarah.more_study_times == 0


def test_connections_headline_pluralises(dashboard):
    assert dashboard.view(DashboardTab.connections).headline == "1 active study partnership"
    dashboard.connect("2")
    assert dashboard.view(DashboardTab.connections).headline == "2 active study partnerships"


def test_exhausted_discover_shows_empty_state(dashboard):
    dashboard.decline("1")
    dashboard.connect("2")

    view = dashboard.view(DashboardTab.discover)
    assert view.cards == []
    assert view.empty_state.title == "No new matches"


def test_study_time_preview_counts_extra_slots(candidates):
    busy = candidates[0].model_copy(
        update={"study_times": ["Morning (9-12 PM)", "Afternoon (12-5 PM)", "Weekends", "Night (8-11 PM)"]}
    )
    card = MatchesDashboard([busy]).view().cards[0]

    assert card.study_times_preview == ["Morning (9-12 PM)", "Afternoon (12-5 PM)"]
    assert card.more_study_times == 2
