"""
Candidate study partner models

Candidates are seeded from fixture data; only their status changes while
the dashboard is open.
"""

from __future__ import annotations

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class CandidateStatus(str, Enum):
    """Status of a candidate; matched and declined are terminal"""
    pending = "pending"
    matched = "matched"
    declined = "declined"


class DashboardTab(str, Enum):
    """Filtered views over the candidate collection"""
    discover = "discover"
    connections = "connections"


class Candidate(BaseModel):
    """Prospective study partner"""
    model_config = ConfigDict(extra="forbid")

    id: str
    name: str
    avatar: Optional[str] = None
    skills: List[str] = Field(default_factory=list)
    goals: str = ""
    compatibility: int = Field(ge=0, le=100, description="Compatibility score, percent")
    study_times: List[str] = Field(default_factory=list)
    subjects: List[str] = Field(default_factory=list)
    status: CandidateStatus = CandidateStatus.pending


class CandidateCard(BaseModel):
    """Candidate as shown on a dashboard tab"""
    model_config = ConfigDict(extra="forbid")

    candidate: Candidate
    initials: str
    study_times_preview: List[str] = Field(description="First two study times")
    more_study_times: int = Field(default=0, description="Study times not in the preview")


class EmptyState(BaseModel):
    """Placeholder when a tab has no candidates"""
    model_config = ConfigDict(extra="forbid")

    title: str
    message: str


class DashboardView(BaseModel):
    """One tab of the matches dashboard"""
    model_config = ConfigDict(extra="forbid")

    tab: DashboardTab
    headline: str
    cards: List[CandidateCard] = Field(default_factory=list)
    discover_count: int
    connections_count: int
    empty_state: Optional[EmptyState] = None
