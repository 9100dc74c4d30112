"""
Loading of candidate study partners from the JSON fixture file.
"""

from __future__ import annotations

import logging
import os
from functools import lru_cache
from typing import Any, List

import orjson

from app.models.match_models import Candidate

logger = logging.getLogger(__name__)


@lru_cache(maxsize=8)
def _read_fixture(path: str) -> tuple[dict[str, Any], ...]:
    with open(path, "rb") as fh:
        rows = orjson.loads(fh.read())
    if not isinstance(rows, list):
        raise ValueError(f"Candidate fixture must be a JSON array: {path}")
    return tuple(rows)


def load_candidates(path: str) -> List[Candidate]:
    """
    Build a fresh candidate list from the fixture file

    Every call returns new Candidate objects, so status changes on one
    dashboard never leak into another.

    Args:
        path: Path to the JSON fixture

    Returns:
        Candidates in fixture order

    Raises:
        FileNotFoundError: If the fixture does not exist
        ValueError: If the fixture is malformed or ids repeat
    """
    rows = _read_fixture(os.path.abspath(path))
    candidates = [Candidate.model_validate(row) for row in rows]

    ids = [c.id for c in candidates]
    if len(set(ids)) != len(ids):
        raise ValueError(f"Duplicate candidate ids in fixture: {path}")
    return candidates


def check_candidate_fixture(path: str) -> int:
    """Validate the fixture at startup; returns the number of candidates"""
    if not os.path.exists(path):
        logger.warning(f"⚠️ Candidate fixture not found: {path}")
        return 0
    candidates = load_candidates(path)
    logger.info(f"📂 Loaded {len(candidates)} candidates from {path}")
    return len(candidates)
