"""Milestone badges awarded on the number of distinct completed lessons."""

from __future__ import annotations

from typing import Iterable

# (minimum completed lessons, badge name), ascending
BADGE_THRESHOLDS = (
    (3, "Getting Started"),
    (6, "Maps Explorer"),
    (10, "Navigation Expert"),
)


def badges_for(completed_count: int) -> list[str]:
    """Badges that should be held at ``completed_count``, in threshold order."""
    return [name for threshold, name in BADGE_THRESHOLDS if completed_count >= threshold]


def new_badges(held: Iterable[str], completed_count: int) -> list[str]:
    """
    Badges earned at ``completed_count`` that are not in ``held`` yet.

    Callers append the result to what they already store; nothing held is
    ever removed.
    """
    held = set(held)
    return [name for name in badges_for(completed_count) if name not in held]
