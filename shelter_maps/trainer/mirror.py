# shelter_maps/trainer/mirror.py
from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import MutableMapping

from shelter_maps.badges import new_badges


@dataclass
class ProgressMirror:
    """
    Visitor-side copy of progress used to render the dashboard.

    For a signed-in user it is overwritten from the server record
    (``from_volunteer``); it is only advanced locally (``apply_completion``)
    for visitors who are not signed in.
    """
    completed_lessons: list[str] = field(default_factory=list)
    total_score: int = 0
    badges: list[str] = field(default_factory=list)

    @classmethod
    def load(cls, store: MutableMapping, key: str) -> "ProgressMirror":
        raw = store.get(key)
        if not raw:
            return cls()
        try:
            data = json.loads(raw)
        except (TypeError, ValueError):
            return cls()
        if not isinstance(data, dict):
            return cls()
        return cls(
            completed_lessons=[str(x) for x in data.get("completedLessons") or []],
            total_score=int(data.get("totalScore") or 0),
            badges=[str(x) for x in data.get("badges") or []],
        )

    def save(self, store: MutableMapping, key: str) -> None:
        # overwritten wholesale
        store[key] = json.dumps(self.to_dict())

    @classmethod
    def from_volunteer(cls, vol) -> "ProgressMirror":
        return cls(
            completed_lessons=list(vol.completed_lessons or []),
            total_score=int(vol.total_score or 0),
            badges=list(vol.badges or []),
        )

    def apply_completion(self, lesson_id: str, points: int) -> list[str]:
        if lesson_id in self.completed_lessons:
            return []
        self.completed_lessons = self.completed_lessons + [lesson_id]
        self.total_score += int(points)
        earned = new_badges(self.badges, len(self.completed_lessons))
        self.badges = self.badges + earned
        return earned

    def to_dict(self) -> dict:
        return {
            "completedLessons": list(self.completed_lessons),
            "totalScore": self.total_score,
            "badges": list(self.badges),
        }
