"""Lesson walk-through state kept between requests.

No ``LessonSession`` stored means the visitor is on the dashboard. Starting a
lesson creates one; "back" and a successful completion drop it again.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional, TypeVar

from shelter_maps.errors import InvalidRequest

T = TypeVar("T")


@dataclass(frozen=True)
class CompletionEvent:
    lesson_id: str
    points: int
    time_spent: int  # seconds


@dataclass
class LessonSession:
    lesson_id: str
    step_count: int
    step: int = 0
    started_at: Optional[str] = None
    points: int = 0

    @classmethod
    def start(cls, lesson_id: str, step_count: int, points: int, now: datetime) -> "LessonSession":
        return cls(
            lesson_id=lesson_id,
            step_count=max(0, int(step_count)),
            step=0,
            started_at=now.isoformat(),
            points=int(points),
        )

    @property
    def last_step(self) -> int:
        return max(0, self.step_count - 1)

    @property
    def is_final_step(self) -> bool:
        return self.step >= self.last_step

    def next_step(self) -> int:
        self.step = min(self.step + 1, self.last_step)
        return self.step

    def previous_step(self) -> int:
        self.step = max(self.step - 1, 0)
        return self.step

    def elapsed_seconds(self, now: datetime) -> int:
        """Whole seconds since start; 0 when the start time is unreadable."""
        try:
            started = datetime.fromisoformat(self.started_at)
            delta = (now - started).total_seconds()
        except (TypeError, ValueError):
            return 0
        return max(0, math.floor(delta))

    def complete(self, now: datetime, on_complete: Callable[[CompletionEvent], T]) -> T:
        """
        Hand the completion event to ``on_complete`` and return its result.

        Only allowed from the final step. If ``on_complete`` raises, the
        exception propagates and the caller keeps this session as it was.
        """
        if not self.is_final_step:
            raise InvalidRequest("Finish every step before completing the lesson")

        event = CompletionEvent(
            lesson_id=self.lesson_id,
            points=self.points,
            time_spent=self.elapsed_seconds(now),
        )
        return on_complete(event)

    def to_dict(self) -> dict:
        return {
            "lessonId": self.lesson_id,
            "step": self.step,
            "stepCount": self.step_count,
            "startedAt": self.started_at,
            "points": self.points,
        }

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> Optional["LessonSession"]:
        if not data or not data.get("lessonId"):
            return None
        step_count = max(0, int(data.get("stepCount") or 0))
        step = int(data.get("step") or 0)
        return cls(
            lesson_id=str(data["lessonId"]),
            step_count=step_count,
            step=min(max(step, 0), max(0, step_count - 1)),
            started_at=data.get("startedAt"),
            points=int(data.get("points") or 0),
        )
