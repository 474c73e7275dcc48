# shelter_maps/volunteers/service.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from shelter_maps.badges import new_badges
from shelter_maps.errors import NotFound, Unauthenticated
from shelter_maps.extensions import db
from shelter_maps.models import ProgressEntry, Volunteer, _utcnow

DEFAULT_LEADERBOARD_LIMIT = 10


@dataclass(frozen=True)
class CompletionResult:
    success: bool
    new_badges: list[str] = field(default_factory=list)
    replay: bool = False


@dataclass(frozen=True)
class LeaderboardRow:
    rank: int
    name: str
    total_score: int
    completed_lessons: int
    badges: int


def _require_user(user_id: Optional[str]) -> str:
    if not user_id:
        raise Unauthenticated()
    return user_id


def get_current_volunteer(user_id: Optional[str]) -> Volunteer | None:
    """Volunteer owned by ``user_id``; None when signed out or not registered."""
    if not user_id:
        return None
    return Volunteer.query.filter_by(user_id=user_id).one_or_none()


def get_or_create_volunteer(user_id: Optional[str], name: str, email: str) -> Volunteer:
    user_id = _require_user(user_id)

    vol = Volunteer.query.filter_by(user_id=user_id).one_or_none()
    if vol:
        return vol

    vol = Volunteer(
        user_id=user_id,
        name=name,
        email=email,
        join_date=_utcnow(),
        total_score=0,
        completed_lessons=[],
        badges=[],
    )
    db.session.add(vol)
    db.session.commit()
    current_app.logger.info("Created volunteer id=%s user_id=%s", vol.id, user_id)
    return vol


def record_completion(user_id: Optional[str], lesson_id: str, score: int, time_spent: int) -> CompletionResult:
    """
    Apply one lesson completion for the caller.

    - always appends a ProgressEntry (flagged ``replay`` for repeats)
    - a lesson not yet completed is added and its score counted once
    - badges are topped up from the resulting completed-lesson count

    All of it commits together or not at all.
    """
    user_id = _require_user(user_id)

    vol = (Volunteer.query
           .filter_by(user_id=user_id)
           .with_for_update()
           .one_or_none())
    if vol is None:
        raise NotFound("Volunteer not found")

    completed = list(vol.completed_lessons or [])
    replay = lesson_id in completed
    now = _utcnow()

    try:
        db.session.add(ProgressEntry(
            volunteer_id=vol.id,
            lesson_id=lesson_id,
            completed=True,
            score=int(score),
            time_spent=int(time_spent),
            replay=replay,
            completed_at=now,
        ))

        earned: list[str] = []
        if not replay:
            completed.append(lesson_id)
            vol.completed_lessons = completed
            vol.total_score = int(vol.total_score or 0) + int(score)

            earned = new_badges(vol.badges or [], len(completed))
            if earned:
                vol.badges = list(vol.badges or []) + earned

        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception(
            "Failed to record completion volunteer_id=%s lesson_id=%s", vol.id, lesson_id
        )
        raise

    current_app.logger.info(
        "Lesson completed volunteer_id=%s lesson_id=%s score=%s time_spent=%s replay=%s",
        vol.id, lesson_id, score, time_spent, replay,
    )
    for badge in earned:
        current_app.logger.info("Badge awarded volunteer_id=%s badge=%s", vol.id, badge)

    return CompletionResult(success=True, new_badges=earned, replay=replay)


def leaderboard(limit: int = DEFAULT_LEADERBOARD_LIMIT) -> list[LeaderboardRow]:
    """Top volunteers by total score; ties go to the earlier joiner."""
    rows = (Volunteer.query
            .order_by(
                Volunteer.total_score.desc(),
                Volunteer.join_date.asc(),
                Volunteer.id.asc(),
            )
            .limit(max(0, int(limit)))
            .all())

    return [
        LeaderboardRow(
            rank=i + 1,
            name=v.name,
            total_score=int(v.total_score or 0),
            completed_lessons=len(v.completed_lessons or []),
            badges=len(v.badges or []),
        )
        for i, v in enumerate(rows)
    ]


def progress_history(volunteer_id: str) -> list[ProgressEntry]:
    return (ProgressEntry.query
            .filter_by(volunteer_id=volunteer_id)
            .order_by(ProgressEntry.completed_at.asc())
            .all())


def volunteer_to_dict(vol: Volunteer) -> dict:
    return {
        "id": vol.id,
        "userId": vol.user_id,
        "name": vol.name,
        "email": vol.email,
        "joinDate": vol.join_date.isoformat() if vol.join_date else None,
        "totalScore": int(vol.total_score or 0),
        "completedLessons": list(vol.completed_lessons or []),
        "badges": list(vol.badges or []),
    }


def leaderboard_row_to_dict(row: LeaderboardRow) -> dict:
    return {
        "rank": row.rank,
        "name": row.name,
        "totalScore": row.total_score,
        "completedLessons": row.completed_lessons,
        "badges": row.badges,
    }
