# shelter_maps/lessons/service.py
from __future__ import annotations

import json

from flask import current_app
from sqlalchemy.exc import IntegrityError

from shelter_maps.extensions import db
from shelter_maps.models import CatalogSeed, Lesson

from .catalog import LESSONS
from .content import parse_steps, step_to_dict

SEED_MARKER_ID = 1


def list_active_lessons() -> list[Lesson]:
    return (Lesson.query
            .filter_by(is_active=True)
            .order_by(Lesson.order.asc())
            .all())


def get_lesson_by_id(lesson_id: str) -> Lesson | None:
    """Exact, case-sensitive lookup by the lesson's stable id."""
    if not lesson_id:
        return None
    return Lesson.query.filter(Lesson.id == lesson_id).one_or_none()


def seed_if_empty() -> int:
    """
    Insert the fixed lesson catalog once.

    Returns the number of lessons inserted, 0 when the catalog already exists.
    The CatalogSeed marker row shares the lessons' transaction, so of two
    concurrent first loads only one commit can succeed.
    """
    if db.session.get(CatalogSeed, SEED_MARKER_ID) is not None:
        return 0
    if Lesson.query.first() is not None:
        return 0

    db.session.add(CatalogSeed(id=SEED_MARKER_ID, lesson_count=len(LESSONS)))
    for item in LESSONS:
        db.session.add(Lesson(
            id=item["id"],
            title=item["title"],
            description=item["description"],
            difficulty=item["difficulty"],
            category=item["category"],
            content=json.dumps(item["content"]),
            points=item["points"],
            order=item["order"],
            is_active=True,
        ))

    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        current_app.logger.info("Lesson catalog was seeded by a concurrent request")
        return 0

    current_app.logger.info("Seeded lesson catalog count=%s", len(LESSONS))
    return len(LESSONS)


def lesson_to_dict(lesson: Lesson, *, include_content: bool = False) -> dict:
    out = {
        "id": lesson.id,
        "title": lesson.title,
        "description": lesson.description,
        "difficulty": lesson.difficulty,
        "category": lesson.category,
        "points": lesson.points,
        "order": lesson.order,
        "isActive": lesson.is_active,
    }
    if include_content:
        out["content"] = lesson.content
        out["steps"] = [step_to_dict(s) for s in parse_steps(lesson.content)]
    return out
