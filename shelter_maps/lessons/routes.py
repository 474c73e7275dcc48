# shelter_maps/lessons/routes.py
from flask import Blueprint, jsonify

from shelter_maps.errors import NotFound
from shelter_maps.lessons.catalog import get_tip
from shelter_maps.lessons.service import (
    get_lesson_by_id,
    lesson_to_dict,
    list_active_lessons,
    seed_if_empty,
)

bp = Blueprint("lessons", __name__, url_prefix="/lessons")


@bp.get("")
def all_lessons():
    return jsonify([lesson_to_dict(lesson) for lesson in list_active_lessons()])


@bp.get("/<lesson_id>")
def lesson_detail(lesson_id: str):
    lesson = get_lesson_by_id(lesson_id)
    if lesson is None:
        raise NotFound(f"Lesson {lesson_id!r} not found")

    out = lesson_to_dict(lesson, include_content=True)
    out["tip"] = get_tip(lesson.id)
    return jsonify(out)


@bp.post("/initialize")
def initialize_lessons():
    count = seed_if_empty()
    return jsonify(ok=True, count=count)
