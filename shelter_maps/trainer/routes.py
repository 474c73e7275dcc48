# shelter_maps/trainer/routes.py
import math

from flask import Blueprint, current_app, jsonify, session

from shelter_maps.errors import InvalidRequest, NotFound
from shelter_maps.lessons.catalog import COMMUNITY_HUB, QUICK_TIPS, get_tip
from shelter_maps.lessons.content import parse_steps, step_to_dict
from shelter_maps.lessons.service import (
    get_lesson_by_id,
    lesson_to_dict,
    list_active_lessons,
    seed_if_empty,
)
from shelter_maps.models import _utcnow
from shelter_maps.volunteers.routes import current_user_id
from shelter_maps.volunteers.service import get_current_volunteer, record_completion

from .mirror import ProgressMirror
from .session import CompletionEvent, LessonSession

bp = Blueprint("trainer", __name__, url_prefix="/app")

LESSON_SESSION_KEY = "lesson_session"


def _mirror_key() -> str:
    return current_app.config.get("PROGRESS_MIRROR_KEY", "shelter-training-progress")


def _load_lesson_session():
    return LessonSession.from_dict(session.get(LESSON_SESSION_KEY))


def _require_lesson_session() -> LessonSession:
    ls = _load_lesson_session()
    if ls is None:
        raise InvalidRequest("No lesson in progress")
    return ls


def _save_lesson_session(ls: LessonSession) -> None:
    session[LESSON_SESSION_KEY] = ls.to_dict()


def _clear_lesson_session() -> None:
    session.pop(LESSON_SESSION_KEY, None)


def _current_mirror() -> ProgressMirror:
    # signed in: the server record wins over the stored copy, an absent record
    # means no progress yet
    user_id = current_user_id()
    if user_id is None:
        return ProgressMirror.load(session, _mirror_key())

    vol = get_current_volunteer(user_id)
    mirror = ProgressMirror.from_volunteer(vol) if vol is not None else ProgressMirror()
    mirror.save(session, _mirror_key())
    return mirror


def _apply_completion(event: CompletionEvent) -> list:
    """Dashboard side of a finished lesson; returns the badges it earned."""
    user_id = current_user_id()
    if user_id is not None:
        result = record_completion(user_id, event.lesson_id, event.points, event.time_spent)
        vol = get_current_volunteer(user_id)
        ProgressMirror.from_volunteer(vol).save(session, _mirror_key())
        return result.new_badges

    mirror = ProgressMirror.load(session, _mirror_key())
    earned = mirror.apply_completion(event.lesson_id, event.points)
    mirror.save(session, _mirror_key())
    return earned


def _dashboard_view(mirror: ProgressMirror) -> dict:
    lessons = list_active_lessons()
    if not lessons and current_app.config.get("AUTO_SEED_LESSONS"):
        seed_if_empty()
        lessons = list_active_lessons()

    completed = set(mirror.completed_lessons)
    items = []
    for lesson in lessons:
        row = lesson_to_dict(lesson)
        row["completed"] = lesson.id in completed
        row["cta"] = "Review" if row["completed"] else "Start"
        items.append(row)

    done = sum(1 for lesson in lessons if lesson.id in completed)
    percent = math.floor(done / len(lessons) * 100 + 0.5) if lessons else 0

    return {
        "view": "dashboard",
        "lessons": items,
        "progress": mirror.to_dict(),
        "completionPercent": percent,
        "lessonsAvailable": len(lessons),
        "communityHub": COMMUNITY_HUB,
        "quickTips": QUICK_TIPS,
    }


def _lesson_view(ls: LessonSession) -> dict:
    lesson = get_lesson_by_id(ls.lesson_id)
    if lesson is None:
        _clear_lesson_session()
        raise NotFound(f"Lesson {ls.lesson_id!r} not found")

    steps = parse_steps(lesson.content)
    current = steps[ls.step] if ls.step < len(steps) else None

    return {
        "view": "lesson",
        "lesson": lesson_to_dict(lesson),
        "step": ls.step,
        "stepCount": ls.step_count,
        "currentStep": step_to_dict(current) if current else None,
        "isFirstStep": ls.step == 0,
        "isFinalStep": ls.is_final_step,
        "tip": get_tip(lesson.id),
    }


@bp.get("")
def current_view():
    ls = _load_lesson_session()
    if ls is not None:
        return jsonify(_lesson_view(ls))
    return jsonify(_dashboard_view(_current_mirror()))


@bp.post("/lessons/<lesson_id>/start")
def start_lesson(lesson_id: str):
    if _load_lesson_session() is not None:
        raise InvalidRequest("A lesson is already in progress")

    lesson = get_lesson_by_id(lesson_id)
    if lesson is None or not lesson.is_active:
        raise NotFound(f"Lesson {lesson_id!r} not found")

    ls = LessonSession.start(
        lesson_id=lesson.id,
        step_count=len(parse_steps(lesson.content)),
        points=lesson.points,
        now=_utcnow(),
    )
    _save_lesson_session(ls)
    return jsonify(_lesson_view(ls))


@bp.post("/lesson/next")
def next_step():
    ls = _require_lesson_session()
    ls.next_step()
    _save_lesson_session(ls)
    return jsonify(_lesson_view(ls))


@bp.post("/lesson/previous")
def previous_step():
    ls = _require_lesson_session()
    ls.previous_step()
    _save_lesson_session(ls)
    return jsonify(_lesson_view(ls))


@bp.post("/lesson/back")
def back_to_dashboard():
    # in-progress state is discarded, no partial credit
    _require_lesson_session()
    _clear_lesson_session()
    return jsonify(_dashboard_view(_current_mirror()))


@bp.post("/lesson/complete")
def complete_lesson():
    ls = _require_lesson_session()

    # raises (and leaves the visitor on the lesson) if the write fails
    earned = ls.complete(_utcnow(), _apply_completion)

    _clear_lesson_session()
    out = _dashboard_view(_current_mirror())
    out["completedLesson"] = {
        "lessonId": ls.lesson_id,
        "points": ls.points,
        "newBadges": earned,
        "message": "Lesson completed successfully!",
    }
    return jsonify(out)
