# shelter_maps/volunteers/routes.py
from flask import Blueprint, current_app, jsonify, request
from flask_login import current_user

from shelter_maps.errors import InvalidRequest, NotFound, Unauthenticated
from shelter_maps.volunteers.service import (
    get_current_volunteer,
    get_or_create_volunteer,
    leaderboard,
    leaderboard_row_to_dict,
    progress_history,
    record_completion,
    volunteer_to_dict,
)

bp = Blueprint("volunteers", __name__, url_prefix="/volunteers")


def current_user_id():
    if getattr(current_user, "is_authenticated", False):
        return current_user.id
    return None


def coerce_non_negative_int(value, name: str) -> int:
    if isinstance(value, bool):
        raise InvalidRequest(f"{name} must be an integer")
    try:
        out = int(value)
    except (TypeError, ValueError):
        raise InvalidRequest(f"{name} must be an integer")
    if isinstance(value, float) and value != out:
        raise InvalidRequest(f"{name} must be an integer")
    if out < 0:
        raise InvalidRequest(f"{name} must not be negative")
    return out


@bp.get("/me")
def me():
    vol = get_current_volunteer(current_user_id())
    return jsonify(volunteer_to_dict(vol) if vol else None)


@bp.post("")
def create_volunteer():
    data = request.get_json(silent=True) or {}
    user_id = current_user_id()

    name = (data.get("name") or getattr(current_user, "name", None) or "").strip()
    email = (data.get("email") or getattr(current_user, "email", None) or "").strip()
    if user_id and (not name or not email):
        raise InvalidRequest("name and email are required")

    vol = get_or_create_volunteer(user_id, name, email)
    return jsonify(ok=True, id=vol.id)


@bp.post("/progress")
def update_progress():
    # identity first: a signed-out caller is unauthenticated whatever the body
    user_id = current_user_id()
    if user_id is None:
        raise Unauthenticated()

    data = request.get_json(silent=True) or {}

    lesson_id = data.get("lessonId")
    if not isinstance(lesson_id, str) or not lesson_id:
        raise InvalidRequest("lessonId is required")
    score = coerce_non_negative_int(data.get("score"), "score")
    time_spent = coerce_non_negative_int(data.get("timeSpent"), "timeSpent")

    result = record_completion(user_id, lesson_id, score, time_spent)
    return jsonify(success=result.success, newBadges=result.new_badges)


@bp.get("/me/progress")
def my_progress():
    vol = get_current_volunteer(current_user_id())
    if vol is None:
        raise NotFound("Volunteer not found")

    return jsonify([
        {
            "lessonId": e.lesson_id,
            "score": e.score,
            "timeSpent": e.time_spent,
            "replay": e.replay,
            "completedAt": e.completed_at.isoformat(),
        }
        for e in progress_history(vol.id)
    ])


@bp.get("/leaderboard")
def get_leaderboard():
    # Basic sanity to avoid absurd limits
    try:
        limit = int(request.args.get("limit") or current_app.config.get("LEADERBOARD_LIMIT", 10))
    except ValueError:
        limit = current_app.config.get("LEADERBOARD_LIMIT", 10)
    limit = max(1, min(100, limit))

    return jsonify([leaderboard_row_to_dict(row) for row in leaderboard(limit)])
