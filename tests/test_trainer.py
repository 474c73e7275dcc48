import json
from datetime import datetime, timedelta

import pytest

from shelter_maps.errors import InvalidRequest
from shelter_maps.extensions import db
from shelter_maps.models import ProgressEntry, Volunteer
from shelter_maps.trainer.mirror import ProgressMirror
from shelter_maps.trainer.session import CompletionEvent, LessonSession

MIRROR_KEY = "shelter-training-progress"
T0 = datetime(2026, 10, 17, 9, 0, 0)


# ---- LessonSession ----

def test_step_index_is_clamped() -> None:
    ls = LessonSession.start("basics-1", step_count=3, points=100, now=T0)
    assert ls.step == 0

    assert ls.previous_step() == 0
    assert ls.next_step() == 1
    assert ls.next_step() == 2
    assert ls.is_final_step
    assert ls.next_step() == 2
    assert ls.previous_step() == 1


def test_complete_only_from_final_step() -> None:
    ls = LessonSession.start("basics-1", step_count=2, points=100, now=T0)
    calls = []

    with pytest.raises(InvalidRequest):
        ls.complete(T0 + timedelta(seconds=10), calls.append)
    assert calls == []

    ls.next_step()
    ls.complete(T0 + timedelta(seconds=95, milliseconds=700), calls.append)
    assert calls == [CompletionEvent(lesson_id="basics-1", points=100, time_spent=95)]


def test_complete_returns_callback_result() -> None:
    ls = LessonSession.start("advanced-1", step_count=1, points=300, now=T0)
    assert ls.complete(T0, lambda event: ["Getting Started"]) == ["Getting Started"]


def test_complete_propagates_callback_failure() -> None:
    ls = LessonSession.start("advanced-1", step_count=1, points=300, now=T0)

    def failing(event):
        raise RuntimeError("write failed")

    with pytest.raises(RuntimeError):
        ls.complete(T0, failing)
    assert ls.step == 0


def test_unreadable_start_time_counts_as_zero() -> None:
    ls = LessonSession(lesson_id="basics-1", step_count=1, started_at="not-a-time", points=100)
    assert ls.elapsed_seconds(T0) == 0

    ls = LessonSession(lesson_id="basics-1", step_count=1, started_at=None, points=100)
    events = []
    ls.complete(T0, events.append)
    assert events[0].time_spent == 0


def test_session_from_dict() -> None:
    assert LessonSession.from_dict(None) is None
    assert LessonSession.from_dict({}) is None

    ls = LessonSession.from_dict({"lessonId": "basics-1", "step": 7, "stepCount": 3, "points": 100})
    assert ls.step == 2
    assert LessonSession.from_dict(ls.to_dict()) == ls


# ---- ProgressMirror ----

def test_mirror_load_defaults() -> None:
    assert ProgressMirror.load({}, MIRROR_KEY) == ProgressMirror()
    assert ProgressMirror.load({MIRROR_KEY: "{broken"}, MIRROR_KEY) == ProgressMirror()
    assert ProgressMirror.load({MIRROR_KEY: "[1, 2]"}, MIRROR_KEY) == ProgressMirror()


def test_mirror_save_overwrites_blob() -> None:
    store = {MIRROR_KEY: json.dumps({"completedLessons": ["x"], "totalScore": 5, "badges": [], "extra": 1})}
    ProgressMirror(completed_lessons=["basics-1"], total_score=100).save(store, MIRROR_KEY)

    assert json.loads(store[MIRROR_KEY]) == {
        "completedLessons": ["basics-1"],
        "totalScore": 100,
        "badges": [],
    }


def test_mirror_apply_completion() -> None:
    mirror = ProgressMirror()
    assert mirror.apply_completion("basics-1", 100) == []
    assert mirror.apply_completion("basics-1", 100) == []
    assert mirror.total_score == 100

    mirror.apply_completion("navigation-1", 150)
    assert mirror.apply_completion("services-1", 200) == ["Getting Started"]
    assert mirror.total_score == 450
    assert mirror.badges == ["Getting Started"]


# ---- /app flow ----

def _walk_to_final_step(client, view):
    for _ in range(view["stepCount"] - 1):
        view = client.post("/app/lesson/next").get_json()
    return view


def _finish(client, lesson_id):
    view = client.post(f"/app/lessons/{lesson_id}/start").get_json()
    _walk_to_final_step(client, view)
    return client.post("/app/lesson/complete")


def test_dashboard_seeds_catalog_on_first_load(client) -> None:
    view = client.get("/app").get_json()

    assert view["view"] == "dashboard"
    assert view["lessonsAvailable"] == 6
    assert view["completionPercent"] == 0
    assert view["progress"] == {"completedLessons": [], "totalScore": 0, "badges": []}
    assert {lesson["cta"] for lesson in view["lessons"]} == {"Start"}
    assert view["communityHub"]["address"].startswith("Swan Buildings")


def test_lesson_walkthrough(client) -> None:
    client.get("/app")

    view = client.post("/app/lessons/basics-1/start").get_json()
    assert view["view"] == "lesson"
    assert view["step"] == 0
    assert view["stepCount"] == 3
    assert view["isFirstStep"] is True
    assert view["currentStep"]["action"] == "introduction"

    assert client.post("/app/lesson/previous").get_json()["step"] == 0
    view = client.post("/app/lesson/next").get_json()
    assert view["currentStep"]["action"] == "search"
    assert view["currentStep"]["mapsLink"].startswith("https://maps.google.com/maps?q=")

    view = _walk_to_final_step(client, view)
    assert view["step"] == 2
    assert view["isFinalStep"] is True
    assert client.post("/app/lesson/next").get_json()["step"] == 2

    # reloading shows the lesson in progress
    assert client.get("/app").get_json()["view"] == "lesson"


def test_complete_before_final_step_is_rejected(client) -> None:
    client.get("/app")
    client.post("/app/lessons/basics-1/start")

    res = client.post("/app/lesson/complete")
    assert res.status_code == 400
    view = client.get("/app").get_json()
    assert view["view"] == "lesson"
    assert view["step"] == 0


def test_back_discards_progress(client) -> None:
    client.get("/app")
    client.post("/app/lessons/navigation-1/start")
    client.post("/app/lesson/next")

    view = client.post("/app/lesson/back").get_json()
    assert view["view"] == "dashboard"
    assert view["progress"]["totalScore"] == 0

    # starting again begins at the first step
    assert client.post("/app/lessons/navigation-1/start").get_json()["step"] == 0


def test_lesson_actions_need_a_lesson(client) -> None:
    for path in ("/app/lesson/next", "/app/lesson/previous", "/app/lesson/back", "/app/lesson/complete"):
        res = client.post(path)
        assert res.status_code == 400, path
        assert res.get_json()["error"] == "invalid_request"


def test_start_rules(client) -> None:
    client.get("/app")
    assert client.post("/app/lessons/nonexistent/start").status_code == 404

    client.post("/app/lessons/basics-1/start")
    assert client.post("/app/lessons/emergency-1/start").status_code == 400
    assert client.get("/app").get_json()["lesson"]["id"] == "basics-1"


def test_anonymous_completion_updates_mirror(client) -> None:
    client.get("/app")

    res = _finish(client, "basics-1")
    assert res.status_code == 200
    view = res.get_json()
    assert view["view"] == "dashboard"
    assert view["completedLesson"]["lessonId"] == "basics-1"
    assert view["completedLesson"]["points"] == 100
    assert view["progress"]["completedLessons"] == ["basics-1"]
    assert view["progress"]["totalScore"] == 100
    assert view["completionPercent"] == 17

    basics = next(lesson for lesson in view["lessons"] if lesson["id"] == "basics-1")
    assert basics["completed"] is True
    assert basics["cta"] == "Review"

    # reviewing a finished lesson adds nothing
    view = _finish(client, "basics-1").get_json()
    assert view["progress"]["totalScore"] == 100

    _finish(client, "navigation-1")
    view = _finish(client, "services-1").get_json()
    assert view["completedLesson"]["newBadges"] == ["Getting Started"]
    assert view["progress"]["badges"] == ["Getting Started"]
    assert view["progress"]["totalScore"] == 450
    assert view["completionPercent"] == 50

    with client.session_transaction() as sess:
        stored = json.loads(sess[MIRROR_KEY])
    assert stored["totalScore"] == 450


def test_volunteer_completion_writes_server_record(app, client, make_volunteer, login) -> None:
    user_id, vol_id = make_volunteer()
    login(client, user_id)
    client.get("/app")

    for lesson_id in ("basics-1", "navigation-1"):
        assert _finish(client, lesson_id).status_code == 200
    view = _finish(client, "services-1").get_json()

    assert view["completedLesson"]["newBadges"] == ["Getting Started"]
    assert view["progress"]["totalScore"] == 450

    with app.app_context():
        vol = db.session.get(Volunteer, vol_id)
        assert vol.completed_lessons == ["basics-1", "navigation-1", "services-1"]
        assert vol.total_score == 450
        assert vol.badges == ["Getting Started"]
        entries = ProgressEntry.query.filter_by(volunteer_id=vol_id).all()
        assert len(entries) == 3
        assert all(e.time_spent >= 0 for e in entries)


def test_server_record_overrides_stale_mirror(client, make_volunteer, login) -> None:
    user_id, _ = make_volunteer(total_score=250, completed_lessons=["services-1"])
    login(client, user_id)
    with client.session_transaction() as sess:
        sess[MIRROR_KEY] = json.dumps({"completedLessons": ["a", "b", "c"], "totalScore": 999, "badges": []})

    view = client.get("/app").get_json()
    assert view["progress"] == {"completedLessons": ["services-1"], "totalScore": 250, "badges": []}


def test_failed_server_write_keeps_visitor_on_lesson(client, make_user, login) -> None:
    # signed in, but no volunteer record to write to
    login(client, make_user())
    client.get("/app")
    _walk_to_final_step(client, client.post("/app/lessons/emergency-1/start").get_json())

    res = client.post("/app/lesson/complete")
    assert res.status_code == 404

    view = client.get("/app").get_json()
    assert view["view"] == "lesson"
    assert view["isFinalStep"] is True


def test_signed_in_user_without_volunteer_sees_empty_progress(client, make_user, login) -> None:
    login(client, make_user())
    with client.session_transaction() as sess:
        sess[MIRROR_KEY] = json.dumps({"completedLessons": ["basics-1"], "totalScore": 100, "badges": []})

    view = client.get("/app").get_json()
    assert view["progress"] == {"completedLessons": [], "totalScore": 0, "badges": []}
    assert view["completionPercent"] == 0

    with client.session_transaction() as sess:
        assert json.loads(sess[MIRROR_KEY])["totalScore"] == 0
