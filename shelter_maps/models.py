import uuid
from datetime import datetime, timezone

from flask_login import UserMixin

from .extensions import db


def _uuid() -> str:
    return uuid.uuid4().hex


def _utcnow() -> datetime:
    # naive UTC, matches how the DateTime columns are stored
    return datetime.now(timezone.utc).replace(tzinfo=None)


class User(UserMixin, db.Model):
    __tablename__ = "user"
    id = db.Column(db.String, primary_key=True, default=_uuid)
    email = db.Column(db.String, unique=True, nullable=False)
    name = db.Column(db.String)
    image = db.Column(db.String)
    created_at = db.Column(db.DateTime, default=_utcnow, nullable=False)


class Volunteer(db.Model):
    """Training profile of one signed-in user.

    ``badges`` always equals ``badges_for(len(completed_lessons))``; both lists
    only ever grow.
    """
    __tablename__ = "volunteer"
    id = db.Column(db.String, primary_key=True, default=_uuid)
    user_id = db.Column(db.String, db.ForeignKey("user.id"), unique=True, nullable=False)
    name = db.Column(db.String, nullable=False)
    email = db.Column(db.String, nullable=False)
    join_date = db.Column(db.DateTime, default=_utcnow, nullable=False)
    total_score = db.Column(db.Integer, default=0, nullable=False)
    completed_lessons = db.Column(db.JSON, default=list, nullable=False)
    badges = db.Column(db.JSON, default=list, nullable=False)


class Lesson(db.Model):
    __tablename__ = "lesson"
    id = db.Column(db.String, primary_key=True)
    title = db.Column(db.String, nullable=False)
    description = db.Column(db.Text, nullable=False)
    difficulty = db.Column(db.String, nullable=False)  # beginner, intermediate, advanced
    category = db.Column(db.String, nullable=False)
    content = db.Column(db.Text, nullable=False)  # JSON: {"type": ..., "steps": [...]}
    points = db.Column(db.Integer, nullable=False)
    order = db.Column(db.Integer, unique=True, nullable=False)
    is_active = db.Column(db.Boolean, default=True, nullable=False)


class ProgressEntry(db.Model):
    """Append-only history row, one per completion event."""
    __tablename__ = "progress_entry"
    id = db.Column(db.String, primary_key=True, default=_uuid)
    volunteer_id = db.Column(db.String, db.ForeignKey("volunteer.id"), nullable=False, index=True)
    lesson_id = db.Column(db.String, nullable=False, index=True)
    completed = db.Column(db.Boolean, default=True, nullable=False)
    score = db.Column(db.Integer, nullable=False)
    time_spent = db.Column(db.Integer, nullable=False)  # seconds
    # True when the lesson was already in the volunteer's completed set
    replay = db.Column(db.Boolean, default=False, nullable=False)
    completed_at = db.Column(db.DateTime, default=_utcnow, nullable=False)


class QuizResult(db.Model):
    __tablename__ = "quiz_result"
    id = db.Column(db.String, primary_key=True, default=_uuid)
    volunteer_id = db.Column(db.String, db.ForeignKey("volunteer.id"), nullable=False, index=True)
    lesson_id = db.Column(db.String, nullable=False)
    answers = db.Column(db.JSON, default=list, nullable=False)  # [{questionId, answer, correct}]
    score = db.Column(db.Integer, nullable=False)
    completed_at = db.Column(db.DateTime, default=_utcnow, nullable=False)


class CatalogSeed(db.Model):
    """Single-row marker written in the same transaction as the seeded lessons."""
    __tablename__ = "catalog_seed"
    id = db.Column(db.Integer, primary_key=True, default=1)
    lesson_count = db.Column(db.Integer, nullable=False)
    seeded_at = db.Column(db.DateTime, default=_utcnow, nullable=False)
