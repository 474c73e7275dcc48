from __future__ import annotations

import pytest

from shelter_maps import create_app
from shelter_maps.config import TestingConfig
from shelter_maps.extensions import db
from shelter_maps.models import User, Volunteer, _uuid


@pytest.fixture()
def app():
    app = create_app(TestingConfig)
    with app.app_context():
        db.create_all()
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def ctx(app):
    """Application context for tests that call services directly.

    HTTP tests must not use it: a request reuses an active app context, which
    would leak ``g`` (and the loaded user) between requests.
    """
    with app.app_context():
        yield app
        db.session.remove()


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def make_user(app):
    def _make(email: str = "ada@example.org", name: str = "Ada") -> str:
        with app.app_context():
            user = User(id=_uuid(), email=email, name=name)
            db.session.add(user)
            db.session.commit()
            return user.id
    return _make


@pytest.fixture()
def make_volunteer(app, make_user):
    def _make(email: str = "ada@example.org", name: str = "Ada", **fields) -> tuple[str, str]:
        user_id = make_user(email=email, name=name)
        with app.app_context():
            vol = Volunteer(
                user_id=user_id,
                name=name,
                email=email,
                total_score=fields.pop("total_score", 0),
                completed_lessons=fields.pop("completed_lessons", []),
                badges=fields.pop("badges", []),
                **fields,
            )
            db.session.add(vol)
            db.session.commit()
            return user_id, vol.id
    return _make


@pytest.fixture()
def login():
    def _login(client, user_id: str) -> None:
        with client.session_transaction() as sess:
            sess["_user_id"] = user_id
            sess["_fresh"] = True
    return _login
