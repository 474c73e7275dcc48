# shelter_maps/auth/routes.py
from authlib.integrations.base_client import OAuthError
from flask import Blueprint, current_app, flash, redirect, url_for
from flask_login import login_required, login_user, logout_user

from ..extensions import db, oauth
from ..models import User, _uuid
from ..volunteers.service import get_or_create_volunteer

bp = Blueprint("auth", __name__, url_prefix="/auth")


def sign_in_from_userinfo(userinfo: dict) -> User:
    """Upsert the user for an identity-provider profile and make sure a volunteer exists."""
    email = userinfo["email"]
    name = userinfo.get("name") or email.split("@", 1)[0]
    picture = userinfo.get("picture")

    # 1) Upsert user first
    user = User.query.filter_by(email=email).first()
    if not user:
        user = User(id=_uuid(), email=email, name=name, image=picture)
        db.session.add(user)
    else:
        user.name = name
        user.image = picture

    db.session.commit()  # ensures user.id exists

    # 2) Training profile
    get_or_create_volunteer(user.id, name, email)
    return user


@bp.get("/login")
def login():
    redirect_uri = url_for("auth.google_callback", _external=True)
    return oauth.google.authorize_redirect(redirect_uri)


@bp.get("/google/callback")
def google_callback():
    try:
        token = oauth.google.authorize_access_token()
    except OAuthError:
        current_app.logger.exception("Google sign-in failed")
        flash("Sign-in failed. Please try again.", "error")
        return redirect(url_for("trainer.current_view"))

    # with the openid scope Authlib validates the id token and fills "userinfo"
    userinfo = token.get("userinfo") or {}
    if not userinfo.get("email"):
        current_app.logger.warning("Google sign-in returned no email")
        flash("Sign-in failed. Please try again.", "error")
        return redirect(url_for("trainer.current_view"))

    user = sign_in_from_userinfo(userinfo)
    current_app.logger.info("Signed in user_id=%s", user.id)

    login_user(user)
    return redirect(url_for("trainer.current_view"))


@bp.get("/logout")
@login_required
def logout():
    logout_user()
    return redirect(url_for("trainer.current_view"))
