from dotenv import load_dotenv
load_dotenv()

from flask import Flask
from .config import Config
from .extensions import db, migrate, login_manager, oauth, register_oauth_clients
from .models import User


@login_manager.user_loader
def load_user(user_id):
    return db.session.get(User, user_id)


def create_app(config_object=None):
    app = Flask(__name__)
    app.config.from_object(config_object or Config)

    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)
    oauth.init_app(app)
    register_oauth_clients()

    # import models so Alembic sees them
    from . import models  # noqa: F401

    from .errors import register_error_handlers
    register_error_handlers(app)

    # register blueprints
    from .auth.routes import bp as auth_bp
    from .lessons.routes import bp as lessons_bp
    from .volunteers.routes import bp as volunteers_bp
    from .trainer.routes import bp as trainer_bp
    app.register_blueprint(auth_bp)
    app.register_blueprint(lessons_bp)
    app.register_blueprint(volunteers_bp)
    app.register_blueprint(trainer_bp)

    from .cli import register_cli
    register_cli(app)

    return app
