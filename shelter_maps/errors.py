from flask import current_app, jsonify
from sqlalchemy.exc import SQLAlchemyError

from .extensions import db

GENERIC_FAILURE_MESSAGE = "Something went wrong. Please try again or refresh the page."


class TrainingError(Exception):
    status_code = 400
    code = "error"


class Unauthenticated(TrainingError):
    status_code = 401
    code = "unauthenticated"

    def __init__(self, message: str = "Not authenticated"):
        super().__init__(message)


class NotFound(TrainingError):
    status_code = 404
    code = "not_found"


class InvalidRequest(TrainingError):
    status_code = 400
    code = "invalid_request"


def register_error_handlers(app):
    @app.errorhandler(TrainingError)
    def handle_training_error(err: TrainingError):
        current_app.logger.warning("Rejected request error=%s message=%s", err.code, err)
        return jsonify(ok=False, error=err.code, message=str(err)), err.status_code

    @app.errorhandler(SQLAlchemyError)
    def handle_storage_error(err: SQLAlchemyError):
        db.session.rollback()
        current_app.logger.exception("Storage error")
        return jsonify(ok=False, error="server_error", message=GENERIC_FAILURE_MESSAGE), 500
