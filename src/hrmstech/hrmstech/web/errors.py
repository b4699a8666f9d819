from __future__ import annotations

import logging

from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from ..core.exceptions import AuthenticationError, AuthorizationError, NotFoundError, ValidationError
from ..employee_ids.formatter import EmployeeIdFormatError
from ..users.errors import auth_error_message

logger = logging.getLogger(__name__)


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(EmployeeIdFormatError)
    def handle_format_error(e: EmployeeIdFormatError):
        return jsonify({"error": str(e), "errors": e.errors}), 400

    @app.errorhandler(ValidationError)
    def handle_validation(e: ValidationError):
        return jsonify({"error": str(e)}), 400

    @app.errorhandler(AuthenticationError)
    def handle_authentication(e: AuthenticationError):
        return jsonify({"error": auth_error_message(e), "code": e.code}), 401

    @app.errorhandler(AuthorizationError)
    def handle_authorization(e: AuthorizationError):
        return jsonify({"error": str(e)}), 403

    @app.errorhandler(NotFoundError)
    def handle_not_found(e: NotFoundError):
        return jsonify({"error": str(e)}), 404

    @app.errorhandler(HTTPException)
    def handle_http(e: HTTPException):
        return jsonify({"error": e.description}), e.code

    @app.errorhandler(Exception)
    def handle_unexpected(e: Exception):
        logger.exception("unhandled error")
        if bool(app.config.get("DEBUG", False)):
            return jsonify({"error": f"Internal error: {e}"}), 500
        return jsonify({"error": "An unexpected error occurred"}), 500
