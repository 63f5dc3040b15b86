"""
api.errors - JSON error handlers for the API blueprint.
"""

import logging

from flask import jsonify

from api import api_bp
from import_engine.errors import MalformedInputError, UserNotFoundError
from services.errors import ConflictError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)


@api_bp.errorhandler(UserNotFoundError)
@api_bp.errorhandler(NotFoundError)
def api_entity_not_found(e):
    return jsonify({"error": str(e)}), 404


@api_bp.errorhandler(MalformedInputError)
def api_malformed_input(e):
    cause = e.__cause__
    body = {"error": str(e)}
    if cause is not None:
        body["cause"] = type(cause).__name__
    return jsonify(body), 400


@api_bp.errorhandler(ValidationError)
def api_validation_error(e):
    return jsonify({"error": str(e)}), 400


@api_bp.errorhandler(ConflictError)
def api_conflict(e):
    return jsonify({"error": str(e)}), 409


@api_bp.errorhandler(404)
def api_not_found(_e):
    return jsonify({"error": "not found"}), 404


@api_bp.errorhandler(400)
def api_bad_request(_e):
    return jsonify({"error": "bad request"}), 400


@api_bp.errorhandler(413)
def api_too_large(_e):
    return jsonify({"error": "payload too large"}), 413


@api_bp.errorhandler(500)
def api_server_error(e):
    logger.error(f"Unhandled API error: {e}")
    return jsonify({"error": "internal server error"}), 500
