"""Habit API routes."""

from __future__ import annotations

from flask import jsonify
from werkzeug.exceptions import HTTPException

from ...extensions import get_service
from ...infra.file_store import StorageError
from ...logging_config import get_logger
from . import bp

logger = get_logger(__name__)


@bp.get("")
def get_habit():
    """Return the habit name, current streak and raw records."""

    return jsonify(get_service().get_habit())


@bp.post("/complete")
def complete_habit():
    """Mark the habit as done for today."""

    return jsonify(get_service().complete_habit())


@bp.post("/reset")
def reset_habit():
    """Clear every completion record while keeping the habit name."""

    return jsonify(get_service().reset_habit())


@bp.get("/history")
def habit_history():
    """Return the last 7 days, oldest first."""

    return jsonify(get_service().get_history())


@bp.errorhandler(StorageError)
def storage_failed(exc: StorageError):
    logger.error("Habit data could not be saved", exc_info=exc)
    return jsonify({"error": "Failed to save data"}), 500


@bp.errorhandler(Exception)
def unexpected_error(exc: Exception):
    if isinstance(exc, HTTPException):
        return exc
    logger.error("Unhandled error in habit API", exc_info=exc)
    return jsonify({"error": "Internal server error"}), 500
