"""Liveness probe used by clients before enabling sync."""

from __future__ import annotations

from flask import current_app, jsonify

from . import bp


@bp.get("/health")
def health():
    app_name = current_app.config["TINYHABIT_CONFIG"].APP_NAME
    return jsonify({"status": "OK", "message": f"{app_name} API is running"})
