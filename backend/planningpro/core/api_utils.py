"""
Common API utilities for consistent response formatting across all controllers.
"""

from datetime import date, datetime
from typing import Any, Optional

from flask import jsonify, request

from planningpro.core.config import APP_TZ


def api_response(
    success: bool, message: str, data: Optional[Any] = None, status_code: int = 200
) -> tuple:
    """
    Standardized API response format for all endpoints.

    Args:
        success: Whether the operation was successful
        message: Human-readable message about the operation
        data: Optional data payload
        status_code: HTTP status code

    Returns:
        Tuple of (json_response, status_code)
    """
    response = {"success": success, "message": message}

    if data is not None:
        response["data"] = data

    return jsonify(response), status_code


def get_json_payload() -> dict:
    """Return the request JSON body as a dict (empty dict when absent)."""
    payload = request.get_json(silent=True)
    return payload if isinstance(payload, dict) else {}


def parse_date_param(name: str, default: Optional[date] = None) -> date:
    """
    Parse a YYYY-MM-DD query parameter.

    Raises:
        ValueError: If the parameter is present but malformed
    """
    raw = request.args.get(name, "").strip()
    if not raw:
        return default or datetime.now(APP_TZ).date()
    return datetime.strptime(raw, "%Y-%m-%d").date()
