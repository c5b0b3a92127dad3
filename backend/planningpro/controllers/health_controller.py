"""
Health controller - health check endpoints for monitoring.
"""

import logging

from flask import Blueprint, jsonify

from planningpro.core.config import API_BASE_URL, APP_NAME, APP_VERSION, get_environment

logger = logging.getLogger(__name__)

health_bp = Blueprint("health", __name__, url_prefix="/health")


@health_bp.route("", methods=["GET"])
def health_check():
    """
    Liveness probe.

    Returns 200 as long as the process serves requests; the booking backend
    is not contacted.

    Example response:
        {"status": "healthy", "app": "PlanningPro", "version": "1.0.0",
         "environment": "development", "backend": "http://localhost:5000/api"}
    """
    logger.debug("Health check", extra={"context": {"endpoint": "/health"}})
    return (
        jsonify(
            {
                "status": "healthy",
                "app": APP_NAME,
                "version": APP_VERSION,
                "environment": get_environment(),
                "backend": API_BASE_URL,
            }
        ),
        200,
    )
