"""
Dashboard controller - statistics and upcoming appointments.
"""

import logging

from flask import Blueprint, request

from planningpro.core.api_utils import api_response
from planningpro.repositories.api_client import BackendAPIClient
from planningpro.repositories.appointment_repo import AppointmentRepository
from planningpro.repositories.client_repo import ClientRepository
from planningpro.repositories.service_repo import ServiceRepository
from planningpro.repositories.stats_repo import StatsRepository
from planningpro.services.dashboard_service import DashboardService

logger = logging.getLogger(__name__)

dashboard_bp = Blueprint("dashboard", __name__, url_prefix="/api/dashboard")


def _get_dashboard_service() -> DashboardService:
    api = BackendAPIClient()
    return DashboardService(
        AppointmentRepository(api),
        ClientRepository(api),
        ServiceRepository(api),
        StatsRepository(api),
    )


@dashboard_bp.route("/stats", methods=["GET"])
def stats():
    """
    Dashboard figures.

    Query Parameters:
        period (str): week, month or year to fetch the backend's
            aggregated figures instead of the locally computed ones
    """
    service = _get_dashboard_service()
    period = request.args.get("period")
    if period:
        try:
            data = service.get_period_stats(period)
        except ValueError as e:
            return api_response(False, str(e), None, 400)
        return api_response(True, "Statistiques de la période", data)

    return api_response(True, "Statistiques", service.get_stats().to_dict())


@dashboard_bp.route("/upcoming", methods=["GET"])
def upcoming():
    try:
        limit = int(request.args.get("limit", 5))
    except ValueError:
        return api_response(False, "Paramètre limit invalide", None, 400)
    if limit < 1:
        return api_response(False, "Paramètre limit invalide", None, 400)

    appointments = _get_dashboard_service().get_upcoming(limit)
    return api_response(
        True, "Prochains rendez-vous", [apt.to_dict() for apt in appointments]
    )


@dashboard_bp.route("/init-demo-data", methods=["POST"])
def init_demo_data():
    result = _get_dashboard_service().init_demo_data()
    logger.info("Demo data requested", extra={"context": {"path": request.path}})
    return api_response(True, "Données de démonstration initialisées", result)
