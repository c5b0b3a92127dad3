"""
Calendar Controller - SOLID compliant HTTP handlers
Single Responsibility: Serve day, week and month view models
"""

import logging
import time

from flask import Blueprint, request

from planningpro.core.api_utils import api_response, parse_date_param
from planningpro.core.logging_config import log_performance
from planningpro.repositories.api_client import BackendAPIClient
from planningpro.repositories.appointment_repo import AppointmentRepository
from planningpro.repositories.client_repo import ClientRepository
from planningpro.repositories.service_repo import ServiceRepository
from planningpro.services.appointment_service import AppointmentService
from planningpro.services.calendar_service import CalendarService

logger = logging.getLogger(__name__)

# Create Blueprint
calendar_bp = Blueprint("calendar", __name__, url_prefix="/calendar")


def _get_calendar_service() -> CalendarService:
    """Dependency injection for the calendar view builder."""
    return CalendarService()


def _get_appointment_service() -> AppointmentService:
    """
    Dependency injection for appointment access.
    Follows Dependency Inversion Principle.
    """
    api = BackendAPIClient()
    return AppointmentService(
        AppointmentRepository(api), ServiceRepository(api), ClientRepository(api)
    )


def _render_view(view: str):
    try:
        anchor = parse_date_param("date")
    except ValueError:
        return api_response(False, "Format de date invalide (YYYY-MM-DD)", None, 400)

    device = request.args.get("device", "desktop")
    calendar_service = _get_calendar_service()
    builders = {
        "day": calendar_service.day_view,
        "week": calendar_service.week_view,
        "month": calendar_service.month_view,
    }

    appointments = _get_appointment_service().list_appointments()
    started = time.perf_counter()
    try:
        data = builders[view](appointments, anchor, device)
    except ValueError as e:
        return api_response(False, str(e), None, 400)

    log_performance(
        f"calendar.{view}_view",
        (time.perf_counter() - started) * 1000,
        date=anchor.isoformat(),
        device=device,
        appointments=len(appointments),
    )
    return api_response(True, "Vue calendrier", data, 200)


@calendar_bp.route("/api/day", methods=["GET"])
def day_view():
    """
    Day view with stacked appointment positions.

    Query Parameters:
        date (str): Day in YYYY-MM-DD format (defaults to today)
        device (str): desktop or mobile
    """
    return _render_view("day")


@calendar_bp.route("/api/week", methods=["GET"])
def week_view():
    """Week view (Monday to Sunday) containing the given date."""
    return _render_view("week")


@calendar_bp.route("/api/month", methods=["GET"])
def month_view():
    """Month grid with appointment previews."""
    return _render_view("month")


@calendar_bp.route("/api/navigate", methods=["GET"])
def navigate():
    """
    Compute the anchor date after a previous/next/today action.

    Query Parameters:
        view (str): day, week or month
        date (str): Current anchor date
        direction (str): prev, next or today
    """
    try:
        anchor = parse_date_param("date")
    except ValueError:
        return api_response(False, "Format de date invalide (YYYY-MM-DD)", None, 400)

    view = request.args.get("view", "week")
    direction = request.args.get("direction", "today")
    try:
        target = _get_calendar_service().navigate(view, anchor, direction)
    except ValueError as e:
        return api_response(False, str(e), None, 400)

    return api_response(True, "Navigation", {"view": view, "date": target.isoformat()})
