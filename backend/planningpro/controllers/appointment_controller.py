"""
Appointment Controller - SOLID-compliant HTTP route handlers for appointments.

Following SOLID principles:
- Single Responsibility: Only handles HTTP request/response for appointments
- Dependency Inversion: Depends on the service, built by a factory
"""

import logging
from datetime import datetime

from flask import Blueprint

from planningpro.core.api_utils import api_response, get_json_payload
from planningpro.repositories.api_client import BackendAPIClient
from planningpro.repositories.appointment_repo import AppointmentRepository
from planningpro.repositories.client_repo import ClientRepository
from planningpro.repositories.service_repo import ServiceRepository
from planningpro.services.appointment_service import AppointmentService

logger = logging.getLogger(__name__)

appointments_bp = Blueprint("appointments", __name__, url_prefix="/api/appointments")


def _get_appointment_service() -> AppointmentService:
    """Dependency injection factory for AppointmentService.

    The three repositories share one backend client (and its HTTP session).
    """
    api = BackendAPIClient()
    return AppointmentService(
        AppointmentRepository(api), ServiceRepository(api), ClientRepository(api)
    )


@appointments_bp.route("", methods=["GET"])
def list_appointments():
    appointments = _get_appointment_service().list_appointments()
    return api_response(
        True, "Rendez-vous récupérés", [apt.to_dict() for apt in appointments]
    )


@appointments_bp.route("/date/<day>", methods=["GET"])
def appointments_by_date(day: str):
    """Appointments of one day (YYYY-MM-DD)."""
    try:
        parsed = datetime.strptime(day, "%Y-%m-%d").date()
    except ValueError:
        return api_response(False, "Format de date invalide (YYYY-MM-DD)", None, 400)

    appointments = _get_appointment_service().get_appointments_for_day(parsed)
    return api_response(
        True, "Rendez-vous du jour", [apt.to_dict() for apt in appointments]
    )


@appointments_bp.route("/client/<client_id>", methods=["GET"])
def appointments_by_client(client_id: str):
    appointments = _get_appointment_service().get_appointments_for_client(client_id)
    return api_response(
        True, "Rendez-vous du client", [apt.to_dict() for apt in appointments]
    )


@appointments_bp.route("/<appointment_id>", methods=["GET"])
def get_appointment(appointment_id: str):
    appointment = _get_appointment_service().get_appointment(appointment_id)
    if appointment is None:
        return api_response(False, "Rendez-vous non trouvé", None, 404)
    return api_response(True, "Rendez-vous trouvé", appointment.to_dict())


@appointments_bp.route("", methods=["POST"])
def create_appointment():
    """Create an appointment.

    Expected JSON payload (either form):
    {"clientId": "...", "serviceId": "...", "start": "ISO", "end": "ISO"}
    {"clientId": "...", "serviceId": "...", "date": "2024-01-15", "startTime": "09:00"}
    """
    appointment = _get_appointment_service().create_appointment(get_json_payload())
    return api_response(True, "Rendez-vous créé avec succès", appointment.to_dict(), 201)


@appointments_bp.route("/<appointment_id>", methods=["PUT"])
def update_appointment(appointment_id: str):
    appointment = _get_appointment_service().update_appointment(
        appointment_id, get_json_payload()
    )
    return api_response(True, "Rendez-vous mis à jour", appointment.to_dict())


@appointments_bp.route("/<appointment_id>", methods=["DELETE"])
def delete_appointment(appointment_id: str):
    _get_appointment_service().delete_appointment(appointment_id)
    return api_response(True, "Rendez-vous supprimé")
