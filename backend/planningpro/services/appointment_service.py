"""
Appointment service following SOLID principles.
"""

import logging
from datetime import date, datetime, timedelta
from typing import List, Optional

from planningpro.domain.entities import Appointment
from planningpro.domain.interfaces import (
    IAppointmentRepository,
    IClientRepository,
    IServiceRepository,
)
from planningpro.schemas.dtos import AppointmentRequest
from planningpro.utils.date_utils import parse_iso_datetime, parse_time_slot

logger = logging.getLogger(__name__)


class AppointmentService:
    """Application service for appointment-related use-cases.

    Accepts either explicit ISO ``start``/``end`` values or the booking
    form's ``date`` + ``startTime`` (+ optional ``endTime``) fields. When no
    end is given it is derived from the selected service's duration, and a
    missing title defaults to "<service> - <client>".
    """

    def __init__(
        self,
        appointment_repo: IAppointmentRepository,
        service_repo: IServiceRepository,
        client_repo: IClientRepository,
    ):
        self.appointment_repo = appointment_repo
        self.service_repo = service_repo
        self.client_repo = client_repo

    def list_appointments(self) -> List[Appointment]:
        return self.appointment_repo.get_all()

    def get_appointment(self, appointment_id: str) -> Optional[Appointment]:
        return self.appointment_repo.get_by_id(appointment_id)

    def get_appointments_for_day(self, day: date) -> List[Appointment]:
        return self.appointment_repo.get_by_date(day.isoformat())

    def get_appointments_for_client(self, client_id: str) -> List[Appointment]:
        return self.appointment_repo.get_by_client(client_id)

    def create_appointment(self, payload: dict) -> Appointment:
        request = self.build_request(payload)
        request.validate()
        appointment = self.appointment_repo.create(request.to_payload())
        logger.info(
            "Appointment created",
            extra={
                "context": {
                    "appointment_id": appointment.id,
                    "start": request.start.isoformat() if request.start else None,
                }
            },
        )
        return appointment

    def update_appointment(self, appointment_id: str, payload: dict) -> Appointment:
        request = self.build_request(payload)
        request.validate()
        return self.appointment_repo.update(appointment_id, request.to_payload())

    def delete_appointment(self, appointment_id: str) -> bool:
        deleted = self.appointment_repo.delete(appointment_id)
        logger.info(
            "Appointment deleted",
            extra={"context": {"appointment_id": appointment_id}},
        )
        return deleted

    def build_request(self, payload: dict) -> AppointmentRequest:
        """Turn a booking form (or API payload) into a validated-ready request."""
        client_id = str(payload.get("clientId") or "").strip()
        service_id = str(payload.get("serviceId") or "").strip()
        title = str(payload.get("title") or "").strip()

        start, end = self._resolve_interval(payload)

        service = None
        if service_id and (end is None or not title):
            service = self.service_repo.get_by_id(service_id)

        if end is None and isinstance(start, datetime) and service is not None:
            end = start + timedelta(minutes=service.duration)

        if not title and service is not None and client_id:
            client = self.client_repo.get_by_id(client_id)
            if client is not None:
                title = f"{service.name} - {client.name}"

        return AppointmentRequest(
            client_id=client_id,
            service_id=service_id,
            title=title,
            start=start,
            end=end,
            status=str(payload.get("status") or "scheduled"),
            notes=(str(payload.get("notes")).strip() or None)
            if payload.get("notes")
            else None,
        )

    def _resolve_interval(self, payload: dict):
        if payload.get("start"):
            return (
                parse_iso_datetime(payload.get("start")),
                parse_iso_datetime(payload.get("end")),
            )

        try:
            day = datetime.strptime(str(payload.get("date")), "%Y-%m-%d").date()
        except ValueError:
            return None, None

        start = self._combine(payload.get("startTime"), day)
        end = self._combine(payload.get("endTime"), day)
        return start, end

    @staticmethod
    def _combine(time_slot, day: date) -> Optional[datetime]:
        if not time_slot:
            return None
        try:
            return parse_time_slot(str(time_slot), day)
        except ValueError:
            return None
