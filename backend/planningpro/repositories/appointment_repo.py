"""Appointment repository backed by the /appointments resource.

The backend may populate clientId/serviceId with full documents; both
shapes are accepted.
"""

from typing import List, Optional

from planningpro.core.exceptions import BackendAPIError
from planningpro.domain.entities import Appointment
from planningpro.domain.interfaces import IAppointmentRepository
from planningpro.repositories.api_client import BackendAPIClient, record_id
from planningpro.repositories.client_repo import to_domain_client
from planningpro.repositories.service_repo import to_domain_service


def to_domain_appointment(record: dict) -> Appointment:
    """Map a backend appointment record to the domain entity."""
    client_ref = record.get("clientId")
    service_ref = record.get("serviceId")
    client_doc = client_ref if isinstance(client_ref, dict) else record.get("client")
    service_doc = (
        service_ref if isinstance(service_ref, dict) else record.get("service")
    )

    return Appointment(
        id=record_id(record),
        client_id=record_id(client_ref),
        service_id=record_id(service_ref),
        title=record.get("title") or "",
        start=record.get("start"),
        end=record.get("end"),
        status=record.get("status") or "scheduled",
        notes=record.get("notes"),
        created_at=record.get("createdAt"),
        client=to_domain_client(client_doc) if isinstance(client_doc, dict) else None,
        service=to_domain_service(service_doc)
        if isinstance(service_doc, dict)
        else None,
    )


class AppointmentRepository(IAppointmentRepository):
    """Repository for appointment operations on the REST backend."""

    def __init__(self, api: BackendAPIClient) -> None:
        self.api = api

    def get_all(self) -> List[Appointment]:
        records = self.api.get("/appointments") or []
        return [to_domain_appointment(r) for r in records]

    def get_by_id(self, appointment_id: str) -> Optional[Appointment]:
        try:
            record = self.api.get(f"/appointments/{appointment_id}")
        except BackendAPIError as e:
            if e.status_code == 404:
                return None
            raise
        return to_domain_appointment(record) if record else None

    def create(self, payload: dict) -> Appointment:
        return to_domain_appointment(self.api.post("/appointments", payload))

    def update(self, appointment_id: str, payload: dict) -> Appointment:
        return to_domain_appointment(
            self.api.put(f"/appointments/{appointment_id}", payload)
        )

    def delete(self, appointment_id: str) -> bool:
        self.api.delete(f"/appointments/{appointment_id}")
        return True

    def get_by_date(self, day: str) -> List[Appointment]:
        records = self.api.get(f"/appointments/date/{day}") or []
        return [to_domain_appointment(r) for r in records]

    def get_by_client(self, client_id: str) -> List[Appointment]:
        records = self.api.get(f"/appointments/client/{client_id}") or []
        return [to_domain_appointment(r) for r in records]
