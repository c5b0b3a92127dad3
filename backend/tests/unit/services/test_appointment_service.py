"""
Unit tests for AppointmentService: payload normalisation and validation.
"""

from datetime import date, datetime
from unittest.mock import Mock

import pytest

from planningpro.core.exceptions import ValidationError
from planningpro.domain.entities import Appointment
from planningpro.domain.interfaces import (
    IAppointmentRepository,
    IClientRepository,
    IServiceRepository,
)
from planningpro.services.appointment_service import AppointmentService


@pytest.fixture
def repos(sample_client, sample_service):
    appointment_repo = Mock(spec=IAppointmentRepository)
    service_repo = Mock(spec=IServiceRepository)
    client_repo = Mock(spec=IClientRepository)
    service_repo.get_by_id.return_value = sample_service
    client_repo.get_by_id.return_value = sample_client
    appointment_repo.create.return_value = Appointment(id="a1")
    appointment_repo.update.return_value = Appointment(id="a1")
    return appointment_repo, service_repo, client_repo


@pytest.fixture
def service(repos):
    return AppointmentService(*repos)


@pytest.mark.unit
@pytest.mark.services
class TestBuildRequest:
    def test_form_fields_with_service_duration(self, service):
        request = service.build_request(
            {
                "clientId": "c1",
                "serviceId": "s1",
                "date": "2024-01-15",
                "startTime": "09:00",
            }
        )

        assert request.start == datetime(2024, 1, 15, 9)
        assert request.end == datetime(2024, 1, 15, 9, 30)
        assert request.title == "Coupe - Marie Dupont"

    def test_explicit_end_time_wins(self, service, repos):
        request = service.build_request(
            {
                "clientId": "c1",
                "serviceId": "s1",
                "title": "Couleur",
                "date": "2024-01-15",
                "startTime": "09:00",
                "endTime": "11:15",
            }
        )

        assert request.end == datetime(2024, 1, 15, 11, 15)
        repos[1].get_by_id.assert_not_called()

    def test_iso_start_and_end(self, service):
        request = service.build_request(
            {
                "clientId": "c1",
                "serviceId": "s1",
                "title": "RDV",
                "start": "2024-01-15T14:00:00",
                "end": "2024-01-15T15:00:00",
                "notes": "  ",
            }
        )

        assert request.start == datetime(2024, 1, 15, 14)
        assert request.end == datetime(2024, 1, 15, 15)
        assert request.notes is None

    def test_bad_date_leaves_interval_empty(self, service):
        request = service.build_request(
            {"clientId": "c1", "serviceId": "s1", "date": "15/01/2024"}
        )

        assert request.start is None
        assert request.end is None

    def test_unknown_service_keeps_end_empty(self, service, repos):
        repos[1].get_by_id.return_value = None

        request = service.build_request(
            {
                "clientId": "c1",
                "serviceId": "gone",
                "date": "2024-01-15",
                "startTime": "09:00",
            }
        )

        assert request.end is None
        assert request.title == ""


@pytest.mark.unit
@pytest.mark.services
class TestAppointmentUseCases:
    def test_create_sends_iso_payload(self, service, repos):
        service.create_appointment(
            {
                "clientId": "c1",
                "serviceId": "s1",
                "date": "2024-01-15",
                "startTime": "10:30",
                "status": "confirmed",
            }
        )

        payload = repos[0].create.call_args[0][0]
        assert payload["start"] == "2024-01-15T10:30:00"
        assert payload["end"] == "2024-01-15T11:00:00"
        assert payload["status"] == "confirmed"

    def test_create_rejects_incomplete_payload(self, service, repos):
        with pytest.raises(ValidationError) as exc_info:
            service.create_appointment({"serviceId": "s1"})

        assert "clientId" in exc_info.value.errors
        assert "start" in exc_info.value.errors
        repos[0].create.assert_not_called()

    def test_update_rejects_inverted_interval(self, service, repos):
        with pytest.raises(ValidationError):
            service.update_appointment(
                "a1",
                {
                    "clientId": "c1",
                    "serviceId": "s1",
                    "title": "RDV",
                    "start": "2024-01-15T10:00:00",
                    "end": "2024-01-15T09:00:00",
                },
            )

        repos[0].update.assert_not_called()

    def test_day_query_uses_iso_date(self, service, repos):
        repos[0].get_by_date.return_value = []

        service.get_appointments_for_day(date(2024, 1, 15))

        repos[0].get_by_date.assert_called_once_with("2024-01-15")

    def test_delete(self, service, repos):
        repos[0].delete.return_value = True

        assert service.delete_appointment("a1") is True
