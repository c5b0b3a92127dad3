"""
Unit tests for dashboard statistics.
"""

from datetime import datetime, timedelta, timezone
from unittest.mock import Mock

import pytest

from planningpro.domain.entities import Client, Service
from planningpro.services.dashboard_service import DashboardService

NOW = datetime(2024, 1, 15, 12, 0)


@pytest.mark.unit
@pytest.mark.services
class TestComputeStats:
    def test_counts_and_revenue(self, make_appointment, sample_service):
        appointments = [
            make_appointment("09:00", "09:30", status="completed"),
            make_appointment("14:00", "14:30", status="scheduled"),
            make_appointment(
                "10:00",
                "10:30",
                day=datetime(2024, 1, 10),
                status="completed",
                service=None,
            ),
            make_appointment(
                "10:00", "10:30", day=datetime(2024, 1, 20), status="cancelled"
            ),
        ]

        stats = DashboardService.compute_stats(
            appointments, [Client(id="c1")], [sample_service], NOW
        )

        assert stats.total_appointments == 4
        assert stats.today_appointments == 2
        assert stats.completed_appointments == 2
        assert stats.cancelled_appointments == 1
        # populated price + catalogue lookup for the unpopulated one
        assert stats.total_revenue == 50.0
        assert stats.total_clients == 1
        assert stats.total_services == 1

    def test_daily_average_over_thirty_days(self, make_appointment):
        appointments = [
            make_appointment("09:00", "10:00", day=NOW - timedelta(days=days))
            for days in range(6)
        ]
        appointments.append(
            make_appointment("09:00", "10:00", day=NOW - timedelta(days=45))
        )

        stats = DashboardService.compute_stats(appointments, [], [], NOW)

        assert stats.avg_appointments_per_day == 0.2

    def test_invalid_dates_are_ignored(self, make_appointment):
        stats = DashboardService.compute_stats(
            [make_appointment("not-a-date", None)], [], [], NOW
        )

        assert stats.total_appointments == 1
        assert stats.today_appointments == 0

    def test_unknown_service_adds_no_revenue(self, make_appointment):
        apt = make_appointment(status="completed", service=None, service_id="gone")

        stats = DashboardService.compute_stats([apt], [], [Service(id="s1")], NOW)

        assert stats.total_revenue == 0.0

    def test_to_dict_keys(self):
        data = DashboardService.compute_stats([], [], [], NOW).to_dict()

        assert data["totalRevenue"] == 0.0
        assert data["avgAppointmentsPerDay"] == 0.0


@pytest.mark.unit
@pytest.mark.services
class TestUpcoming:
    def test_future_non_cancelled_sorted(self, make_appointment):
        appointments = [
            make_appointment("16:00", "17:00", apt_id="later"),
            make_appointment("08:00", "09:00", apt_id="past"),
            make_appointment("13:00", "14:00", apt_id="soon"),
            make_appointment("15:00", "16:00", apt_id="off", status="cancelled"),
        ]

        result = DashboardService.upcoming(appointments, NOW)

        assert [a.id for a in result] == ["soon", "later"]

    def test_limit(self, make_appointment):
        appointments = [
            make_appointment("09:00", "10:00", day=NOW + timedelta(days=d))
            for d in range(1, 9)
        ]

        assert len(DashboardService.upcoming(appointments, NOW, limit=5)) == 5

    def test_mixes_aware_and_naive(self, make_appointment):
        aware_now = datetime(2024, 1, 15, 12, tzinfo=timezone.utc)
        appointments = [
            make_appointment(
                datetime(2024, 1, 15, 13, tzinfo=timezone.utc),
                datetime(2024, 1, 15, 14, tzinfo=timezone.utc),
                apt_id="aware",
            ),
            make_appointment(
                datetime(2024, 1, 16, 9), datetime(2024, 1, 16, 10), apt_id="naive"
            ),
        ]

        result = DashboardService.upcoming(appointments, aware_now)

        assert [a.id for a in result] == ["aware", "naive"]


@pytest.mark.unit
@pytest.mark.services
def test_service_wires_repositories(make_appointment):
    appointment_repo, client_repo, service_repo, stats_repo = (
        Mock(),
        Mock(),
        Mock(),
        Mock(),
    )
    appointment_repo.get_all.return_value = [make_appointment("13:00", "14:00")]
    client_repo.get_all.return_value = []
    service_repo.get_all.return_value = []
    stats_repo.init_demo_data.return_value = {"message": "ok"}

    service = DashboardService(
        appointment_repo, client_repo, service_repo, stats_repo, clock=lambda: NOW
    )

    assert service.get_stats().today_appointments == 1
    assert len(service.get_upcoming()) == 1
    assert service.init_demo_data() == {"message": "ok"}
