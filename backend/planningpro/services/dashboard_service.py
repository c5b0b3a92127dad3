"""
Dashboard statistics computed from the current clients, services and appointments.
"""

import logging
from datetime import datetime, timedelta
from typing import Callable, Dict, List, Optional

from planningpro.core.config import APP_TZ
from planningpro.domain.entities import Appointment, Client, DashboardStats, Service
from planningpro.domain.interfaces import (
    IAppointmentRepository,
    IClientRepository,
    IServiceRepository,
    IStatsRepository,
)
from planningpro.domain.timeline_layout import is_valid_timestamp
from planningpro.utils.date_utils import is_today

logger = logging.getLogger(__name__)

AVERAGE_WINDOW_DAYS = 30


def _comparable(value: datetime, now: datetime) -> datetime:
    """Align naive/aware datetimes with `now` before comparing."""
    if value.tzinfo is None and now.tzinfo is not None:
        return value.replace(tzinfo=now.tzinfo)
    if value.tzinfo is not None and now.tzinfo is None:
        return value.astimezone(APP_TZ).replace(tzinfo=None)
    if value.tzinfo is not None:
        return value.astimezone(now.tzinfo)
    return value


class DashboardService:
    """Application service for the dashboard page."""

    def __init__(
        self,
        appointment_repo: IAppointmentRepository,
        client_repo: IClientRepository,
        service_repo: IServiceRepository,
        stats_repo: IStatsRepository,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.appointment_repo = appointment_repo
        self.client_repo = client_repo
        self.service_repo = service_repo
        self.stats_repo = stats_repo
        self.clock = clock or (lambda: datetime.now(APP_TZ))

    def get_stats(self) -> DashboardStats:
        return self.compute_stats(
            self.appointment_repo.get_all(),
            self.client_repo.get_all(),
            self.service_repo.get_all(),
            self.clock(),
        )

    def get_upcoming(self, limit: int = 5) -> List[Appointment]:
        return self.upcoming(self.appointment_repo.get_all(), self.clock(), limit)

    def get_period_stats(self, period: str) -> dict:
        return self.stats_repo.get_by_period(period)

    def init_demo_data(self) -> dict:
        result = self.stats_repo.init_demo_data()
        logger.info("Demo data initialised on backend")
        return result

    @staticmethod
    def compute_stats(
        appointments: List[Appointment],
        clients: List[Client],
        services: List[Service],
        now: datetime,
    ) -> DashboardStats:
        """
        Aggregate dashboard figures.

        Revenue counts completed appointments only, using the populated
        service when present and the catalogue price otherwise. The daily
        average covers the last 30 days, rounded to one decimal.
        """
        by_status: Dict[str, int] = {}
        for apt in appointments:
            by_status[apt.status] = by_status.get(apt.status, 0) + 1

        prices = {service.id: service.price for service in services}
        revenue = 0.0
        for apt in appointments:
            if apt.status != "completed":
                continue
            if apt.service is not None:
                revenue += apt.service.price
            else:
                revenue += prices.get(apt.service_id, 0.0)

        window_start = now - timedelta(days=AVERAGE_WINDOW_DAYS)
        recent = [
            apt
            for apt in appointments
            if is_valid_timestamp(apt.start)
            and _comparable(apt.start, now) >= window_start
        ]

        today_count = 0
        for apt in appointments:
            if is_valid_timestamp(apt.start) and is_today(
                _comparable(apt.start, now), now
            ):
                today_count += 1

        return DashboardStats(
            total_clients=len(clients),
            total_services=len(services),
            total_appointments=len(appointments),
            today_appointments=today_count,
            scheduled_appointments=by_status.get("scheduled", 0),
            confirmed_appointments=by_status.get("confirmed", 0),
            completed_appointments=by_status.get("completed", 0),
            cancelled_appointments=by_status.get("cancelled", 0),
            total_revenue=round(revenue, 2),
            avg_appointments_per_day=round(len(recent) / AVERAGE_WINDOW_DAYS, 1),
        )

    @staticmethod
    def upcoming(
        appointments: List[Appointment], now: datetime, limit: int = 5
    ) -> List[Appointment]:
        """Next non-cancelled appointments after `now`, soonest first."""
        future = [
            apt
            for apt in appointments
            if is_valid_timestamp(apt.start)
            and not apt.is_cancelled
            and _comparable(apt.start, now) > now
        ]
        future.sort(key=lambda apt: _comparable(apt.start, now))
        return future[:limit]
