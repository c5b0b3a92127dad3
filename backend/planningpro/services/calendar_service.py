"""
Calendar view models (day, week and month) built on the timeline layout engine.

Single Responsibility: turn a list of appointments and a display profile
into JSON-ready structures the browser renders as-is.
"""

import logging
from dataclasses import replace
from datetime import date, datetime, timedelta
from typing import Callable, List, Optional

from planningpro.core.config import APP_TZ
from planningpro.domain.entities import Appointment
from planningpro.domain.timeline_layout import (
    DEVICE_CLASSES,
    DisplayProfile,
    LayoutDiagnostic,
    get_display_profile,
    is_valid_timestamp,
    layout_day,
)
from planningpro.utils.date_utils import (
    add_months,
    create_time_slots,
    format_date,
    format_time,
    get_calendar_days,
    get_week_days,
    is_same_day,
    is_same_month,
    is_today,
)

logger = logging.getLogger(__name__)

MONTH_WEEKDAY_LABELS = ["Lun", "Mar", "Mer", "Jeu", "Ven", "Sam", "Dim"]
MONTH_PREVIEW_LIMIT = {"desktop": 3, "mobile": 2}
NAVIGATION_DIRECTIONS = ("prev", "next", "today")
VIEWS = ("day", "week", "month")


def _to_local(value):
    # naive values are already local; aware ones become naive local time
    if isinstance(value, datetime) and value.tzinfo is not None:
        return value.astimezone(APP_TZ).replace(tzinfo=None)
    return value


class CalendarService:
    """
    Build calendar view models.

    Args:
        clock: Returns the current datetime (injectable for tests)
    """

    def __init__(self, clock: Optional[Callable[[], datetime]] = None):
        self.clock = clock or (lambda: datetime.now(APP_TZ))

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _check_device(device: str) -> str:
        if device not in DEVICE_CLASSES:
            raise ValueError(f"Unknown device class: {device}")
        return device

    @staticmethod
    def localize(appointments: List[Appointment]) -> List[Appointment]:
        """Copies of the appointments with naive datetimes in the app timezone."""
        return [
            replace(apt, start=_to_local(apt.start), end=_to_local(apt.end))
            for apt in appointments
        ]

    @staticmethod
    def appointments_for_day(
        appointments: List[Appointment], day: date
    ) -> List[Appointment]:
        result = []
        for apt in appointments:
            if not is_valid_timestamp(apt.start):
                logger.warning(
                    "Appointment skipped: invalid start date",
                    extra={
                        "context": {
                            "appointment_id": apt.id,
                            "title": apt.title,
                            "start": repr(apt.start),
                        }
                    },
                )
                continue
            if is_same_day(apt.start, day):
                result.append(apt)
        return result

    def _diagnostics_logger(self, view: str, day: date):
        def report(diagnostic: LayoutDiagnostic) -> None:
            logger.warning(
                "Appointment stack positioned with fallback layout",
                extra={
                    "context": {
                        "view": view,
                        "date": day.isoformat(),
                        "reason": diagnostic.reason,
                        "event_count": diagnostic.event_count,
                        "start": repr(diagnostic.start),
                        "end": repr(diagnostic.end),
                    }
                },
            )

        return report

    def _stacks(
        self,
        appointments: List[Appointment],
        profile: DisplayProfile,
        view: str,
        day: date,
    ) -> List[dict]:
        stacks = []
        for cluster, position in layout_day(
            appointments, profile, self._diagnostics_logger(view, day)
        ):
            stacks.append(
                {
                    "position": position.to_css(),
                    "offset": position.offset,
                    "extent": position.extent,
                    "fallback": position.fallback,
                    "count": len(cluster),
                    "start": format_time(cluster[0].start),
                    "end": format_time(cluster[-1].end),
                    "appointments": [apt.to_dict() for apt in cluster],
                }
            )
        return stacks

    @staticmethod
    def _time_slots(profile: DisplayProfile, show_half_hours: bool) -> List[dict]:
        slots = []
        for slot in create_time_slots(0, 24, profile.granularity_minutes):
            visible = slot.endswith(":00") or (show_half_hours and slot.endswith(":30"))
            slots.append({"time": slot, "label": slot if visible else ""})
        return slots

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------

    def day_view(
        self, appointments: List[Appointment], day: date, device: str = "desktop"
    ) -> dict:
        profile = get_display_profile("day", self._check_device(device))
        day_appointments = self.appointments_for_day(self.localize(appointments), day)

        return {
            "view": "day",
            "device": device,
            "date": day.isoformat(),
            "header": {
                "weekday": format_date(day, "%A"),
                "weekdayShort": format_date(day, "%a"),
                "label": format_date(day, "%d %B %Y"),
                "labelShort": format_date(day, "%d %b"),
            },
            "isToday": is_today(day, self.clock()),
            "appointmentCount": len(day_appointments),
            "slotUnitSize": profile.slot_unit_size,
            "timeSlots": self._time_slots(profile, show_half_hours=device == "mobile"),
            "stacks": self._stacks(day_appointments, profile, "day", day),
        }

    def week_view(
        self, appointments: List[Appointment], anchor: date, device: str = "desktop"
    ) -> dict:
        profile = get_display_profile("week", self._check_device(device))
        localized = self.localize(appointments)
        now = self.clock()
        week_days = get_week_days(anchor)

        days = []
        for day in week_days:
            day_appointments = self.appointments_for_day(localized, day)
            days.append(
                {
                    "date": day.isoformat(),
                    "weekday": format_date(day, "%a"),
                    "dayNumber": day.day,
                    "isToday": is_today(day, now),
                    "appointmentCount": len(day_appointments),
                    "stacks": self._stacks(day_appointments, profile, "week", day),
                }
            )

        return {
            "view": "week",
            "device": device,
            "date": anchor.isoformat(),
            "range": {
                "start": week_days[0].isoformat(),
                "end": week_days[-1].isoformat(),
            },
            "slotUnitSize": profile.slot_unit_size,
            "timeSlots": self._time_slots(profile, show_half_hours=False),
            "days": days,
        }

    def month_view(
        self, appointments: List[Appointment], anchor: date, device: str = "desktop"
    ) -> dict:
        limit = MONTH_PREVIEW_LIMIT[self._check_device(device)]
        localized = self.localize(appointments)
        now = self.clock()

        days = []
        for day in get_calendar_days(anchor):
            day_appointments = sorted(
                self.appointments_for_day(localized, day), key=lambda apt: apt.start
            )
            days.append(
                {
                    "date": day.isoformat(),
                    "dayNumber": day.day,
                    "isCurrentMonth": is_same_month(day, anchor),
                    "isToday": is_today(day, now),
                    "appointmentCount": len(day_appointments),
                    "appointments": [
                        {
                            "id": apt.id,
                            "title": apt.title,
                            "time": format_time(apt.start),
                            "status": apt.status,
                            "color": apt.service.color if apt.service else None,
                        }
                        for apt in day_appointments[:limit]
                    ],
                    "moreCount": max(0, len(day_appointments) - limit),
                }
            )

        return {
            "view": "month",
            "device": device,
            "date": anchor.isoformat(),
            "title": format_date(anchor, "%B %Y"),
            "weekdays": MONTH_WEEKDAY_LABELS,
            "days": days,
        }

    def navigate(self, view: str, anchor: date, direction: str) -> date:
        """
        Anchor date after a previous/next/today navigation.

        Raises:
            ValueError: For an unknown view or direction
        """
        if view not in VIEWS:
            raise ValueError(f"Unknown calendar view: {view}")
        if direction not in NAVIGATION_DIRECTIONS:
            raise ValueError(f"Unknown navigation direction: {direction}")

        if direction == "today":
            return self.clock().date()

        step = 1 if direction == "next" else -1
        if view == "day":
            return anchor + timedelta(days=step)
        if view == "week":
            return anchor + timedelta(weeks=step)
        return add_months(anchor, step)
