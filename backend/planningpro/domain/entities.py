"""
Domain entities - Pure business logic, no framework dependencies.

Following SOLID principles:
- Single Responsibility: Each entity represents one business concept
- Open/Closed: Entities can be extended without modification

Entities mirror the records served by the booking backend. Dates that the
backend sent in an unparsable form are kept as-is rather than rejected, so
the calendar can still render the appointment in a degraded position.
"""

import re
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, List, Optional

APPOINTMENT_STATUSES = ("scheduled", "confirmed", "completed", "cancelled")

DEFAULT_SERVICE_COLOR = "#3B82F6"
COLOR_PATTERN = re.compile(r"^#[0-9A-Fa-f]{6}$")

QR_POSITIONS = ("bottom-right", "bottom-left", "top-right", "top-left")
QR_SIZE_MIN = 100
QR_SIZE_MAX = 200
QR_SIZE_DEFAULT = 150

ACTION_TYPES = ("download", "redirect", "website", "form")
PREVIEW_FILE = "carte-apercu"


@dataclass
class Client:
    """Domain entity representing a customer of the business."""

    id: Optional[str] = None
    name: str = ""
    email: str = ""
    phone: str = ""
    address: Optional[str] = None
    notes: Optional[str] = None
    last_visit: Optional[datetime] = None
    created_at: Optional[datetime] = None

    def matches(self, term: str) -> bool:
        """Case-insensitive match on name or email, substring match on phone."""
        needle = term.strip().lower()
        if not needle:
            return True
        return (
            needle in self.name.lower()
            or needle in self.email.lower()
            or term.strip() in self.phone
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "phone": self.phone,
            "address": self.address,
            "notes": self.notes,
            "lastVisit": self.last_visit.isoformat()
            if isinstance(self.last_visit, datetime)
            else self.last_visit,
            "createdAt": self.created_at.isoformat()
            if isinstance(self.created_at, datetime)
            else self.created_at,
        }


@dataclass
class Service:
    """Domain entity for a bookable service (name, duration, price, colour)."""

    id: Optional[str] = None
    name: str = ""
    duration: int = 60  # minutes
    price: float = 0.0
    color: str = DEFAULT_SERVICE_COLOR
    description: Optional[str] = None

    def hourly_rate(self) -> int:
        if self.duration > 0 and self.price > 0:
            return round(self.price / self.duration * 60)
        return 0

    def format_duration(self) -> str:
        hours, mins = divmod(self.duration, 60)
        if hours > 0 and mins > 0:
            return f"{hours}h {mins}min"
        if hours > 0:
            return f"{hours}h"
        return f"{mins}min"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "duration": self.duration,
            "price": self.price,
            "color": self.color,
            "description": self.description,
        }


@dataclass
class Appointment:
    """Domain entity for an appointment on the calendar."""

    id: Optional[str] = None
    client_id: Optional[str] = None
    service_id: Optional[str] = None
    title: str = ""
    start: Any = None
    end: Any = None
    status: str = "scheduled"  # scheduled, confirmed, completed, cancelled
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    # Populated data
    client: Optional[Client] = None
    service: Optional[Service] = None

    @property
    def is_cancelled(self) -> bool:
        return self.status == "cancelled"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "clientId": self.client_id,
            "serviceId": self.service_id,
            "title": self.title,
            "start": self.start.isoformat()
            if isinstance(self.start, datetime)
            else self.start,
            "end": self.end.isoformat() if isinstance(self.end, datetime) else self.end,
            "status": self.status,
            "notes": self.notes,
            "client": self.client.to_dict() if self.client else None,
            "service": self.service.to_dict() if self.service else None,
        }


@dataclass
class DashboardStats:
    """Aggregate figures shown on the dashboard."""

    total_clients: int = 0
    total_services: int = 0
    total_appointments: int = 0
    today_appointments: int = 0
    scheduled_appointments: int = 0
    confirmed_appointments: int = 0
    completed_appointments: int = 0
    cancelled_appointments: int = 0
    total_revenue: float = 0.0
    avg_appointments_per_day: float = 0.0

    def to_dict(self) -> dict:
        return {
            "totalClients": self.total_clients,
            "totalServices": self.total_services,
            "totalAppointments": self.total_appointments,
            "todayAppointments": self.today_appointments,
            "scheduledAppointments": self.scheduled_appointments,
            "confirmedAppointments": self.confirmed_appointments,
            "completedAppointments": self.completed_appointments,
            "cancelledAppointments": self.cancelled_appointments,
            "totalRevenue": self.total_revenue,
            "avgAppointmentsPerDay": self.avg_appointments_per_day,
        }


@dataclass
class BusinessCardAction:
    """Step executed by the registration page after a QR code scan."""

    id: int = 0
    type: str = "download"
    file: str = PREVIEW_FILE
    url: str = ""
    delay: int = 0  # milliseconds
    active: bool = True

    def __post_init__(self):
        """Validate business rules."""
        if self.type not in ACTION_TYPES:
            raise ValueError(f"Unknown action type: {self.type}")
        if self.delay < 0:
            raise ValueError("Delay cannot be negative")

    @classmethod
    def from_dict(cls, data: dict) -> "BusinessCardAction":
        """
        Build an action from its stored form.

        Raises:
            ValueError: If the type is unknown or a number field is malformed
        """
        return cls(
            id=int(data.get("id") or 0),
            type=str(data.get("type") or "download"),
            file=str(data.get("file") or PREVIEW_FILE),
            url=str(data.get("url") or ""),
            delay=int(data.get("delay") or 0),
            active=bool(data.get("active", True)),
        )

    @property
    def is_redirect(self) -> bool:
        return self.type in ("redirect", "website")

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "type": self.type,
            "file": self.file,
            "url": self.url,
            "delay": self.delay,
            "active": self.active,
        }


@dataclass
class BusinessCardConfig:
    """Display options of the business card and its post-scan actions."""

    show_qr: bool = True
    qr_position: str = "bottom-right"
    qr_size: int = QR_SIZE_DEFAULT
    actions: List[BusinessCardAction] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> "BusinessCardConfig":
        """
        Clean a stored or submitted configuration.

        Unknown positions fall back to bottom-right, the QR size is clamped
        to [100, 200] and malformed actions are dropped.
        """
        if not isinstance(data, dict):
            return cls()

        position = data.get("qrPosition")
        if position not in QR_POSITIONS:
            position = "bottom-right"

        try:
            size = int(float(data.get("qrSize") or QR_SIZE_DEFAULT))
        except (TypeError, ValueError):
            size = QR_SIZE_DEFAULT
        size = max(QR_SIZE_MIN, min(QR_SIZE_MAX, size))

        raw_actions = data.get("actions")
        actions = []
        if isinstance(raw_actions, list):
            for raw in raw_actions:
                if not isinstance(raw, dict):
                    continue
                try:
                    actions.append(BusinessCardAction.from_dict(raw))
                except (TypeError, ValueError):
                    continue

        show_qr = data.get("showQR")
        return cls(
            show_qr=True if show_qr is None else bool(show_qr),
            qr_position=position,
            qr_size=size,
            actions=actions,
        )

    def to_dict(self) -> dict:
        return {
            "showQR": self.show_qr,
            "qrPosition": self.qr_position,
            "qrSize": self.qr_size,
            "actions": [action.to_dict() for action in self.actions],
        }
