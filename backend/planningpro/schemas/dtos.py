"""
Data Transfer Objects (DTOs) and validation schemas.

Following SOLID principles:
- Single Responsibility: Each schema validates one specific data contract
- Open/Closed: Schemas can be extended without modification

Incoming JSON uses the backend's camelCase keys; validate() collects every
field error and raises a single ValidationError.
"""

import re
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional

from planningpro.core.exceptions import ValidationError
from planningpro.domain.entities import (
    APPOINTMENT_STATUSES,
    COLOR_PATTERN,
    DEFAULT_SERVICE_COLOR,
)

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def _text(payload: dict, key: str) -> str:
    value = payload.get(key)
    return str(value).strip() if value is not None else ""


def _optional_text(payload: dict, key: str) -> Optional[str]:
    value = _text(payload, key)
    return value or None


@dataclass
class ClientRequest:
    """DTO for client creation and update requests."""

    name: str
    email: str
    phone: str
    address: Optional[str] = None
    notes: Optional[str] = None

    @classmethod
    def from_payload(cls, payload: dict) -> "ClientRequest":
        return cls(
            name=_text(payload, "name"),
            email=_text(payload, "email"),
            phone=_text(payload, "phone"),
            address=_optional_text(payload, "address"),
            notes=_optional_text(payload, "notes"),
        )

    def _errors(self) -> Dict[str, str]:
        errors = {}
        if not self.name:
            errors["name"] = "Le nom est requis"
        if not self.email:
            errors["email"] = "L'email est requis"
        elif not EMAIL_PATTERN.match(self.email):
            errors["email"] = "Format d'email invalide"
        if not self.phone:
            errors["phone"] = "Le téléphone est requis"
        return errors

    def validate(self) -> None:
        """Validate the request data."""
        errors = self._errors()
        if errors:
            raise ValidationError(errors)

    def to_payload(self) -> dict:
        return {
            "name": self.name,
            "email": self.email,
            "phone": self.phone,
            "address": self.address,
            "notes": self.notes,
        }


@dataclass
class ClientRegistrationRequest(ClientRequest):
    """DTO for the public registration form reached by scanning a business card."""

    company: Optional[str] = None
    postal_code: Optional[str] = None
    city: Optional[str] = None

    @classmethod
    def from_payload(cls, payload: dict) -> "ClientRegistrationRequest":
        return cls(
            name=_text(payload, "name"),
            email=_text(payload, "email"),
            phone=_text(payload, "phone"),
            address=_optional_text(payload, "address"),
            notes=_optional_text(payload, "notes"),
            company=_optional_text(payload, "company"),
            postal_code=_optional_text(payload, "postalCode"),
            city=_optional_text(payload, "city"),
        )

    def to_payload(self) -> dict:
        payload = super().to_payload()
        payload.update(
            {"company": self.company, "postalCode": self.postal_code, "city": self.city}
        )
        return payload


@dataclass
class ServiceRequest:
    """DTO for service catalogue requests."""

    name: str
    duration: Any
    price: Any
    color: str = DEFAULT_SERVICE_COLOR
    description: Optional[str] = None

    @classmethod
    def from_payload(cls, payload: dict) -> "ServiceRequest":
        return cls(
            name=_text(payload, "name"),
            duration=payload.get("duration"),
            price=payload.get("price"),
            color=_text(payload, "color") or DEFAULT_SERVICE_COLOR,
            description=_optional_text(payload, "description"),
        )

    def validate(self) -> None:
        """Validate the request data and normalise numeric fields."""
        errors = {}
        if not self.name:
            errors["name"] = "Le nom du service est requis"

        try:
            self.duration = int(self.duration)
            if self.duration < 1:
                errors["duration"] = "La durée doit être d'au moins 1 minute"
        except (TypeError, ValueError):
            errors["duration"] = "Durée invalide"

        try:
            self.price = round(float(self.price), 2)
            if self.price < 0:
                errors["price"] = "Le prix ne peut pas être négatif"
        except (TypeError, ValueError):
            errors["price"] = "Prix invalide"

        if not COLOR_PATTERN.match(self.color):
            errors["color"] = "Couleur invalide (format #RRGGBB)"

        if errors:
            raise ValidationError(errors)

    def to_payload(self) -> dict:
        return {
            "name": self.name,
            "duration": self.duration,
            "price": self.price,
            "color": self.color,
            "description": self.description,
        }


@dataclass
class AppointmentRequest:
    """DTO for appointment creation and update requests."""

    client_id: str
    service_id: str
    title: str
    start: Optional[datetime]
    end: Optional[datetime]
    status: str = "scheduled"
    notes: Optional[str] = None

    def validate(self) -> None:
        """Validate the request data."""
        errors = {}
        if not self.client_id:
            errors["clientId"] = "Le client est requis"
        if not self.service_id:
            errors["serviceId"] = "Le service est requis"
        if not self.title:
            errors["title"] = "Le titre est requis"
        if not isinstance(self.start, datetime):
            errors["start"] = "Date de début invalide"
        if not isinstance(self.end, datetime):
            errors["end"] = "Date de fin invalide"
        elif isinstance(self.start, datetime) and self.end <= self.start:
            errors["end"] = "La fin doit être postérieure au début"
        if self.status not in APPOINTMENT_STATUSES:
            errors["status"] = "Statut invalide"
        if errors:
            raise ValidationError(errors)

    def to_payload(self) -> dict:
        return {
            "clientId": self.client_id,
            "serviceId": self.service_id,
            "title": self.title,
            "start": self.start.isoformat() if self.start else None,
            "end": self.end.isoformat() if self.end else None,
            "status": self.status,
            "notes": self.notes,
        }
