"""
Abstract interfaces for repositories following Interface Segregation Principle.

These interfaces define contracts without implementation details,
enabling dependency injection and easier testing.
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

from .entities import Appointment, BusinessCardConfig, Client, Service


class IClientRepository(ABC):
    """Interface for client operations on the booking backend."""

    @abstractmethod
    def get_all(self) -> List[Client]:
        """Get all clients."""
        pass

    @abstractmethod
    def get_by_id(self, client_id: str) -> Optional[Client]:
        """Get client by ID."""
        pass

    @abstractmethod
    def create(self, payload: dict) -> Client:
        """Create a new client."""
        pass

    @abstractmethod
    def update(self, client_id: str, payload: dict) -> Client:
        """Update an existing client."""
        pass

    @abstractmethod
    def delete(self, client_id: str) -> bool:
        """Delete a client."""
        pass

    @abstractmethod
    def search(self, query: str) -> List[Client]:
        """Search clients on the backend."""
        pass

    @abstractmethod
    def register_public(self, user_id: str, payload: dict) -> dict:
        """Register a client through the public business-card form."""
        pass


class IServiceRepository(ABC):
    """Interface for service catalogue operations."""

    @abstractmethod
    def get_all(self) -> List[Service]:
        pass

    @abstractmethod
    def get_by_id(self, service_id: str) -> Optional[Service]:
        pass

    @abstractmethod
    def create(self, payload: dict) -> Service:
        pass

    @abstractmethod
    def update(self, service_id: str, payload: dict) -> Service:
        pass

    @abstractmethod
    def delete(self, service_id: str) -> bool:
        pass

    @abstractmethod
    def search(self, query: str) -> List[Service]:
        pass


class IAppointmentRepository(ABC):
    """Interface for appointment operations."""

    @abstractmethod
    def get_all(self) -> List[Appointment]:
        pass

    @abstractmethod
    def get_by_id(self, appointment_id: str) -> Optional[Appointment]:
        pass

    @abstractmethod
    def create(self, payload: dict) -> Appointment:
        pass

    @abstractmethod
    def update(self, appointment_id: str, payload: dict) -> Appointment:
        pass

    @abstractmethod
    def delete(self, appointment_id: str) -> bool:
        pass

    @abstractmethod
    def get_by_date(self, day: str) -> List[Appointment]:
        """Get appointments of a day given as YYYY-MM-DD."""
        pass

    @abstractmethod
    def get_by_client(self, client_id: str) -> List[Appointment]:
        pass


class IStatsRepository(ABC):
    """Interface for backend-side statistics."""

    @abstractmethod
    def get_dashboard(self) -> dict:
        pass

    @abstractmethod
    def get_by_period(self, period: str) -> dict:
        pass

    @abstractmethod
    def init_demo_data(self) -> dict:
        pass


class IBusinessCardRepository(ABC):
    """Interface for the saved business card."""

    @abstractmethod
    def get(self) -> Optional[Tuple[Optional[str], BusinessCardConfig]]:
        """Return (card image data URL, config) or None when nothing is saved."""
        pass

    @abstractmethod
    def save(
        self, card_image: Optional[str], config: BusinessCardConfig
    ) -> Tuple[Optional[str], BusinessCardConfig]:
        pass
