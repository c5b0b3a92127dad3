# Repositories package initialization
# Each repository maps one backend resource to domain entities

from .api_client import BackendAPIClient, transform_dates
from .appointment_repo import AppointmentRepository
from .business_card_repo import BusinessCardRepository
from .client_repo import ClientRepository
from .service_repo import ServiceRepository
from .stats_repo import StatsRepository

__all__ = [
    "BackendAPIClient",
    "transform_dates",
    "AppointmentRepository",
    "BusinessCardRepository",
    "ClientRepository",
    "ServiceRepository",
    "StatsRepository",
]
