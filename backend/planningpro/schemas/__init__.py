from .dtos import (
    AppointmentRequest,
    ClientRegistrationRequest,
    ClientRequest,
    ServiceRequest,
)

__all__ = [
    "AppointmentRequest",
    "ClientRegistrationRequest",
    "ClientRequest",
    "ServiceRequest",
]
