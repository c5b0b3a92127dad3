"""
Custom exceptions for the application.
Following SOLID principles - centralized error handling.
"""

from typing import Dict, Optional


class PlanningProError(Exception):
    """Base class for every application error."""

    pass


class ConfigurationError(PlanningProError):
    """
    Exception raised when required environment configuration is missing
    or invalid at startup.
    """

    def __init__(self, message: str, missing: Optional[list] = None):
        super().__init__(message)
        self.missing = missing or []


class ValidationError(PlanningProError):
    """
    Exception raised when a client, service or appointment payload fails
    business validation. Carries per-field error messages.
    """

    def __init__(self, errors: Dict[str, str], message: str = "Données invalides"):
        super().__init__(message)
        self.message = message
        self.errors = errors


class BackendAPIError(PlanningProError):
    """
    Exception raised when the booking backend answers with a non-2xx status.
    """

    def __init__(self, message: str, status_code: int):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class BackendUnavailableError(PlanningProError):
    """
    Exception raised when the booking backend cannot be reached
    (connection refused, timeout, invalid JSON).
    """

    pass


class BusinessCardError(PlanningProError):
    """Exception raised for invalid business card operations."""

    pass


class InvalidImageError(BusinessCardError):
    """Exception raised when an uploaded card image cannot be decoded."""

    pass
