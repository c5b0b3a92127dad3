# Services package initialization
# This file makes the services directory a Python package
# and allows importing service modules

from . import appointment_service
from . import business_card_service
from . import calendar_service
from . import catalog_service
from . import client_service
from . import dashboard_service

__all__ = [
    "appointment_service",
    "business_card_service",
    "calendar_service",
    "catalog_service",
    "client_service",
    "dashboard_service",
]
