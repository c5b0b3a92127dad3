"""
Domain package - Pure business logic layer.

This package contains:
- entities.py: Domain entities with business logic
- interfaces.py: Repository contracts
- timeline_layout.py: Calendar stacking and positioning engine
"""

from .entities import (
    Appointment,
    BusinessCardAction,
    BusinessCardConfig,
    Client,
    DashboardStats,
    Service,
)
from .interfaces import (
    IAppointmentRepository,
    IBusinessCardRepository,
    IClientRepository,
    IServiceRepository,
    IStatsRepository,
)
from .timeline_layout import (
    DisplayProfile,
    LayoutDiagnostic,
    LayoutPosition,
    compute_layout_position,
    get_display_profile,
    group_overlapping,
    layout_day,
)

__all__ = [
    # Domain entities
    "Appointment",
    "BusinessCardAction",
    "BusinessCardConfig",
    "Client",
    "DashboardStats",
    "Service",
    # Repository interfaces
    "IAppointmentRepository",
    "IBusinessCardRepository",
    "IClientRepository",
    "IServiceRepository",
    "IStatsRepository",
    # Timeline layout
    "DisplayProfile",
    "LayoutDiagnostic",
    "LayoutPosition",
    "compute_layout_position",
    "get_display_profile",
    "group_overlapping",
    "layout_day",
]
