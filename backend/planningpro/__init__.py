"""
PlanningPro - appointment booking service.

Flask application computing calendar layouts, dashboard statistics and
business-card QR codes on top of an external REST booking backend.
"""

__version__ = "1.0.0"
