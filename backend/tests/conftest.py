"""
Central pytest configuration for the PlanningPro backend tests.

This file provides common fixtures, test markers, and environment setup
for both unit and integration tests. The booking backend is never
contacted: repositories get a mocked BackendAPIClient and controllers get
mocked services.
"""

import os
import sys
from datetime import datetime
from pathlib import Path
from unittest.mock import Mock

import pytest

# Add backend directory to sys.path for imports to work
backend_root = Path(__file__).parent.parent  # backend/
sys.path.insert(0, str(backend_root))

# Test environment (set early so import-time configuration uses it)
os.environ["TESTING"] = "true"
os.environ["LOG_TO_FILE"] = "0"  # stdout only, no logs/ directory in tests
os.environ["API_BASE_URL"] = "http://backend.test/api"
os.environ["FRONTEND_BASE_URL"] = "http://front.test"
os.environ.setdefault("FLASK_ENV", "development")

# Set up test environment paths BEFORE any other imports
from tests.config.paths import setup_test_environment  # noqa: E402

setup_test_environment()

from tests.config.markers import *  # noqa: E402,F401,F403

from planningpro.domain.entities import (  # noqa: E402
    Appointment,
    Client,
    Service,
)
from planningpro.repositories.api_client import BackendAPIClient  # noqa: E402


# =====================================================
# DOMAIN FIXTURES
# =====================================================


@pytest.fixture
def sample_client():
    return Client(
        id="c1",
        name="Marie Dupont",
        email="marie@example.com",
        phone="0601020304",
    )


@pytest.fixture
def sample_service():
    return Service(id="s1", name="Coupe", duration=30, price=25.0, color="#FF0000")


@pytest.fixture
def make_appointment(sample_client, sample_service):
    """Factory building appointments on a fixed day from "HH:MM" strings."""

    def _make(
        start="09:00",
        end="10:00",
        day=datetime(2024, 1, 15),
        status="scheduled",
        apt_id=None,
        **kwargs,
    ):
        def _at(value):
            if not isinstance(value, str) or ":" not in value:
                return value
            hours, minutes = (int(part) for part in value.split(":"))
            return day.replace(hour=hours, minute=minutes)

        _make.counter += 1
        defaults = {
            "id": apt_id or f"a{_make.counter}",
            "client_id": sample_client.id,
            "service_id": sample_service.id,
            "title": f"RDV {_make.counter}",
            "start": _at(start),
            "end": _at(end),
            "status": status,
            "client": sample_client,
            "service": sample_service,
        }
        defaults.update(kwargs)
        return Appointment(**defaults)

    _make.counter = 0
    return _make


# =====================================================
# BACKEND FIXTURES
# =====================================================


@pytest.fixture
def mock_api():
    """BackendAPIClient double: configure get/post/put/delete per test."""
    api = Mock(spec=BackendAPIClient)
    api.get.return_value = []
    return api


@pytest.fixture
def mock_session():
    """requests.Session double used by BackendAPIClient tests."""
    session = Mock()
    session.headers = {}
    return session


def make_response(status_code=200, json_data=None, content=None):
    """Build a requests.Response-like Mock."""
    response = Mock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 300
    if content is None:
        content = b"" if json_data is None else b"{}"
    response.content = content
    if isinstance(json_data, Exception):
        response.json.side_effect = json_data
    else:
        response.json.return_value = json_data
    return response


@pytest.fixture
def response_factory():
    return make_response


# =====================================================
# FLASK APPLICATION FIXTURES
# =====================================================


@pytest.fixture
def app():
    """Create a Flask application for testing."""
    from planningpro.main import create_app

    app = create_app()
    app.config.update({"TESTING": True, "PROPAGATE_EXCEPTIONS": False})
    return app


@pytest.fixture
def client(app):
    """Flask test client."""
    return app.test_client()
