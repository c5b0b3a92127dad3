"""
Centralized configuration module for application-wide settings.

Every setting is read from the environment (a .env file is loaded by
create_app() when present) and cached in a module-level constant at import
time, so services and controllers share one consistent view.
"""

import logging
import os
from zoneinfo import ZoneInfo

from planningpro.core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

TRUTHY_VALUES = ("true", "1", "yes")


# ===========================
# Timezone Configuration
# ===========================


def get_app_timezone() -> ZoneInfo:
    """
    Get the application timezone from environment variable.

    Returns:
        ZoneInfo: Application timezone (defaults to UTC if not configured)

    Environment Variables:
        TZ: Timezone identifier (e.g., 'Europe/Paris', 'UTC')
            Default: 'UTC'
    """
    tz_name = os.getenv("TZ", "UTC")

    try:
        return ZoneInfo(tz_name)
    except Exception as e:
        logger.warning(
            f"Invalid timezone '{tz_name}' specified in TZ environment variable. "
            f"Falling back to UTC. Error: {e}"
        )
        return ZoneInfo("UTC")


APP_TZ = get_app_timezone()


# ===========================
# Backend API Configuration
# ===========================

DEFAULT_API_BASE_URL = "http://localhost:5000/api"


def get_api_base_url() -> str:
    """
    Get the base URL of the REST booking backend.

    Environment Variables:
        API_BASE_URL: Backend root, e.g. 'https://api.example.com/api'
            Default: 'http://localhost:5000/api'
            Production: Required (see validate_env)

    A trailing slash is stripped so endpoints can be appended directly.
    """
    return os.getenv("API_BASE_URL", DEFAULT_API_BASE_URL).rstrip("/")


def get_api_timeout() -> float:
    """
    Get the timeout, in seconds, applied to every backend request.

    Environment Variables:
        API_TIMEOUT: Positive number of seconds (default: 10)
    """
    raw = os.getenv("API_TIMEOUT", "10")
    try:
        timeout = float(raw)
    except ValueError:
        logger.warning(f"Invalid API_TIMEOUT '{raw}', using 10 seconds")
        return 10.0
    if timeout <= 0:
        logger.warning(f"Non-positive API_TIMEOUT '{raw}', using 10 seconds")
        return 10.0
    return timeout


API_BASE_URL = get_api_base_url()
API_TIMEOUT = get_api_timeout()


# ===========================
# Application Identity
# ===========================

APP_NAME = os.getenv("APP_NAME", "PlanningPro")
APP_VERSION = os.getenv("APP_VERSION", "1.0.0")


def get_environment() -> str:
    """Return FLASK_ENV ('development' when unset)."""
    return os.getenv("FLASK_ENV", "development")


def is_development() -> bool:
    return get_environment() != "production"


def is_testing() -> bool:
    return os.getenv("TESTING", "").strip().lower() in TRUTHY_VALUES


# ===========================
# Business Card Configuration
# ===========================


def get_frontend_base_url() -> str:
    """
    Get the public origin of the browser UI.

    QR codes printed on business cards point to
    '<FRONTEND_BASE_URL>/register-client/<user id or destination>'.

    Environment Variables:
        FRONTEND_BASE_URL: Default 'http://localhost:5173'
    """
    return os.getenv("FRONTEND_BASE_URL", "http://localhost:5173").rstrip("/")


FRONTEND_BASE_URL = get_frontend_base_url()

# Account used when a registration link carries a destination instead of an id
DEFAULT_USER_ID = os.getenv("DEFAULT_USER_ID", "507f1f77bcf86cd799439011")


# ===========================
# Validation
# ===========================

REQUIRED_ENV_VARS = ("API_BASE_URL",)


def validate_env() -> None:
    """
    Ensure required environment variables are present.

    Raises:
        ConfigurationError: Listing every missing variable
    """
    missing = [key for key in REQUIRED_ENV_VARS if not os.getenv(key)]

    if missing:
        raise ConfigurationError(
            f"Variables d'environnement manquantes: {', '.join(missing)}",
            missing=missing,
        )


def log_app_config():
    """
    Log the active configuration.

    Should be called during application startup to provide visibility
    into the backend target and environment (no secrets are logged).
    """
    logger.info(
        "Application configuration initialized",
        extra={
            "context": {
                "app_name": APP_NAME,
                "app_version": APP_VERSION,
                "environment": get_environment(),
                "api_base_url": API_BASE_URL,
                "api_timeout": API_TIMEOUT,
                "frontend_base_url": FRONTEND_BASE_URL,
                "timezone": str(APP_TZ),
            }
        },
    )
