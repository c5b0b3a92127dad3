import logging
import os

from dotenv import load_dotenv

# Get logger for this module
logger = logging.getLogger(__name__)

# Load environment variables before the config module reads them
load_dotenv()

from flask import Flask  # noqa: E402

from planningpro.core.api_utils import api_response  # noqa: E402
from planningpro.core.exceptions import (  # noqa: E402
    BackendAPIError,
    BackendUnavailableError,
    BusinessCardError,
    ValidationError,
)


def _register_error_handlers(app: Flask) -> None:
    """Map application exceptions raised by the services to JSON responses."""

    @app.errorhandler(ValidationError)
    def handle_validation_error(error: ValidationError):
        logger.info(
            "Validation failed",
            extra={"context": {"errors": error.errors}},
        )
        return api_response(False, error.message, {"errors": error.errors}, 400)

    @app.errorhandler(BackendAPIError)
    def handle_backend_error(error: BackendAPIError):
        status = 404 if error.status_code == 404 else 502
        logger.warning(
            "Backend API error",
            extra={
                "context": {
                    "backend_status": error.status_code,
                    "error": error.message,
                }
            },
        )
        return api_response(False, error.message, None, status)

    @app.errorhandler(BackendUnavailableError)
    def handle_backend_unavailable(error: BackendUnavailableError):
        logger.error(
            "Backend unavailable",
            extra={"context": {"error": str(error)}},
        )
        return api_response(
            False, "Service de réservation indisponible", {"error": str(error)}, 503
        )

    @app.errorhandler(BusinessCardError)
    def handle_business_card_error(error: BusinessCardError):
        return api_response(False, str(error), None, 400)


def create_app():
    # Determine environment
    env = os.getenv("FLASK_ENV", "development")
    is_production = env == "production"

    app = Flask(__name__)

    # Set TESTING config from environment variable (before any other configuration)
    testing_env = os.getenv("TESTING", "").lower().strip()
    if testing_env in ("true", "1", "yes"):
        app.config["TESTING"] = True

    # Configure structured logging (after app creation so we can register hooks)
    from planningpro.core.logging_config import setup_logging

    setup_logging(
        app=app,  # Pass app to register request/response hooks
        log_level=logging.INFO if is_production else logging.DEBUG,
        # log_to_file controlled by LOG_TO_FILE env var (1=files, 0=stdout only)
        use_json_format=is_production,  # JSON logs in production, colored in dev
    )

    logger.info(
        "Logging configured",
        extra={"context": {"environment": env, "json_format": is_production}},
    )

    from planningpro.core.config import log_app_config, validate_env

    # Fail fast on missing configuration in production only
    if is_production:
        validate_env()
    log_app_config()

    _register_error_handlers(app)

    from planningpro.controllers.appointment_controller import appointments_bp
    from planningpro.controllers.business_card_controller import business_card_bp
    from planningpro.controllers.calendar_controller import calendar_bp
    from planningpro.controllers.client_controller import clients_bp
    from planningpro.controllers.dashboard_controller import dashboard_bp
    from planningpro.controllers.health_controller import health_bp
    from planningpro.controllers.register_controller import register_bp
    from planningpro.controllers.service_controller import services_bp

    app.register_blueprint(calendar_bp)
    app.register_blueprint(clients_bp)
    app.register_blueprint(services_bp)
    app.register_blueprint(appointments_bp)
    app.register_blueprint(dashboard_bp)
    app.register_blueprint(business_card_bp)
    app.register_blueprint(register_bp)
    app.register_blueprint(health_bp)

    logger.info(
        "Blueprints registered",
        extra={"context": {"count": len(app.blueprints)}},
    )
    return app
