"""
Logging setup for PlanningPro.

Records carry their structured payload in ``extra={"context": {...}}``.
Production writes one JSON object per line; development gets a coloured
console line. When ``LOG_TO_FILE`` is enabled, JSON is also written to
rotating files under ``backend/logs/``.

    from planningpro.core.logging_config import get_logger

    logger = get_logger(__name__)
    logger.info("Appointment created", extra={"context": {"appointment_id": "a1"}})
"""

import json
import logging
import logging.handlers
import os
import sys
import time
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional, Union

from flask import Flask, g, request

LOG_DIR = Path(__file__).resolve().parents[2] / "logs"
MAX_LOG_BYTES = 10 * 1024 * 1024
LOG_BACKUPS = 5
CONSOLE_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
QUIET_LOGGERS = ("werkzeug", "urllib3", "PIL")


class JSONFormatter(logging.Formatter):
    """One JSON object per record, with the ``context`` extra when present."""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        context = getattr(record, "context", None)
        if context is not None:
            payload["context"] = context
        return json.dumps(payload, ensure_ascii=False, default=str)


class ConsoleFormatter(logging.Formatter):
    """Coloured level names for terminals."""

    COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        # other handlers see the same record, so colour a copy
        colored = logging.makeLogRecord(record.__dict__)
        color = self.COLORS.get(record.levelname, self.RESET)
        colored.levelname = f"{color}{record.levelname:8}{self.RESET}"
        return super().format(colored)


def _resolve_level(log_level: Union[int, str]) -> int:
    if isinstance(log_level, int):
        return log_level
    return getattr(logging, str(log_level).upper(), logging.INFO)


def _log_to_file_enabled() -> bool:
    return os.getenv("LOG_TO_FILE", "1").strip().lower() in ("1", "true", "yes")


def _rotating_handler(
    filename: str, level: int, formatter: logging.Formatter
) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(
        LOG_DIR / filename,
        maxBytes=MAX_LOG_BYTES,
        backupCount=LOG_BACKUPS,
        encoding="utf-8",
    )
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def _add_file_handlers(root: logging.Logger, level: int) -> bool:
    """Attach app.log and planningpro_errors.log; False when the disk refuses."""
    try:
        LOG_DIR.mkdir(exist_ok=True)
        root.addHandler(_rotating_handler("app.log", level, JSONFormatter()))
        root.addHandler(
            _rotating_handler("planningpro_errors.log", logging.ERROR, JSONFormatter())
        )
    except OSError as e:
        root.warning(
            "File logging disabled, console only",
            extra={"context": {"log_dir": str(LOG_DIR), "error": str(e)}},
        )
        return False
    return True


def _register_request_hooks(app: Flask) -> None:
    """Log every request and its response time under flask.request/flask.response."""

    @app.before_request
    def log_request():
        g.request_started = time.perf_counter()
        g.request_id = uuid.uuid4().hex[:12]
        logging.getLogger("flask.request").info(
            f"{request.method} {request.path}",
            extra={
                "context": {
                    "request_id": g.request_id,
                    "method": request.method,
                    "path": request.path,
                    "query": request.query_string.decode("utf-8", "replace"),
                    "remote_addr": request.remote_addr,
                }
            },
        )

    @app.after_request
    def log_response(response):
        started = g.get("request_started")
        if started is None:
            return response
        duration_ms = (time.perf_counter() - started) * 1000
        logging.getLogger("flask.response").info(
            f"{request.method} {request.path} {response.status_code} "
            f"in {duration_ms:.2f}ms",
            extra={
                "context": {
                    "request_id": g.get("request_id"),
                    "status_code": response.status_code,
                    "duration_ms": round(duration_ms, 2),
                }
            },
        )
        return response


def setup_logging(
    app: Optional[Flask] = None,
    log_level: Union[int, str] = "INFO",
    log_to_file: Optional[bool] = None,
    use_json_format: bool = False,
) -> None:
    """
    Replace the root handlers with PlanningPro's.

    Args:
        app: Flask application; when given, requests and responses are logged
        log_level: ``logging`` constant or level name
        log_to_file: Also write rotating JSON files (default: ``LOG_TO_FILE``)
        use_json_format: JSON on the console instead of coloured text
    """
    level = _resolve_level(log_level)
    if log_to_file is None:
        log_to_file = _log_to_file_enabled()

    root = logging.getLogger()
    root.setLevel(level)
    for handler in root.handlers[:]:
        handler.close()
        root.removeHandler(handler)

    console = logging.StreamHandler(sys.stdout)
    console.setLevel(level)
    console.setFormatter(
        JSONFormatter()
        if use_json_format
        else ConsoleFormatter(CONSOLE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
    )
    root.addHandler(console)

    if log_to_file:
        log_to_file = _add_file_handlers(root, level)

    if app is not None:
        _register_request_hooks(app)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    app_logger = logging.getLogger("planningpro")
    app_logger.setLevel(level)
    app_logger.debug(
        "Logging ready",
        extra={
            "context": {
                "level": logging.getLevelName(level),
                "log_to_file": log_to_file,
                "json": use_json_format,
            }
        },
    )


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def log_performance(func_name: str, duration_ms: float, **kwargs) -> None:
    """Log how long an operation took, with any extra context given as kwargs."""
    context = {"function": func_name, "duration_ms": round(duration_ms, 2)}
    context.update(kwargs)
    get_logger("planningpro.performance").info(
        f"{func_name} completed in {duration_ms:.2f}ms",
        extra={"context": context},
    )
