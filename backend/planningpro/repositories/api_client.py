"""
HTTP gateway to the REST booking backend.

Single Responsibility: send JSON requests, map HTTP failures to
application exceptions and turn ISO date strings into datetimes.
"""

import logging
from datetime import datetime
from typing import Any, Optional

import requests

from planningpro.core.config import API_BASE_URL, API_TIMEOUT, is_development
from planningpro.core.exceptions import BackendAPIError, BackendUnavailableError
from planningpro.utils.date_utils import parse_iso_datetime

logger = logging.getLogger(__name__)

DATE_FIELDS = ("start", "end", "createdAt", "lastVisit", "updatedAt")


def transform_dates(obj: Any) -> Any:
    """
    Recursively convert known date fields from ISO strings to datetimes.

    Unparsable values are left untouched (and logged) so the calendar can
    still degrade gracefully instead of losing the record.
    """
    if obj is None:
        return obj

    if isinstance(obj, list):
        return [transform_dates(item) for item in obj]

    if isinstance(obj, dict):
        transformed = dict(obj)
        for key, value in transformed.items():
            if key in DATE_FIELDS and isinstance(value, str):
                parsed = parse_iso_datetime(value)
                if parsed is None:
                    logger.warning(
                        f"transform_dates: invalid date for {key}",
                        extra={"context": {"field": key, "value": value}},
                    )
                else:
                    transformed[key] = parsed
            elif isinstance(value, (dict, list)):
                transformed[key] = transform_dates(value)
        return transformed

    return obj


def record_id(record: Any) -> Optional[str]:
    """Identifier of a backend record, accepting Mongo-style '_id'."""
    if isinstance(record, dict):
        value = record.get("_id") or record.get("id")
        return str(value) if value is not None else None
    if record is None:
        return None
    return str(record)


class BackendAPIClient:
    """
    Thin JSON client over a requests.Session.

    Every resource repository shares one instance so connections are pooled.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = (base_url or API_BASE_URL).rstrip("/")
        self.timeout = timeout or API_TIMEOUT
        self.session = session or requests.Session()
        self.session.headers.update({"Content-Type": "application/json"})

    def request(
        self,
        method: str,
        endpoint: str,
        payload: Optional[Any] = None,
        params: Optional[dict] = None,
    ) -> Any:
        """
        Send a request and return the decoded JSON body.

        Raises:
            BackendAPIError: On non-2xx responses (backend 'error' message kept)
            BackendUnavailableError: On transport failure or invalid JSON
        """
        url = f"{self.base_url}{endpoint}"

        if is_development():
            logger.debug(f"API Request: {method} {url}")

        started = datetime.now()
        try:
            response = self.session.request(
                method,
                url,
                json=payload,
                params=params,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error(
                f"API Error: {method} {endpoint}",
                extra={"context": {"url": url, "error": str(e)}},
            )
            raise BackendUnavailableError(f"Backend unreachable: {e}") from e

        if not response.ok:
            try:
                error_data = response.json()
            except ValueError:
                error_data = {}
            message = error_data.get("error") if isinstance(error_data, dict) else None
            message = message or f"HTTP error! status: {response.status_code}"
            logger.error(
                f"API Error: {method} {endpoint}",
                extra={
                    "context": {
                        "url": url,
                        "status_code": response.status_code,
                        "error": message,
                    }
                },
            )
            raise BackendAPIError(message, response.status_code)

        if response.status_code == 204 or not response.content:
            return None

        try:
            data = response.json()
        except ValueError as e:
            logger.error(f"API Error: invalid JSON from {method} {endpoint}")
            raise BackendUnavailableError("Invalid JSON returned by backend") from e

        if is_development():
            elapsed_ms = (datetime.now() - started).total_seconds() * 1000
            logger.debug(
                f"API Response: {method} {url} {response.status_code} in {elapsed_ms:.2f}ms"
            )

        return transform_dates(data)

    def get(self, endpoint: str, params: Optional[dict] = None) -> Any:
        return self.request("GET", endpoint, params=params)

    def post(self, endpoint: str, payload: Optional[Any] = None) -> Any:
        return self.request("POST", endpoint, payload=payload)

    def put(self, endpoint: str, payload: Optional[Any] = None) -> Any:
        return self.request("PUT", endpoint, payload=payload)

    def delete(self, endpoint: str) -> Any:
        return self.request("DELETE", endpoint)
