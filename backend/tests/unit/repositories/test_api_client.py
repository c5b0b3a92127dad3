"""
Unit tests for the REST backend gateway.

The requests.Session is replaced by a Mock; no network access happens.
"""

from datetime import datetime, timezone

import pytest
import requests

from planningpro.core.exceptions import BackendAPIError, BackendUnavailableError
from planningpro.repositories.api_client import (
    BackendAPIClient,
    record_id,
    transform_dates,
)


@pytest.fixture
def api(mock_session):
    return BackendAPIClient(
        base_url="http://backend.test/api/", timeout=3, session=mock_session
    )


@pytest.mark.unit
class TestBackendAPIClient:
    def test_sets_json_header_and_strips_trailing_slash(self, api, mock_session):
        assert api.base_url == "http://backend.test/api"
        assert mock_session.headers["Content-Type"] == "application/json"

    def test_get_decodes_json_and_dates(self, api, mock_session, response_factory):
        mock_session.request.return_value = response_factory(
            200, [{"_id": "a1", "start": "2024-01-15T09:00:00.000Z"}]
        )

        result = api.get("/appointments", params={"q": "x"})

        mock_session.request.assert_called_once_with(
            "GET",
            "http://backend.test/api/appointments",
            json=None,
            params={"q": "x"},
            timeout=3,
        )
        assert result[0]["start"] == datetime(2024, 1, 15, 9, tzinfo=timezone.utc)

    def test_post_sends_payload(self, api, mock_session, response_factory):
        mock_session.request.return_value = response_factory(201, {"_id": "c1"})

        api.post("/clients", {"name": "Marie"})

        _, kwargs = mock_session.request.call_args
        assert kwargs["json"] == {"name": "Marie"}

    def test_error_body_message_is_kept(self, api, mock_session, response_factory):
        mock_session.request.return_value = response_factory(
            400, {"error": "Email déjà utilisé"}
        )

        with pytest.raises(BackendAPIError) as exc_info:
            api.post("/clients", {})

        assert exc_info.value.status_code == 400
        assert exc_info.value.message == "Email déjà utilisé"

    def test_error_without_json_body(self, api, mock_session, response_factory):
        mock_session.request.return_value = response_factory(
            500, ValueError("no json"), content=b"<html>"
        )

        with pytest.raises(BackendAPIError) as exc_info:
            api.get("/stats")

        assert exc_info.value.message == "HTTP error! status: 500"

    def test_transport_failure_is_unavailable(self, api, mock_session):
        mock_session.request.side_effect = requests.ConnectionError("refused")

        with pytest.raises(BackendUnavailableError):
            api.get("/clients")

    def test_timeout_is_unavailable(self, api, mock_session):
        mock_session.request.side_effect = requests.Timeout("slow")

        with pytest.raises(BackendUnavailableError):
            api.get("/clients")

    def test_empty_body_returns_none(self, api, mock_session, response_factory):
        mock_session.request.return_value = response_factory(204)

        assert api.delete("/clients/c1") is None

    def test_invalid_json_is_unavailable(self, api, mock_session, response_factory):
        mock_session.request.return_value = response_factory(
            200, ValueError("bad json"), content=b"oops"
        )

        with pytest.raises(BackendUnavailableError):
            api.get("/clients")


@pytest.mark.unit
class TestTransformDates:
    def test_nested_structures(self):
        data = {
            "businessCard": {"updatedAt": "2024-01-01T10:00:00"},
            "items": [{"createdAt": "2024-01-02T11:00:00", "name": "start"}],
        }

        result = transform_dates(data)

        assert result["businessCard"]["updatedAt"] == datetime(2024, 1, 1, 10)
        assert result["items"][0]["createdAt"] == datetime(2024, 1, 2, 11)
        assert result["items"][0]["name"] == "start"

    def test_invalid_dates_are_left_untouched(self):
        assert transform_dates({"start": "not-a-date"}) == {"start": "not-a-date"}

    def test_does_not_mutate_input(self):
        original = {"end": "2024-01-01T10:00:00"}

        transform_dates(original)

        assert original["end"] == "2024-01-01T10:00:00"

    def test_scalars_pass_through(self):
        assert transform_dates(None) is None
        assert transform_dates("2024-01-01") == "2024-01-01"


@pytest.mark.unit
class TestRecordId:
    @pytest.mark.parametrize(
        "record,expected",
        [
            ({"_id": "abc"}, "abc"),
            ({"id": 12}, "12"),
            ("plain-id", "plain-id"),
            (None, None),
            ({}, None),
        ],
    )
    def test_record_id(self, record, expected):
        assert record_id(record) == expected
