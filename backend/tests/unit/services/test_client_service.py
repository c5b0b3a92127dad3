"""
Unit tests for ClientService and CatalogService with mocked repositories.
"""

from unittest.mock import Mock

import pytest

from planningpro.core.exceptions import ValidationError
from planningpro.domain.entities import Client, Service
from planningpro.domain.interfaces import IClientRepository, IServiceRepository
from planningpro.services.catalog_service import CatalogService
from planningpro.services.client_service import ClientService


@pytest.fixture
def mock_client_repo() -> Mock:
    return Mock(spec=IClientRepository)


@pytest.fixture
def mock_service_repo() -> Mock:
    return Mock(spec=IServiceRepository)


@pytest.mark.unit
@pytest.mark.services
class TestClientService:
    def test_list_clients_filters_locally(self, mock_client_repo):
        mock_client_repo.get_all.return_value = [
            Client(id="1", name="Marie", email="m@x.fr", phone="01"),
            Client(id="2", name="Luc", email="l@x.fr", phone="02"),
        ]

        result = ClientService(mock_client_repo).list_clients("luc")

        assert [c.id for c in result] == ["2"]

    def test_create_validates_before_calling_backend(self, mock_client_repo):
        with pytest.raises(ValidationError):
            ClientService(mock_client_repo).create_client({"name": "Marie"})

        mock_client_repo.create.assert_not_called()

    def test_create_sends_clean_payload(self, mock_client_repo):
        mock_client_repo.create.return_value = Client(id="c1", name="Marie")

        client = ClientService(mock_client_repo).create_client(
            {"name": " Marie ", "email": "m@x.fr", "phone": "01", "extra": "ignored"}
        )

        assert client.id == "c1"
        payload = mock_client_repo.create.call_args[0][0]
        assert payload["name"] == "Marie"
        assert "extra" not in payload

    def test_search_with_blank_query_lists_everything(self, mock_client_repo):
        mock_client_repo.get_all.return_value = []

        ClientService(mock_client_repo).search_clients("   ")

        mock_client_repo.get_all.assert_called_once()
        mock_client_repo.search.assert_not_called()

    def test_register_client(self, mock_client_repo):
        mock_client_repo.register_public.return_value = {"message": "ok"}

        result = ClientService(mock_client_repo).register_client(
            "u1",
            {"name": "Marie", "email": "m@x.fr", "phone": "01", "city": "Lyon"},
        )

        assert result == {"message": "ok"}
        user_id, payload = mock_client_repo.register_public.call_args[0]
        assert user_id == "u1"
        assert payload["city"] == "Lyon"

    def test_update_and_delete(self, mock_client_repo):
        service = ClientService(mock_client_repo)
        mock_client_repo.delete.return_value = True

        service.update_client("c1", {"name": "M", "email": "m@x.fr", "phone": "01"})

        assert service.delete_client("c1") is True
        mock_client_repo.update.assert_called_once()


@pytest.mark.unit
@pytest.mark.services
class TestCatalogService:
    def test_create_normalises_payload(self, mock_service_repo):
        mock_service_repo.create.return_value = Service(id="s1", name="Coupe")

        CatalogService(mock_service_repo).create_service(
            {"name": "Coupe", "duration": "30", "price": "25"}
        )

        payload = mock_service_repo.create.call_args[0][0]
        assert payload["duration"] == 30
        assert payload["price"] == 25.0
        assert payload["color"] == "#3B82F6"

    def test_invalid_service_is_rejected(self, mock_service_repo):
        with pytest.raises(ValidationError) as exc_info:
            CatalogService(mock_service_repo).update_service(
                "s1", {"name": "Coupe", "duration": -5, "price": 10}
            )

        assert "duration" in exc_info.value.errors
        mock_service_repo.update.assert_not_called()

    def test_search_trims_query(self, mock_service_repo):
        mock_service_repo.search.return_value = []

        CatalogService(mock_service_repo).search_services("  coupe ")

        mock_service_repo.search.assert_called_once_with("coupe")
