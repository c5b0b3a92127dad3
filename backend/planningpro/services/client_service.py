"""
Client service following SOLID principles.
"""

import logging
from typing import List, Optional

from planningpro.domain.entities import Client
from planningpro.domain.interfaces import IClientRepository
from planningpro.schemas.dtos import ClientRegistrationRequest, ClientRequest

logger = logging.getLogger(__name__)


class ClientService:
    """Application service for client management use-cases."""

    def __init__(self, client_repo: IClientRepository):
        self.client_repo = client_repo

    def list_clients(self, term: Optional[str] = None) -> List[Client]:
        """All clients, optionally filtered locally by name, email or phone."""
        clients = self.client_repo.get_all()
        if term:
            clients = [c for c in clients if c.matches(term)]
        return clients

    def get_client(self, client_id: str) -> Optional[Client]:
        return self.client_repo.get_by_id(client_id)

    def create_client(self, payload: dict) -> Client:
        request = ClientRequest.from_payload(payload)
        request.validate()
        client = self.client_repo.create(request.to_payload())
        logger.info("Client created", extra={"context": {"client_id": client.id}})
        return client

    def update_client(self, client_id: str, payload: dict) -> Client:
        request = ClientRequest.from_payload(payload)
        request.validate()
        return self.client_repo.update(client_id, request.to_payload())

    def delete_client(self, client_id: str) -> bool:
        deleted = self.client_repo.delete(client_id)
        logger.info("Client deleted", extra={"context": {"client_id": client_id}})
        return deleted

    def search_clients(self, query: str) -> List[Client]:
        if not query.strip():
            return self.client_repo.get_all()
        return self.client_repo.search(query.strip())

    def register_client(self, user_id: str, payload: dict) -> dict:
        """Public registration from a scanned business card."""
        request = ClientRegistrationRequest.from_payload(payload)
        request.validate()
        result = self.client_repo.register_public(user_id, request.to_payload())
        logger.info(
            "Client registered from business card",
            extra={"context": {"user_id": user_id}},
        )
        return result
