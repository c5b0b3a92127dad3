"""Client repository backed by the booking backend's /clients resource."""

from typing import List, Optional

from planningpro.core.exceptions import BackendAPIError
from planningpro.domain.entities import Client
from planningpro.domain.interfaces import IClientRepository
from planningpro.repositories.api_client import BackendAPIClient, record_id


def to_domain_client(record: dict) -> Client:
    """Map a backend client record to the domain entity."""
    return Client(
        id=record_id(record),
        name=record.get("name") or "",
        email=record.get("email") or "",
        phone=record.get("phone") or "",
        address=record.get("address"),
        notes=record.get("notes"),
        last_visit=record.get("lastVisit"),
        created_at=record.get("createdAt"),
    )


class ClientRepository(IClientRepository):
    """Repository for client operations on the REST backend."""

    def __init__(self, api: BackendAPIClient) -> None:
        self.api = api

    def get_all(self) -> List[Client]:
        records = self.api.get("/clients") or []
        return [to_domain_client(r) for r in records]

    def get_by_id(self, client_id: str) -> Optional[Client]:
        try:
            record = self.api.get(f"/clients/{client_id}")
        except BackendAPIError as e:
            if e.status_code == 404:
                return None
            raise
        return to_domain_client(record) if record else None

    def create(self, payload: dict) -> Client:
        return to_domain_client(self.api.post("/clients", payload))

    def update(self, client_id: str, payload: dict) -> Client:
        return to_domain_client(self.api.put(f"/clients/{client_id}", payload))

    def delete(self, client_id: str) -> bool:
        self.api.delete(f"/clients/{client_id}")
        return True

    def search(self, query: str) -> List[Client]:
        records = self.api.get("/clients/search", params={"q": query}) or []
        return [to_domain_client(r) for r in records]

    def register_public(self, user_id: str, payload: dict) -> dict:
        return self.api.post(f"/clients/register/{user_id}", payload) or {}
