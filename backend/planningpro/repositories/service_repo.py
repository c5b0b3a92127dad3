"""Service catalogue repository backed by the /services resource."""

from typing import List, Optional

from planningpro.core.exceptions import BackendAPIError
from planningpro.domain.entities import DEFAULT_SERVICE_COLOR, Service
from planningpro.domain.interfaces import IServiceRepository
from planningpro.repositories.api_client import BackendAPIClient, record_id


def to_domain_service(record: dict) -> Service:
    """Map a backend service record to the domain entity."""
    return Service(
        id=record_id(record),
        name=record.get("name") or "",
        duration=int(record.get("duration") or 0),
        price=float(record.get("price") or 0),
        color=record.get("color") or DEFAULT_SERVICE_COLOR,
        description=record.get("description"),
    )


class ServiceRepository(IServiceRepository):
    """Repository for service catalogue operations on the REST backend."""

    def __init__(self, api: BackendAPIClient) -> None:
        self.api = api

    def get_all(self) -> List[Service]:
        records = self.api.get("/services") or []
        return [to_domain_service(r) for r in records]

    def get_by_id(self, service_id: str) -> Optional[Service]:
        try:
            record = self.api.get(f"/services/{service_id}")
        except BackendAPIError as e:
            if e.status_code == 404:
                return None
            raise
        return to_domain_service(record) if record else None

    def create(self, payload: dict) -> Service:
        return to_domain_service(self.api.post("/services", payload))

    def update(self, service_id: str, payload: dict) -> Service:
        return to_domain_service(self.api.put(f"/services/{service_id}", payload))

    def delete(self, service_id: str) -> bool:
        self.api.delete(f"/services/{service_id}")
        return True

    def search(self, query: str) -> List[Service]:
        records = self.api.get("/services/search", params={"q": query}) or []
        return [to_domain_service(r) for r in records]
