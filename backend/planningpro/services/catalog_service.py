"""
Service catalogue management (name, duration, price, colour).
"""

import logging
from typing import List, Optional

from planningpro.domain.entities import Service
from planningpro.domain.interfaces import IServiceRepository
from planningpro.schemas.dtos import ServiceRequest

logger = logging.getLogger(__name__)


class CatalogService:
    """Application service for the bookable services offered by the business."""

    def __init__(self, service_repo: IServiceRepository):
        self.service_repo = service_repo

    def list_services(self) -> List[Service]:
        return self.service_repo.get_all()

    def get_service(self, service_id: str) -> Optional[Service]:
        return self.service_repo.get_by_id(service_id)

    def create_service(self, payload: dict) -> Service:
        request = ServiceRequest.from_payload(payload)
        request.validate()
        service = self.service_repo.create(request.to_payload())
        logger.info("Service created", extra={"context": {"service_id": service.id}})
        return service

    def update_service(self, service_id: str, payload: dict) -> Service:
        request = ServiceRequest.from_payload(payload)
        request.validate()
        return self.service_repo.update(service_id, request.to_payload())

    def delete_service(self, service_id: str) -> bool:
        # The backend also removes the appointments booked for this service
        deleted = self.service_repo.delete(service_id)
        logger.info("Service deleted", extra={"context": {"service_id": service_id}})
        return deleted

    def search_services(self, query: str) -> List[Service]:
        if not query.strip():
            return self.service_repo.get_all()
        return self.service_repo.search(query.strip())
