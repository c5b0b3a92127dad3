"""
Service catalogue controller - HTTP handlers for bookable services.
"""

from flask import Blueprint, request

from planningpro.core.api_utils import api_response, get_json_payload
from planningpro.repositories.api_client import BackendAPIClient
from planningpro.repositories.service_repo import ServiceRepository
from planningpro.services.catalog_service import CatalogService

services_bp = Blueprint("services", __name__, url_prefix="/api/services")


def _get_catalog_service() -> CatalogService:
    return CatalogService(ServiceRepository(BackendAPIClient()))


@services_bp.route("", methods=["GET"])
def list_services():
    services = _get_catalog_service().list_services()
    return api_response(
        True, "Services récupérés", [service.to_dict() for service in services]
    )


@services_bp.route("/search", methods=["GET"])
def search_services():
    services = _get_catalog_service().search_services(request.args.get("q", ""))
    return api_response(
        True, "Résultats de recherche", [service.to_dict() for service in services]
    )


@services_bp.route("/<service_id>", methods=["GET"])
def get_service(service_id: str):
    service = _get_catalog_service().get_service(service_id)
    if service is None:
        return api_response(False, "Service non trouvé", None, 404)
    data = service.to_dict()
    data["formattedDuration"] = service.format_duration()
    data["hourlyRate"] = service.hourly_rate()
    return api_response(True, "Service trouvé", data)


@services_bp.route("", methods=["POST"])
def create_service():
    service = _get_catalog_service().create_service(get_json_payload())
    return api_response(True, "Service créé avec succès", service.to_dict(), 201)


@services_bp.route("/<service_id>", methods=["PUT"])
def update_service(service_id: str):
    service = _get_catalog_service().update_service(service_id, get_json_payload())
    return api_response(True, "Service mis à jour", service.to_dict())


@services_bp.route("/<service_id>", methods=["DELETE"])
def delete_service(service_id: str):
    _get_catalog_service().delete_service(service_id)
    return api_response(True, "Service supprimé")
