"""
Client controller for handling HTTP requests following SOLID principles.

This controller:
- Handles HTTP concerns only (Single Responsibility)
- Depends on service abstractions (Dependency Inversion)

Validation and backend errors raised by the service are turned into JSON
responses by the application's error handlers.
"""

import logging

from flask import Blueprint, request

from planningpro.core.api_utils import api_response, get_json_payload
from planningpro.repositories.api_client import BackendAPIClient
from planningpro.repositories.client_repo import ClientRepository
from planningpro.services.client_service import ClientService

logger = logging.getLogger(__name__)

clients_bp = Blueprint("clients", __name__, url_prefix="/api/clients")


def _get_client_service() -> ClientService:
    """Dependency injection factory for ClientService."""
    return ClientService(ClientRepository(BackendAPIClient()))


@clients_bp.route("", methods=["GET"])
def list_clients():
    """List clients, optionally filtered with ?q= on name, email or phone."""
    clients = _get_client_service().list_clients(request.args.get("q"))
    return api_response(
        True, "Clients récupérés", [client.to_dict() for client in clients]
    )


@clients_bp.route("/search", methods=["GET"])
def search_clients():
    clients = _get_client_service().search_clients(request.args.get("q", ""))
    return api_response(
        True, "Résultats de recherche", [client.to_dict() for client in clients]
    )


@clients_bp.route("/<client_id>", methods=["GET"])
def get_client(client_id: str):
    client = _get_client_service().get_client(client_id)
    if client is None:
        return api_response(False, "Client non trouvé", None, 404)
    return api_response(True, "Client trouvé", client.to_dict())


@clients_bp.route("", methods=["POST"])
def create_client():
    client = _get_client_service().create_client(get_json_payload())
    return api_response(True, "Client créé avec succès", client.to_dict(), 201)


@clients_bp.route("/<client_id>", methods=["PUT"])
def update_client(client_id: str):
    client = _get_client_service().update_client(client_id, get_json_payload())
    return api_response(True, "Client mis à jour", client.to_dict())


@clients_bp.route("/<client_id>", methods=["DELETE"])
def delete_client(client_id: str):
    _get_client_service().delete_client(client_id)
    return api_response(True, "Client supprimé")
