"""
Public registration controller reached by scanning a business card QR code.

The last path segment is either the account id or, when the card carries a
redirect action, the destination of the final redirect (possibly containing
slashes, hence the path converter).
"""

import logging

from flask import Blueprint

from planningpro.core.api_utils import api_response, get_json_payload
from planningpro.repositories.api_client import BackendAPIClient
from planningpro.repositories.business_card_repo import BusinessCardRepository
from planningpro.repositories.client_repo import ClientRepository
from planningpro.services.business_card_service import BusinessCardService
from planningpro.services.client_service import ClientService

logger = logging.getLogger(__name__)

register_bp = Blueprint("register", __name__, url_prefix="/register-client")


def _get_business_card_service() -> BusinessCardService:
    return BusinessCardService(BusinessCardRepository(BackendAPIClient()))


def _get_client_service() -> ClientService:
    return ClientService(ClientRepository(BackendAPIClient()))


@register_bp.route("/<path:segment>", methods=["GET"])
def registration_page(segment: str):
    """Account id, final redirect and the post-scan actions to run."""
    data = _get_business_card_service().registration_page(segment)
    return api_response(True, "Page d'inscription", data)


@register_bp.route("/<path:segment>", methods=["POST"])
def register(segment: str):
    target = BusinessCardService.resolve_registration_target(segment)
    result = _get_client_service().register_client(
        target["userId"], get_json_payload()
    )
    logger.info(
        "Public registration completed",
        extra={
            "context": {
                "user_id": target["userId"],
                "redirect": target["redirectUrl"],
            }
        },
    )
    return api_response(
        True,
        "Inscription réussie",
        {"result": result, "redirectUrl": target["redirectUrl"]},
        201,
    )
