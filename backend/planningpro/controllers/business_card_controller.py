"""
Business card controller - card configuration, post-scan actions and QR images.
"""

import io
import logging

from flask import Blueprint, request, send_file

from planningpro.core.api_utils import api_response, get_json_payload
from planningpro.core.config import DEFAULT_USER_ID
from planningpro.domain.entities import QR_SIZE_DEFAULT, QR_SIZE_MAX, QR_SIZE_MIN
from planningpro.repositories.api_client import BackendAPIClient
from planningpro.repositories.business_card_repo import BusinessCardRepository
from planningpro.services.business_card_service import (
    DOWNLOAD_FILENAME,
    BusinessCardService,
)

logger = logging.getLogger(__name__)

business_card_bp = Blueprint(
    "business_card", __name__, url_prefix="/api/business-card"
)


def _get_business_card_service() -> BusinessCardService:
    return BusinessCardService(BusinessCardRepository(BackendAPIClient()))


def _card_data(card_image, config) -> dict:
    return {"cardImage": card_image, "cardConfig": config.to_dict()}


def _uploaded_image():
    upload = request.files.get("cardImage")
    if upload is None:
        return None
    return upload.read() or None


@business_card_bp.route("", methods=["GET"])
def get_card():
    card_image, config = _get_business_card_service().load()
    return api_response(True, "Carte de visite", _card_data(card_image, config))


@business_card_bp.route("", methods=["POST"])
def save_card():
    """Save the card configuration ({"cardConfig": {...}} or the bare config)."""
    payload = get_json_payload()
    raw_config = payload.get("cardConfig", payload)
    card_image, config = _get_business_card_service().save_config(raw_config)
    return api_response(
        True, "Configuration enregistrée", _card_data(card_image, config)
    )


@business_card_bp.route("/image", methods=["POST"])
def upload_image():
    image_bytes = _uploaded_image()
    if image_bytes is None:
        return api_response(False, "Aucune image fournie", None, 400)
    card_image, config = _get_business_card_service().save_card_image(image_bytes)
    return api_response(True, "Image enregistrée", _card_data(card_image, config))


@business_card_bp.route("/actions", methods=["POST"])
def add_action():
    config = _get_business_card_service().update_actions("add", get_json_payload())
    return api_response(True, "Action ajoutée", config.to_dict(), 201)


@business_card_bp.route("/actions/<int:action_id>", methods=["PUT"])
def update_action(action_id: int):
    config = _get_business_card_service().update_actions(
        "update", action_id, get_json_payload()
    )
    return api_response(True, "Action mise à jour", config.to_dict())


@business_card_bp.route("/actions/<int:action_id>", methods=["DELETE"])
def delete_action(action_id: int):
    config = _get_business_card_service().update_actions("delete", action_id)
    return api_response(True, "Action supprimée", config.to_dict())


@business_card_bp.route("/actions/<int:action_id>/move", methods=["POST"])
def move_action(action_id: int):
    direction = get_json_payload().get("direction", "")
    config = _get_business_card_service().update_actions("move", action_id, direction)
    return api_response(True, "Action déplacée", config.to_dict())


@business_card_bp.route("/actions/<int:action_id>/toggle", methods=["POST"])
def toggle_action(action_id: int):
    config = _get_business_card_service().update_actions("toggle", action_id)
    return api_response(True, "Action modifiée", config.to_dict())


@business_card_bp.route("/qr.png", methods=["GET"])
def qr_code():
    """
    QR code image pointing at the registration page.

    Query Parameters:
        user_id (str): Account the scanned visitors are registered under
        size (int): Side in pixels, clamped to [100, 200]
    """
    try:
        size = int(request.args.get("size", QR_SIZE_DEFAULT))
    except ValueError:
        return api_response(False, "Paramètre size invalide", None, 400)
    size = max(QR_SIZE_MIN, min(QR_SIZE_MAX, size))

    service = _get_business_card_service()
    _, config = service.load()
    target = service.qr_target_url(request.args.get("user_id", DEFAULT_USER_ID), config)
    png = service.render_qr_png(target, size)
    return send_file(io.BytesIO(png), mimetype="image/png")


@business_card_bp.route("/download", methods=["POST"])
def download_card():
    """Card picture (uploaded or saved) with the QR code drawn on it, as PNG."""
    user_id = request.form.get("user_id") or request.args.get(
        "user_id", DEFAULT_USER_ID
    )
    png = _get_business_card_service().download_card(user_id, _uploaded_image())

    logger.info(
        "Business card downloaded",
        extra={"context": {"user_id": user_id, "bytes": len(png)}},
    )
    return send_file(
        io.BytesIO(png),
        mimetype="image/png",
        as_attachment=True,
        download_name=DOWNLOAD_FILENAME,
    )
