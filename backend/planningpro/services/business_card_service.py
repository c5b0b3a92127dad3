"""
Digital business card: configuration, post-scan actions and QR composition.

The QR code printed on the card opens the public registration page. When an
active redirect action is configured, the destination travels in the URL so
the registration page can forward the visitor after sign-up.
"""

import base64
import binascii
import io
import logging
import re
from typing import Any, Dict, List, Optional, Tuple

import qrcode
from PIL import Image, ImageDraw, UnidentifiedImageError

from planningpro.core.config import DEFAULT_USER_ID, FRONTEND_BASE_URL
from planningpro.core.exceptions import BusinessCardError, InvalidImageError
from planningpro.domain.entities import (
    PREVIEW_FILE,
    BusinessCardAction,
    BusinessCardConfig,
)
from planningpro.domain.interfaces import IBusinessCardRepository

logger = logging.getLogger(__name__)

QR_MARGIN = 20
QR_BACKING_PADDING = 5
DEFAULT_CARD_SIZE = (1050, 600)
DOWNLOAD_FILENAME = "carte-de-visite-qr.png"
USER_ID_PATTERN = re.compile(r"^[0-9a-fA-F]{24}$")
SCHEME_PATTERN = re.compile(r"^https?://")

DEFAULT_SCAN_ACTION = BusinessCardAction(
    id=1, type="download", file=PREVIEW_FILE, url="", delay=1000, active=True
)


def qr_origin(card_size: Tuple[int, int], qr_size: int, position: str) -> Tuple[int, int]:
    """Top-left corner of the QR code for a corner position, 20px from the edges."""
    width, height = card_size
    right = width - qr_size - QR_MARGIN
    bottom = height - qr_size - QR_MARGIN

    if position == "bottom-left":
        return QR_MARGIN, bottom
    if position == "top-right":
        return right, QR_MARGIN
    if position == "top-left":
        return QR_MARGIN, QR_MARGIN
    return right, bottom


def image_bytes_from_data_url(value: Any) -> Optional[bytes]:
    """
    Decode a 'data:image/...;base64,' URL.

    Returns None for anything that is not a data URL (e.g. a static path).
    """
    if not isinstance(value, str) or not value.startswith("data:"):
        return None
    _, _, encoded = value.partition(",")
    try:
        return base64.b64decode(encoded, validate=True)
    except (binascii.Error, ValueError) as e:
        raise InvalidImageError("Image de carte illisible") from e


class BusinessCardService:
    """Application service for the business card feature."""

    def __init__(
        self,
        card_repo: IBusinessCardRepository,
        frontend_base_url: Optional[str] = None,
    ):
        self.card_repo = card_repo
        self.frontend_base_url = (frontend_base_url or FRONTEND_BASE_URL).rstrip("/")

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def load(self) -> Tuple[Optional[str], BusinessCardConfig]:
        saved = self.card_repo.get()
        if saved is None:
            return None, BusinessCardConfig()
        return saved

    def save_config(self, raw_config: Any) -> Tuple[Optional[str], BusinessCardConfig]:
        card_image, _ = self.load()
        return self.card_repo.save(card_image, self.sanitize_config(raw_config))

    def save_card_image(self, image_bytes: bytes) -> Tuple[Optional[str], BusinessCardConfig]:
        """Validate an uploaded picture and store it as a data URL."""
        image = self._open_image(image_bytes)
        mime = Image.MIME.get(image.format or "", "image/png")
        data_url = f"data:{mime};base64,{base64.b64encode(image_bytes).decode()}"
        _, config = self.load()
        return self.card_repo.save(data_url, config)

    def update_actions(self, operation: str, *args) -> BusinessCardConfig:
        """Apply an action operation to the saved card and persist the result."""
        operations = {
            "add": self.add_action,
            "update": self.update_action,
            "delete": self.delete_action,
            "move": self.move_action,
            "toggle": self.toggle_action,
        }
        if operation not in operations:
            raise BusinessCardError(f"Opération inconnue: {operation}")

        card_image, config = self.load()
        updated = operations[operation](config, *args)
        _, saved = self.card_repo.save(card_image, updated)
        return saved

    # ------------------------------------------------------------------
    # Configuration and actions
    # ------------------------------------------------------------------

    @staticmethod
    def sanitize_config(raw_config: Any) -> BusinessCardConfig:
        return BusinessCardConfig.from_dict(raw_config)

    @staticmethod
    def _index_of(config: BusinessCardConfig, action_id: int) -> int:
        for index, action in enumerate(config.actions):
            if action.id == action_id:
                return index
        raise BusinessCardError(f"Action introuvable: {action_id}")

    @staticmethod
    def _build_action(data: dict, action_id: int) -> BusinessCardAction:
        try:
            return BusinessCardAction.from_dict({**data, "id": action_id})
        except (TypeError, ValueError) as e:
            raise BusinessCardError(f"Action invalide: {e}") from e

    def add_action(self, config: BusinessCardConfig, data: dict) -> BusinessCardConfig:
        next_id = max((action.id for action in config.actions), default=0) + 1
        action = self._build_action(data, next_id)
        return BusinessCardConfig(
            show_qr=config.show_qr,
            qr_position=config.qr_position,
            qr_size=config.qr_size,
            actions=config.actions + [action],
        )

    def update_action(
        self, config: BusinessCardConfig, action_id: int, data: dict
    ) -> BusinessCardConfig:
        index = self._index_of(config, action_id)
        actions = list(config.actions)
        actions[index] = self._build_action(data, action_id)
        return BusinessCardConfig(
            config.show_qr, config.qr_position, config.qr_size, actions
        )

    def delete_action(self, config: BusinessCardConfig, action_id: int) -> BusinessCardConfig:
        self._index_of(config, action_id)
        actions = [action for action in config.actions if action.id != action_id]
        return BusinessCardConfig(
            config.show_qr, config.qr_position, config.qr_size, actions
        )

    def move_action(
        self, config: BusinessCardConfig, action_id: int, direction: str
    ) -> BusinessCardConfig:
        if direction not in ("up", "down"):
            raise BusinessCardError(f"Direction invalide: {direction}")
        index = self._index_of(config, action_id)
        actions = list(config.actions)
        target = index - 1 if direction == "up" else index + 1
        if 0 <= target < len(actions):
            actions[index], actions[target] = actions[target], actions[index]
        return BusinessCardConfig(
            config.show_qr, config.qr_position, config.qr_size, actions
        )

    def toggle_action(self, config: BusinessCardConfig, action_id: int) -> BusinessCardConfig:
        index = self._index_of(config, action_id)
        actions = list(config.actions)
        current = actions[index]
        actions[index] = BusinessCardAction(
            id=current.id,
            type=current.type,
            file=current.file,
            url=current.url,
            delay=current.delay,
            active=not current.active,
        )
        return BusinessCardConfig(
            config.show_qr, config.qr_position, config.qr_size, actions
        )

    # ------------------------------------------------------------------
    # QR code
    # ------------------------------------------------------------------

    def qr_target_url(self, user_id: Optional[str], config: BusinessCardConfig) -> str:
        """
        URL encoded in the QR code.

        Raises:
            BusinessCardError: If no user id is given
        """
        if not user_id:
            raise BusinessCardError("userId manquant pour générer le QR code")

        redirect = next(
            (a for a in config.actions if a.active and a.is_redirect and a.url),
            None,
        )
        if redirect is not None:
            destination = SCHEME_PATTERN.sub("", redirect.url)
            return f"{self.frontend_base_url}/register-client/{destination}"
        return f"{self.frontend_base_url}/register-client/{user_id}"

    @staticmethod
    def _qr_image(data: str, size: int) -> Image.Image:
        qr = qrcode.QRCode(
            version=None,
            error_correction=qrcode.constants.ERROR_CORRECT_M,
            box_size=10,
            border=1,
        )
        qr.add_data(data)
        qr.make(fit=True)

        buffer = io.BytesIO()
        qr.make_image(fill_color="black", back_color="white").save(buffer, format="PNG")
        buffer.seek(0)
        return Image.open(buffer).convert("RGB").resize((size, size), Image.NEAREST)

    def render_qr_png(self, data: str, size: int) -> bytes:
        buffer = io.BytesIO()
        self._qr_image(data, size).save(buffer, format="PNG")
        return buffer.getvalue()

    @staticmethod
    def _open_image(image_bytes: bytes) -> Image.Image:
        try:
            image = Image.open(io.BytesIO(image_bytes))
            image.load()
        except (UnidentifiedImageError, OSError) as e:
            raise InvalidImageError("Format d'image non supporté") from e
        return image

    def compose_card(
        self,
        image_bytes: Optional[bytes],
        qr_data: str,
        config: BusinessCardConfig,
    ) -> bytes:
        """
        Draw the QR code onto the card picture and return PNG bytes.

        A white square backs the code; without a picture a blank card is used.
        """
        if image_bytes:
            card = self._open_image(image_bytes).convert("RGB")
        else:
            card = Image.new("RGB", DEFAULT_CARD_SIZE, "white")

        if config.show_qr and qr_data:
            size = config.qr_size
            x, y = qr_origin(card.size, size, config.qr_position)
            ImageDraw.Draw(card).rectangle(
                [
                    x - QR_BACKING_PADDING,
                    y - QR_BACKING_PADDING,
                    x + size + QR_BACKING_PADDING - 1,
                    y + size + QR_BACKING_PADDING - 1,
                ],
                fill="white",
            )
            card.paste(self._qr_image(qr_data, size), (x, y))

        buffer = io.BytesIO()
        card.save(buffer, format="PNG")
        logger.info(
            "Business card composed",
            extra={
                "context": {
                    "width": card.size[0],
                    "height": card.size[1],
                    "qr": config.show_qr,
                    "position": config.qr_position,
                }
            },
        )
        return buffer.getvalue()

    def download_card(self, user_id: str, uploaded: Optional[bytes] = None) -> bytes:
        """Card with its QR code, from an uploaded picture or the saved one."""
        card_image, config = self.load()
        image_bytes = uploaded or image_bytes_from_data_url(card_image)
        return self.compose_card(image_bytes, self.qr_target_url(user_id, config), config)

    # ------------------------------------------------------------------
    # Registration page (after scan)
    # ------------------------------------------------------------------

    @staticmethod
    def scan_plan(config: Optional[BusinessCardConfig]) -> List[Dict[str, Any]]:
        """Active actions in execution order (by id) with their delays."""
        actions = config.actions if config is not None else [DEFAULT_SCAN_ACTION]
        steps = []
        for action in sorted((a for a in actions if a.active), key=lambda a: a.id):
            step = action.to_dict()
            step["step"] = "redirect" if action.is_redirect else action.type
            steps.append(step)
        return steps

    def registration_page(self, segment: str) -> Dict[str, Any]:
        """Everything the public registration page needs for a scanned link."""
        target = self.resolve_registration_target(segment)
        saved = self.card_repo.get()
        config = saved[1] if saved is not None else None
        target["actions"] = self.scan_plan(config)
        return target

    @staticmethod
    def resolve_registration_target(segment: str) -> Dict[str, Optional[str]]:
        """
        Interpret the last path segment of a registration link.

        A 24-hex segment is an account id; anything else is the destination
        of the final redirect, registered under the default account.
        """
        segment = segment.strip().strip("/")
        if USER_ID_PATTERN.match(segment):
            return {"userId": segment, "redirectUrl": None}
        return {"userId": DEFAULT_USER_ID, "redirectUrl": f"https://{segment}"}
