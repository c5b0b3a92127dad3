"""Business card repository backed by the /business-cards resource."""

import logging
from typing import Optional, Tuple

from planningpro.core.exceptions import BackendAPIError
from planningpro.domain.entities import BusinessCardConfig
from planningpro.domain.interfaces import IBusinessCardRepository
from planningpro.repositories.api_client import BackendAPIClient

logger = logging.getLogger(__name__)


class BusinessCardRepository(IBusinessCardRepository):
    """Load and save the account's business card (image + configuration)."""

    def __init__(self, api: BackendAPIClient) -> None:
        self.api = api

    def get(self) -> Optional[Tuple[Optional[str], BusinessCardConfig]]:
        try:
            record = self.api.get("/business-cards")
        except BackendAPIError as e:
            if e.status_code == 404:
                logger.info("No saved business card found")
                return None
            raise
        if not record:
            return None
        return record.get("cardImage"), BusinessCardConfig.from_dict(
            record.get("cardConfig")
        )

    def save(
        self, card_image: Optional[str], config: BusinessCardConfig
    ) -> Tuple[Optional[str], BusinessCardConfig]:
        response = self.api.post(
            "/business-cards",
            {"cardImage": card_image, "cardConfig": config.to_dict()},
        ) or {}
        saved = response.get("businessCard") or {}
        logger.info(
            "Business card saved",
            extra={"context": {"actions": len(config.actions), "has_image": bool(card_image)}},
        )
        return saved.get("cardImage", card_image), BusinessCardConfig.from_dict(
            saved.get("cardConfig", config.to_dict())
        )
