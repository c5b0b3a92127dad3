"""
Unit tests for the business card and public registration endpoints.
"""

import io
from unittest.mock import Mock, patch

import pytest

from planningpro.core.config import DEFAULT_USER_ID
from planningpro.core.exceptions import BusinessCardError, InvalidImageError
from planningpro.domain.entities import BusinessCardAction, BusinessCardConfig
from planningpro.services.business_card_service import DOWNLOAD_FILENAME

USER_ID = "65a1b2c3d4e5f6a7b8c9d0e1"
PNG = b"\x89PNG\r\n\x1a\nfake"


@pytest.fixture
def card_service():
    service = Mock()
    service.load.return_value = (None, BusinessCardConfig())
    with patch(
        "planningpro.controllers.business_card_controller._get_business_card_service",
        return_value=service,
    ):
        yield service


@pytest.mark.unit
@pytest.mark.controllers
@pytest.mark.business_card
class TestCardConfiguration:
    def test_get_card(self, client, card_service, response_helper):
        data = response_helper.assert_success(client.get("/api/business-card"))

        assert data["cardImage"] is None
        assert data["cardConfig"]["qrPosition"] == "bottom-right"

    def test_save_wrapped_config(self, client, card_service, response_helper):
        card_service.save_config.return_value = (None, BusinessCardConfig(qr_size=120))

        data = response_helper.assert_success(
            client.post("/api/business-card", json={"cardConfig": {"qrSize": 120}})
        )

        card_service.save_config.assert_called_once_with({"qrSize": 120})
        assert data["cardConfig"]["qrSize"] == 120

    def test_save_bare_config(self, client, card_service):
        card_service.save_config.return_value = (None, BusinessCardConfig())

        client.post("/api/business-card", json={"showQR": False})

        card_service.save_config.assert_called_once_with({"showQR": False})

    def test_upload_image(self, client, card_service, response_helper):
        card_service.save_card_image.return_value = (
            "data:image/png;base64,AAAA",
            BusinessCardConfig(),
        )

        data = response_helper.assert_success(
            client.post(
                "/api/business-card/image",
                data={"cardImage": (io.BytesIO(PNG), "card.png")},
                content_type="multipart/form-data",
            )
        )

        card_service.save_card_image.assert_called_once_with(PNG)
        assert data["cardImage"].startswith("data:image/png")

    def test_upload_without_file(self, client, card_service, response_helper):
        response_helper.assert_failure(client.post("/api/business-card/image"), 400)

        card_service.save_card_image.assert_not_called()

    def test_upload_invalid_image_is_400(self, client, card_service, response_helper):
        card_service.save_card_image.side_effect = InvalidImageError("Image illisible")

        body = response_helper.assert_failure(
            client.post(
                "/api/business-card/image",
                data={"cardImage": (io.BytesIO(b"junk"), "card.png")},
                content_type="multipart/form-data",
            ),
            400,
        )

        assert body["message"] == "Image illisible"


@pytest.mark.unit
@pytest.mark.controllers
@pytest.mark.business_card
class TestCardActions:
    def test_add(self, client, card_service, response_helper):
        card_service.update_actions.return_value = BusinessCardConfig(
            actions=[BusinessCardAction(id=1, type="form")]
        )

        data = response_helper.assert_success(
            client.post("/api/business-card/actions", json={"type": "form"}), 201
        )

        card_service.update_actions.assert_called_once_with("add", {"type": "form"})
        assert data["actions"][0]["type"] == "form"

    def test_update(self, client, card_service):
        card_service.update_actions.return_value = BusinessCardConfig()

        client.put("/api/business-card/actions/3", json={"delay": 200})

        card_service.update_actions.assert_called_once_with(
            "update", 3, {"delay": 200}
        )

    def test_move(self, client, card_service):
        card_service.update_actions.return_value = BusinessCardConfig()

        client.post("/api/business-card/actions/2/move", json={"direction": "up"})

        card_service.update_actions.assert_called_once_with("move", 2, "up")

    def test_toggle_and_delete(self, client, card_service):
        card_service.update_actions.return_value = BusinessCardConfig()

        client.post("/api/business-card/actions/2/toggle")
        client.delete("/api/business-card/actions/2")

        assert [c.args for c in card_service.update_actions.call_args_list] == [
            ("toggle", 2),
            ("delete", 2),
        ]

    def test_unknown_action_is_400(self, client, card_service, response_helper):
        card_service.update_actions.side_effect = BusinessCardError("Action inconnue")

        response_helper.assert_failure(client.delete("/api/business-card/actions/9"), 400)


@pytest.mark.unit
@pytest.mark.controllers
@pytest.mark.business_card
class TestCardImages:
    def test_qr_png(self, client, card_service):
        card_service.qr_target_url.return_value = "http://front.test/register-client/x"
        card_service.render_qr_png.return_value = PNG

        response = client.get(f"/api/business-card/qr.png?user_id={USER_ID}&size=500")

        assert response.status_code == 200
        assert response.mimetype == "image/png"
        assert response.data == PNG
        assert card_service.qr_target_url.call_args[0][0] == USER_ID
        # clamped to the largest allowed size
        card_service.render_qr_png.assert_called_once_with(
            "http://front.test/register-client/x", 200
        )

    def test_qr_png_bad_size(self, client, card_service, response_helper):
        response_helper.assert_failure(
            client.get("/api/business-card/qr.png?size=big"), 400
        )

    def test_download_is_attachment(self, client, card_service):
        card_service.download_card.return_value = PNG

        response = client.post(
            "/api/business-card/download",
            data={"user_id": USER_ID, "cardImage": (io.BytesIO(PNG), "card.png")},
            content_type="multipart/form-data",
        )

        assert response.status_code == 200
        assert DOWNLOAD_FILENAME in response.headers["Content-Disposition"]
        assert "attachment" in response.headers["Content-Disposition"]
        card_service.download_card.assert_called_once_with(USER_ID, PNG)

    def test_download_defaults(self, client, card_service):
        card_service.download_card.return_value = PNG

        client.post("/api/business-card/download")

        card_service.download_card.assert_called_once_with(DEFAULT_USER_ID, None)


@pytest.mark.unit
@pytest.mark.controllers
@pytest.mark.business_card
class TestRegistration:
    def test_registration_page(self, client, response_helper):
        service = Mock()
        service.registration_page.return_value = {"userId": USER_ID, "actions": []}

        with patch(
            "planningpro.controllers.register_controller._get_business_card_service",
            return_value=service,
        ):
            data = response_helper.assert_success(
                client.get(f"/register-client/{USER_ID}")
            )

        assert data["userId"] == USER_ID

    def test_register_with_redirect_destination(self, client, response_helper):
        clients = Mock()
        clients.register_client.return_value = {"id": "c9"}

        with patch(
            "planningpro.controllers.register_controller._get_client_service",
            return_value=clients,
        ):
            data = response_helper.assert_success(
                client.post(
                    "/register-client/example.com/page",
                    json={"name": "Léa", "email": "lea@example.com"},
                ),
                201,
            )

        clients.register_client.assert_called_once_with(
            DEFAULT_USER_ID, {"name": "Léa", "email": "lea@example.com"}
        )
        assert data == {"result": {"id": "c9"}, "redirectUrl": "https://example.com/page"}
