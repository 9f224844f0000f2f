import pytest
import requests
from unittest.mock import MagicMock, patch

from postmate.errors import ConfigurationError, WebhookError
from postmate.webhook import build_webhook_url, resolve_webhook_url, send_webhook, test_webhook as send_test_webhook


class TestWebhookUrl:
    def test_adds_query(self, fixed_now):
        url = build_webhook_url("https://hook.example.com/abc", "test", {"source": "settings_page"}, fixed_now)
        assert url == (
            "https://hook.example.com/abc?trigger=test"
            "&timestamp=2025-01-10T00%3A00%3A00.000Z&source=settings_page"
        )

    def test_existing_query_uses_ampersand(self, fixed_now):
        url = build_webhook_url("https://hook.example.com/abc?team=1", "scheduled_check", {"count": "2"}, fixed_now)
        assert url.startswith("https://hook.example.com/abc?team=1&trigger=scheduled_check&")
        assert url.endswith("&count=2")


class TestSendWebhook:
    def test_posts_empty_json(self, mock_response, app_log):
        with patch("postmate.webhook.requests.post", return_value=mock_response(200)) as post:
            send_webhook("https://hook.example.com/abc", "test", log=app_log)
        assert post.call_args.kwargs["json"] == {}
        assert app_log.entries()[0]["message"] == "Webhook sent successfully"

    def test_non_2xx_raises(self, mock_response):
        with patch("postmate.webhook.requests.post", return_value=mock_response(500, text="nope")):
            with pytest.raises(WebhookError, match="500 nope"):
                send_webhook("https://hook.example.com/abc", "test")

    def test_connection_error_raises(self):
        with patch("postmate.webhook.requests.post", side_effect=requests.ConnectionError("down")):
            with pytest.raises(WebhookError):
                send_webhook("https://hook.example.com/abc", "test")

    def test_missing_url(self):
        with pytest.raises(ConfigurationError, match="Webhook URL not configured"):
            send_webhook("", "test")

    def test_test_trigger(self, mock_response):
        with patch("postmate.webhook.requests.post", return_value=mock_response(200)) as post:
            send_test_webhook("https://hook.example.com/abc")
        url = post.call_args.args[0]
        assert "trigger=test" in url
        assert "source=settings_page" in url


class TestResolveWebhookUrl:
    """A configured URL wins; otherwise the one saved in the sheet is used"""

    def test_configured_url_skips_sheet(self):
        datastore = MagicMock()
        assert resolve_webhook_url("https://hook.example.com/env", datastore) == "https://hook.example.com/env"
        datastore.get_webhook_url.assert_not_called()

    def test_falls_back_to_sheet(self):
        datastore = MagicMock()
        datastore.get_webhook_url.return_value = "https://hook.example.com/sheet"
        assert resolve_webhook_url(None, datastore) == "https://hook.example.com/sheet"

    def test_nothing_configured(self):
        assert resolve_webhook_url("", None) == ""
