from unittest.mock import MagicMock, patch
from datetime import datetime, timedelta, timezone

from postmate import main as cli
from postmate.config import AppConfig
from postmate.errors import DatastoreError
from postmate.models import PostRecord, PostStatus


class TestValidateCommand:
    def test_within_limits(self, capsys):
        assert cli.main(["validate", "--platforms", "x", "line", "--content", "hello"]) == 0
        out = capsys.readouterr().out
        assert "✓ X (Twitter): 5/280" in out

    def test_over_limit(self, capsys):
        assert cli.main(["validate", "--platforms", "x", "--content", "a" * 281]) == 1
        assert "exceeds its 280 character limit" in capsys.readouterr().out

    def test_override(self, capsys):
        code = cli.main(["validate", "--platforms", "x", "--content", "a" * 281, "--override", "x=short"])
        assert code == 0


class TestListPosts:
    def test_shows_reconciled_status(self, capsys):
        late = datetime.now(timezone.utc) - timedelta(minutes=10)
        datastore = MagicMock()
        datastore.fetch_records.return_value = [
            PostRecord("1_x", "hi", "x", schedule_time=late, status=PostStatus.PENDING),
        ]
        with patch.object(cli, "load_config", return_value=AppConfig()), \
                patch.object(cli, "_datastore", return_value=datastore):
            assert cli.main(["list-posts"]) == 0

        out = capsys.readouterr().out
        assert "failed (stored: pending)" in out
        datastore.update_records.assert_not_called()

    def test_datastore_error_is_friendly(self, capsys):
        with patch.object(cli, "load_config", return_value=AppConfig()), \
                patch.object(cli, "_datastore", side_effect=DatastoreError("Google Sheet not configured")):
            assert cli.main(["list-posts"]) == 1
        assert "Google Sheet not set up" in capsys.readouterr().out


class TestCheckConfig:
    def test_reports_missing(self, capsys):
        with patch.object(cli, "load_config", return_value=AppConfig()):
            assert cli.main(["check-config"]) == 0
        out = capsys.readouterr().out
        assert "Google Sheet:  ✗ Not configured" in out
        assert "AI_API_TOKEN" in out


class TestCheckScheduled:
    def test_uses_sheet_webhook_when_env_missing(self, capsys):
        datastore = MagicMock()
        datastore.get_webhook_url.return_value = "https://hook.example.com/x"
        result = MagicMock(due=[1, 2], processed_count=2)
        with patch.object(cli, "load_config", return_value=AppConfig()), \
                patch.object(cli, "_datastore", return_value=datastore), \
                patch.object(cli, "check_scheduled_posts", return_value=result) as check:
            assert cli.main(["check-scheduled"]) == 0

        assert check.call_args.args[1] == "https://hook.example.com/x"
        assert "2 due post(s)" in capsys.readouterr().out


class TestTestWebhookCommand:
    def test_falls_back_to_sheet_webhook(self, capsys):
        config = AppConfig(google_sheet_id="sheet-123", google_service_account_info={"type": "service_account"})
        datastore = MagicMock()
        datastore.get_webhook_url.return_value = "https://hook.example.com/sheet"
        with patch.object(cli, "load_config", return_value=config), \
                patch.object(cli, "_datastore", return_value=datastore), \
                patch.object(cli, "test_webhook") as send:
            assert cli.main(["test-webhook"]) == 0

        assert send.call_args.args[0] == "https://hook.example.com/sheet"
        assert "Test webhook sent" in capsys.readouterr().out
