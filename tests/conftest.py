"""
Pytest configuration and shared fixtures for PostMate tests
"""

import pytest
from datetime import datetime, timezone
from typing import List
from unittest.mock import MagicMock

from postmate.app_log import AppLog
from postmate.config import AppConfig
from postmate.models import Post, PostRecord


class FakeDatastore:
    """In-memory datastore recording every append; can fail selected platforms."""

    def __init__(self, failing_platforms=(), records=None):
        self.failing_platforms = set(failing_platforms)
        self.appended: List[PostRecord] = []
        self.calls: List[str] = []
        self.records: List[PostRecord] = list(records or [])

    def append_record(self, record: PostRecord) -> None:
        self.calls.append(record.platform)
        if record.platform in self.failing_platforms:
            raise ConnectionError(f"network failure for {record.platform}")
        self.appended.append(record)
        self.records.append(record)

    def fetch_records(self) -> List[PostRecord]:
        return list(self.records)


@pytest.fixture(autouse=True)
def workspace(tmp_path, monkeypatch):
    """Keep every test's local state in its own temp workspace"""
    monkeypatch.setenv("POSTMATE_WORKSPACE", str(tmp_path / "workspace"))
    return tmp_path / "workspace"


@pytest.fixture
def fixed_now():
    """2025-01-10 00:00 UTC (09:00 JST)"""
    return datetime(2025, 1, 10, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def datastore():
    return FakeDatastore()


@pytest.fixture
def make_datastore():
    """Factory for datastores that fail selected platforms or hold records"""
    return FakeDatastore


@pytest.fixture
def app_log():
    return AppLog(echo=False)


@pytest.fixture
def sample_post():
    """Shared content for X, Instagram and LINE with no overrides"""
    return Post(
        content="New menu launches this Friday!",
        platforms=["x", "instagram", "line"],
    )


@pytest.fixture
def mock_config():
    """Configuration with every remote collaborator set"""
    return AppConfig(
        google_sheet_id="sheet-123",
        google_service_account_info={"type": "service_account"},
        webhook_url="https://hook.example.com/abc",
        ai_service="openai",
        ai_model="gpt-4o-mini",
        ai_api_token="sk-test",
    )


@pytest.fixture
def mock_response():
    """Factory for requests-style responses"""
    def _make(status_code=200, json_data=None, text=""):
        response = MagicMock()
        response.status_code = status_code
        response.ok = 200 <= status_code < 300
        response.reason = "OK" if response.ok else "Error"
        response.json.return_value = json_data if json_data is not None else {}
        response.content = b"{}" if json_data is not None else b""
        response.text = text
        return response
    return _make
