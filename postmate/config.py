"""Configuration for the datastore, AI provider and webhook credentials.

Values are read from Streamlit secrets first, then environment variables:
- GOOGLE_SHEET_ID: Spreadsheet that stores post records
- GOOGLE_SERVICE_ACCOUNT_FILE: Path to a service account JSON key
  (or a `gcp_service_account` table in Streamlit secrets)
- MAKE_WEBHOOK_URL: Automation webhook that dispatches posts
- AI_SERVICE / AI_MODEL / AI_API_TOKEN: Draft generation provider
  (OPENAI_API_KEY is accepted as the token when AI_SERVICE is openai)
- supabase_url / supabase_key: Optional user settings store
- POSTMATE_WORKSPACE: Custom workspace path (optional)
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Any, Dict

# Fixed display offset for all user-facing dates (Japan Standard Time, no DST)
LOCAL_UTC_OFFSET = timedelta(hours=9)

# Pending posts older than this are shown as failed
RECONCILE_GRACE_PERIOD = timedelta(minutes=5)
RECONCILE_INTERVAL_SECONDS = 60

LOG_CAPACITY = 100

DEFAULT_POSTS_SHEET = "Posts"
DEFAULT_SETTINGS_SHEET = "UserSettings"


def _secret(name: str) -> Any:
    """Look up a Streamlit secret, returning None outside a configured app."""
    try:
        import streamlit as st
        if hasattr(st, "secrets") and name in st.secrets:
            return st.secrets[name]
    except Exception:
        # No secrets.toml or not running under Streamlit
        return None
    return None


def get_setting(name: str, default: str | None = None) -> str | None:
    value = _secret(name)
    if value:
        return str(value)
    return os.getenv(name, default)


@dataclass
class AppConfig:
    """Credentials and locations for the remote collaborators."""

    # Google Sheets datastore
    google_sheet_id: str | None = None
    google_service_account_file: str | None = None
    google_service_account_info: Dict[str, Any] = field(default_factory=dict)
    posts_sheet_name: str = DEFAULT_POSTS_SHEET
    settings_sheet_name: str = DEFAULT_SETTINGS_SHEET

    # Automation webhook
    webhook_url: str | None = None

    # Draft generation
    ai_service: str = "openai"
    ai_model: str = "gpt-4o-mini"
    ai_api_token: str | None = None

    # Optional user settings store
    supabase_url: str | None = None
    supabase_key: str | None = None

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Load configuration from Streamlit secrets and environment variables."""
        ai_service = (get_setting("AI_SERVICE", "openai") or "openai").lower()
        ai_token = get_setting("AI_API_TOKEN")
        if not ai_token and ai_service == "openai":
            ai_token = get_setting("OPENAI_API_KEY")

        account_info = _secret("gcp_service_account")

        return cls(
            google_sheet_id=get_setting("GOOGLE_SHEET_ID"),
            google_service_account_file=get_setting("GOOGLE_SERVICE_ACCOUNT_FILE"),
            google_service_account_info=dict(account_info) if account_info else {},
            posts_sheet_name=get_setting("POSTS_SHEET_NAME", DEFAULT_POSTS_SHEET) or DEFAULT_POSTS_SHEET,
            settings_sheet_name=get_setting("SETTINGS_SHEET_NAME", DEFAULT_SETTINGS_SHEET) or DEFAULT_SETTINGS_SHEET,
            webhook_url=get_setting("MAKE_WEBHOOK_URL"),
            ai_service=ai_service,
            ai_model=get_setting("AI_MODEL", "gpt-4o-mini") or "gpt-4o-mini",
            ai_api_token=ai_token,
            supabase_url=get_setting("supabase_url"),
            supabase_key=get_setting("supabase_key"),
        )

    def is_sheets_configured(self) -> bool:
        """Check if the spreadsheet datastore can be reached."""
        return bool(
            self.google_sheet_id
            and (self.google_service_account_file or self.google_service_account_info)
        )

    def is_ai_configured(self) -> bool:
        return bool(self.ai_service and self.ai_model and self.ai_api_token)

    def is_webhook_configured(self) -> bool:
        return bool(self.webhook_url)

    def is_supabase_configured(self) -> bool:
        return bool(self.supabase_url and self.supabase_key)


def load_config() -> AppConfig:
    return AppConfig.from_env()
