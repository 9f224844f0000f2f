"""Per-user settings storage (Supabase or SQLite).

Supabase is used when `supabase_url` and `supabase_key` are configured. The
table is created via the Supabase SQL editor:

    CREATE TABLE IF NOT EXISTS user_settings (
        id BIGSERIAL PRIMARY KEY,
        username TEXT UNIQUE NOT NULL,
        google_sheet_id TEXT,
        google_sheet_url TEXT,
        ai_service TEXT,
        ai_model TEXT,
        ai_api_token TEXT,
        ai_connection_status BOOLEAN DEFAULT FALSE,
        webhook_url TEXT,
        created_at TIMESTAMPTZ DEFAULT NOW(),
        updated_at TIMESTAMPTZ DEFAULT NOW()
    );

Otherwise settings live in a SQLite database in the workspace.
"""

from __future__ import annotations

import sqlite3
from dataclasses import asdict, dataclass, fields, replace
from datetime import datetime
from pathlib import Path
from typing import Any, Dict

from supabase import Client, create_client

from .config import AppConfig, load_config
from .paths import get_db_path

TABLE = "user_settings"
AI_FIELDS = ("ai_service", "ai_model", "ai_api_token")


@dataclass
class UserSettings:
    google_sheet_id: str = ""
    google_sheet_url: str = ""
    ai_service: str = ""
    ai_model: str = ""
    ai_api_token: str = ""
    ai_connection_status: bool = False
    webhook_url: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "UserSettings":
        known = {f.name for f in fields(cls)}
        values = {k: v for k, v in data.items() if k in known and v is not None}
        if "ai_connection_status" in values:
            values["ai_connection_status"] = bool(values["ai_connection_status"])
        return cls(**values)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def updated(self, **changes: Any) -> "UserSettings":
        """Copy with changes. Changing an AI credential clears the connection flag."""
        result = replace(self, **changes)
        if "ai_connection_status" not in changes and any(
            getattr(result, name) != getattr(self, name) for name in AI_FIELDS
        ):
            result.ai_connection_status = False
        return result

    def ai_ready(self, config: AppConfig) -> bool:
        """Whether AI drafts may be generated with `config`.

        A token the user saved must have passed the connection check; a token
        from the deployment secrets is trusted as is.
        """
        if not config.is_ai_configured():
            return False
        return self.ai_connection_status or not self.ai_api_token

    def apply_to(self, config: AppConfig) -> AppConfig:
        """Overlay non-empty user values on the app configuration."""
        if self.google_sheet_id:
            config.google_sheet_id = self.google_sheet_id
        if self.ai_service:
            config.ai_service = self.ai_service
        if self.ai_model:
            config.ai_model = self.ai_model
        if self.ai_api_token:
            config.ai_api_token = self.ai_api_token
        if self.webhook_url:
            config.webhook_url = self.webhook_url
        return config


# ===== SUPABASE =====

def get_supabase_client(config: AppConfig | None = None) -> Client | None:
    config = config or load_config()
    if not config.is_supabase_configured():
        return None
    return create_client(config.supabase_url, config.supabase_key)


# ===== SQLITE =====

def init_database(db_path: Path | None = None) -> Path:
    db_path = db_path or get_db_path()
    conn = sqlite3.connect(str(db_path))
    try:
        conn.execute(f'''
            CREATE TABLE IF NOT EXISTS {TABLE} (
                username TEXT PRIMARY KEY,
                google_sheet_id TEXT,
                google_sheet_url TEXT,
                ai_service TEXT,
                ai_model TEXT,
                ai_api_token TEXT,
                ai_connection_status INTEGER DEFAULT 0,
                webhook_url TEXT,
                updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        ''')
        conn.commit()
    finally:
        conn.close()
    return db_path


def get_user_settings(username: str, config: AppConfig | None = None, db_path: Path | None = None) -> UserSettings:
    """Settings for a user, or defaults if none are stored."""
    client = get_supabase_client(config)
    if client:
        result = client.table(TABLE).select("*").eq("username", username).limit(1).execute()
        if result.data:
            return UserSettings.from_dict(result.data[0])
        return UserSettings()

    db_path = init_database(db_path)
    conn = sqlite3.connect(str(db_path))
    conn.row_factory = sqlite3.Row
    try:
        row = conn.execute(f"SELECT * FROM {TABLE} WHERE username = ?", (username,)).fetchone()
    finally:
        conn.close()
    return UserSettings.from_dict(dict(row)) if row else UserSettings()


def save_user_settings(
    username: str,
    settings: UserSettings,
    config: AppConfig | None = None,
    db_path: Path | None = None,
) -> bool:
    """Insert or replace a user's settings."""
    data = settings.to_dict()
    client = get_supabase_client(config)
    if client:
        client.table(TABLE).upsert(
            {"username": username, **data, "updated_at": datetime.now().isoformat()},
            on_conflict="username",
        ).execute()
        print(f"✅ Saved settings for {username} to Supabase")
        return True

    db_path = init_database(db_path)
    columns = ["username", *data.keys(), "updated_at"]
    values = [username, *data.values(), datetime.now().isoformat()]
    conn = sqlite3.connect(str(db_path))
    try:
        conn.execute(
            f"INSERT OR REPLACE INTO {TABLE} ({', '.join(columns)}) VALUES ({', '.join('?' for _ in columns)})",
            values,
        )
        conn.commit()
    finally:
        conn.close()
    print(f"✅ Saved settings for {username}")
    return True
