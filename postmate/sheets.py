"""Google Sheets datastore for post records, via the Sheets v4 REST API."""

from __future__ import annotations

from typing import Any, Dict, List
from urllib.parse import quote

import requests

from .config import AppConfig, DEFAULT_POSTS_SHEET, DEFAULT_SETTINGS_SHEET
from .errors import ConfigurationError, DatastoreError
from .models import ROW_WIDTH, SHEET_HEADERS, PostRecord, PostStatus
from .schedule_time import now_utc, to_storage

SCOPES = ["https://www.googleapis.com/auth/spreadsheets"]

WEBHOOK_SETTING_KEY = "make_webhook_url"

_UNSET = object()


def build_session(config: AppConfig) -> requests.Session:
    """Authorized requests session for the configured service account."""
    from google.auth.transport.requests import AuthorizedSession
    from google.oauth2 import service_account

    if config.google_service_account_info:
        credentials = service_account.Credentials.from_service_account_info(
            config.google_service_account_info, scopes=SCOPES
        )
    elif config.google_service_account_file:
        credentials = service_account.Credentials.from_service_account_file(
            config.google_service_account_file, scopes=SCOPES
        )
    else:
        raise ConfigurationError("Google service account not configured")
    return AuthorizedSession(credentials)


class SheetsDatastore:
    """Reads and writes post rows in a single spreadsheet tab."""

    BASE_URL = "https://sheets.googleapis.com/v4/spreadsheets"

    def __init__(
        self,
        sheet_id: str,
        session: requests.Session,
        posts_sheet: str = DEFAULT_POSTS_SHEET,
        settings_sheet: str = DEFAULT_SETTINGS_SHEET,
        timeout: float = 30,
    ):
        if not sheet_id:
            raise ConfigurationError("Google Sheet not configured")
        self.sheet_id = sheet_id
        self.session = session
        self.posts_sheet = posts_sheet
        self.settings_sheet = settings_sheet
        self.timeout = timeout

    @classmethod
    def from_config(cls, config: AppConfig, session: requests.Session | None = None) -> "SheetsDatastore":
        if not config.google_sheet_id:
            raise ConfigurationError("Google Sheet not configured")
        return cls(
            config.google_sheet_id,
            session or build_session(config),
            posts_sheet=config.posts_sheet_name,
            settings_sheet=config.settings_sheet_name,
        )

    # ===== RECORD OPERATIONS =====

    def append_record(self, record: PostRecord) -> None:
        """Append one post row."""
        self._request(
            "post",
            self._values_url(f"{self.posts_sheet}") + ":append",
            params={"valueInputOption": "RAW", "insertDataOption": "INSERT_ROWS"},
            json={"values": [record.to_row()]},
        )
        print(f"✅ Added {record.id} to sheet")

    def fetch_records(self, include_deleted: bool = False) -> List[PostRecord]:
        """All post rows, header skipped.

        When an id appears on several rows (an edited post), the last row wins.
        """
        records: Dict[str, PostRecord] = {}
        for index, row in enumerate(self._read_rows()[1:], start=2):
            if not row or not any(row):
                continue
            record = PostRecord.from_row(row, fallback_id=f"sheet-{index}")
            records.pop(record.id, None)
            records[record.id] = record

        result = [r for r in records.values() if include_deleted or not r.deleted]
        print(f"✅ Loaded {len(result)} post records from sheet")
        return result

    def update_records(
        self,
        base_id: str,
        content: str | None = None,
        status: PostStatus | None = None,
        deleted: bool | None = None,
        schedule_time: Any = _UNSET,
    ) -> int:
        """Rewrite every row of a post (all platforms). Returns rows updated.

        `schedule_time=None` clears the schedule; omit it to leave it unchanged.
        """
        rows = self._read_rows()
        updated = 0
        stamp = to_storage(now_utc())

        for index, row in enumerate(rows[1:], start=2):
            if not row or not row[0] or row[0].split("_", 1)[0] != base_id:
                continue

            new_row = list(row) + [""] * (ROW_WIDTH - len(row))
            if content is not None:
                new_row[1] = content
            if schedule_time is not _UNSET:
                new_row[3] = to_storage(schedule_time)
            if status is not None:
                new_row[4] = PostStatus(status).value
            if deleted is not None:
                new_row[8] = "TRUE" if deleted else "FALSE"
            new_row[10] = stamp

            self._request(
                "put",
                self._values_url(f"{self.posts_sheet}!A{index}:K{index}"),
                params={"valueInputOption": "RAW"},
                json={"values": [new_row]},
            )
            updated += 1

        print(f"✅ Updated {updated} row(s) for post {base_id}")
        return updated

    def delete_post(self, base_id: str) -> int:
        """Soft delete: set the delete flag on every row of the post."""
        return self.update_records(base_id, deleted=True)

    # ===== SHEET SETUP =====

    def sheet_titles(self) -> List[str]:
        data = self._request("get", f"{self.BASE_URL}/{self.sheet_id}", params={"fields": "sheets.properties.title"})
        return [s.get("properties", {}).get("title", "") for s in data.get("sheets", [])]

    def ensure_sheet(self, title: str, headers: List[str] | None = None) -> bool:
        """Create a tab (with an optional header row) if missing. True if created."""
        if title in self.sheet_titles():
            return False

        self._request(
            "post",
            f"{self.BASE_URL}/{self.sheet_id}:batchUpdate",
            json={"requests": [{"addSheet": {"properties": {"title": title}}}]},
        )
        if headers:
            end_column = chr(ord("A") + len(headers) - 1)
            self._request(
                "put",
                self._values_url(f"{title}!A1:{end_column}1"),
                params={"valueInputOption": "RAW"},
                json={"values": [headers]},
            )
        print(f"✅ Created sheet tab: {title}")
        return True

    def ensure_posts_sheet(self) -> bool:
        return self.ensure_sheet(self.posts_sheet, SHEET_HEADERS)

    # ===== WEBHOOK SETTING =====

    def get_webhook_url(self) -> str:
        """Webhook URL stored in the settings tab (F1 key, G1 value)."""
        self.ensure_sheet(self.settings_sheet)
        data = self._request("get", self._values_url(f"{self.settings_sheet}!F1:G1"))
        rows = data.get("values", [])
        if rows and rows[0] and rows[0][0] == WEBHOOK_SETTING_KEY:
            return rows[0][1] if len(rows[0]) > 1 else ""
        return ""

    def save_webhook_url(self, webhook_url: str) -> None:
        self.ensure_sheet(self.settings_sheet)
        self._request(
            "put",
            self._values_url(f"{self.settings_sheet}!F1:G1"),
            params={"valueInputOption": "RAW"},
            json={"values": [[WEBHOOK_SETTING_KEY, webhook_url]]},
        )
        print("✅ Webhook URL saved to sheet")

    # ===== HTTP =====

    def _values_url(self, range_: str) -> str:
        return f"{self.BASE_URL}/{self.sheet_id}/values/{quote(range_, safe='!:')}"

    def _read_rows(self) -> List[List[str]]:
        data = self._request("get", self._values_url(self.posts_sheet), params={"majorDimension": "ROWS"})
        return data.get("values", [])

    def _request(self, method: str, url: str, **kwargs: Any) -> Dict[str, Any]:
        try:
            response = getattr(self.session, method)(url, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            raise DatastoreError(f"Network error talking to Google Sheets: {e}") from e

        if not response.ok:
            try:
                message = response.json().get("error", {}).get("message", "Unknown error")
            except ValueError:
                message = response.text or "Unknown error"
            print(f"❌ Google Sheets API error {response.status_code}: {message}")
            raise DatastoreError(f"Google Sheets request failed ({response.status_code}): {message}")

        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError:
            return {}
