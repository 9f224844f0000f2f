"""Automation webhook trigger (query-parameter style, empty JSON body)."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict
from urllib.parse import urlencode

import requests

from .app_log import AppLog
from .errors import ConfigurationError, WebhookError
from .schedule_time import now_utc, to_storage


def build_webhook_url(url: str, trigger: str, params: Dict[str, str] | None = None, now: datetime | None = None) -> str:
    query = {"trigger": trigger, "timestamp": to_storage(now or now_utc())}
    query.update(params or {})
    separator = "&" if "?" in url else "?"
    return f"{url}{separator}{urlencode(query)}"


def resolve_webhook_url(configured: str | None, datastore: Any = None) -> str:
    """The configured URL, else the one stored in the sheet's settings tab."""
    if configured:
        return configured
    if datastore is None:
        return ""
    return datastore.get_webhook_url() or ""


def send_webhook(
    url: str,
    trigger: str,
    params: Dict[str, str] | None = None,
    now: datetime | None = None,
    log: AppLog | None = None,
) -> None:
    """POST a trigger to the webhook. Raises WebhookError on failure."""
    if log is None:
        log = AppLog(echo=False)
    if not url:
        raise ConfigurationError("Webhook URL not configured")

    full_url = build_webhook_url(url, trigger, params, now)
    log.info("Sending webhook", {"trigger": trigger, "url": full_url[:80]})

    try:
        response = requests.post(full_url, json={}, timeout=30)
    except requests.RequestException as e:
        log.error("Error sending webhook", {"trigger": trigger, "error": str(e)})
        raise WebhookError(f"Webhook connection error: {e}") from e

    if not response.ok:
        log.error("Webhook request failed", {
            "status": response.status_code,
            "statusText": response.reason,
            "error": response.text,
        })
        raise WebhookError(f"Webhook request failed: {response.status_code} {response.text}")

    log.info("Webhook sent successfully", {"trigger": trigger})


def test_webhook(url: str, log: AppLog | None = None) -> None:
    send_webhook(url, "test", {"source": "settings_page"}, log=log)
