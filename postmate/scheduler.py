"""One-shot check for scheduled posts whose time has come.

When pending posts are due, the automation webhook is triggered once with the
number of due posts; the automation picks them up from the sheet.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterable, List

from .app_log import AppLog
from .errors import ConfigurationError
from .fanout import Datastore
from .models import PostRecord, PostStatus
from .schedule_time import now_utc
from .webhook import send_webhook


@dataclass
class ScheduledCheckResult:
    due: List[PostRecord] = field(default_factory=list)
    webhook_sent: bool = False

    @property
    def processed_count(self) -> int:
        return len(self.due) if self.webhook_sent else 0


def due_records(records: Iterable[PostRecord], now: datetime | None = None) -> List[PostRecord]:
    instant = now or now_utc()
    return [
        r for r in records
        if r.status is PostStatus.PENDING and r.schedule_time is not None and r.schedule_time <= instant
    ]


def check_scheduled_posts(
    datastore: Datastore,
    webhook_url: str | None,
    now: datetime | None = None,
    log: AppLog | None = None,
) -> ScheduledCheckResult:
    if log is None:
        log = AppLog(echo=False)
    log.info("Checking scheduled posts")

    due = due_records(datastore.fetch_records(), now)
    result = ScheduledCheckResult(due=due)
    if not due:
        log.info("No scheduled posts to process")
        return result

    log.info(f"Found {len(due)} scheduled posts to process", {"postIds": [r.id for r in due]})
    if not webhook_url:
        log.error("Webhook URL not configured for scheduler")
        raise ConfigurationError("Webhook URL not configured")

    send_webhook(webhook_url, "scheduled_check", {"count": str(len(due))}, now=now, log=log)
    result.webhook_sent = True
    log.info("Scheduled posts webhook sent successfully", {"count": len(due)})
    return result
