"""Display-only status overlay for posts the automation never confirmed.

The webhook-driven dispatcher can fail without updating the sheet, leaving a
row `pending` forever. For display, a pending row whose schedule passed more
than the grace period ago is shown as `failed`. The derived status lives
beside the record and is never written back to the datastore.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Dict, Iterable, List

from .config import RECONCILE_GRACE_PERIOD
from .models import PostRecord, PostStatus
from .schedule_time import now_utc, parse_instant


@dataclass(frozen=True)
class DisplayedRecord:
    record: PostRecord
    display_status: PostStatus

    @property
    def stored_status(self) -> PostStatus:
        return self.record.status

    @property
    def is_overridden(self) -> bool:
        return self.display_status is not self.record.status


def display_status(
    record: PostRecord,
    now: datetime | None = None,
    grace: timedelta = RECONCILE_GRACE_PERIOD,
) -> PostStatus:
    if record.status is not PostStatus.PENDING:
        return record.status

    scheduled = record.schedule_time
    if isinstance(scheduled, str):
        scheduled = parse_instant(scheduled)
    if scheduled is None:
        return record.status

    if (now or now_utc()) - scheduled > grace:
        return PostStatus.FAILED
    return record.status


def reconcile(
    records: Iterable[PostRecord],
    now: datetime | None = None,
    grace: timedelta = RECONCILE_GRACE_PERIOD,
) -> List[DisplayedRecord]:
    instant = now or now_utc()
    return [DisplayedRecord(record, display_status(record, instant, grace)) for record in records]


def status_counts(displayed: Iterable[DisplayedRecord]) -> Dict[str, int]:
    counts = Counter(item.display_status.value for item in displayed)
    return {status.value: counts.get(status.value, 0) for status in PostStatus}
