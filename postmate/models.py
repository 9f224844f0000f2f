from __future__ import annotations

from dataclasses import dataclass, field, asdict
from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional

from .schedule_time import parse_instant, split_local, to_storage

# Column layout of the posts sheet (A:K)
SHEET_HEADERS = [
    "ID",
    "Content",
    "Platform",
    "Schedule (UTC)",
    "Status",
    "Image IDs",
    "Reserved",
    "Reserved",
    "Deleted",
    "Created At",
    "Updated At",
]
ROW_WIDTH = len(SHEET_HEADERS)


class PostStatus(str, Enum):
    DRAFT = "draft"
    PENDING = "pending"
    SENT = "sent"
    FAILED = "failed"

    @classmethod
    def parse(cls, value: str | None) -> "PostStatus":
        try:
            return cls((value or "").strip().lower())
        except ValueError:
            return cls.PENDING


@dataclass
class PlatformSchedule:
    """Per-platform schedule override entered in the composer."""

    enabled: bool = False
    date: str = ""   # YYYY-MM-DD, local time
    time: str = ""   # HH:MM, local time

    def is_complete(self) -> bool:
        return bool(self.enabled and self.date and self.time)

    @classmethod
    def from_dict(cls, data: Dict) -> "PlatformSchedule":
        return cls(
            enabled=bool(data.get("enabled", False)),
            date=data.get("date", "") or "",
            time=data.get("time", "") or "",
        )


@dataclass
class Post:
    """The logical post a user composes once for several platforms.

    platform_content:
        {"x": "short copy...", "instagram": "longer caption..."}
    platform_schedules:
        {"x": PlatformSchedule(enabled=True, date="2025-01-10", time="09:00")}
    """

    content: str = ""
    platforms: List[str] = field(default_factory=list)
    platform_content: Dict[str, str] = field(default_factory=dict)
    image_ids: List[str] = field(default_factory=list)
    platform_images: Dict[str, List[str]] = field(default_factory=dict)
    platform_schedules: Dict[str, PlatformSchedule] = field(default_factory=dict)
    is_scheduled: bool = False
    schedule_date: str = ""
    schedule_time: str = ""
    status: PostStatus = PostStatus.DRAFT
    id: Optional[str] = None  # existing identifier when editing

    @property
    def is_editing(self) -> bool:
        return bool(self.id)

    @classmethod
    def from_dict(cls, data: Dict) -> "Post":
        schedules = {
            platform: value if isinstance(value, PlatformSchedule) else PlatformSchedule.from_dict(value)
            for platform, value in (data.get("platform_schedules") or {}).items()
        }
        return cls(
            content=data.get("content", ""),
            platforms=list(data.get("platforms", [])),
            platform_content=dict(data.get("platform_content") or {}),
            image_ids=list(data.get("image_ids") or []),
            platform_images={k: list(v) for k, v in (data.get("platform_images") or {}).items()},
            platform_schedules=schedules,
            is_scheduled=bool(data.get("is_scheduled", False)),
            schedule_date=data.get("schedule_date", "") or "",
            schedule_time=data.get("schedule_time", "") or "",
            status=PostStatus.parse(data.get("status", "draft")),
            id=data.get("id"),
        )

    def to_dict(self) -> Dict:
        data = asdict(self)
        data["status"] = self.status.value
        return data


def split_record_id(record_id: str) -> str:
    """Base identifier of a record id: the part before the first underscore."""
    return record_id.split("_", 1)[0] if record_id else record_id


@dataclass
class PostRecord:
    """One persisted row: a single platform's copy of a logical post."""

    id: str
    content: str
    platform: str
    schedule_time: Optional[datetime] = None  # aware UTC, None = post immediately
    status: PostStatus = PostStatus.PENDING
    image_ids: List[str] = field(default_factory=list)
    deleted: bool = False
    created_at: str = ""
    updated_at: str = ""

    @property
    def base_id(self) -> str:
        return split_record_id(self.id)

    def to_row(self) -> List[str]:
        return [
            self.id,
            self.content,
            self.platform,
            to_storage(self.schedule_time),
            self.status.value,
            ",".join(self.image_ids),
            "",
            "",
            "TRUE" if self.deleted else "FALSE",
            self.created_at,
            self.updated_at,
        ]

    @classmethod
    def from_row(cls, row: List[str], fallback_id: str = "") -> "PostRecord":
        cells = list(row) + [""] * (ROW_WIDTH - len(row))
        image_ids = [part.strip() for part in (cells[5] or "").split(",") if part.strip()]
        return cls(
            id=cells[0] or fallback_id,
            content=cells[1] or "",
            platform=cells[2] or "",
            schedule_time=parse_instant(cells[3]),
            status=PostStatus.parse(cells[4]),
            image_ids=image_ids,
            deleted=(cells[8] or "").strip().upper() == "TRUE",
            created_at=cells[9] or "",
            updated_at=cells[10] or cells[9] or "",
        )


@dataclass
class PostGroup:
    """Records sharing a base id, shown as one row in the listing."""

    base_id: str
    records: List[PostRecord] = field(default_factory=list)

    @property
    def platforms(self) -> List[str]:
        seen: List[str] = []
        for record in self.records:
            if record.platform and record.platform not in seen:
                seen.append(record.platform)
        return seen

    @property
    def primary(self) -> PostRecord:
        return self.records[0]

    def to_post(self) -> Post:
        """Rebuild the logical post for editing (platform set is fixed)."""
        primary = self.primary
        platform_content: Dict[str, str] = {}
        platform_images: Dict[str, List[str]] = {}
        platform_schedules: Dict[str, PlatformSchedule] = {}
        for record in self.records:
            platform_content[record.platform] = record.content
            platform_images[record.platform] = list(record.image_ids)
            if record.schedule_time is not None:
                date, time = split_local(record.schedule_time)
                platform_schedules[record.platform] = PlatformSchedule(True, date, time)

        return Post(
            content=primary.content,
            platforms=self.platforms,
            platform_content=platform_content,
            image_ids=list(primary.image_ids),
            platform_images=platform_images,
            platform_schedules=platform_schedules,
            status=primary.status,
            id=primary.id,
        )


def group_records(records: List[PostRecord]) -> List[PostGroup]:
    """Group records by base id, skipping soft-deleted rows, first-seen order."""
    groups: Dict[str, PostGroup] = {}
    for record in records:
        if record.deleted:
            continue
        group = groups.setdefault(record.base_id, PostGroup(record.base_id))
        group.records.append(record)
    return list(groups.values())
