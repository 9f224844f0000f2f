"""Fan a composed post out into one datastore record per platform."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Protocol

from .app_log import AppLog
from .errors import CharacterLimitError, UnknownPlatformError
from .models import Post, PostRecord, PostStatus, split_record_id
from .platforms import Platform, display_name_for
from .schedule_time import local_to_utc, now_utc, to_storage
from .validation import effective_content, validate_post


class Datastore(Protocol):
    def append_record(self, record: PostRecord) -> None: ...

    def fetch_records(self) -> List[PostRecord]: ...


@dataclass
class SubmissionReport:
    base_id: str
    is_draft: bool
    succeeded: List[str] = field(default_factory=list)
    failed: Dict[str, str] = field(default_factory=dict)
    records: List[PostRecord] = field(default_factory=list)

    @property
    def attempted(self) -> int:
        return len(self.succeeded) + len(self.failed)

    @property
    def ok(self) -> bool:
        return not self.failed

    def summary(self) -> str:
        kind = "draft" if self.is_draft else "post"
        if not self.failed:
            return f"Saved {kind} for {len(self.succeeded)} platform(s)."
        failed = ", ".join(display_name_for(p) for p in self.failed)
        return (
            f"Saved {kind} for {len(self.succeeded)} of {self.attempted} platform(s). "
            f"Failed: {failed}."
        )


def compute_base_id(existing_id: str | None = None, now: datetime | None = None) -> str:
    """Stable id shared by every platform record of one post.

    Edits keep the existing prefix; new posts use the current time in
    milliseconds. Two new posts created in the same millisecond collide.
    """
    if existing_id:
        base = split_record_id(existing_id)
        if base:
            return base
    instant = now or now_utc()
    return str(int(instant.timestamp() * 1000))


def resolve_schedule(post: Post, platform: str) -> datetime | None:
    """UTC instant for a platform, or None to post immediately.

    A per-platform override is used only when enabled with both date and
    time; anything less falls back to the shared schedule.
    """
    override = post.platform_schedules.get(platform)
    if override is not None and override.is_complete():
        return local_to_utc(override.date, override.time)
    if post.is_scheduled and post.schedule_date and post.schedule_time:
        return local_to_utc(post.schedule_date, post.schedule_time)
    return None


def resolve_images(post: Post, platform: str) -> List[str]:
    selection = post.platform_images.get(platform)
    if selection:
        return list(selection)
    return list(post.image_ids)


def build_records(post: Post, is_draft: bool, base_id: str, now: datetime | None = None) -> List[PostRecord]:
    stamp = to_storage(now or now_utc())
    status = PostStatus.DRAFT if is_draft else PostStatus.PENDING
    return [
        PostRecord(
            id=f"{base_id}_{platform}",
            content=effective_content(post.content, post.platform_content, platform),
            platform=platform,
            schedule_time=resolve_schedule(post, platform),
            status=status,
            image_ids=resolve_images(post, platform),
            created_at=stamp,
            updated_at=stamp,
        )
        for platform in post.platforms
    ]


def submit_post(
    post: Post,
    datastore: Datastore,
    is_draft: bool = False,
    now: datetime | None = None,
    log: AppLog | None = None,
) -> SubmissionReport:
    """Submit one record per selected platform.

    Platforms outside the supported set raise UnknownPlatformError, drafts
    included. Confirmed submissions are validated first and raise
    CharacterLimitError before any remote call. Each platform is submitted in
    turn; a failure is recorded and the remaining platforms are still
    attempted. There is no retry and no rollback of platforms that already
    succeeded.
    """
    if log is None:
        log = AppLog(echo=False)

    unknown = [p for p in post.platforms if Platform.parse(p) is None]
    if unknown:
        log.warn("Submission blocked by unsupported platforms", {"platforms": unknown})
        raise UnknownPlatformError(unknown)

    if not is_draft:
        violations = validate_post(post)
        if violations:
            log.warn("Submission blocked by character limits", violations)
            raise CharacterLimitError(violations)

    instant = now or now_utc()
    base_id = compute_base_id(post.id, instant)
    report = SubmissionReport(base_id=base_id, is_draft=is_draft)

    log.info("Starting form submission", {
        "baseId": base_id,
        "isEditing": post.is_editing,
        "platforms": post.platforms,
        "isDraft": is_draft,
    })

    for record in build_records(post, is_draft, base_id, instant):
        report.records.append(record)
        try:
            datastore.append_record(record)
        except Exception as e:
            log.error("Failed to submit post", {"platform": record.platform, "postId": record.id, "error": str(e)})
            report.failed[record.platform] = str(e)
            continue
        log.info("Post submitted successfully", {"platform": record.platform, "postId": record.id})
        report.succeeded.append(record.platform)

    return report
