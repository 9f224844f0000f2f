from datetime import datetime, timezone

from postmate.models import (
    ROW_WIDTH,
    PlatformSchedule,
    Post,
    PostRecord,
    PostStatus,
    group_records,
    split_record_id,
)


class TestPostRecordRows:
    """Sheet rows are the persisted form of a record (columns A:K)"""

    def test_to_row_layout(self):
        record = PostRecord(
            id="1700000000000_x",
            content="hello",
            platform="x",
            schedule_time=datetime(2025, 1, 10, 0, 0, tzinfo=timezone.utc),
            status=PostStatus.PENDING,
            image_ids=["a", "b"],
            created_at="2025-01-01T00:00:00.000Z",
            updated_at="2025-01-01T00:00:00.000Z",
        )
        row = record.to_row()
        assert len(row) == ROW_WIDTH
        assert row[:6] == ["1700000000000_x", "hello", "x", "2025-01-10T00:00:00.000Z", "pending", "a,b"]
        assert row[8] == "FALSE"

    def test_from_short_row(self):
        record = PostRecord.from_row(["1_x", "hi", "x", "", "SENT"])
        assert record.schedule_time is None
        assert record.status is PostStatus.SENT
        assert record.image_ids == []
        assert not record.deleted

    def test_missing_id_uses_fallback(self):
        record = PostRecord.from_row(["", "hi", "x"], fallback_id="sheet-4")
        assert record.id == "sheet-4"

    def test_deleted_flag_and_unknown_status(self):
        record = PostRecord.from_row(["1_x", "hi", "x", "", "weird", "", "", "", "TRUE"])
        assert record.deleted
        assert record.status is PostStatus.PENDING


class TestIdentifiers:
    def test_split_record_id(self):
        assert split_record_id("1700000000000_instagram") == "1700000000000"
        assert split_record_id("1700000000000") == "1700000000000"


class TestGrouping:
    def test_groups_by_base_id_and_skips_deleted(self):
        records = [
            PostRecord("1_x", "a", "x"),
            PostRecord("1_line", "a", "line"),
            PostRecord("2_x", "b", "x", deleted=True),
            PostRecord("3_x", "c", "x"),
        ]
        groups = group_records(records)
        assert [g.base_id for g in groups] == ["1", "3"]
        assert groups[0].platforms == ["x", "line"]

    def test_to_post_restores_per_platform_values(self):
        records = [
            PostRecord("1_x", "short", "x", schedule_time=datetime(2025, 1, 10, 0, 0, tzinfo=timezone.utc)),
            PostRecord("1_line", "long", "line", image_ids=["img"]),
        ]
        post = group_records(records)[0].to_post()
        assert post.id == "1_x"
        assert post.is_editing
        assert post.platforms == ["x", "line"]
        assert post.platform_content == {"x": "short", "line": "long"}
        assert post.platform_schedules == {"x": PlatformSchedule(True, "2025-01-10", "09:00")}


class TestPostSerialization:
    def test_from_dict(self):
        post = Post.from_dict({
            "content": "hi",
            "platforms": ["x"],
            "platform_schedules": {"x": {"enabled": True, "date": "2025-01-10", "time": "09:00"}},
            "status": "pending",
        })
        assert post.platform_schedules["x"].is_complete()
        assert post.status is PostStatus.PENDING
        assert post.to_dict()["status"] == "pending"
