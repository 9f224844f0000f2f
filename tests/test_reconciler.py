from datetime import timedelta

from postmate.models import PostRecord, PostStatus
from postmate.reconciler import display_status, reconcile, status_counts


def make_record(status, scheduled, record_id="1700000000000_x"):
    return PostRecord(id=record_id, content="hi", platform="x", schedule_time=scheduled, status=status)


class TestDisplayStatus:
    """Pending posts the automation never confirmed are shown as failed after 5 minutes"""

    def test_four_minutes_late_stays_pending(self, fixed_now):
        record = make_record(PostStatus.PENDING, fixed_now - timedelta(minutes=4))
        assert display_status(record, fixed_now) is PostStatus.PENDING

    def test_six_minutes_late_shows_failed(self, fixed_now):
        record = make_record(PostStatus.PENDING, fixed_now - timedelta(minutes=6))
        assert display_status(record, fixed_now) is PostStatus.FAILED

    def test_exactly_at_grace_stays_pending(self, fixed_now):
        record = make_record(PostStatus.PENDING, fixed_now - timedelta(minutes=5))
        assert display_status(record, fixed_now) is PostStatus.PENDING

    def test_immediate_posts_never_overridden(self, fixed_now):
        assert display_status(make_record(PostStatus.PENDING, None), fixed_now) is PostStatus.PENDING

    def test_other_statuses_untouched(self, fixed_now):
        long_ago = fixed_now - timedelta(days=3)
        for status in (PostStatus.SENT, PostStatus.DRAFT, PostStatus.FAILED):
            assert display_status(make_record(status, long_ago), fixed_now) is status

    def test_future_schedule_stays_pending(self, fixed_now):
        record = make_record(PostStatus.PENDING, fixed_now + timedelta(hours=1))
        assert display_status(record, fixed_now) is PostStatus.PENDING

    def test_string_schedule_is_parsed(self, fixed_now):
        record = make_record(PostStatus.PENDING, "2025-01-09T23:00:00.000Z")
        assert display_status(record, fixed_now) is PostStatus.FAILED


class TestReconcile:
    def test_stored_status_is_never_mutated(self, fixed_now, make_datastore):
        record = make_record(PostStatus.PENDING, fixed_now - timedelta(minutes=6))
        datastore = make_datastore(records=[record])

        displayed = reconcile(datastore.fetch_records(), fixed_now)

        assert displayed[0].display_status is PostStatus.FAILED
        assert displayed[0].stored_status is PostStatus.PENDING
        assert displayed[0].is_overridden
        assert record.status is PostStatus.PENDING
        assert datastore.calls == []

    def test_status_counts_include_every_status(self, fixed_now):
        records = [
            make_record(PostStatus.PENDING, fixed_now - timedelta(minutes=10), "1_x"),
            make_record(PostStatus.PENDING, fixed_now + timedelta(minutes=10), "2_x"),
            make_record(PostStatus.SENT, fixed_now - timedelta(minutes=10), "3_x"),
        ]
        counts = status_counts(reconcile(records, fixed_now))
        assert counts == {"draft": 0, "pending": 1, "sent": 1, "failed": 1}
