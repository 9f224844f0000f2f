import json

import pytest

from postmate.app_log import AppLog


class TestAppLog:
    """The Logs page shows the latest 100 entries, newest first"""

    def test_newest_first(self, app_log):
        app_log.info("first")
        app_log.error("second", {"platform": "x"})
        entries = app_log.entries()
        assert [e["message"] for e in entries] == ["second", "first"]
        assert entries[0]["type"] == "ERROR"
        assert json.loads(entries[0]["data"]) == {"platform": "x"}
        assert entries[1]["data"] is None

    def test_capacity(self):
        log = AppLog(capacity=100, echo=False)
        for i in range(150):
            log.debug(f"entry {i}")
        assert len(log) == 100
        assert log.entries()[0]["message"] == "entry 149"
        assert log.entries()[-1]["message"] == "entry 50"

    def test_unknown_level(self, app_log):
        with pytest.raises(ValueError):
            app_log.add("TRACE", "nope")

    def test_timestamp_format(self, app_log):
        entry = app_log.add("info", "hello")
        assert len(entry["timestamp"]) == len("2025/01/10 09:00:00")
        assert entry["type"] == "INFO"

    def test_persist_and_reload(self, tmp_path):
        path = tmp_path / "app_log.json"
        log = AppLog(path, echo=False)
        log.warn("saved")
        log.flush()

        reloaded = AppLog(path, echo=False).load()
        assert reloaded.entries()[0]["message"] == "saved"

    def test_corrupt_file_starts_empty(self, tmp_path):
        path = tmp_path / "app_log.json"
        path.write_text("{not json", encoding="utf-8")
        assert len(AppLog(path, echo=False).load()) == 0

    def test_clear(self, tmp_path):
        path = tmp_path / "app_log.json"
        log = AppLog(path, echo=False)
        log.info("x")
        log.clear()
        assert len(log) == 0
        assert json.loads(path.read_text(encoding="utf-8")) == []
