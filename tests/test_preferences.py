import json

import pytest

from postmate.preferences import Preferences


class TestPreferences:
    def test_defaults_when_missing(self, tmp_path):
        prefs = Preferences.load(tmp_path / "preferences.json")
        assert (prefs.font_size, prefs.compact_mode, prefs.onboarding_seen) == ("medium", False, False)

    def test_changes_persist(self, tmp_path):
        path = tmp_path / "preferences.json"
        prefs = Preferences.load(path)
        prefs.set_font_size("large")
        prefs.set_compact_mode(True)
        prefs.mark_onboarding_seen()

        data = json.loads(path.read_text(encoding="utf-8"))
        assert data == {"font_size": "large", "compact_mode": True, "onboarding_seen": True}
        assert Preferences.load(path).font_size == "large"

    def test_invalid_font_size_rejected(self, tmp_path):
        prefs = Preferences.load(tmp_path / "preferences.json")
        with pytest.raises(ValueError):
            prefs.set_font_size("huge")

    def test_invalid_stored_values_fall_back(self, tmp_path):
        path = tmp_path / "preferences.json"
        path.write_text(json.dumps({"font_size": "huge", "compact_mode": "yes"}), encoding="utf-8")
        prefs = Preferences.load(path)
        assert prefs.font_size == "medium"
        assert prefs.compact_mode is False

    def test_corrupt_file(self, tmp_path):
        path = tmp_path / "preferences.json"
        path.write_text("{", encoding="utf-8")
        assert Preferences.load(path).font_size == "medium"
