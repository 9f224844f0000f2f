from postmate.platforms import (
    Platform,
    display_name_for,
    max_length_for,
    platform_ids,
    validation_table,
)


class TestPlatformTable:
    """Limits drive validation, so each platform must carry the right numbers"""

    def test_limits(self):
        assert max_length_for("x") == 280
        assert max_length_for("instagram") == 2200
        assert max_length_for("facebook") == 63206
        assert max_length_for("line") == 1000
        assert max_length_for("discord") == 2000
        assert max_length_for("wordpress") == 100000

    def test_unknown_platform_is_unconstrained(self):
        assert max_length_for("myspace") is None
        assert display_name_for("myspace") == "myspace"

    def test_parse_is_case_insensitive(self):
        assert Platform.parse("X") is Platform.X
        assert Platform.parse(" Instagram ") is Platform.INSTAGRAM
        assert Platform.parse(Platform.LINE) is Platform.LINE
        assert Platform.parse("") is None

    def test_ids_and_names(self):
        assert platform_ids() == ["x", "instagram", "facebook", "line", "discord", "wordpress"]
        assert display_name_for("x") == "X (Twitter)"
        assert str(Platform.DISCORD) == "discord"

    def test_validation_table_subset(self):
        table = validation_table(["x", "line"])
        assert table == {
            "x": {"maxLength": 280, "name": "X (Twitter)"},
            "line": {"maxLength": 1000, "name": "LINE"},
        }
