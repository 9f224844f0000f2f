from postmate.models import Post
from postmate.validation import effective_content, validate, validate_post


class TestEffectiveContent:
    def test_override_wins(self):
        assert effective_content("shared", {"x": "short"}, "x") == "short"

    def test_empty_override_falls_back_to_shared(self):
        assert effective_content("shared", {"x": ""}, "x") == "shared"
        assert effective_content("shared", {}, "instagram") == "shared"


class TestValidate:
    """Submission is blocked exactly when some platform is over its limit"""

    def test_within_limits(self):
        assert validate("a" * 280, {}, ["x", "instagram"]) == {}

    def test_x_over_limit_only_x_reported(self):
        violations = validate("a" * 281, {}, ["x", "instagram"])
        assert list(violations) == ["x"]
        assert violations["x"] == [
            "X (Twitter) exceeds its 280 character limit (currently 281 characters)."
        ]

    def test_override_is_what_gets_measured(self):
        # Long shared text is fine for X when X has its own short version
        violations = validate("a" * 500, {"x": "short copy"}, ["x", "instagram"])
        assert violations == {}

    def test_override_over_limit(self):
        violations = validate("short", {"line": "b" * 1001}, ["line", "x"])
        assert list(violations) == ["line"]

    def test_unknown_platforms_are_not_limited(self):
        assert validate("a" * 5000, {}, ["myspace"]) == {}

    def test_unselected_platforms_ignored(self):
        assert validate("short", {"x": "a" * 400}, ["instagram"]) == {}

    def test_validate_post(self):
        post = Post(content="a" * 300, platforms=["x", "facebook"])
        assert list(validate_post(post)) == ["x"]
