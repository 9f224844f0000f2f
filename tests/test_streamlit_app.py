from streamlit.testing.v1 import AppTest


def _two_key_errors():
    import streamlit_app
    from postmate.errors import AIKeyError

    streamlit_app.show_error(AIKeyError("Invalid API key"), key="generate")
    streamlit_app.show_error(AIKeyError("Invalid API key"), key="submit")


class TestShowError:
    """Two alerts with the same title can share a page"""

    def test_action_buttons_keyed_by_caller(self):
        at = AppTest.from_function(_two_key_errors, default_timeout=30)
        at.run()

        assert not at.exception
        assert [b.key for b in at.button] == ["action_generate", "action_submit"]
        assert [b.label for b in at.button] == ["Check AI settings", "Check AI settings"]
        assert len(at.error) == 2
