"""
Settings Tests
"""

from qaforum.core.config import Settings, get_settings


class TestSettings:

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("API_PREFIX", raising=False)
        settings = Settings(_env_file=None)

        assert settings.api_prefix == "/v2"
        assert settings.app_name == "Q&A Forum"
        assert settings.forum_max_author_length == 100

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("API_PREFIX", "/api/forum")
        monkeypatch.setenv("forum_max_message_length", "42")

        settings = Settings(_env_file=None)

        assert settings.api_prefix == "/api/forum"
        assert settings.forum_max_message_length == 42

    def test_prefix_is_normalized(self):
        assert Settings(_env_file=None, api_prefix="v3/").api_prefix == "/v3"
        assert Settings(_env_file=None, api_prefix="/").api_prefix == ""

    def test_settings_are_cached(self):
        assert get_settings() is get_settings()
