"""Tests for settings and the user .env file."""

from postnl.core.config import PostNLSettings, parse_env_lines, write_user_env_vars
from postnl.core.domain.api_mode import ApiMode


class TestParseEnvLines:
    def test_comments_blanks_and_quotes(self):
        text = '# header\n\nPOSTNL_API_KEY="abc"\nPOSTNL_SANDBOX=false\nnot a pair\n'
        assert parse_env_lines(text) == {"POSTNL_API_KEY": "abc", "POSTNL_SANDBOX": "false"}


class TestWriteUserEnvVars:
    def test_merges_with_existing_values(self, tmp_path):
        env_path = tmp_path / "cfg" / ".env"
        write_user_env_vars({"POSTNL_API_KEY": "old", "POSTNL_CUSTOMER_CODE": "DEVC"}, env_path=env_path)
        write_user_env_vars({"POSTNL_API_KEY": "new", "POSTNL_CUSTOMER_NUMBER": None}, env_path=env_path)

        values = parse_env_lines(env_path.read_text(encoding="utf-8"))
        assert values == {"POSTNL_API_KEY": "new", "POSTNL_CUSTOMER_CODE": "DEVC"}


class TestPostNLSettings:
    def test_defaults(self):
        settings = PostNLSettings(_env_file=None)
        assert settings.sandbox is True
        assert settings.api_mode is ApiMode.REST
        assert settings.cache_enabled() is False

    def test_environment_prefix(self, monkeypatch):
        monkeypatch.setenv("POSTNL_API_KEY", "from-env")
        monkeypatch.setenv("POSTNL_API_MODE", "legacy")
        monkeypatch.setenv("POSTNL_CACHE_TTL_SECONDS", "30")
        settings = PostNLSettings(_env_file=None)
        assert settings.api_key_value() == "from-env"
        assert settings.api_mode is ApiMode.LEGACY
        assert settings.cache_enabled() is True

    def test_env_file(self, tmp_path, monkeypatch):
        monkeypatch.delenv("POSTNL_CUSTOMER_CODE", raising=False)
        env_path = tmp_path / ".env"
        env_path.write_text("POSTNL_CUSTOMER_CODE=ABCD\n", encoding="utf-8")
        assert PostNLSettings(_env_file=env_path).customer_code == "ABCD"
