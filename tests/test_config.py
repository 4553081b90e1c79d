"""Settings loading from the environment and the remote config endpoint."""

from __future__ import annotations

import os

import httpx
import pytest

from standarium_erp import config
from standarium_erp.config import DEFAULT_AI_URL, Settings, load_settings
from standarium_erp.errors import ConfigError

ENV_VARS = (
    "SUPABASE_URL", "SUPABASE_KEY", "STANDARIUM_CONFIG_URL", "STANDARIUM_AI_URL",
    "STANDARIUM_AI_TIMEOUT", "STANDARIUM_DATA_DIR", "STANDARIUM_LABOR_RATE",
    "STANDARIUM_REFRESH_MS", "PORT", "LOG_LEVEL",
)


@pytest.fixture()
def clean_env(monkeypatch, tmp_path):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return str(tmp_path / "missing.env")


class TestLoadSettings:
    def test_defaults(self, clean_env) -> None:
        s = load_settings(clean_env)
        assert s.ai_url == DEFAULT_AI_URL
        assert s.labor_rate == 150.0
        assert s.port == 8070
        assert s.refresh_ms == 1000
        assert not s.use_supabase

    def test_env_overrides(self, clean_env, monkeypatch) -> None:
        monkeypatch.setenv("SUPABASE_URL", "https://abc.supabase.co")
        monkeypatch.setenv("SUPABASE_KEY", "anon-key")
        monkeypatch.setenv("STANDARIUM_LABOR_RATE", "200")
        monkeypatch.setenv("PORT", "9000")
        monkeypatch.setenv("LOG_LEVEL", "debug")
        s = load_settings(clean_env)
        assert s.use_supabase
        assert s.labor_rate == 200.0
        assert s.port == 9000
        assert s.log_level == "DEBUG"

    def test_dotenv_file_is_read(self, clean_env, tmp_path) -> None:
        env_file = tmp_path / ".env"
        env_file.write_text("STANDARIUM_AI_URL=http://localhost:3000\n", encoding="utf-8")
        try:
            assert load_settings(str(env_file)).ai_url == "http://localhost:3000"
        finally:
            os.environ.pop("STANDARIUM_AI_URL", None)

    def test_placeholder_url_is_not_usable(self) -> None:
        assert not Settings(supabase_url="https://YOUR_PROJECT.supabase.co", supabase_key="k").use_supabase

    def test_bad_number_raises(self, clean_env, monkeypatch) -> None:
        monkeypatch.setenv("STANDARIUM_LABOR_RATE", "muito")
        with pytest.raises(ConfigError):
            load_settings(clean_env)

    def test_remote_config_fills_supabase_keys(self, clean_env, monkeypatch) -> None:
        monkeypatch.setenv("STANDARIUM_CONFIG_URL", "https://api.example.com")
        monkeypatch.setattr(config, "fetch_remote_config",
                            lambda url: {"url": "https://xyz.supabase.co", "key": "remote-key"})
        s = load_settings(clean_env)
        assert s.supabase_url == "https://xyz.supabase.co"
        assert s.supabase_key == "remote-key"

    def test_remote_config_failure_falls_back_to_local(self, clean_env, monkeypatch) -> None:
        monkeypatch.setenv("STANDARIUM_CONFIG_URL", "https://api.example.com")

        def unreachable(url):
            raise httpx.ConnectError("down")

        monkeypatch.setattr(config, "fetch_remote_config", unreachable)
        assert not load_settings(clean_env).use_supabase
