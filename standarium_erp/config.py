"""Settings from .env / environment, plus logging setup."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

import httpx
from dotenv import load_dotenv

from standarium_erp.errors import ConfigError

logger = logging.getLogger("standarium.config")

# BASE_DIR points to the project root (parent of standarium_erp/)
BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

DEFAULT_AI_URL = "https://standarium-erp-api.onrender.com"
CONFIG_ENDPOINT = "/api/supabase-config"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@dataclass(frozen=True)
class Settings:
    supabase_url: str = ""
    supabase_key: str = ""
    ai_url: str = DEFAULT_AI_URL
    ai_timeout: float = 60.0
    data_dir: str = os.path.join(BASE_DIR, "data")
    labor_rate: float = 150.0
    refresh_ms: int = 1000
    port: int = 8070
    log_level: str = "INFO"

    @property
    def use_supabase(self) -> bool:
        return _usable(self.supabase_url, self.supabase_key)


def _usable(url, key):
    return bool(url and key and "YOUR_PROJECT" not in url)


def _env_float(name, default):
    raw = os.environ.get(name, "")
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        raise ConfigError(f"{name} must be a number, got {raw!r}")


def fetch_remote_config(config_url: str, timeout: float = 10.0) -> dict:
    """GET the Supabase url/key pair published by the hosted backend."""
    url = config_url.rstrip("/") + CONFIG_ENDPOINT
    resp = httpx.get(url, timeout=timeout)
    resp.raise_for_status()
    data = resp.json()
    if not isinstance(data, dict):
        raise ConfigError(f"Unexpected config payload from {url}")
    return data


def load_settings(env_file: str | None = None) -> Settings:
    """Load settings. Local .env wins; the config endpoint fills missing Supabase keys."""
    load_dotenv(env_file or os.path.join(BASE_DIR, ".env"))

    supabase_url = os.environ.get("SUPABASE_URL", "")
    supabase_key = os.environ.get("SUPABASE_KEY", "")
    config_url = os.environ.get("STANDARIUM_CONFIG_URL", "")
    if not _usable(supabase_url, supabase_key) and config_url:
        try:
            remote = fetch_remote_config(config_url)
            supabase_url = remote.get("url", "") or supabase_url
            supabase_key = remote.get("key", "") or supabase_key
        except (httpx.HTTPError, ValueError, ConfigError) as e:
            logger.warning("Could not fetch config from %s (%s), using local store", config_url, e)

    return Settings(
        supabase_url=supabase_url,
        supabase_key=supabase_key,
        ai_url=os.environ.get("STANDARIUM_AI_URL") or DEFAULT_AI_URL,
        ai_timeout=_env_float("STANDARIUM_AI_TIMEOUT", 60.0),
        data_dir=os.environ.get("STANDARIUM_DATA_DIR") or os.path.join(BASE_DIR, "data"),
        labor_rate=_env_float("STANDARIUM_LABOR_RATE", 150.0),
        refresh_ms=int(_env_float("STANDARIUM_REFRESH_MS", 1000)),
        port=int(_env_float("PORT", 8070)),
        log_level=os.environ.get("LOG_LEVEL", "INFO").upper(),
    )


def configure_logging(level="INFO"):
    root = logging.getLogger("standarium")
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
    root.setLevel(level)
    return root
