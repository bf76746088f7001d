from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path

import streamlit as st

CONFIG_FILE_NAME = "settings.json"
ENV_DATA_DIR = "STORE_ADMIN_DATA_DIR"
ENV_API_URL = "STORE_ADMIN_API_URL"
ENV_UPLOADS_URL = "STORE_ADMIN_UPLOADS_URL"
ENV_LOG_LEVEL = "STORE_ADMIN_LOG_LEVEL"

DEFAULT_API_URL = "http://localhost:5000/api"
DEFAULT_UPLOADS_URL = "http://localhost:5000/uploads/"


@dataclass(frozen=True)
class Settings:
    data_dir: Path
    api_base_url: str = DEFAULT_API_URL
    uploads_base_url: str = DEFAULT_UPLOADS_URL
    log_level: str = "INFO"
    currency: str = "₹"


def _default_data_dir() -> Path:
    return Path.home() / ".store_admin"


def _load_persisted_settings(data_dir: Path) -> dict:
    cfg = data_dir / CONFIG_FILE_NAME
    if cfg.exists():
        try:
            return json.loads(cfg.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            return {}
    return {}


def persist_api_base_url(data_dir: Path, api_base_url: str, uploads_base_url: str = "") -> None:
    url = api_base_url.strip().rstrip("/")
    if not url.startswith(("http://", "https://")):
        raise ValueError("API URL must start with http:// or https://")

    data_dir.mkdir(parents=True, exist_ok=True)
    cfg = data_dir / CONFIG_FILE_NAME
    payload = _load_persisted_settings(data_dir)
    payload["api_base_url"] = url
    if uploads_base_url.strip():
        payload["uploads_base_url"] = uploads_base_url.strip()
    cfg.write_text(json.dumps(payload, indent=2), encoding="utf-8")

    # Update session for immediate effect
    st.session_state["store_admin_api_url"] = url


def resolve_settings(session: dict, environ: dict) -> Settings:
    # Priority order:
    # 1) Session state (set via Settings page)
    # 2) Environment variable
    # 3) Persisted settings in the data folder
    # 4) Defaults
    if environ.get(ENV_DATA_DIR):
        data_dir = Path(environ[ENV_DATA_DIR]).expanduser().resolve()
    else:
        data_dir = _default_data_dir()
    persisted = _load_persisted_settings(data_dir)

    if session.get("store_admin_api_url"):
        api_url = str(session["store_admin_api_url"])
    elif environ.get(ENV_API_URL):
        api_url = str(environ[ENV_API_URL])
    else:
        api_url = str(persisted.get("api_base_url", DEFAULT_API_URL))

    uploads_url = environ.get(ENV_UPLOADS_URL) or persisted.get("uploads_base_url") or DEFAULT_UPLOADS_URL
    if not uploads_url.endswith("/"):
        uploads_url += "/"

    return Settings(
        data_dir=data_dir,
        api_base_url=api_url.rstrip("/"),
        uploads_base_url=uploads_url,
        log_level=str(environ.get(ENV_LOG_LEVEL, "INFO")).upper(),
    )


@st.cache_resource
def get_settings() -> Settings:
    settings = resolve_settings(dict(st.session_state), dict(os.environ))
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    return settings


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
