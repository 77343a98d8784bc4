"""Configuration loading.

Rules:
- Primary source: `casesync_config.json` at the project root (optional).
- Overrides: environment variables (`CASESYNC_*`).
- Validation: Pydantic models enforce required fields and value constraints.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from casesync.db.base import DEFAULT_DATABASE_URL
from casesync.db.case_store import DEFAULT_STORE_KEY

ROOT_CONFIG = Path("casesync_config.json")
logger = logging.getLogger(__name__)


def _env(key: str, default: Optional[str] = None) -> Optional[str]:
    return os.environ.get(key, default)


class BackendConfig(BaseModel):
    base_url: str
    timeout_seconds: float = Field(default=10.0, gt=0)

    @field_validator("base_url")
    @classmethod
    def base_url_must_be_http(cls, v: str) -> str:
        if not isinstance(v, str) or not v.strip():
            raise ValueError("backend.base_url must be a non-empty string")
        if not v.startswith(("http://", "https://")):
            raise ValueError("backend.base_url must start with http:// or https://")
        return v.rstrip("/")


class StorageConfig(BaseModel):
    database_url: str = DEFAULT_DATABASE_URL
    store_key: str = DEFAULT_STORE_KEY

    @field_validator("store_key")
    @classmethod
    def store_key_must_be_non_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("storage.store_key must be a non-empty string")
        return v


class AppConfig(BaseModel):
    backend: BackendConfig
    storage: StorageConfig = Field(default_factory=StorageConfig)
    case_token: Optional[str] = None


def _read_json_file(path: Path) -> dict:
    try:
        if path.exists():
            return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        logger.error("Failed to read JSON config %s: %s", path, e)
    return {}


def load_config(path: Path | None = None) -> AppConfig:
    """Load configuration with validation.

    Precedence (highest first):
    1) Environment variables
    2) `casesync_config.json` (or `path`)
    3) Defaults (local backend, SQLite file store)
    """
    base = _read_json_file(path or ROOT_CONFIG)
    backend = dict(base.get("backend") or {})
    storage = dict(base.get("storage") or {})

    backend["base_url"] = _env("CASESYNC_BACKEND_URL") or backend.get("base_url") or "http://localhost:8000/v1"
    timeout = _env("CASESYNC_HTTP_TIMEOUT")
    if timeout is not None:
        backend["timeout_seconds"] = timeout
    database_url = _env("CASESYNC_DATABASE_URL")
    if database_url:
        storage["database_url"] = database_url
    store_key = _env("CASESYNC_STORE_KEY")
    if store_key:
        storage["store_key"] = store_key

    cfg = AppConfig(
        backend=BackendConfig(**backend),
        storage=StorageConfig(**storage),
        case_token=_env("CASESYNC_CASE_TOKEN") or base.get("case_token"),
    )
    logger.info("config_loaded backend=%s database=%s", cfg.backend.base_url, cfg.storage.database_url)
    return cfg


__all__ = ["BackendConfig", "StorageConfig", "AppConfig", "load_config"]
