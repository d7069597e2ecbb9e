"""Configuration loading — config/digest.yaml + .env."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

from .schemas import DigestConfig

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parent.parent
DEFAULT_CONFIG_PATH = PROJECT_ROOT / "config" / "digest.yaml"
CONFIG_ENV = "DIGEST_CONFIG"


def _resolve_env(value: Any) -> Any:
    """Resolve ${ENV_VAR} references in config values."""
    if isinstance(value, str) and value.startswith("${") and value.endswith("}"):
        env_key = value[2:-1]
        return os.environ.get(env_key, value)
    if isinstance(value, dict):
        return {k: _resolve_env(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_resolve_env(v) for v in value]
    return value


def load_config(path: str | Path | None = None) -> DigestConfig:
    """Load the digest config.

    Lookup order: explicit *path*, then $DIGEST_CONFIG, then config/digest.yaml.
    A missing file yields the built-in defaults.
    """
    load_dotenv()

    config_path = Path(path or os.environ.get(CONFIG_ENV) or DEFAULT_CONFIG_PATH)
    if not config_path.exists():
        logger.debug("No config at %s, using defaults", config_path)
        return DigestConfig()

    with open(config_path, encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    logger.debug("Loaded config: %s", config_path)
    return DigestConfig(**_resolve_env(raw))
