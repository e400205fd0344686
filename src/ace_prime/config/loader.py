from __future__ import annotations

import logging
import os
import tomllib
from pathlib import Path
from typing import Any, Dict

logger = logging.getLogger(__name__)

CONFIG_PATH_ENV = "ACE_PRIME_CONFIG"
DEFAULT_CONFIG_PATH = Path("config.toml")


def as_bool(raw: Any) -> bool:
    """TOML booleans and "1"/"true"/"yes" env strings."""
    return str(raw).strip().lower() in ("1", "true", "yes")


def resolve_config_path(path: str | Path | None = None) -> Path:
    """Explicit path first, then ``$ACE_PRIME_CONFIG``, then ./config.toml."""
    if path is not None:
        return Path(path)
    from_env = os.getenv(CONFIG_PATH_ENV, "").strip()
    return Path(from_env) if from_env else DEFAULT_CONFIG_PATH


def load_raw_config(path: str | Path | None = None) -> Dict[str, Any]:
    """
    Read the ``[aceprime]`` TOML config.

    A missing file yields ``{}`` so every setting falls back to the
    environment. A malformed file raises ``tomllib.TOMLDecodeError``.
    """
    target = resolve_config_path(path)
    if not target.is_file():
        logger.debug("No config file at %s; using environment only", target)
        return {}

    with target.open("rb") as handle:
        data = tomllib.load(handle)

    if not isinstance(data.get("aceprime", {}), dict):
        raise ValueError(f"{target}: [aceprime] must be a table")
    return data


__all__ = ["as_bool", "load_raw_config", "resolve_config_path", "CONFIG_PATH_ENV", "DEFAULT_CONFIG_PATH"]
