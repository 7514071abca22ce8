"""Runtime settings resolved from the environment and an optional YAML file."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional

import yaml

logger = logging.getLogger(__name__)

DEFAULT_DATA_DIR = Path("data")
DEFAULT_LOG_LEVEL = "WARNING"

ENV_CONFIG = "CLAIMLENS_CONFIG"
ENV_DATA_DIR = "CLAIMLENS_DATA_DIR"
ENV_LOG_LEVEL = "CLAIMLENS_LOG_LEVEL"


class ConfigError(ValueError):
    """Raised when the settings file cannot be used."""


@dataclass(frozen=True)
class Settings:
    data_dir: Path = DEFAULT_DATA_DIR
    log_level: str = DEFAULT_LOG_LEVEL


def _read_yaml(path: Path) -> Mapping[str, Any]:
    try:
        with path.open("r", encoding="utf-8") as handle:
            payload = yaml.safe_load(handle) or {}
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigError(f"cannot read {path}: {exc}") from exc
    if not isinstance(payload, dict):
        raise ConfigError(f"{path}: expected a mapping at the top level")
    return payload


def _log_level(value: Any) -> str:
    level = str(value).strip().upper()
    if not isinstance(logging.getLevelName(level), int):
        logger.warning("Unknown log level %r; using %s", value, DEFAULT_LOG_LEVEL)
        return DEFAULT_LOG_LEVEL
    return level


def load_settings(
    env: Optional[Mapping[str, str]] = None, config_path: Optional[Path] = None
) -> Settings:
    """Resolve settings: environment beats the YAML file, which beats defaults."""

    env = os.environ if env is None else env
    file_values: Mapping[str, Any] = {}
    path = config_path or (Path(env[ENV_CONFIG]) if env.get(ENV_CONFIG) else None)
    if path is not None:
        if path.exists():
            file_values = _read_yaml(path)
        else:
            logger.warning("Config file %s not found; using defaults", path)

    data_dir = env.get(ENV_DATA_DIR) or file_values.get("data_dir") or DEFAULT_DATA_DIR
    log_level = env.get(ENV_LOG_LEVEL) or file_values.get("log_level") or DEFAULT_LOG_LEVEL
    return Settings(data_dir=Path(data_dir), log_level=_log_level(log_level))


__all__ = ["ConfigError", "Settings", "load_settings"]
