"""Settings loaded from an optional YAML file."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

import yaml

from .rules.base import Severity

logger = logging.getLogger(__name__)

CONFIG_LOCATIONS = (Path("logsleuth.yaml"), Path(".logsleuth") / "config.yaml")


class ConfigError(ValueError):
    """Settings file is unreadable or holds values of the wrong type."""


@dataclass
class Settings:
    max_log_bytes: int = 1_000_000  # files at or above this size are rejected
    max_text_bytes: int = 8_000_000  # decoded text beyond this is truncated
    log_extensions: list[str] = field(default_factory=lambda: [".log", ".txt", ".gz"])
    fail_on: str = "HIGH"
    workers: int = 4


def _validate(data: dict[str, Any], source: Path) -> Settings:
    known = {f.name for f in fields(Settings)}
    unknown = sorted(set(data) - known)
    if unknown:
        logger.warning("%s: ignoring unknown setting(s): %s", source, ", ".join(unknown))

    settings = Settings()
    for key in ("max_log_bytes", "max_text_bytes", "workers"):
        if key in data:
            value = data[key]
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                raise ConfigError(f"{source}: {key} must be a positive integer, got {value!r}")
            setattr(settings, key, value)
    if "log_extensions" in data:
        exts = data["log_extensions"]
        if not isinstance(exts, list) or not all(isinstance(e, str) for e in exts):
            raise ConfigError(f"{source}: log_extensions must be a list of strings")
        settings.log_extensions = [e if e.startswith(".") else f".{e}" for e in exts]
    if "fail_on" in data:
        try:
            settings.fail_on = Severity.parse(str(data["fail_on"])).value
        except ValueError as e:
            raise ConfigError(f"{source}: {e}") from None
    return settings


def load_settings(path: Path | None = None) -> Settings:
    """Load settings from path, or the first default location that exists. Defaults if none."""
    if path is None:
        path = next((p for p in CONFIG_LOCATIONS if p.exists()), None)
        if path is None:
            return Settings()
    elif not path.exists():
        raise ConfigError(f"Config file not found: {path}")

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except (yaml.YAMLError, OSError) as e:
        raise ConfigError(f"{path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"{path}: expected a mapping at top level")
    logger.debug("Loaded settings from %s", path)
    return _validate(data, path)


def load_mod_list(path: Path) -> dict[str, str | None] | list[str]:
    """
    Read an installed-mod listing: either a YAML/JSON list of mod ids,
    or a mapping of mod id -> version (or a {"mods": ...} wrapper around either).
    """
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (yaml.YAMLError, OSError) as e:
        raise ConfigError(f"{path}: {e}") from e
    if isinstance(data, dict) and "mods" in data:
        data = data["mods"]
    if data is None:
        return []
    if isinstance(data, list):
        return [str(m) for m in data]
    if isinstance(data, dict):
        return {str(k): (None if v is None else str(v)) for k, v in data.items()}
    raise ConfigError(f"{path}: expected a list of mod ids or a mapping of id -> version")
