from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from act.core.errors import ConfigError

START_ROOM = "start"
DEFAULT_CONFIG_NAME = "act.yaml"


@dataclass(frozen=True)
class ActConfig:
    start_room: str = START_ROOM
    splash: bool = True
    splash_delay: float = 4.0
    clear_on_move: bool = True
    validate_references: bool = False
    audit_path: str | None = None


def resolve_config_path(config_path: str | None) -> Path | None:
    """Find the config file, or None if there is nothing to load."""
    if config_path:
        path = Path(config_path)
        if path.exists():
            return path
        if config_path != DEFAULT_CONFIG_NAME:
            raise FileNotFoundError(f"Config file not found: {path}")

    env_path = os.getenv("ACT_CONFIG")
    if env_path:
        env_candidate = Path(env_path)
        if env_candidate.exists():
            return env_candidate

    cwd = Path.cwd()
    for parent in [cwd, *cwd.parents]:
        candidate = parent / DEFAULT_CONFIG_NAME
        if candidate.exists():
            return candidate

    return None


def load_yaml(path: str | Path) -> dict[str, Any]:
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Config file not found: {p}")
    try:
        with p.open("r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}
    except (yaml.YAMLError, UnicodeDecodeError) as e:
        raise ConfigError(f"Could not read config {p}: {e}") from e
    if not isinstance(raw, dict):
        raise ConfigError(f"Config {p} must be a mapping")
    return raw


def _get(raw: dict[str, Any], key: str, kinds: tuple[type, ...], default: Any) -> Any:
    value = raw.get(key, default)
    # bool is an int subclass; only accept it where a bool is expected
    if not isinstance(value, kinds) or (isinstance(value, bool) and bool not in kinds):
        names = "/".join(k.__name__ for k in kinds)
        raise ConfigError(f"'{key}' must be {names}, got {value!r}")
    return value


def config_from_dict(raw: dict[str, Any], base_dir: Path | None = None) -> ActConfig:
    audit = raw.get("audit") or {}
    if not isinstance(audit, dict):
        raise ConfigError(f"'audit' must be a mapping, got {audit!r}")
    audit_path = _get(audit, "path", (str, type(None)), None)
    if audit_path and base_dir is not None and not Path(audit_path).is_absolute():
        audit_path = str((base_dir / audit_path).resolve())

    splash_delay = float(_get(raw, "splash_delay", (int, float), 4.0))
    if splash_delay < 0:
        raise ConfigError(f"'splash_delay' must not be negative, got {splash_delay}")

    return ActConfig(
        start_room=_get(raw, "start_room", (str,), START_ROOM),
        splash=_get(raw, "splash", (bool,), True),
        splash_delay=splash_delay,
        clear_on_move=_get(raw, "clear_on_move", (bool,), True),
        validate_references=_get(raw, "validate_references", (bool,), False),
        audit_path=audit_path,
    )


def load_config(path: str | None = DEFAULT_CONFIG_NAME) -> ActConfig:
    resolved = resolve_config_path(path)
    if resolved is None:
        return ActConfig()
    resolved = resolved.resolve()
    return config_from_dict(load_yaml(resolved), base_dir=resolved.parent)
