"""Configuration loading & validation.

Precedence (last wins): base.yaml -> overrides.local.yaml -> ENV (SYSERROR__*).

- `schema_version` missing -> assume 1, warn.
- Each known section is validated by its own schema (extra keys rejected).
- Cross-field bounds (messages.max_buffer >= messages.initial_buffer) are
  checked before the aggregate model is built.
"""
from __future__ import annotations

import logging
import os
import pathlib
import threading
from functools import lru_cache
from typing import Any, Dict, Type

import yaml
from pydantic import BaseModel, ConfigDict

from syserror import metrics
from syserror.errors import map_exception, validate_error_type

from .schemas.observability import LoggingConfig
from .schemas.platform import MessagesConfig, PlatformConfig

log = logging.getLogger("syserror.config")


class AggregatedConfig(BaseModel):
    schema_version: int = 1
    platform: PlatformConfig = PlatformConfig()
    messages: MessagesConfig = MessagesConfig()
    logging: LoggingConfig = LoggingConfig()

    model_config = ConfigDict(extra="forbid")


DEFAULT_CONFIG_DIR = "configs"
ENV_PREFIX = "SYSERROR__"

SUB_SCHEMA_CLASSES: Dict[str, Type[BaseModel]] = {
    "platform": PlatformConfig,
    "messages": MessagesConfig,
    "logging": LoggingConfig,
}


class ConfigError(Exception):
    pass


def _load_yaml_if_exists(path: pathlib.Path) -> Dict[str, Any]:
    if not path.exists():
        return {}
    with path.open("r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def _merge_dict(
    base: Dict[str, Any], override: Dict[str, Any]
) -> Dict[str, Any]:
    for k, v in override.items():
        if isinstance(v, dict) and isinstance(base.get(k), dict):
            base[k] = _merge_dict(base[k], v)
        else:
            base[k] = v
    return base


def _coerce_env_value(value: str) -> Any:
    if value.lower() in {"true", "false"}:
        return value.lower() == "true"
    try:
        return int(value)
    except ValueError:
        pass
    try:
        return float(value)
    except ValueError:
        return value


def _apply_env(cfg: Dict[str, Any]) -> None:
    prefix_len = len(ENV_PREFIX)
    for env_key, value in os.environ.items():
        if not env_key.startswith(ENV_PREFIX):
            continue
        path_parts = env_key[prefix_len:].lower().split("__")
        target = cfg
        for part in path_parts[:-1]:
            if part not in target or not isinstance(target[part], dict):
                target[part] = {}
            target = target[part]
        target[path_parts[-1]] = _coerce_env_value(value)
        dotted_path = ".".join(path_parts)
        metrics.inc("env_override_total", {"path": dotted_path})
        log.info("config env override path=%s source=env", dotted_path)


_lock = threading.Lock()


def _resolve_config_dir() -> pathlib.Path:
    """Resolve config directory each call honoring env var changes."""
    return pathlib.Path(os.getenv("SYSERROR_CONFIG_DIR", DEFAULT_CONFIG_DIR))


def _migrate_legacy(data: Dict[str, Any]) -> Dict[str, Any]:
    if "schema_version" not in data:
        if data:
            log.warning("schema_version missing -> assuming 1")
        data["schema_version"] = 1
    return data


def _validate_sub_schemas(raw: Dict[str, Any]) -> Dict[str, BaseModel]:
    """Validate each known section via its schema class."""
    validated: Dict[str, BaseModel] = {}
    for name, cls in SUB_SCHEMA_CLASSES.items():
        if name in raw:
            try:
                validated[name] = cls.model_validate(raw[name] or {})
            except Exception as e:  # noqa: BLE001
                code = validate_error_type(map_exception(e, "config.load"))
                raise ConfigError(
                    f"Validation failed for section '{name}' ({code}): {e}"
                ) from e
    return validated


def _normalize_and_validate(raw: Dict[str, Any]) -> None:
    """Cross-field bounds checks.

    Emits metrics on violations and raises ConfigError if any.
    """
    errors: list[tuple[str, str, str]] = []  # (path, code, msg)
    messages = raw.get("messages") or {}
    initial = messages.get("initial_buffer")
    maximum = messages.get("max_buffer")
    if isinstance(initial, int) and isinstance(maximum, int):
        if maximum < initial:
            errors.append(
                (
                    "messages.max_buffer",
                    "config-out-of-range",
                    "max_buffer must be >= initial_buffer",
                )
            )

    if errors:
        for path, code, _ in errors:
            metrics.inc(
                "config_validation_errors_total",
                {"path": path, "code": code},
            )
            validate_error_type(code)
        details = ", ".join(f"{p}:{c}:{m}" for p, c, m in errors)
        raise ConfigError(f"config validation failed: {details}")


@lru_cache(maxsize=1)
def get_config() -> AggregatedConfig:  # noqa: D401
    with _lock:
        cfg_dir = _resolve_config_dir()
        base_cfg = _load_yaml_if_exists(cfg_dir / "base.yaml")
        overrides_cfg = _load_yaml_if_exists(cfg_dir / "overrides.local.yaml")
        merged = _merge_dict(base_cfg, overrides_cfg)
        _apply_env(merged)
        migrated = _migrate_legacy(merged)
        validated_sub = _validate_sub_schemas(migrated)
        # bounds use schema defaults for whichever half was not given
        if "messages" in validated_sub:
            migrated["messages"] = validated_sub["messages"].model_dump()
        _normalize_and_validate(migrated)
        try:
            agg = AggregatedConfig.model_validate(
                {
                    k: v
                    for k, v in migrated.items()
                    if k not in validated_sub
                }
            )
        except Exception as e:  # noqa: BLE001
            raise ConfigError(str(e)) from e
        for k, v in validated_sub.items():
            setattr(agg, k, v)
        return agg


def clear_config_cache() -> None:
    """Clear cached config (primarily for tests)."""
    get_config.cache_clear()


def as_dict() -> Dict[str, Any]:
    return get_config().model_dump()


def configure_logging() -> None:
    """Apply `logging.level` from config to the package logger."""
    level = get_config().logging.level
    logging.getLogger("syserror").setLevel(
        {"warn": logging.WARNING}.get(level, getattr(logging, level.upper()))
    )
