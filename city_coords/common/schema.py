"""Minimal strict schemas for YAML config and catalog record validation."""

from __future__ import annotations

from typing import Any

from city_coords.common.constants import U32_MAX
from city_coords.common.errors import ConfigError, Malformed

CONFIG_SECTIONS = {
    "paths": {"raw_dir", "out_dir", "report_path", "log_dir"},
    "inputs": {"countries_filename", "regions_filename"},
    "limits": {"max_file_size"},
    "output": {"fallback_code", "sort_groups"},
}
NULLABLE_PATHS = {"report_path", "log_dir"}


def _assert_no_unknown_keys(obj: dict, known: set[str], ctx: str) -> None:
    unknown = set(obj) - known
    if unknown:
        unknown_str = ", ".join(sorted(unknown))
        raise ConfigError(f"Unknown keys in {ctx}: {unknown_str}")


def _assert_non_empty_str(value: Any, ctx: str) -> None:
    if not isinstance(value, str) or not value:
        raise ConfigError(f"{ctx} must be a non-empty string")


def validate_pipeline_config(cfg: dict) -> dict:
    if not isinstance(cfg, dict):
        raise ConfigError("pipeline config must be a mapping")
    _assert_no_unknown_keys(cfg, set(CONFIG_SECTIONS), "pipeline config")

    for section, known in CONFIG_SECTIONS.items():
        if not isinstance(cfg.get(section), dict):
            raise ConfigError(f"{section} must be a mapping")
        _assert_no_unknown_keys(cfg[section], known, section)

    for key, value in cfg["paths"].items():
        if value is None and key in NULLABLE_PATHS:
            continue
        _assert_non_empty_str(value, f"paths.{key}")

    for key, value in cfg["inputs"].items():
        _assert_non_empty_str(value, f"inputs.{key}")

    max_file_size = cfg["limits"]["max_file_size"]
    if isinstance(max_file_size, bool) or not isinstance(max_file_size, int) or max_file_size <= 0:
        raise ConfigError("limits.max_file_size must be a positive integer")

    _assert_non_empty_str(cfg["output"]["fallback_code"], "output.fallback_code")
    if not isinstance(cfg["output"]["sort_groups"], bool):
        raise ConfigError("output.sort_groups must be a boolean")

    return cfg


def require_object(value: Any, source: str, ctx: str) -> dict:
    if not isinstance(value, dict):
        raise Malformed(source, f"{ctx}: expected an object, got {type(value).__name__}")
    return value


def require_array(value: Any, source: str, ctx: str) -> list:
    if not isinstance(value, list):
        raise Malformed(source, f"{ctx}: expected an array, got {type(value).__name__}")
    return value


def require_u32(record: dict, key: str, source: str, ctx: str) -> int:
    if key not in record:
        raise Malformed(source, f"{ctx}: missing field `{key}`")
    value = record[key]
    if isinstance(value, bool) or not isinstance(value, int):
        raise Malformed(source, f"{ctx}.{key}: expected u32, got {type(value).__name__}")
    if not 0 <= value <= U32_MAX:
        raise Malformed(source, f"{ctx}.{key}: {value} is out of range for u32")
    return value


def require_str(record: dict, key: str, source: str, ctx: str) -> str:
    if key not in record:
        raise Malformed(source, f"{ctx}: missing field `{key}`")
    value = record[key]
    if not isinstance(value, str):
        raise Malformed(source, f"{ctx}.{key}: expected a string, got {type(value).__name__}")
    return value


def optional_str(record: dict, key: str, source: str, ctx: str) -> str | None:
    value = record.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise Malformed(source, f"{ctx}.{key}: expected a string or null, got {type(value).__name__}")
    return value
