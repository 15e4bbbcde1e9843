"""Configuration loading and validation."""

from __future__ import annotations

import copy
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from city_coords.common.constants import (
    COUNTRIES_FILENAME,
    DEFAULT_LOG_DIR,
    DEFAULT_OUT_DIR,
    DEFAULT_RAW_DIR,
    DEFAULT_REPORT_PATH,
    FALLBACK_COUNTRY_CODE,
    MAX_FILE_SIZE,
    REGIONS_FILENAME,
)
from city_coords.common.errors import ConfigError
from city_coords.common.fs import read_yaml
from city_coords.common.schema import validate_pipeline_config

DEFAULT_CONFIG: dict[str, dict[str, Any]] = {
    "paths": {
        "raw_dir": DEFAULT_RAW_DIR,
        "out_dir": DEFAULT_OUT_DIR,
        "report_path": DEFAULT_REPORT_PATH,
        "log_dir": DEFAULT_LOG_DIR,
    },
    "inputs": {
        "countries_filename": COUNTRIES_FILENAME,
        "regions_filename": REGIONS_FILENAME,
    },
    "limits": {"max_file_size": MAX_FILE_SIZE},
    "output": {"fallback_code": FALLBACK_COUNTRY_CODE, "sort_groups": False},
}


@dataclass(frozen=True)
class PipelineConfig:
    raw_dir: Path
    out_dir: Path
    report_path: Path | None = None
    log_dir: Path | None = None
    countries_filename: str = COUNTRIES_FILENAME
    regions_filename: str = REGIONS_FILENAME
    max_file_size: int = MAX_FILE_SIZE
    fallback_code: str = FALLBACK_COUNTRY_CODE
    sort_groups: bool = False

    @property
    def countries_path(self) -> Path:
        return self.raw_dir / self.countries_filename

    @property
    def regions_path(self) -> Path:
        return self.raw_dir / self.regions_filename


def _deep_merge(base: Any, overlay: Any) -> Any:
    if isinstance(base, dict) and isinstance(overlay, dict):
        merged = dict(base)
        for key, value in overlay.items():
            if key in merged:
                merged[key] = _deep_merge(merged[key], value)
            else:
                merged[key] = value
        return merged
    return overlay


def _read_config_file(path: Path) -> dict:
    if not path.exists():
        raise ConfigError(f"Config file not found: {path}")
    try:
        payload = read_yaml(path)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc
    if payload is None:
        return {}
    if not isinstance(payload, dict):
        raise ConfigError(f"Config file must contain a mapping: {path}")
    return payload


def _resolve(base_dir: Path, value: str | None) -> Path | None:
    if value is None:
        return None
    path = Path(value)
    return path if path.is_absolute() else base_dir / path


def load_config(
    path: Path | None = None,
    *,
    base_dir: Path = Path("."),
    overlay_path: Path | None = None,
) -> PipelineConfig:
    cfg = copy.deepcopy(DEFAULT_CONFIG)
    if path is not None:
        cfg = _deep_merge(cfg, _read_config_file(path))
    if overlay_path is not None:
        cfg = _deep_merge(cfg, _read_config_file(overlay_path))
    cfg = validate_pipeline_config(cfg)

    paths = cfg["paths"]
    return PipelineConfig(
        raw_dir=_resolve(base_dir, paths["raw_dir"]),
        out_dir=_resolve(base_dir, paths["out_dir"]),
        report_path=_resolve(base_dir, paths["report_path"]),
        log_dir=_resolve(base_dir, paths["log_dir"]),
        countries_filename=cfg["inputs"]["countries_filename"],
        regions_filename=cfg["inputs"]["regions_filename"],
        max_file_size=cfg["limits"]["max_file_size"],
        fallback_code=cfg["output"]["fallback_code"],
        sort_groups=cfg["output"]["sort_groups"],
    )
