from pathlib import Path

import pytest

from city_coords.common.config_loader import PipelineConfig, load_config
from city_coords.common.errors import ConfigError


def test_load_config_defaults_resolve_against_base_dir(tmp_path: Path):
    config = load_config(base_dir=tmp_path)

    assert config.raw_dir == tmp_path / "data" / "raw"
    assert config.out_dir == tmp_path / "data" / "generated" / "per-country"
    assert config.countries_path == tmp_path / "data" / "raw" / "countries.json"
    assert config.regions_path == tmp_path / "data" / "raw" / "states+cities.json"
    assert config.max_file_size == 100 * 1024 * 1024
    assert config.fallback_code == "XX"
    assert config.sort_groups is False


def test_load_config_from_repo_config_file():
    repo_root = Path(__file__).resolve().parents[2]
    config = load_config(repo_root / "config" / "pipeline.yml", base_dir=repo_root)
    assert config == load_config(base_dir=repo_root)


def test_load_config_applies_file_and_overlay(tmp_path: Path):
    base = tmp_path / "pipeline.yml"
    overlay = tmp_path / "local.yml"
    base.write_text(
        """paths:
  raw_dir: input
limits:
  max_file_size: 2048
""",
        encoding="utf-8",
    )
    overlay.write_text(
        """output:
  sort_groups: true
paths:
  report_path: null
""",
        encoding="utf-8",
    )

    config = load_config(base, base_dir=tmp_path, overlay_path=overlay)

    assert config.raw_dir == tmp_path / "input"
    assert config.max_file_size == 2048
    assert config.sort_groups is True
    assert config.report_path is None
    assert config.log_dir == tmp_path / "data" / "generated" / "run_meta"


def test_load_config_ignores_empty_overlay_file(tmp_path: Path):
    overlay = tmp_path / "empty.yml"
    overlay.write_text("", encoding="utf-8")
    assert load_config(base_dir=tmp_path, overlay_path=overlay) == load_config(base_dir=tmp_path)


def test_load_config_keeps_absolute_paths(tmp_path: Path):
    cfg = tmp_path / "pipeline.yml"
    cfg.write_text(f"paths:\n  out_dir: {tmp_path / 'abs-out'}\n", encoding="utf-8")
    assert load_config(cfg, base_dir=Path("/elsewhere")).out_dir == tmp_path / "abs-out"


def test_load_config_rejects_non_mapping_overlay(tmp_path: Path):
    overlay = tmp_path / "overlay.yml"
    overlay.write_text("- not\n- a\n- mapping\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(base_dir=tmp_path, overlay_path=overlay)


def test_load_config_rejects_missing_file(tmp_path: Path):
    with pytest.raises(ConfigError):
        load_config(tmp_path / "absent.yml", base_dir=tmp_path)


def test_load_config_rejects_invalid_yaml(tmp_path: Path):
    cfg = tmp_path / "broken.yml"
    cfg.write_text("paths: [unclosed\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(cfg, base_dir=tmp_path)


def test_pipeline_config_can_be_built_directly(tmp_path: Path):
    config = PipelineConfig(raw_dir=tmp_path / "raw", out_dir=tmp_path / "out")
    assert config.report_path is None
    assert config.countries_filename == "countries.json"
