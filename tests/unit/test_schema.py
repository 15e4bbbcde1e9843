import copy

import pytest

from city_coords.common.config_loader import DEFAULT_CONFIG
from city_coords.common.errors import ConfigError
from city_coords.common.schema import validate_pipeline_config


def _cfg() -> dict:
    return copy.deepcopy(DEFAULT_CONFIG)


def test_validate_pipeline_config_accepts_defaults():
    assert validate_pipeline_config(_cfg())["output"]["fallback_code"] == "XX"


def test_validate_pipeline_config_rejects_unknown_section():
    bad = _cfg()
    bad["unexpected"] = {}
    with pytest.raises(ConfigError):
        validate_pipeline_config(bad)


def test_validate_pipeline_config_rejects_unknown_key_in_section():
    bad = _cfg()
    bad["limits"]["max_memory"] = 1
    with pytest.raises(ConfigError):
        validate_pipeline_config(bad)


@pytest.mark.parametrize("value", [0, -1, True, "100", 1.5])
def test_validate_pipeline_config_rejects_bad_max_file_size(value):
    bad = _cfg()
    bad["limits"]["max_file_size"] = value
    with pytest.raises(ConfigError):
        validate_pipeline_config(bad)


def test_validate_pipeline_config_rejects_empty_fallback_code():
    bad = _cfg()
    bad["output"]["fallback_code"] = ""
    with pytest.raises(ConfigError):
        validate_pipeline_config(bad)


def test_validate_pipeline_config_requires_raw_dir():
    bad = _cfg()
    bad["paths"]["raw_dir"] = None
    with pytest.raises(ConfigError):
        validate_pipeline_config(bad)


def test_validate_pipeline_config_allows_null_report_and_log_paths():
    cfg = _cfg()
    cfg["paths"]["report_path"] = None
    cfg["paths"]["log_dir"] = None
    validate_pipeline_config(cfg)


def test_validate_pipeline_config_rejects_non_mapping_section():
    bad = _cfg()
    bad["output"] = ["XX"]
    with pytest.raises(ConfigError):
        validate_pipeline_config(bad)
