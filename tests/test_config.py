"""Unit tests for the preferences file."""

import json
import pytest

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from src import config as prefs


@pytest.fixture
def config_path(tmp_path):
    return tmp_path / "config" / "ppfdesk.json"


class TestConfig:
    def test_missing_file_gives_defaults(self, config_path):
        assert prefs.load_config(config_path) == prefs.DEFAULT_CONFIG

    def test_defaults_are_not_shared(self, config_path):
        cfg = prefs.load_config(config_path)
        cfg["quality_thresholds"]["good"] = 50
        assert prefs.DEFAULT_CONFIG["quality_thresholds"]["good"] == 90

    def test_save_then_load(self, config_path):
        cfg = prefs.load_config(config_path)
        cfg["area_check"] = prefs.AREA_CHECK_ENFORCE
        cfg["default_status_filter"] = "needs-recut"
        prefs.save_config(cfg, config_path)
        assert config_path.exists()
        assert prefs.load_config(config_path) == cfg

    def test_partial_file_merges_over_defaults(self, config_path):
        config_path.parent.mkdir(parents=True)
        config_path.write_text(json.dumps({"quality_thresholds": {"good": 95}}))
        cfg = prefs.load_config(config_path)
        assert cfg["quality_thresholds"] == {"good": 95, "fair": 80}
        assert cfg["area_check"] == prefs.AREA_CHECK_ADVISORY

    @pytest.mark.parametrize("content", ["{not json", "[]", "[1, 2]"])
    def test_bad_file_falls_back_to_defaults(self, config_path, content):
        config_path.parent.mkdir(parents=True)
        config_path.write_text(content)
        assert prefs.load_config(config_path) == prefs.DEFAULT_CONFIG

    def test_reset_writes_defaults(self, config_path):
        prefs.save_config({"area_check": "enforce"}, config_path)
        cfg = prefs.reset_config(config_path)
        assert cfg == prefs.DEFAULT_CONFIG
        assert json.loads(config_path.read_text()) == prefs.DEFAULT_CONFIG

    def test_mistyped_value_falls_back_per_key(self, config_path, caplog):
        config_path.parent.mkdir(parents=True)
        config_path.write_text(json.dumps({
            "area_tolerance_sqft": "abc",
            "area_check": prefs.AREA_CHECK_ENFORCE,
        }))
        cfg = prefs.load_config(config_path)
        assert cfg["area_tolerance_sqft"] == prefs.DEFAULT_CONFIG["area_tolerance_sqft"]
        assert cfg["area_check"] == prefs.AREA_CHECK_ENFORCE
        assert "area_tolerance_sqft" in caplog.text
        assert isinstance(cfg["area_tolerance_sqft"], float)

    def test_numeric_strings_are_coerced(self, config_path):
        config_path.parent.mkdir(parents=True)
        config_path.write_text(json.dumps({
            "area_tolerance_sqft": "0.5",
            "quality_thresholds": {"good": "95", "fair": None},
        }))
        cfg = prefs.load_config(config_path)
        assert cfg["area_tolerance_sqft"] == 0.5
        assert cfg["quality_thresholds"] == {"good": 95, "fair": 80}

    @pytest.mark.parametrize("bad", [
        {"quality_thresholds": [90, 80]},
        {"area_check": "sometimes"},
        {"area_check": 1},
        {"area_tolerance_sqft": -1},
        {"area_tolerance_sqft": True},
        {"default_time_range": 30},
    ])
    def test_invalid_values_use_defaults(self, config_path, bad):
        config_path.parent.mkdir(parents=True)
        config_path.write_text(json.dumps(bad))
        assert prefs.load_config(config_path) == prefs.DEFAULT_CONFIG
