"""
User preferences for PPFDesk, stored as JSON.

Only UI/behaviour preferences live here. Installation records are never
written to disk.
"""

from __future__ import annotations

import copy
import json
import logging
import math
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

CONFIG_PATH = Path(__file__).resolve().parent.parent / "config" / "ppfdesk.json"

AREA_CHECK_ADVISORY = "advisory"
AREA_CHECK_ENFORCE = "enforce"

# Default preferences (used if JSON doesn't exist yet)
DEFAULT_CONFIG = {
    "default_time_range": "all",
    "default_status_filter": "all",
    "quality_thresholds": {
        "good": 90,
        "fair": 80,
    },
    "area_check": AREA_CHECK_ADVISORY,
    "area_tolerance_sqft": 0.05,
}


def _coerce(key: str, value, default):
    """Return value converted to the type of default, or default with a warning."""
    if isinstance(default, dict):
        if not isinstance(value, dict):
            logger.warning("Preference '%s' should be an object, using defaults.", key)
            return copy.deepcopy(default)
        return {k: _coerce(f"{key}.{k}", value.get(k, v), v) for k, v in default.items()}
    if isinstance(default, bool) or isinstance(value, bool):
        if type(value) is type(default):
            return value
    elif isinstance(default, (int, float)):
        try:
            number = float(value)
        except (TypeError, ValueError):
            number = None
        if number is not None and math.isfinite(number):
            return number if isinstance(default, float) else int(number)
    elif isinstance(value, type(default)):
        return value
    logger.warning("Preference '%s' has invalid value %r, using %r.", key, value, default)
    return copy.deepcopy(default)


def load_config(path: Optional[Path] = None) -> dict:
    """Read preferences, merging any saved values over the defaults."""
    path = path or CONFIG_PATH
    merged = copy.deepcopy(DEFAULT_CONFIG)
    if not path.exists():
        return merged
    try:
        with open(path, encoding="utf-8") as f:
            cfg = json.load(f)
    except (json.JSONDecodeError, UnicodeDecodeError):
        logger.warning("Bad preferences file at %s, using defaults.", path)
        return merged
    if not isinstance(cfg, dict):
        logger.warning("Bad preferences file at %s, using defaults.", path)
        return merged

    for key, default in DEFAULT_CONFIG.items():
        if key in cfg:
            merged[key] = _coerce(key, cfg[key], default)
    if merged["area_check"] not in (AREA_CHECK_ADVISORY, AREA_CHECK_ENFORCE):
        logger.warning("Unknown area_check mode %r, using advisory.", merged["area_check"])
        merged["area_check"] = AREA_CHECK_ADVISORY
    if merged["area_tolerance_sqft"] < 0:
        logger.warning("Negative area tolerance in %s, using default.", path)
        merged["area_tolerance_sqft"] = DEFAULT_CONFIG["area_tolerance_sqft"]
    return merged


def save_config(config: dict, path: Optional[Path] = None) -> None:
    path = path or CONFIG_PATH
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(config, f, indent=2)
    logger.info("Preferences saved to %s", path)


def reset_config(path: Optional[Path] = None) -> dict:
    config = copy.deepcopy(DEFAULT_CONFIG)
    save_config(config, path)
    return config
