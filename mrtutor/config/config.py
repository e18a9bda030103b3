from __future__ import annotations

"""Configuration loading and validation for the resistance tutor.

This module loads YAML configuration, applies defaults, and checks that
probabilities, band counts and debug overrides are usable.
"""

import sys
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

ALLOWED_BANDS = {4, 5}
ALLOWED_TOLERANCES = {4: {0.05, 0.1}, 5: {0.01, 0.02}}


def _load_yaml(path: Path) -> Dict[str, Any]:
    try:
        with path.open("r", encoding="utf-8") as f:
            return yaml.safe_load(f) or {}
    except FileNotFoundError:
        print(f"ERROR: Config file not found: {path}", file=sys.stderr)
        sys.exit(1)
    except yaml.YAMLError as e:
        print(f"ERROR: Config file is not valid YAML: {path}: {e}", file=sys.stderr)
        sys.exit(1)


def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    """Load configuration from YAML or defaults.

    Args:
        path: Optional path to a YAML config. If None, use package defaults.

    Returns:
        A dictionary with configuration values.
    """
    if path:
        return _load_yaml(Path(path))
    return _load_yaml(Path(__file__).with_name("defaults.yml"))


def _positive_or_none(section: Dict[str, Any], key: str) -> None:
    value = section.get(key)
    if value is None:
        return
    try:
        number = float(value)
    except (TypeError, ValueError):
        number = -1.0
    if number <= 0:
        print(f"WARNING: Ignoring {key} '{value}', expected a positive number.")
        section[key] = None
    else:
        section[key] = number


def validate_config(cfg: Dict[str, Any]) -> Dict[str, Any]:
    """Apply defaults and validate configuration values.

    Args:
        cfg: The raw configuration dictionary.

    Returns:
        The validated and merged configuration dictionary.
    """
    cfg.setdefault("activity", {})
    cfg.setdefault("learner", {})
    cfg.setdefault("results", {})
    cfg.setdefault("explain", False)

    activity = cfg["activity"]
    learner = cfg["learner"]
    results = cfg["results"]

    activity.setdefault("four_band_probability", 0.75)
    activity.setdefault("debug_nbands", None)
    activity.setdefault("debug_rvalue", None)
    activity.setdefault("debug_mvalue", None)
    activity.setdefault("debug_tvalue", None)

    learner.setdefault("id", "anonymous")

    results.setdefault("persist", True)
    results.setdefault("output_path", "./mr_results.json")
    results.setdefault("stats_path", "./mr_stats.txt")
    results.setdefault("store_dir", "./storage/data")

    try:
        p = float(activity["four_band_probability"])
    except (TypeError, ValueError):
        p = -1.0
    if not 0.0 <= p <= 1.0:
        print(f"WARNING: Invalid four_band_probability '{activity['four_band_probability']}', using 0.75.")
        p = 0.75
    activity["four_band_probability"] = p

    nbands = activity.get("debug_nbands")
    if nbands is not None:
        try:
            nbands = int(nbands)
        except (TypeError, ValueError):
            nbands = None
        if nbands not in ALLOWED_BANDS:
            print(f"WARNING: Unsupported debug_nbands '{activity['debug_nbands']}', choosing at random.")
            nbands = None
        activity["debug_nbands"] = nbands

    for key in ("debug_rvalue", "debug_mvalue", "debug_tvalue"):
        _positive_or_none(activity, key)

    tvalue = activity.get("debug_tvalue")
    if tvalue is not None and nbands is not None and tvalue not in ALLOWED_TOLERANCES[nbands]:
        print(f"WARNING: debug_tvalue {tvalue} is unusual for a {nbands}-band resistor.")

    learner["id"] = str(learner.get("id") or "anonymous")
    results["persist"] = bool(results.get("persist"))
    cfg["explain"] = bool(cfg.get("explain"))
    return cfg
