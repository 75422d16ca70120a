"""
YAML → host config loader.

Reads optional user overrides from ~/.meso-scheduler/config.yaml (or
$MESO_SCHEDULER_HOME/config.yaml) and merges them over built-in defaults.

Usage:
    from meso_scheduler.core.engine.config_loader import load_host_config
    cfg = load_host_config()
    rounding = cfg["warmup"]["rounding"]

If the override file has parse errors it is ignored and the defaults are
returned (no crash).  Individual override values of the wrong type (a
bare ``warmup:`` key, ``cranky_joint: 'false'``, ``week: two``) are
dropped and the default for that key is kept.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import yaml

from ..config import DEFAULT_ANCHOR_DAY, DEFAULT_ANCHOR_WEEK, DEFAULT_ROUNDING

logger = logging.getLogger(__name__)

DEFAULT_HOST_CONFIG: dict[str, Any] = {
    "anchor": {"week": DEFAULT_ANCHOR_WEEK, "day": DEFAULT_ANCHOR_DAY},
    "warmup": {"rounding": DEFAULT_ROUNDING, "cranky_joint": False},
}

# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _load_yaml_file(path: Path) -> dict[str, Any]:
    """Load a single YAML file; return {} on any read or parse error."""
    try:
        with open(path, "r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh)
    except (OSError, yaml.YAMLError) as e:
        logger.debug("Ignoring config file %s: %s", path, e)
        return {}
    return data if isinstance(data, dict) else {}


def _same_kind(default: Any, value: Any) -> bool:
    """True if an override value can stand in for the default."""
    if isinstance(default, dict):
        return isinstance(value, dict)
    if isinstance(default, bool):
        return isinstance(value, bool)
    if isinstance(default, int):
        # bool is an int subclass; `week: true` is not a week
        return isinstance(value, int) and not isinstance(value, bool)
    if isinstance(default, str):
        return isinstance(value, str)
    return True


def _deep_merge(base: dict, override: dict) -> dict:
    """
    Recursively merge *override* into *base* (non-destructive to base).

    Keys already in *base* only accept values of the same kind; mismatches
    are logged and skipped.
    """
    result = dict(base)
    for k, v in override.items():
        if k in result and not _same_kind(result[k], v):
            logger.debug("Ignoring config override %s=%r", k, v)
            continue
        if isinstance(v, dict) and isinstance(result.get(k), dict):
            result[k] = _deep_merge(result[k], v)
        else:
            result[k] = v
    return result


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def get_home_dir() -> Path:
    """
    Get the meso-scheduler data directory.

    Honors MESO_SCHEDULER_HOME, otherwise ~/.meso-scheduler.
    """
    override = os.environ.get("MESO_SCHEDULER_HOME")
    if override:
        return Path(override).expanduser()
    return Path.home() / ".meso-scheduler"


def get_user_config_path() -> Path | None:
    """Return the user config.yaml if it exists, else None."""
    p = get_home_dir() / "config.yaml"
    return p if p.exists() else None


def load_host_config(path: Path | None = None) -> dict[str, Any]:
    """
    Load host configuration.

    Load order (later overrides earlier):
    1. DEFAULT_HOST_CONFIG
    2. `path`, or the user config.yaml when `path` is None

    Returns:
        Merged dict of config sections.
    """
    config = _deep_merge({}, DEFAULT_HOST_CONFIG)

    source = path if path is not None else get_user_config_path()
    if source is not None and source.exists():
        config = _deep_merge(config, _load_yaml_file(source))

    return config
