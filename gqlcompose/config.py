"""Runtime configuration for gqlcompose - centralized configuration management."""

import copy
import json
import os
from pathlib import Path
from typing import Any

from gqlcompose.utils.constants import CONFIG_FILE_NAME, DEFAULT_SCHEMA_EXTENSIONS, ENV_PREFIX
from gqlcompose.utils.logging import logger

DEFAULTS = {
    "discovery": {
        "extensions": list(DEFAULT_SCHEMA_EXTENSIONS),
        "follow_symlinks": False,
        "max_workers": 8,
        "encoding": "utf-8",
    },
    "watch": {
        "debounce_seconds": 0.2,
    },
}

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def _coerce(value: str, default_value: Any) -> Any:
    """Convert an environment string to the type of the default it replaces."""
    if isinstance(default_value, bool):
        lowered = value.strip().lower()
        if lowered in _TRUE_VALUES:
            return True
        if lowered in _FALSE_VALUES:
            return False
        raise ValueError(f"expected a boolean, got {value!r}")
    if isinstance(default_value, int):
        return int(value)
    if isinstance(default_value, float):
        return float(value)
    if isinstance(default_value, list):
        return [v.strip() for v in value.split(",") if v.strip()]
    return value


def _accepts(default_value: Any, value: Any) -> bool:
    if isinstance(default_value, bool):
        return isinstance(value, bool)
    if isinstance(default_value, float):
        return isinstance(value, (int, float)) and not isinstance(value, bool)
    return isinstance(value, type(default_value)) and not (
        isinstance(value, bool) and not isinstance(default_value, bool)
    )


def load_runtime_config(root: str = ".") -> dict[str, Any]:
    """
    Load runtime configuration from .gqlcompose.json and environment variables.

    Config priority (highest to lowest):
    1. Environment variables (GQLCOMPOSE_<SECTION>_<KEY>)
    2. .gqlcompose.json in ``root``
    3. Built-in defaults

    Unknown keys and values of the wrong type are ignored.

    Args:
        root: Directory to look for the config file in

    Returns:
        Configuration dictionary with merged values
    """
    cfg = copy.deepcopy(DEFAULTS)

    path = Path(root) / CONFIG_FILE_NAME
    try:
        if path.exists():
            with open(path, encoding="utf-8") as f:
                user = json.load(f)

            if isinstance(user, dict):
                for section in cfg:
                    if section in user and isinstance(user[section], dict):
                        for key, value in user[section].items():
                            if key in cfg[section] and _accepts(cfg[section][key], value):
                                cfg[section][key] = value
    except (json.JSONDecodeError, OSError) as e:
        logger.warning(f"Could not load config file from {path}: {e}")
        logger.info("Continuing with default configuration")

    for section in cfg:
        for key in cfg[section]:
            env_var = f"{ENV_PREFIX}_{section.upper()}_{key.upper()}"
            if env_var in os.environ:
                value = os.environ[env_var]
                try:
                    cfg[section][key] = _coerce(value, cfg[section][key])
                except ValueError as e:
                    logger.warning(f"Invalid value for environment variable {env_var}: '{value}' - {e}")
                    logger.info(f"Using default value: {cfg[section][key]}")

    return cfg
