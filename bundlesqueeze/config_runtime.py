"""Runtime configuration for bundlesqueeze - centralized configuration management."""

import copy
import json
import os
from pathlib import Path
from typing import Any

from bundlesqueeze.utils.constants import (
    CONFIG_FILE_NAME,
    DATA_JSON_NAME,
    ENV_PREFIX,
    REPORT_HTML_NAME,
    SQUEEZE_DIR,
)
from bundlesqueeze.utils.logging import logger

DEFAULTS = {
    "paths": {
        "data_json": f"./{DATA_JSON_NAME}",
        "report_html": f"./{REPORT_HTML_NAME}",
        "report_dir": "./",
    },
    "limits": {
        "tree_depth": 2,
        "max_children": 25,
        "max_entries": 50,
    },
    "report": {
        "size_unit": "KB",
        "size_decimals": 2,
        "ignore": [],
    },
}


def load_runtime_config(root: str = ".") -> dict[str, Any]:
    """
    Load runtime configuration from .squeeze/config.json and environment variables.

    Config priority (highest to lowest):
    1. Environment variables (BUNDLESQUEEZE_<SECTION>_<KEY>)
    2. .squeeze/config.json file
    3. Built-in defaults

    Values whose type does not match the default are ignored.

    Args:
        root: Root directory to look for config file

    Returns:
        Configuration dictionary with merged values
    """
    cfg = copy.deepcopy(DEFAULTS)

    path = Path(root) / SQUEEZE_DIR / CONFIG_FILE_NAME
    try:
        if path.exists():
            with open(path, encoding="utf-8") as f:
                user = json.load(f)

            if isinstance(user, dict):
                for section in cfg:
                    if section in user and isinstance(user[section], dict):
                        for key, value in user[section].items():
                            if key in cfg[section] and isinstance(value, type(cfg[section][key])):
                                cfg[section][key] = value
    except (json.JSONDecodeError, OSError) as e:
        logger.warning(f"Could not load config file from {path}: {e}")
        logger.warning("Continuing with default configuration")

    for section in cfg:
        for key in cfg[section]:
            env_var = f"{ENV_PREFIX}_{section.upper()}_{key.upper()}"
            if env_var not in os.environ:
                continue
            value = os.environ[env_var]
            default_value = cfg[section][key]
            try:
                if isinstance(default_value, bool):
                    cfg[section][key] = value.lower() in ("1", "true", "yes")
                elif isinstance(default_value, int):
                    cfg[section][key] = int(value)
                elif isinstance(default_value, float):
                    cfg[section][key] = float(value)
                elif isinstance(default_value, list):
                    cfg[section][key] = [v.strip() for v in value.split(",") if v.strip()]
                else:
                    cfg[section][key] = value
            except ValueError:
                logger.warning(f"Ignoring {env_var}={value!r}: expected {type(default_value).__name__}")

    return cfg
