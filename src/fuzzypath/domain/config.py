from __future__ import annotations

"""
Configuration Domain Management.

Handles persistent storage of search preferences using JSON inside the user
data directory. Unknown or missing keys fall back to defaults so older files
keep loading.
"""

import json
import logging
import os
from typing import Any, Dict

from fuzzypath.domain.constants import (
    CURRENT_CONFIG_VERSION,
    DEFAULT_BRANCHING_CAP,
    DEFAULT_MAX_RESULTS,
)
from fuzzypath.infra.fs import get_user_data_dir

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = "config.json"


# -----------------------------------------------------------------------------
# Configuration Models (Dict-based)
# -----------------------------------------------------------------------------
def get_default_config() -> Dict[str, Any]:
    """
    Generate the default search configuration.

    Returns:
        Dict[str, Any]: Default configuration values.
    """
    return {
        # Traversal
        "start_path": os.getcwd(),
        "max_results": DEFAULT_MAX_RESULTS,
        "branching_cap": DEFAULT_BRANCHING_CAP,

        # Execution
        "max_workers": 1,
        "timeout": 0.0,

        # Output
        "sort_results": False,
        "show_weights": False,

        # Diagnostics
        "log_level": "WARNING",
    }


def get_config_file() -> str:
    """Absolute path of the persisted configuration file."""
    return os.path.join(get_user_data_dir(), CONFIG_FILE_NAME)


# -----------------------------------------------------------------------------
# Persistence Logic
# -----------------------------------------------------------------------------
def load_config() -> Dict[str, Any]:
    """
    Load the saved configuration merged over the defaults.

    The working directory is never restored from disk: relative queries
    always start where the command runs.

    Returns:
        Dict[str, Any]: The loaded configuration or defaults on failure.
    """
    config = get_default_config()
    config_file = get_config_file()

    if not os.path.exists(config_file):
        logger.debug("Config file not found. Returning defaults.")
        return config

    try:
        with open(config_file, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.error(f"Failed to load config: {e}. Using defaults.")
        return config

    if not isinstance(data, dict) or not isinstance(data.get("settings"), dict):
        logger.warning("Corrupted config file. Using defaults.")
        return config

    settings = {k: v for k, v in data["settings"].items() if k in config and k != "start_path"}
    config.update(settings)
    return config


def save_config(config: Dict[str, Any]) -> bool:
    """
    Persist the configuration to disk.

    Args:
        config: Validated configuration dictionary.

    Returns:
        bool: True if the file was written.
    """
    config_file = get_config_file()
    defaults = get_default_config()
    settings = {k: v for k, v in config.items() if k in defaults and k != "start_path"}

    try:
        os.makedirs(os.path.dirname(config_file), exist_ok=True)
        with open(config_file, "w", encoding="utf-8") as f:
            json.dump({"version": CURRENT_CONFIG_VERSION, "settings": settings}, f,
                      ensure_ascii=False, indent=4)
        logger.debug(f"Configuration saved to {config_file}")
        return True
    except OSError as e:
        logger.error(f"Failed to save configuration: {e}")
        return False
