import copy
import logging
import os
import sys
from typing import Any

import yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG: dict[str, Any] = {
    "logging": {
        "level": "INFO",
        "format": "%(asctime)s %(levelname)s %(name)s: %(message)s",
        "datefmt": "%Y-%m-%d %H:%M:%S",
    },
    "stats": {
        "expand": False,
        "color": True,
        "pattern": "*.po*",
    },
}


def merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(config_folder: str) -> dict[str, Any]:
    config_file_path = os.path.abspath(f"{config_folder}/config.yml")

    config: dict[str, Any] = {}
    try:
        with open(config_file_path, "r") as file:
            config = yaml.safe_load(file) or {}
    except FileNotFoundError:
        logger.warning(f"File not found: {config_file_path}, using defaults.")
    except yaml.YAMLError as exc:
        logger.error(sys._getframe().f_code.co_name + " " + str(exc))
        sys.exit(1)

    return merge(DEFAULT_CONFIG, config)


def setup_logging(config: dict[str, Any]) -> None:
    logging.basicConfig(
        level=logging.getLevelName(config["logging"]["level"]),
        format=config["logging"]["format"],
        datefmt=config["logging"]["datefmt"],
    )
