"""Configuration loading from a YAML file."""

import copy
import logging
from pathlib import Path
from typing import Optional

import yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = {
    "quiz": {
        "question_bank": "data/questions.json",
        "mode": "daily",
        "count": None,
        "time_budget": 20.0,
        "tick_interval": 0.1,
    },
    "logging": {
        "level": "WARNING",
    },
}


def load_config(path: Optional[str] = None) -> dict:
    """Load ``path`` over the defaults. A missing file gives the defaults."""
    config = copy.deepcopy(DEFAULT_CONFIG)
    if not path:
        return config

    config_path = Path(path)
    if not config_path.exists():
        logger.debug(f"No config file at {config_path}; using defaults")
        return config

    with open(config_path, encoding="utf-8") as f:
        loaded = yaml.safe_load(f) or {}
    if not isinstance(loaded, dict):
        raise ValueError(f"Config file {config_path} must contain a mapping")

    for section, values in loaded.items():
        if isinstance(values, dict) and isinstance(config.get(section), dict):
            config[section].update(values)
        else:
            config[section] = values
    return config
