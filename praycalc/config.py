import copy
import json
import logging
import os

from .methods import TIME_NAMES

logger = logging.getLogger(__name__)

CONFIG_DIR = os.path.join(os.path.expanduser("~"), ".config", "praycalc")
CONFIG_PATH = os.path.join(CONFIG_DIR, "config.json")

DEFAULT_CONFIG = {
    "location": None,
    "locations": {},
    "method": "MWL",
    "asr": "Standard",
    "high_lats": "NightMiddle",
    "imsak_minutes": 10,
    "dhuhr_minutes": 0,
    "time_format": "24h",
    "offsets": {name: 0 for name in TIME_NAMES},
}


def load_config(path=CONFIG_PATH):
    config = copy.deepcopy(DEFAULT_CONFIG)
    if not os.path.exists(path):
        logger.info("Writing default config to %s", path)
        save_config(config, path)
        return config
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"Config must be a JSON object: {path}")
    offsets = {**config["offsets"], **data.get("offsets", {})}
    config.update(data)
    config["offsets"] = offsets
    return config


def save_config(config, path=CONFIG_PATH):
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(config, f, indent=2)
