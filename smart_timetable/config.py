import json
import logging

logger = logging.getLogger(__name__)

CONFIG_FILE = "config.json"

DEFAULT_CONFIG = {
    "seed": None,                 # None -> unseeded shuffle
    "absorb_selection": True,     # auto-generate finalizes an in-progress selection
    "faculty_file": "data/faculty.csv",
    "snapshot_file": "timetable_snapshot.json",
    "output_file": "timetable.xlsx",
    "log_level": "INFO",
}


def load_config(path=CONFIG_FILE):
    """Load settings from config file, falling back to defaults for anything missing"""
    config = dict(DEFAULT_CONFIG)
    try:
        with open(path, "r") as f:
            loaded = json.load(f)
    except FileNotFoundError:
        return config
    except (OSError, json.JSONDecodeError) as e:
        logger.warning("Could not read %s, using defaults: %s", path, e)
        return config
    if not isinstance(loaded, dict):
        logger.warning("Ignoring %s: expected a JSON object", path)
        return config
    unknown = set(loaded) - set(DEFAULT_CONFIG)
    if unknown:
        logger.warning("Ignoring unknown config keys: %s", sorted(unknown))
    config.update({k: v for k, v in loaded.items() if k in DEFAULT_CONFIG})
    level = str(config["log_level"]).upper()
    if not isinstance(logging.getLevelName(level), int):
        logger.warning("Unknown log_level %r, using %s", config["log_level"], DEFAULT_CONFIG["log_level"])
        level = DEFAULT_CONFIG["log_level"]
    config["log_level"] = level
    return config
