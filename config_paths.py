import json
import logging
import os

logger = logging.getLogger(__name__)

HOME = os.path.expanduser("~")
XDG_CONFIG_HOME = os.environ.get("XDG_CONFIG_HOME")
CONFIG_HOME = XDG_CONFIG_HOME if XDG_CONFIG_HOME else os.path.join(HOME, ".config")
CONFIG_DIR = os.path.join(CONFIG_HOME, "rowfocus")
CONFIG_JSON = os.path.join(CONFIG_DIR, "config.json")

# default settings
ROW_HEIGHT_DEFAULT = 20
HEADER_HEIGHT_DEFAULT = 20
VIEWPORT_HEIGHT_DEFAULT = 400
PRELOAD_ROWS_DEFAULT = 25
STATUS_WIDTH_DEFAULT = 100

# json field -> (config key, minimum accepted value)
_FOCUS_FIELDS = {
    "row_height": ("ROW_HEIGHT", 1),
    "header_height": ("HEADER_HEIGHT", 0),
    "viewport_height": ("VIEWPORT_HEIGHT", 1),
    "preload_rows": ("PRELOAD_ROWS", 0),
    "status_width": ("STATUS_WIDTH", 1),
}


def load_config():
    cfg = {
        "ROW_HEIGHT": ROW_HEIGHT_DEFAULT,
        "HEADER_HEIGHT": HEADER_HEIGHT_DEFAULT,
        "VIEWPORT_HEIGHT": VIEWPORT_HEIGHT_DEFAULT,
        "PRELOAD_ROWS": PRELOAD_ROWS_DEFAULT,
        "STATUS_WIDTH": STATUS_WIDTH_DEFAULT,
    }

    if not os.path.exists(CONFIG_JSON):
        return cfg

    try:
        with open(CONFIG_JSON, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as exc:
        logger.warning("ignoring unreadable config %s: %s", CONFIG_JSON, exc)
        return cfg

    focus = data.get("focus") if isinstance(data, dict) else None
    if not isinstance(focus, dict):
        return cfg

    for name, (cfg_key, minimum) in _FOCUS_FIELDS.items():
        if name not in focus:
            continue
        value = focus[name]
        # bool is an int subclass; reject it explicitly
        if isinstance(value, bool) or not isinstance(value, int) or value < minimum:
            logger.warning("ignoring config focus.%s=%r", name, value)
            continue
        cfg[cfg_key] = value

    return cfg
