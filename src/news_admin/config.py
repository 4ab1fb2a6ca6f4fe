from __future__ import annotations

import json
import logging
import os
from datetime import datetime
from typing import Any, Dict, Optional

# --- Configuration ---
NEWS_API_URL = "http://127.0.0.1:8000/News/"
HTTP_TIMEOUT = 15
REVERSAL_DELAY = 2.0

CONFIG_PATH = os.path.expanduser("~/.config/news_admin/config.json")

REQUEST_HEADERS = {
    "User-Agent": "news-admin/0.1 (+textual)",
    "Accept": "application/json",
}
RETRY_TOTAL = 3
RETRY_BACKOFF_FACTOR = 0.3
RETRY_STATUS_FORCELIST = [429, 500, 502, 503, 504]

# Card images: the item's own url, then the bundled logo, then a remote placeholder.
DEFAULT_IMAGE_PATH = os.path.join(os.path.dirname(__file__), "assets", "rgukt_logo.png")
PLACEHOLDER_IMAGE_URL = "https://via.placeholder.com/150"

# Default UI settings
UI_DEFAULTS = {
    "statusbar_keybindings": "[b {color}]n[/] new news, [b {color}]tab[/] to move between cards",
}

DEFAULTS: Dict[str, Any] = {
    "api_url": NEWS_API_URL,
    "http_timeout": HTTP_TIMEOUT,
    "reversal_delay": REVERSAL_DELAY,
    "reverse_after_create": True,
    "theme": "dracula",
    "ui": dict(UI_DEFAULTS),
}

# --- Logging ---
LOG_DIR = "/tmp"
LOG_FORMAT = "%(asctime)s %(levelname)-7s %(threadName)s %(name)s: %(message)s"

logger = logging.getLogger("news_admin")


def setup_logging(debug: bool = False, log_dir: str = LOG_DIR) -> Optional[str]:
    """Route the news_admin logger to a per-run file when debugging.

    Nothing is written to stderr while the TUI owns the terminal. urllib3
    is capped at INFO.
    """
    if not debug:
        logging.basicConfig(level=logging.CRITICAL, handlers=[logging.NullHandler()])
        logger.setLevel(logging.CRITICAL)
        return None

    ts = datetime.now().strftime("%Y%m%dT%H%M%S")
    debug_path = os.path.join(log_dir, f"news_admin_{ts}_{os.getpid()}.log")

    handler = logging.FileHandler(debug_path, mode="a")
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    logging.getLogger("urllib3").setLevel(logging.INFO)

    logger.debug("Debug logging enabled to %s", debug_path)
    return debug_path


def load_config(path: str = CONFIG_PATH) -> Dict[str, Any]:
    """Load the config file on top of the defaults.

    A missing file is not an error; an unreadable one is logged and ignored.
    """
    config: Dict[str, Any] = {**DEFAULTS, "ui": dict(UI_DEFAULTS)}
    if not os.path.exists(path):
        logger.info("No config file at %s, using defaults.", path)
        return config
    try:
        with open(path, "r") as f:
            user_config = json.load(f)
    except (IOError, json.JSONDecodeError) as e:
        logger.error("Failed to load config from %s: %s", path, e)
        return config

    if not isinstance(user_config, dict):
        logger.error("Ignoring config at %s: top level must be an object", path)
        return config

    ui = user_config.pop("ui", None)
    config.update(user_config)
    if isinstance(ui, dict):
        config["ui"].update(ui)
    logger.info("Loaded config from %s", path)
    return config
