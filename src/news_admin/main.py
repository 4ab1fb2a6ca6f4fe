#!/usr/bin/env python3
# -*- coding: utf-8 -*-
from __future__ import annotations

import argparse
import logging
import sys

from .app import NewsAdminApp
from .config import load_config, setup_logging

logger = logging.getLogger("news_admin")


# --- Entrypoint ---
def main() -> None:
    parser = argparse.ArgumentParser(description="News administration panel")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    parser.add_argument("--theme", type=str, help="Set theme for this run")
    parser.add_argument(
        "--api-url", type=str, help="Base URL of the news resource for this run"
    )
    args = parser.parse_args()

    debug_path = setup_logging(args.debug)
    if debug_path:
        print(f"Debug logging enabled: {debug_path}", file=sys.stderr)

    config = load_config()
    if args.api_url:
        config["api_url"] = args.api_url
    logger.info("Managing news at %s", config["api_url"])

    try:
        app = NewsAdminApp(config=config, theme=args.theme)
        app.run()
    except Exception as e:
        logger.exception("Application crashed: %s", e)
        print(f"Application crashed: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
