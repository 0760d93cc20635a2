#!/usr/bin/env python3
"""Entry point for running the RPSLS server.

Run with: python -m rpsls.game_server
Or via the installed script: rpsls-server
"""

import logging
import sys

import uvicorn
from dotenv import load_dotenv
from loguru import logger

from rpsls.game_server.server import create_app
from rpsls.utils.config import load_settings


def main() -> None:
    load_dotenv()
    settings = load_settings()

    logger.remove()
    logger.add(sys.stderr, level=settings.log_level)
    logging.basicConfig(level=settings.log_level)

    app = create_app(settings)
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
