from __future__ import annotations

import logging
import sys

from pythonjsonlogger import jsonlogger

from storefront.config import settings

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def configure_logging() -> None:
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, settings.log_level.upper(), logging.INFO))
    root_logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    if settings.log_json:
        handler.setFormatter(jsonlogger.JsonFormatter(LOG_FORMAT))
    else:
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt='%Y-%m-%d %H:%M:%S'))
    root_logger.addHandler(handler)

    # SQL echo is controlled by the engine, not by the root level.
    logging.getLogger('sqlalchemy.engine').setLevel(logging.WARNING)
