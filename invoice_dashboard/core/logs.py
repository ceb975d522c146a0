# invoice_dashboard/core/logs.py

import logging
from typing import Optional

from invoice_dashboard.core.settings import get_settings

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(level: Optional[str] = None) -> None:
    """
    Install the root handler used by the API and the seeding scripts.

    Falls back to the LOG_LEVEL setting when no level is given.
    """
    level = level or get_settings().log_level

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
    )
