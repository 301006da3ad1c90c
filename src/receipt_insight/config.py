"""
Default settings and logging setup for the receipt insight library.
"""

import logging
from typing import Optional

# Two-digit years below this value belong to the 2000s, the rest to the 1900s
CENTURY_THRESHOLD = 50

# Ambiguous day/month readings must fall within this many days of "now"
PLAUSIBILITY_WINDOW_DAYS = 365

DEFAULT_DATE_FORMAT = "dd/MM/yyyy"
UNKNOWN_DATE = "Unknown Date"

# Relative weight of each classification signal channel
SIGNAL_WEIGHTS = {
    'merchant': 0.5,
    'items': 0.3,
    'context': 0.2,
}

MAX_ALTERNATIVES = 3

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def configure_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> None:
    """Configure root logging for applications embedding the library.

    Args:
        level: Logging level for the root logger
        log_file: Optional path of a log file written alongside the console
    """
    handlers = [logging.StreamHandler()]
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=handlers
    )
