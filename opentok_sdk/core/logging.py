import logging
from typing import Optional

from opentok_sdk.core.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

def setup_logging(level: Optional[str] = None) -> None:
    """Configure root logging for scripts and host applications.

    The library itself only creates module loggers; it never configures
    handlers on import.
    """
    level_name = (level or settings.LOG_LEVEL).upper()
    logging.basicConfig(level=getattr(logging, level_name, logging.INFO), format=LOG_FORMAT)
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
