from __future__ import annotations

import logging
from typing import Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(level: Optional[str] = None) -> None:
    """Configure root logging once for the CLI or an embedding application."""
    from .config import get_settings

    level_name = (level or get_settings().log_level or "INFO").upper()
    log_level = getattr(logging, level_name, logging.INFO)

    logging.basicConfig(level=log_level, format=LOG_FORMAT)
    # httpx logs every request at INFO; keep it quiet unless debugging.
    logging.getLogger("httpx").setLevel(max(log_level, logging.WARNING))
    logging.getLogger(__name__).debug("Logging configured, level=%s", level_name)
