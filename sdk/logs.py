# sdk/logs.py
import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

from sdk.config import settings


def setup_logging(level: Optional[str] = None, console: Optional[Console] = None) -> None:
    handler = RichHandler(console=console, rich_tracebacks=True, show_path=False)
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel((level or settings.log_level).upper())

    # keep request-level chatter out of the storefront output
    logging.getLogger("httpx").setLevel(logging.WARNING)
