# sdk/notifications.py
import logging
from enum import Enum
from typing import Optional, Protocol

from rich.console import Console
from rich.panel import Panel

logger = logging.getLogger(__name__)


class NotificationLevel(str, Enum):
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


class NotificationSink(Protocol):
    def __call__(self, message: str, level: NotificationLevel) -> None: ...


class Notifier:
    """Fire-and-forget front for a notification sink.

    ``notify`` never returns a value and never raises: a broken sink is
    logged and otherwise ignored so it cannot disturb the caller.
    """

    def __init__(self, sink: NotificationSink):
        self._sink = sink

    def notify(self, message: str, level: NotificationLevel) -> None:
        try:
            self._sink(message, level)
        except Exception:
            logger.exception("notification sink failed (%s: %s)", level.value, message)


_LEVEL_STYLE = {
    NotificationLevel.SUCCESS: ("green", "✅ Success"),
    NotificationLevel.WARNING: ("yellow", "⚠️ Warning"),
    NotificationLevel.ERROR: ("red", "❌ Error"),
}


class ConsoleSink:
    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def __call__(self, message: str, level: NotificationLevel) -> None:
        style, title = _LEVEL_STYLE[level]
        self.console.print(Panel.fit(f"[{style}]{message}[/{style}]", title=title, border_style=style))
