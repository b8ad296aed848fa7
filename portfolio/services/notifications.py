import asyncio
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Optional, Protocol

from ..core.dom import Element


logger = logging.getLogger(__name__)

INFO = "info"
SUCCESS = "success"
ERROR = "error"

KIND_COLORS = {
    SUCCESS: "#10b981",
    ERROR: "#ef4444",
    INFO: "#6366f1",
}

DISPLAY_SECONDS = 4.0
EXIT_SECONDS = 0.3


class Scheduler(Protocol):
    def call_later(self, delay: float, callback: Callable[[], Any]) -> Any: ...


class AsyncioScheduler:
    """Schedules on the running event loop; handles are never tracked or joined."""

    def call_later(self, delay: float, callback: Callable[[], Any]) -> Optional[asyncio.TimerHandle]:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.warning(f"No running event loop, dropping timer scheduled in {delay}s")
            return None
        return loop.call_later(delay, callback)


@dataclass(frozen=True)
class Notification:
    message: str
    kind: str = INFO
    created_at: datetime = field(default_factory=datetime.now)


def _notification_style(kind: str) -> dict:
    return {
        "position": "fixed",
        "bottom": "30px",
        "right": "30px",
        "padding": "16px 24px",
        "background": KIND_COLORS.get(kind, KIND_COLORS[INFO]),
        "color": "white",
        "border-radius": "12px",
        "font-weight": "500",
        "box-shadow": "0 10px 40px rgba(0, 0, 0, 0.3)",
        "z-index": "10000",
        "animation": "slideIn 0.3s ease",
        "max-width": "350px",
    }


class NotificationCenter:
    """Shows one transient status message at a time.

    A new notification immediately removes the one on display (no exit
    animation for it). Every notification schedules its own exit at
    ``DISPLAY_SECONDS`` and its removal ``EXIT_SECONDS`` later; those timers
    only ever act on their own element.
    """

    def __init__(self, body: Element, scheduler: Optional[Scheduler] = None):
        self.body = body
        self.scheduler = scheduler or AsyncioScheduler()
        self.current: Optional[Notification] = None
        self._current_element: Optional[Element] = None

    def notify(self, message: str, kind: str = INFO) -> None:
        try:
            self._show(Notification(message=message, kind=kind or INFO))
        except Exception as e:
            logger.error(f"Failed to display notification: {str(e)}", exc_info=True)

    def visible(self) -> Optional[Element]:
        """Return the notification element currently attached to ``body``."""
        for child in self.body.children:
            if child.has_class("notification"):
                return child
        return None

    def _show(self, notification: Notification) -> None:
        existing = self.visible()
        if existing is not None:
            existing.remove()

        element = Element(
            "div",
            classes=["notification", f"notification-{notification.kind}"],
            text=notification.message,
            style=_notification_style(notification.kind),
        )
        self.body.append(element)
        self.current = notification
        self._current_element = element

        self.scheduler.call_later(DISPLAY_SECONDS, lambda: self._begin_exit(element))
        self.scheduler.call_later(DISPLAY_SECONDS + EXIT_SECONDS, lambda: self._dismiss(element))

    @staticmethod
    def _begin_exit(element: Element) -> None:
        element.style["animation"] = "slideOut 0.3s ease forwards"

    def _dismiss(self, element: Element) -> None:
        element.remove()
        if self._current_element is element:
            self.current = None
            self._current_element = None
