"""Notification sink protocol and in-process sinks."""

import logging
from typing import Protocol, Sequence

logger = logging.getLogger(__name__)


class NotificationSink(Protocol):
    """
    Destination for user notifications.

    Delivery is fire-and-forget and best-effort: implementations should not
    raise, and callers never retry.
    """

    async def notify(self, title: str, body: str) -> None:
        ...


class LoggingNotificationSink:
    """Writes notifications to the application log."""

    async def notify(self, title: str, body: str) -> None:
        logger.info("NOTIFY %s | %s", title, body)


class CompositeNotificationSink:
    """Fans a notification out to several sinks; one failing sink does not stop the rest."""

    def __init__(self, sinks: Sequence[NotificationSink]):
        self._sinks = list(sinks)

    async def notify(self, title: str, body: str) -> None:
        for sink in self._sinks:
            try:
                await sink.notify(title, body)
            except Exception:
                logger.exception("Notification sink %s failed", type(sink).__name__)

    async def aclose(self) -> None:
        for sink in self._sinks:
            close = getattr(sink, "aclose", None)
            if close is not None:
                await close()
