"""Notification sinks for triggered alerts."""

from stockscope.notifications.base import (
    NotificationSink,
    LoggingNotificationSink,
    CompositeNotificationSink,
)
from stockscope.notifications.webhook import WebhookNotificationSink

__all__ = [
    "NotificationSink",
    "LoggingNotificationSink",
    "CompositeNotificationSink",
    "WebhookNotificationSink",
]
