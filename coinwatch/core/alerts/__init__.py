"""Alert events and delivery."""

from .models import AlertEvent
from .notifier import (
    BaseNotifier,
    ConsoleNotifier,
    MultiNotifier,
    TelegramNotifier,
    build_notifier,
    console_notifier,
)

__all__ = [
    "AlertEvent",
    "BaseNotifier",
    "ConsoleNotifier",
    "MultiNotifier",
    "TelegramNotifier",
    "build_notifier",
    "console_notifier",
]
