"""Alert notifiers for different channels."""

from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from typing import List, Optional

import requests
from rich.console import Console
from rich.panel import Panel

from coinwatch.config import Settings, get_settings
from .models import AlertEvent

logger = logging.getLogger(__name__)

# Retry configuration
MAX_RETRIES = 3
RETRY_DELAY_SECONDS = 2


class BaseNotifier(ABC):
    """Abstract base class for notifiers."""

    @abstractmethod
    def notify(self, event: AlertEvent) -> bool:
        """Deliver an alert event.

        Returns:
            True if the notification was sent successfully
        """
        ...


class ConsoleNotifier(BaseNotifier):
    """Console-based notifier using Rich for formatting."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def notify(self, event: AlertEvent) -> bool:
        timestamp = event.triggered_at.strftime("%Y-%m-%d %H:%M:%S UTC")

        content = f"[bold cyan]{event.symbol}[/bold cyan]\n"
        content += f"[dim]{timestamp}[/dim]\n\n"
        content += event.message

        self.console.print(
            Panel(
                content,
                title="[bold red]PRICE ALERT[/bold red]",
                border_style="red",
            )
        )
        return True


class TelegramNotifier(BaseNotifier):
    """Telegram-based notifier using Bot API."""

    TELEGRAM_API_URL = "https://api.telegram.org/bot{token}/sendMessage"

    def __init__(self, bot_token: str, chat_id: str):
        """Initialize Telegram notifier.

        Args:
            bot_token: Telegram bot token from @BotFather
            chat_id: Chat ID to send messages to
        """
        self.bot_token = bot_token
        self.chat_id = chat_id

    def notify(self, event: AlertEvent) -> bool:
        """Send alert via Telegram, retrying server errors and transport failures."""
        message = f"<b>[ALERT] {event.symbol}</b>\n\n{event.message}"

        for attempt in range(MAX_RETRIES):
            try:
                response = requests.post(
                    self.TELEGRAM_API_URL.format(token=self.bot_token),
                    json={
                        "chat_id": self.chat_id,
                        "text": message,
                        "parse_mode": "HTML",
                    },
                    timeout=15,
                )

                if response.status_code == 200:
                    logger.debug(f"Telegram notification sent for {event.symbol}")
                    return True
                elif response.status_code < 500:
                    # Client error - don't retry
                    logger.error(f"Telegram API error: {response.status_code} - {response.text}")
                    return False

                logger.warning(
                    f"Telegram server error (attempt {attempt + 1}/{MAX_RETRIES}): "
                    f"{response.status_code}"
                )
            except requests.RequestException as e:
                logger.warning(
                    f"Telegram request failed (attempt {attempt + 1}/{MAX_RETRIES}): {e}"
                )

            if attempt < MAX_RETRIES - 1:
                time.sleep(RETRY_DELAY_SECONDS * (attempt + 1))

        logger.error(f"Telegram notification failed after {MAX_RETRIES} attempts for {event.symbol}")
        return False


class MultiNotifier(BaseNotifier):
    """Notifier that sends to multiple channels."""

    def __init__(self, notifiers: List[BaseNotifier]):
        self.notifiers = notifiers

    def notify(self, event: AlertEvent) -> bool:
        """Send alert to all configured notifiers.

        Returns:
            True if at least one notifier succeeded
        """
        results = []
        for notifier in self.notifiers:
            try:
                results.append(notifier.notify(event))
            except Exception as e:
                logger.error(f"Notifier {type(notifier).__name__} failed: {e}")
                results.append(False)

        return any(results)


def build_notifier(settings: Optional[Settings] = None) -> Optional[BaseNotifier]:
    """Build the notifier for the channels enabled in settings.

    Returns:
        A single notifier, a MultiNotifier, or None when every channel is off
    """
    settings = settings or get_settings()
    notifiers: List[BaseNotifier] = []

    if settings.console_alerts:
        notifiers.append(console_notifier)

    if settings.telegram_bot_token and settings.telegram_chat_id:
        notifiers.append(TelegramNotifier(settings.telegram_bot_token, settings.telegram_chat_id))
        logger.debug("Telegram notifier enabled")
    elif settings.telegram_bot_token or settings.telegram_chat_id:
        logger.warning("Telegram partially configured (missing token or chat_id)")

    if not notifiers:
        return None
    if len(notifiers) == 1:
        return notifiers[0]
    return MultiNotifier(notifiers)


# Singleton instance for convenience
console_notifier = ConsoleNotifier()
