"""Tests for alert notifiers."""

from decimal import Decimal
from unittest.mock import MagicMock, Mock, patch

import requests

from coinwatch.config import Settings
from coinwatch.core.alerts.models import AlertEvent
from coinwatch.core.alerts.notifier import (
    ConsoleNotifier,
    MultiNotifier,
    TelegramNotifier,
    build_notifier,
)

EVENT = AlertEvent(
    asset_name="Bitcoin",
    symbol="BTC",
    current_price=Decimal("51000"),
    threshold=Decimal("50000"),
)


class TestTelegramNotifier:
    """Tests for TelegramNotifier."""

    def test_sends_message(self):
        notifier = TelegramNotifier("token", "chat")
        response = MagicMock(status_code=200)

        with patch("coinwatch.core.alerts.notifier.requests.post", return_value=response) as mock_post:
            assert notifier.notify(EVENT) is True

        payload = mock_post.call_args.kwargs["json"]
        assert payload["chat_id"] == "chat"
        assert EVENT.message in payload["text"]

    def test_client_error_is_not_retried(self):
        notifier = TelegramNotifier("token", "chat")
        response = MagicMock(status_code=400, text="Bad Request")

        with patch("coinwatch.core.alerts.notifier.requests.post", return_value=response) as mock_post:
            assert notifier.notify(EVENT) is False

        assert mock_post.call_count == 1

    def test_transport_errors_are_retried(self):
        notifier = TelegramNotifier("token", "chat")

        with patch(
            "coinwatch.core.alerts.notifier.requests.post",
            side_effect=requests.ConnectionError("down"),
        ) as mock_post, patch("coinwatch.core.alerts.notifier.time.sleep"):
            assert notifier.notify(EVENT) is False

        assert mock_post.call_count == 3


class TestMultiNotifier:
    """Tests for MultiNotifier."""

    def test_succeeds_if_any_channel_succeeds(self):
        failing = Mock()
        failing.notify.side_effect = RuntimeError("boom")
        working = Mock()
        working.notify.return_value = True

        assert MultiNotifier([failing, working]).notify(EVENT) is True
        working.notify.assert_called_once_with(EVENT)


class TestBuildNotifier:
    """Tests for build_notifier."""

    def test_console_only(self):
        notifier = build_notifier(Settings(console_alerts=True, telegram_bot_token="", telegram_chat_id=""))
        assert isinstance(notifier, ConsoleNotifier)

    def test_console_and_telegram(self):
        notifier = build_notifier(Settings(console_alerts=True, telegram_bot_token="t", telegram_chat_id="c"))
        assert isinstance(notifier, MultiNotifier)
        assert len(notifier.notifiers) == 2

    def test_all_channels_disabled(self):
        notifier = build_notifier(Settings(console_alerts=False, telegram_bot_token="", telegram_chat_id=""))
        assert notifier is None
