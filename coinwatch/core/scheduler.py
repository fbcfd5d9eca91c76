"""Supervisor that schedules one polling job per monitored asset."""

from __future__ import annotations

import logging
import signal
import sys
from datetime import datetime
from typing import List, Optional

from apscheduler.executors.pool import ThreadPoolExecutor
from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.schedulers.base import BaseScheduler
from apscheduler.schedulers.blocking import BlockingScheduler
from apscheduler.triggers.interval import IntervalTrigger

from coinwatch.config import AssetWatchConfig, get_settings
from coinwatch.core.alerts.notifier import BaseNotifier
from coinwatch.data.market.provider import MarketDataProvider
from .monitor import AssetMonitor

logger = logging.getLogger(__name__)
settings = get_settings()


class MonitorSupervisor:
    """Owns the lifecycle of every AssetMonitor.

    Each monitor gets its own interval job on a thread pool sized to the
    number of assets, so all assets poll concurrently and independently.

    The interval runs from the start of one poll to the start of the next.
    A poll still running when its next run is due makes that run skipped
    (``max_instances=1``), and polling resumes at the following tick.
    """

    def __init__(
        self,
        assets: List[AssetWatchConfig],
        interval_seconds: Optional[int] = None,
        price_source: Optional[MarketDataProvider] = None,
        notifier: Optional[BaseNotifier] = None,
        scheduler: Optional[BaseScheduler] = None,
        blocking: bool = True,
    ):
        """Initialize the supervisor.

        Args:
            assets: Assets to monitor, one job each
            interval_seconds: Seconds between polls (defaults to settings)
            price_source: Market data provider shared by all monitors
            notifier: Alert delivery shared by all monitors
            scheduler: Scheduler to use (built from ``blocking`` if omitted)
            blocking: Whether ``start`` blocks the calling thread
        """
        self.interval = interval_seconds or settings.monitor_interval_seconds
        self.blocking = blocking
        self.monitors = [
            AssetMonitor(asset, price_source=price_source, notifier=notifier)
            for asset in assets
        ]
        if scheduler is None:
            executors = {"default": ThreadPoolExecutor(max_workers=max(1, len(self.monitors)))}
            scheduler_cls = BlockingScheduler if blocking else BackgroundScheduler
            scheduler = scheduler_cls(executors=executors)
        self.scheduler = scheduler
        self._shutdown_requested = False

    def schedule(self) -> None:
        """Register one polling job per monitor, each due immediately."""
        now = datetime.now()
        for index, monitor in enumerate(self.monitors):
            self.scheduler.add_job(
                monitor.poll_once,
                trigger=IntervalTrigger(seconds=self.interval),
                id=f"monitor_{index}_{monitor.asset.symbol}",
                name=f"{monitor.asset.name} Monitor",
                next_run_time=now,
                max_instances=1,
                coalesce=True,
                replace_existing=True,
            )

    def _handle_signal(self, signum, frame) -> None:
        """Handle shutdown signals gracefully."""
        if self._shutdown_requested:
            logger.warning("Received second shutdown signal, forcing exit...")
            sys.exit(1)

        logger.info("Received shutdown signal, stopping monitors...")
        self._shutdown_requested = True
        self.stop()

    def start(self) -> None:
        """Start every monitor.

        In blocking mode this returns only once the scheduler is shut down.
        """
        if not self.monitors:
            logger.warning("No assets configured, nothing to monitor")
            return

        if self.blocking:
            signal.signal(signal.SIGINT, self._handle_signal)
            signal.signal(signal.SIGTERM, self._handle_signal)

        self.schedule()
        symbols = ", ".join(m.asset.symbol for m in self.monitors)
        logger.info(f"Monitoring {len(self.monitors)} asset(s) every {self.interval}s: {symbols}")

        try:
            self.scheduler.start()
        except (KeyboardInterrupt, SystemExit):
            pass  # Expected on shutdown
        finally:
            if self.blocking:
                logger.info("Monitors stopped")

    def stop(self) -> None:
        """Stop all monitors."""
        if self.scheduler.running:
            self.scheduler.shutdown(wait=False)
            logger.info("Monitor shutdown complete")


def start_monitors(
    assets: List[AssetWatchConfig],
    interval_seconds: Optional[int] = None,
    notifier: Optional[BaseNotifier] = None,
) -> None:
    """Monitor the given assets until the process is stopped (convenience function)."""
    supervisor = MonitorSupervisor(
        assets,
        interval_seconds=interval_seconds,
        notifier=notifier,
    )
    supervisor.start()
