"""Monitor API routes."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel

from coinwatch.api.deps import get_watchlist
from coinwatch.config import AssetWatchConfig, get_settings

router = APIRouter()


class WatchedAsset(BaseModel):
    """A monitored asset and the state of its monitor."""

    name: str
    symbol: str
    threshold: float
    cycles: int = 0
    consecutive_failures: int = 0


class WatchlistResponse(BaseModel):
    """Configured assets and polling interval."""

    running: bool
    interval_seconds: int
    assets: List[WatchedAsset]


@router.get("/watchlist", response_model=WatchlistResponse)
def get_watchlist_status(
    request: Request,
    watchlist: List[AssetWatchConfig] = Depends(get_watchlist),
):
    """Get the monitored assets and per-monitor cycle counters."""
    supervisor = getattr(request.app.state, "supervisor", None)

    if supervisor is not None:
        assets = [
            WatchedAsset(
                name=m.asset.name,
                symbol=m.asset.symbol,
                threshold=float(m.asset.threshold),
                cycles=m.cycles,
                consecutive_failures=m.consecutive_failures,
            )
            for m in supervisor.monitors
        ]
    else:
        assets = [
            WatchedAsset(name=a.name, symbol=a.symbol, threshold=float(a.threshold))
            for a in watchlist
        ]

    return WatchlistResponse(
        running=bool(supervisor and supervisor.scheduler.running),
        interval_seconds=supervisor.interval if supervisor else get_settings().monitor_interval_seconds,
        assets=assets,
    )
