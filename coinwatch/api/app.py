"""FastAPI application setup."""

import logging

from fastapi import FastAPI

from coinwatch.api.routes import monitor, portfolio
from coinwatch.config import (
    PRODUCT_DESCRIPTION,
    PRODUCT_NAME,
    PRODUCT_TAGLINE,
    PRODUCT_VERSION,
    get_settings,
    load_watchlist,
)
from coinwatch.core.alerts.notifier import build_notifier
from coinwatch.core.scheduler import MonitorSupervisor
from coinwatch.db.database import init_db

logger = logging.getLogger(__name__)
settings = get_settings()

app = FastAPI(
    title=f"{PRODUCT_NAME} API",
    description=PRODUCT_DESCRIPTION,
    version=PRODUCT_VERSION,
)
app.state.watchlist = []
app.state.supervisor = None


@app.on_event("startup")
def startup():
    """Initialize database and start background price monitors."""
    init_db()

    if not settings.monitor_on_startup:
        logger.info("Price monitoring disabled (MONITOR_ON_STARTUP=false)")
        return

    # ConfigError here aborts startup
    app.state.watchlist = load_watchlist(settings.watchlist_path)
    supervisor = MonitorSupervisor(
        app.state.watchlist,
        notifier=build_notifier(settings),
        blocking=False,
    )
    supervisor.start()
    app.state.supervisor = supervisor


@app.on_event("shutdown")
def shutdown():
    """Stop background price monitors."""
    if app.state.supervisor is not None:
        app.state.supervisor.stop()
        app.state.supervisor = None


@app.get("/api/health")
def health():
    """Health check endpoint."""
    return {
        "name": PRODUCT_NAME,
        "version": PRODUCT_VERSION,
        "status": "ok",
        "tagline": PRODUCT_TAGLINE,
    }


# Mount API routers
app.include_router(portfolio.router, prefix="/api/portfolio", tags=["portfolio"])
app.include_router(monitor.router, prefix="/api/monitor", tags=["monitor"])
