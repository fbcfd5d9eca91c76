"""Tests for the HTTP surface."""

from decimal import Decimal
from unittest.mock import MagicMock, patch

import pytest
from fastapi.testclient import TestClient

import coinwatch.api.app as app_module
from coinwatch.api.app import app
from coinwatch.api.deps import get_db, get_price_source
from coinwatch.config import AssetWatchConfig
from coinwatch.core.monitor import AssetMonitor
from coinwatch.errors import ConfigError, FetchError


@pytest.fixture
def client(db_session, fake_prices):
    """Client bound to an in-memory database and a fixed price source."""
    source = fake_prices({"BTC": 50000, "ETH": 3000})

    def _get_db():
        yield db_session
        db_session.commit()

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_price_source] = lambda: source
    # Not used as a context manager, so startup hooks (and monitors) don't run
    test_client = TestClient(app)
    test_client.price_source = source
    yield test_client
    app.dependency_overrides.clear()


class TestPortfolioRoutes:
    """Tests for /api/portfolio."""

    def test_add_and_list_holdings(self, client):
        response = client.post("/api/portfolio/", json={"user_id": 1, "symbol": "btc", "quantity": 0.5})

        assert response.status_code == 201
        assert response.json()["symbol"] == "BTC"

        listed = client.get("/api/portfolio/").json()
        assert [(h["symbol"], h["quantity"]) for h in listed] == [("BTC", 0.5)]
        assert listed[0]["updated_at"] is None

    def test_rejects_non_positive_quantity(self, client):
        response = client.post("/api/portfolio/", json={"user_id": 1, "symbol": "BTC", "quantity": 0})
        assert response.status_code == 422

    def test_rejects_non_finite_quantity(self, client):
        response = client.post(
            "/api/portfolio/",
            content=b'{"user_id": 1, "symbol": "BTC", "quantity": Infinity}',
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 422
        assert client.get("/api/portfolio/").json() == []
        assert client.get("/api/portfolio/value").status_code == 200

    def test_value_sums_positions(self, client):
        client.post("/api/portfolio/", json={"user_id": 1, "symbol": "BTC", "quantity": 0.25})
        client.post("/api/portfolio/", json={"user_id": 2, "symbol": "BTC", "quantity": 0.25})
        client.post("/api/portfolio/", json={"user_id": 1, "symbol": "ETH", "quantity": 2})

        body = client.get("/api/portfolio/value").json()

        assert body["total_value"] == 31000.0
        assert {p["symbol"]: p["value"] for p in body["positions"]} == {"BTC": 25000.0, "ETH": 6000.0}

    def test_value_for_one_user(self, client):
        client.post("/api/portfolio/", json={"user_id": 1, "symbol": "BTC", "quantity": 1})
        client.post("/api/portfolio/", json={"user_id": 2, "symbol": "ETH", "quantity": 1})

        body = client.get("/api/portfolio/value", params={"user_id": 2}).json()

        assert body["total_value"] == 3000.0

    def test_empty_portfolio_values_zero(self, client):
        assert client.get("/api/portfolio/value").json() == {"total_value": 0.0, "positions": []}

    def test_unknown_symbol_is_server_error(self, client):
        client.post("/api/portfolio/", json={"user_id": 1, "symbol": "BTC", "quantity": 1})
        client.post("/api/portfolio/", json={"user_id": 1, "symbol": "NOPE", "quantity": 1})

        response = client.get("/api/portfolio/value")

        assert response.status_code == 502

    def test_fetch_failure_is_server_error(self, client):
        client.post("/api/portfolio/", json={"user_id": 1, "symbol": "BTC", "quantity": 1})
        client.price_source.error = FetchError("down")

        assert client.get("/api/portfolio/value").status_code == 502


class TestMonitorRoutes:
    """Tests for /api/monitor."""

    def test_watchlist_without_running_monitors(self, client):
        body = client.get("/api/monitor/watchlist").json()

        assert body["running"] is False
        assert body["assets"] == []

    def test_health(self, client):
        assert client.get("/api/health").json()["status"] == "ok"


class TestAppLifecycle:
    """Tests for the startup and shutdown hooks."""

    @pytest.fixture
    def lifecycle(self):
        """Patch out table creation and run with monitoring enabled."""
        with patch("coinwatch.api.app.init_db") as mock_init_db, patch.object(
            app_module.settings, "monitor_on_startup", True
        ):
            yield mock_init_db
        app.state.watchlist = []
        app.state.supervisor = None

    def test_startup_starts_and_shutdown_stops_monitors(self, lifecycle):
        assets = [AssetWatchConfig(name="Bitcoin", symbol="BTC", threshold=Decimal("50000"))]
        supervisor = MagicMock()
        supervisor.monitors = [AssetMonitor(assets[0])]
        supervisor.interval = 30
        supervisor.scheduler.running = True

        with patch("coinwatch.api.app.load_watchlist", return_value=assets), patch(
            "coinwatch.api.app.MonitorSupervisor", return_value=supervisor
        ) as mock_supervisor_cls:
            with TestClient(app) as client:
                lifecycle.assert_called_once()
                supervisor.start.assert_called_once()
                assert mock_supervisor_cls.call_args.args[0] == assets
                assert mock_supervisor_cls.call_args.kwargs["blocking"] is False

                body = client.get("/api/monitor/watchlist").json()
                assert body["running"] is True
                assert [a["symbol"] for a in body["assets"]] == ["BTC"]

                supervisor.stop.assert_not_called()

        supervisor.stop.assert_called_once()
        assert app.state.supervisor is None

    def test_config_error_aborts_startup(self, lifecycle):
        with patch(
            "coinwatch.api.app.load_watchlist", side_effect=ConfigError("Cannot read watch list")
        ), patch("coinwatch.api.app.MonitorSupervisor") as mock_supervisor_cls:
            with pytest.raises(ConfigError):
                with TestClient(app):
                    pass

        mock_supervisor_cls.assert_not_called()
        assert app.state.supervisor is None

    def test_monitoring_disabled_skips_watchlist(self, lifecycle):
        with patch.object(app_module.settings, "monitor_on_startup", False), patch(
            "coinwatch.api.app.load_watchlist"
        ) as mock_load:
            with TestClient(app) as client:
                assert client.get("/api/monitor/watchlist").json()["running"] is False

        mock_load.assert_not_called()
