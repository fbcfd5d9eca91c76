"""Shared fixtures."""

from decimal import Decimal

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from coinwatch.db.models import Base


@pytest.fixture
def db_session():
    """Session on a fresh in-memory SQLite database."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    session = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


class FakePriceSource:
    """Price source returning a fixed snapshot, or raising a fixed error."""

    def __init__(self, prices=None, error=None):
        self.prices = {k: Decimal(str(v)) for k, v in (prices or {}).items()}
        self.error = error
        self.calls = 0

    def fetch_prices(self):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return dict(self.prices)

    def get_price(self, symbol):
        from coinwatch.data.market.provider import lookup_price

        return lookup_price(self.fetch_prices(), symbol)


@pytest.fixture
def fake_prices():
    """Factory for FakePriceSource instances."""
    return FakePriceSource
