import os
from pathlib import Path

# Must be set before the cleanpro package builds its engine and settings
os.environ.setdefault("PYTEST_RUN", "1")
os.environ.setdefault("SEED_DEFAULT_RATES", "false")

from dotenv import load_dotenv

# Load environment variables for tests
load_dotenv(Path(__file__).resolve().parents[1] / ".env.test")

import pytest
from decimal import Decimal
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from cleanpro.main import app
from cleanpro.database import get_db
from cleanpro.models.base import BaseModel
from cleanpro.crud import crud_rate
from cleanpro import schemas


def setup_db():
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    BaseModel.metadata.create_all(engine)
    return sessionmaker(bind=engine, autoflush=False)


@pytest.fixture
def Session():
    return setup_db()


@pytest.fixture
def db(Session):
    session = Session()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(Session):
    def override_db():
        session = Session()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def _create_rate(db, **data):
    return crud_rate.create_rate(db, schemas.RateCreate(**data))


@pytest.fixture
def add_rate(db):
    def _add(**data):
        return _create_rate(db, **data)

    return _add


@pytest.fixture
def catalog(db):
    """Tiers 80/120/160, Deep Cleaning +40, Pet Hair Cleanup +25, weekly -10%."""
    rates = {
        "small": _create_rate(db, category="squareFootage", min_sq_ft=0, max_sq_ft=999, base_price=Decimal("80")),
        "medium": _create_rate(db, category="squareFootage", min_sq_ft=1000, max_sq_ft=1999, base_price=Decimal("120")),
        "large": _create_rate(db, category="squareFootage", min_sq_ft=2000, max_sq_ft=999999, base_price=Decimal("160")),
        "deep": _create_rate(db, category="surcharge", name="Deep Cleaning", surcharge_type="fixed", surcharge_value=Decimal("40")),
        "pets": _create_rate(db, category="surcharge", name="Pet Hair Cleanup", surcharge_type="fixed", surcharge_value=Decimal("25")),
        "weekly": _create_rate(db, category="discount", frequency="weekly", discount_type="percentage", discount_value=Decimal("10")),
    }
    return rates
