"""Shared fixtures for the footprint tests.

The API is exercised against an in-memory SQLite database; nothing touches
the file database under data/.
"""

import os

os.environ.setdefault("FOOTPRINT_DATABASE_URL", "sqlite://")

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from footprint import models  # noqa: F401  (registers the ledger table)
from footprint.database import Base, get_db
from footprint.direct import ReadingSession
from footprint.schemas import (
    AllAnswers,
    FoodAnswers,
    HomeEnergyAnswers,
    ShoppingAnswers,
    TransportAnswers,
    WasteAnswers,
    WaterAnswers,
)


@pytest.fixture
def typical_answers():
    """A commuter with a small petrol car, LPG cooking and a moderate non-veg diet."""
    return AllAnswers(
        transport=TransportAnswers(
            has_vehicle=True,
            vehicle_type="petrol_small",
            daily_km=20,
            carpools=False,
            domestic_flights_per_year=2,
            international_flights_per_year=0,
        ),
        home_energy=HomeEnergyAnswers(household_size=4, climate_zone="warm_humid",
                                      cooking_fuel="lpg", lpg_cylinders_per_year=8),
        food=FoodAnswers(diet_type="nonveg_moderate", rice_freq_per_week=7, waste_level="average"),
        shopping=ShoppingAnswers(electronics_owned=["smartphone", "laptop"], upgrade_frequency="few_years"),
        water=WaterAnswers(usage_level="average", source="municipal", treatment="ro_uv"),
        waste=WasteAnswers(waste_size="medium", segregation="partial", disposal="landfill"),
    )


@pytest.fixture
def reading_session():
    session = ReadingSession()
    session.submit("electricity", 100, source="ocr")
    session.submit("petrol", 20)
    return session


@pytest.fixture
def db_session():
    engine = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
    Base.metadata.create_all(bind=engine)
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    db = TestingSession()
    try:
        yield db
    finally:
        db.close()
        engine.dispose()


@pytest.fixture
def client(db_session):
    from fastapi.testclient import TestClient

    from footprint.main import app

    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
