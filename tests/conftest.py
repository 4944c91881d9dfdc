"""
Shared fixtures for the AirSense test-suite.

Tests run against a small SQLite dataset seeded once per session. The
application's ``get_db`` dependency is overridden to use it.
"""

import asyncio
import os
import tempfile
from datetime import datetime

TEST_DIR = tempfile.mkdtemp(prefix="airsense-tests-")
TEST_DATABASE_URL = f"sqlite+aiosqlite:///{os.path.join(TEST_DIR, 'airsense_test.db')}"

os.environ["SQLALCHEMY_DATABASE_URI"] = TEST_DATABASE_URL
os.environ["REDIS_ENABLED"] = "false"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["HEALTH_CHECK_SECRET"] = "test-secret"
os.environ["LOG_DIR"] = os.path.join(TEST_DIR, "logs")
os.environ["LOG_LEVEL"] = "WARNING"

import httpx  # noqa: E402
import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.pool import NullPool  # noqa: E402

from airsense.database import Base, get_db  # noqa: E402
from airsense.main import app  # noqa: E402
from airsense.models import (  # noqa: E402
    DictionaryEntry,
    Exposure,
    HistoricalDatum,
    Municipality,
    Pollutant,
    Station,
    StationLocation,
)
from airsense.viewer.client import AirSenseClient  # noqa: E402

# A fresh connection per session keeps aiosqlite away from cross-loop reuse
engine = create_async_engine(TEST_DATABASE_URL, echo=False, poolclass=NullPool)
TestingSessionLocal = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

CALI_ID = 5
PALMIRA_ID = 7
BUGA_ID = 9
YUMBO_ID = 11


def _datum(id, station_id, exposure_id, year, mean, maximum, **extra):
    values = dict(
        id=id,
        station_id=station_id,
        exposure_id=exposure_id,
        year=year,
        mean=mean,
        maximum=maximum,
        minimum=extra.pop("minimum", 1.0),
        median=extra.pop("median", mean),
        percentile_98=extra.pop("percentile_98", maximum),
        max_timestamp=extra.pop("max_timestamp", datetime(year, 3, 15, 14, 0)),
        exceedances=extra.pop("exceedances", 0),
        exceedance_percentage=extra.pop("exceedance_percentage", 0.0),
        exceedance_days=extra.pop("exceedance_days", 0),
        temporal_representativeness=extra.pop("temporal_representativeness", 85.0),
    )
    values.update(extra)
    return HistoricalDatum(**values)


def seed_rows():
    """Fixture dataset: three municipalities with measurements and one without."""
    return [
        Municipality(id=CALI_ID, name="Cali", latitude=3.4516, longitude=-76.532),
        Municipality(id=PALMIRA_ID, name="Palmira", latitude=3.5394, longitude=-76.3036),
        Municipality(id=BUGA_ID, name="Buga", latitude=3.9009, longitude=-76.2978),
        Municipality(id=YUMBO_ID, name="Yumbo", latitude=3.5823, longitude=-76.4914),

        Station(id=101, name="Estación Univalle", municipality_id=CALI_ID, station_type="Fija"),
        Station(id=102, name="Estación Compartir", municipality_id=CALI_ID, station_type="Fija"),
        Station(id=103, name="Estación Pance", municipality_id=CALI_ID, station_type=None),
        Station(id=201, name="Estación Palmira Centro", municipality_id=PALMIRA_ID, station_type="Fija"),
        Station(id=301, name="Estación Yumbo", municipality_id=YUMBO_ID, station_type="Indicativa"),

        # Univalle moved in 2019
        StationLocation(id=1, station_id=101, year=2015, latitude=3.3700, longitude=-76.5300),
        StationLocation(id=2, station_id=101, year=2019, latitude=3.3800, longitude=-76.5400),
        StationLocation(id=3, station_id=102, year=2018, latitude=3.4200, longitude=-76.4900),
        StationLocation(id=4, station_id=103, year=2019, latitude=3.3300, longitude=-76.5500),
        StationLocation(id=5, station_id=201, year=2018, latitude=3.5400, longitude=-76.3000),
        StationLocation(id=6, station_id=301, year=2018, latitude=3.5800, longitude=-76.4900),

        Pollutant(id=1, symbol="PM2.5", name="Material particulado fino", units="µg/m³"),
        Pollutant(id=2, symbol="PM10", name="Material particulado", units="µg/m³"),
        Pollutant(id=3, symbol="O3", name="Ozono", units="µg/m³"),

        Exposure(id=10, pollutant_id=1, hours=24, label="24 horas", regulatory_limit=37.0),
        Exposure(id=11, pollutant_id=1, hours=8760, label="Anual", regulatory_limit=25.0),
        Exposure(id=12, pollutant_id=2, hours=24, label="24 horas", regulatory_limit=75.0),
        Exposure(id=13, pollutant_id=3, hours=8, label="8 horas", regulatory_limit=100.0),
        Exposure(id=14, pollutant_id=3, hours=1, label="1 hora", regulatory_limit=150.0),

        _datum(1, 101, 10, 2018, mean=12.0, maximum=40.0, exceedances=3,
               exceedance_percentage=0.9, exceedance_days=3),
        _datum(2, 101, 12, 2018, mean=48.0, maximum=90.0),
        _datum(3, 101, 10, 2019, mean=30.0, maximum=80.0),
        _datum(4, 102, 14, 2018, mean=60.0, maximum=140.0),
        _datum(5, 102, 11, 2020, mean=8.0, maximum=20.0, max_timestamp=None),
        _datum(6, 103, 13, 2020, mean=90.0, maximum=130.0),
        _datum(7, 201, 10, 2018, mean=20.0, maximum=45.0),
        _datum(8, 301, 10, 2018, mean=26.0, maximum=60.0),

        DictionaryEntry(
            id=1, symbol="PM2.5", name="Material particulado fino", color_hex="#8E44AD",
            what_is_it="Partículas de diámetro menor a 2,5 micras.",
            causes="Combustión de vehículos e industria.",
            consequences="Enfermedades respiratorias y cardiovasculares.",
        ),
        DictionaryEntry(
            id=2, symbol="O3", name="Ozono troposférico", color_hex="#3498DB",
            what_is_it="Gas formado por reacciones fotoquímicas.",
            causes="Óxidos de nitrógeno y compuestos orgánicos bajo radiación solar.",
            consequences="Irritación de las vías respiratorias.",
        ),
    ]


async def _create_and_seed():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    async with TestingSessionLocal() as session:
        session.add_all(seed_rows())
        await session.commit()


@pytest.fixture(scope="session", autouse=True)
def seeded_database():
    """Create and seed the SQLite database once per test session."""
    asyncio.run(_create_and_seed())
    yield
    asyncio.run(engine.dispose())


async def override_get_db():
    async with TestingSessionLocal() as session:
        yield session


@pytest.fixture
def client():
    """Test client fixture."""
    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
async def db():
    """Database session on the seeded dataset."""
    async with TestingSessionLocal() as session:
        yield session


@pytest.fixture
async def api_client():
    """Viewer API client talking to the application in-process."""
    app.dependency_overrides[get_db] = override_get_db
    transport = httpx.ASGITransport(app=app)
    async with AirSenseClient(base_url="http://testserver/api", transport=transport) as client:
        yield client
    app.dependency_overrides.clear()
