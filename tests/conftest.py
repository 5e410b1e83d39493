from datetime import datetime, timedelta, timezone

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from printcare.db.store import CatalogStore
from printcare.models import Base
from printcare.services.booking_lifecycle import BookingLifecycleManager
from printcare.services.change_notifier import ChangeNotifier


class TickingClock:
    """Deterministic clock: every call is one second after the previous one."""

    def __init__(self, start: datetime | None = None):
        self.now = start or datetime(2026, 3, 1, 9, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        self.now += timedelta(seconds=1)
        return self.now


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine("sqlite+aiosqlite:///:memory:")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def notifier():
    return ChangeNotifier()


@pytest.fixture
def store(session_factory, notifier):
    return CatalogStore(session_factory, notifier)


@pytest.fixture
def clock():
    return TickingClock()


@pytest.fixture
def lifecycle(store, clock):
    return BookingLifecycleManager(store, clock=clock)


@pytest_asyncio.fixture
async def catalog(store):
    """A small active catalog: one brand/model, two categories, one technician."""
    brand = await store.add_brand("Epson")
    model = await store.add_model(brand.id, "L3110", "inkjet")
    paper = await store.add_category("Masalah Kertas", "FileText")
    printing = await store.add_category("Masalah Pencetakan")
    tech = await store.add_technician(name="Budi Santoso", phone="081200000001")
    return {
        "brand": brand,
        "model": model,
        "paper": paper,
        "printing": printing,
        "technician": tech,
    }
