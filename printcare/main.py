"""FastAPI application entry point."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from printcare.api.router import api_router
from printcare.config import Settings, configure_logging, get_settings
from printcare.db.engine import build_engine, build_session_factory, create_tables
from printcare.db.store import CatalogStore
from printcare.services.booking_lifecycle import BookingLifecycleManager
from printcare.services.change_notifier import ChangeNotifier

logger = logging.getLogger(__name__)


def attach_services(
    app: FastAPI,
    session_factory: async_sessionmaker[AsyncSession],
    settings: Settings,
) -> None:
    """Build the notifier, store and lifecycle manager and hang them on app.state."""
    notifier = ChangeNotifier()
    store = CatalogStore(session_factory, notifier)
    app.state.notifier = notifier
    app.state.store = store
    app.state.lifecycle = BookingLifecycleManager(
        store,
        service_type=settings.bookings.service_type,
        unassigned_label=settings.bookings.unassigned_technician_label,
        hide_inactive_references=settings.bookings.hide_inactive_references,
    )


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        engine = build_engine(settings.database_url)
        await create_tables(engine)
        attach_services(app, build_session_factory(engine), settings)
        logger.info("PrintCare admin started on %s", settings.database_url)
        yield
        await engine.dispose()

    app = FastAPI(
        title="PrintCare Admin",
        description="Admin backend for a printer repair service: bookings, catalog, technicians and gallery.",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.include_router(api_router)
    return app


app = create_app()
