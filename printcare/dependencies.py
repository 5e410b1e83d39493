"""FastAPI dependency providers for the services held on app.state."""

from __future__ import annotations

from fastapi import Request

from printcare.db.store import CatalogStore
from printcare.services.booking_lifecycle import BookingLifecycleManager


def get_store(request: Request) -> CatalogStore:
    return request.app.state.store


def get_lifecycle(request: Request) -> BookingLifecycleManager:
    return request.app.state.lifecycle
