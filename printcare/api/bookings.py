"""Booking endpoints: intake, lookup, lifecycle transitions and deletion."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from printcare.dependencies import get_lifecycle, get_store
from printcare.db.store import CatalogStore
from printcare.schemas import (
    ActualCostUpdate, BookingCreate, BookingRead, LifecycleResponse,
    StatusUpdate, TechnicianAssign,
)
from printcare.services.booking_lifecycle import BookingLifecycleManager, LifecycleResult
from printcare.services.errors import NotFoundError, TransitionNotAllowedError

router = APIRouter(prefix="/api/bookings", tags=["bookings"])


def _response(result: LifecycleResult) -> LifecycleResponse:
    return LifecycleResponse(
        id=result.booking_id,
        changed=result.changed,
        status=result.status,
        warnings=result.warnings,
    )


@router.post("", response_model=LifecycleResponse, status_code=201)
async def create_booking(
    body: BookingCreate,
    lifecycle: BookingLifecycleManager = Depends(get_lifecycle),
):
    result = await lifecycle.create_booking(body)
    return _response(result)


@router.get("", response_model=list[BookingRead])
async def list_bookings(lifecycle: BookingLifecycleManager = Depends(get_lifecycle)):
    return await lifecycle.list_bookings()


@router.get("/{booking_id}", response_model=BookingRead)
async def get_booking(
    booking_id: str,
    lifecycle: BookingLifecycleManager = Depends(get_lifecycle),
):
    booking = await lifecycle.get_booking(booking_id)
    if not booking:
        raise HTTPException(404, "Booking not found")
    return booking


@router.put("/{booking_id}/status", response_model=LifecycleResponse)
async def update_status(
    booking_id: str,
    body: StatusUpdate,
    lifecycle: BookingLifecycleManager = Depends(get_lifecycle),
):
    try:
        result = await lifecycle.set_status(booking_id, body.status)
    except NotFoundError:
        raise HTTPException(404, "Booking not found")
    except TransitionNotAllowedError as e:
        raise HTTPException(409, str(e))
    return _response(result)


@router.put("/{booking_id}/technician", response_model=LifecycleResponse)
async def assign_technician(
    booking_id: str,
    body: TechnicianAssign,
    lifecycle: BookingLifecycleManager = Depends(get_lifecycle),
    store: CatalogStore = Depends(get_store),
):
    tech = await store.get_technician(body.technician_id)
    if not tech or not tech.is_active:
        raise HTTPException(404, "Technician not found")

    try:
        result = await lifecycle.assign_technician(booking_id, tech.id)
    except NotFoundError:
        raise HTTPException(404, "Booking not found")
    return _response(result)


@router.put("/{booking_id}/actual-cost", response_model=LifecycleResponse)
async def update_actual_cost(
    booking_id: str,
    body: ActualCostUpdate,
    lifecycle: BookingLifecycleManager = Depends(get_lifecycle),
):
    try:
        result = await lifecycle.update_actual_cost(booking_id, body.actual_cost)
    except NotFoundError:
        raise HTTPException(404, "Booking not found")
    return _response(result)


@router.delete("/{booking_id}", response_model=LifecycleResponse)
async def delete_booking(
    booking_id: str,
    lifecycle: BookingLifecycleManager = Depends(get_lifecycle),
):
    try:
        result = await lifecycle.delete_booking(booking_id)
    except NotFoundError:
        raise HTTPException(404, "Booking not found")
    return _response(result)
