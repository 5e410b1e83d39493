"""Booking lifecycle: creation, status transitions, assignment, cost, deletion.

The booking row is authoritative and the timeline is an audit trail. Writes
to the booking itself raise on failure; timeline writes that follow a
successful booking write are best-effort and come back as warnings on the
``LifecycleResult`` instead of exceptions.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable

from printcare.db.store import CatalogStore
from printcare.models import PrinterBrand, PrinterModel, ProblemCategory
from printcare.models.base import utcnow
from printcare.schemas.booking import BookingCreate, BookingRead
from printcare.services.booking_status import (
    ASSIGNED,
    COST_UPDATED,
    BookingStatus,
    TransitionPolicy,
    allow_any_transition,
    status_value,
    timeline_copy,
)
from printcare.services.booking_views import to_booking_read
from printcare.services.cost_estimator import estimate_cost
from printcare.services.errors import TransitionNotAllowedError

logger = logging.getLogger(__name__)

UNKNOWN_TECHNICIAN = "Unknown"


def normalize_booking_id(booking_id: str) -> str:
    return booking_id.strip().upper()


@dataclass
class LifecycleResult:
    booking_id: str
    changed: bool = True
    status: str | None = None
    warnings: list[str] = field(default_factory=list)

    @property
    def degraded(self) -> bool:
        return bool(self.warnings)


class BookingLifecycleManager:
    def __init__(
        self,
        store: CatalogStore,
        *,
        service_type: str = "Antar ke Toko",
        unassigned_label: str = "Belum ditugaskan",
        hide_inactive_references: bool = True,
        transition_policy: TransitionPolicy = allow_any_transition,
        clock: Callable[[], datetime] = utcnow,
    ):
        self._store = store
        self._service_type = service_type
        self._unassigned_label = unassigned_label
        self._hide_inactive = hide_inactive_references
        self._policy = transition_policy
        self._clock = clock

    # ── Creation ─────────────────────────────────────────────

    async def create_booking(self, form: BookingCreate) -> LifecycleResult:
        """Upsert the customer, resolve references, and insert the booking.

        The customer upsert and the booking insert raise on failure. Brand,
        model, category and technician lookups degrade to None.
        """
        warnings: list[str] = []

        customer_id = await self._store.upsert_customer_by_phone(
            form.phone, form.customer_name, form.email, form.address,
        )

        brand_id = await self._lookup_by_name(PrinterBrand, "printer brand", form.printer_brand, warnings)
        model_id = await self._lookup_by_name(PrinterModel, "printer model", form.printer_model, warnings)
        category_id = await self._lookup_by_name(
            ProblemCategory, "problem category", form.problem_category, warnings,
        )
        technician_id = await self._pick_technician(warnings)

        now = self._clock()
        booking_id = await self._store.insert_booking({
            "customer_id": customer_id,
            "printer_brand_id": brand_id,
            "printer_model_id": model_id,
            "problem_category_id": category_id,
            "problem_description": form.problem_description,
            "service_type": self._service_type,
            "appointment_date": form.appointment_date,
            "appointment_time": form.appointment_time,
            "technician_id": technician_id,
            "status": BookingStatus.PENDING.value,
            "estimated_cost": estimate_cost(form.problem_category),
            "notes": form.notes,
            "created_at": now,
            "updated_at": now,
        })
        logger.info("Created booking %s for customer %s", booking_id, customer_id)
        return LifecycleResult(booking_id, status=BookingStatus.PENDING.value, warnings=warnings)

    async def _lookup_by_name(self, model, label: str, name: str, warnings: list[str]) -> str | None:
        if not name:
            return None
        try:
            found = await self._store.find_active_by_name(model, name)
        except Exception:
            logger.exception("Lookup of %s %r failed", label, name)
            warnings.append(f"Lookup of {label} '{name}' failed")
            return None
        if found is None:
            logger.warning("No active %s named %r", label, name)
            warnings.append(f"No active {label} named '{name}'")
        return found

    async def _pick_technician(self, warnings: list[str]) -> str | None:
        try:
            technician_id = await self._store.find_one_available_technician()
        except Exception:
            logger.exception("Technician lookup failed")
            warnings.append("Technician lookup failed")
            return None
        if technician_id is None:
            warnings.append("No available technician")
        return technician_id

    # ── Status transitions ───────────────────────────────────

    async def set_status(self, booking_id: str, status: BookingStatus | str) -> LifecycleResult:
        """Move a booking to ``status`` and record it on the timeline.

        Setting the current status again is a no-op. A status the booking has
        visited before does not get a second timeline entry; the existing one
        is marked completed again.
        """
        booking_id = normalize_booking_id(booking_id)
        requested = status_value(status)

        current = await self._store.get_booking_status(booking_id)
        if current == requested:
            logger.debug("Booking %s already %s, skipping", booking_id, requested)
            return LifecycleResult(booking_id, changed=False, status=current)

        if not self._policy(current, requested):
            raise TransitionNotAllowedError(current, requested)

        now = self._clock()
        await self._store.update_booking_fields(booking_id, {"status": requested, "updated_at": now})
        logger.info("Booking %s status %s -> %s", booking_id, current, requested)

        result = LifecycleResult(booking_id, status=requested)
        title, description = timeline_copy(requested)
        try:
            await self._store.record_status_timeline(booking_id, requested, title, description, now)
        except Exception:
            logger.exception("Timeline entry for booking %s (%s) not recorded", booking_id, requested)
            result.warnings.append(f"Timeline entry for '{requested}' was not recorded")
        return result

    # ── Assignment & cost ────────────────────────────────────

    async def assign_technician(self, booking_id: str, technician_id: str) -> LifecycleResult:
        """Assign a technician. Every call appends an ``assigned`` timeline entry."""
        booking_id = normalize_booking_id(booking_id)
        now = self._clock()
        await self._store.update_booking_fields(
            booking_id, {"technician_id": technician_id, "updated_at": now},
        )
        logger.info("Assigned technician %s to booking %s", technician_id, booking_id)

        result = LifecycleResult(booking_id)
        name = await self._technician_name(technician_id, result.warnings)
        await self._append_timeline(
            result, ASSIGNED, "Teknisi ditugaskan",
            f"Teknisi {name} ditugaskan untuk pemesanan ini", now,
        )
        return result

    async def _technician_name(self, technician_id: str, warnings: list[str]) -> str:
        try:
            tech = await self._store.get_technician(technician_id)
        except Exception:
            logger.exception("Technician %s lookup failed", technician_id)
            tech = None
        if tech is None:
            warnings.append(f"Technician {technician_id} could not be resolved for the timeline")
            return UNKNOWN_TECHNICIAN
        return tech.name

    async def update_actual_cost(self, booking_id: str, actual_cost: str) -> LifecycleResult:
        """Record the actual cost (free text). Every call appends a ``cost_updated`` entry."""
        booking_id = normalize_booking_id(booking_id)
        now = self._clock()
        await self._store.update_booking_fields(
            booking_id, {"actual_cost": actual_cost, "updated_at": now},
        )
        logger.info("Booking %s actual cost set to %s", booking_id, actual_cost)

        result = LifecycleResult(booking_id)
        await self._append_timeline(
            result, COST_UPDATED, "Biaya aktual diperbarui",
            f"Biaya aktual diperbarui menjadi {actual_cost}", now,
        )
        return result

    async def _append_timeline(
        self, result: LifecycleResult, label: str, title: str, description: str, now: datetime
    ) -> None:
        try:
            await self._store.insert_timeline_entry(
                result.booking_id, label, title, description, completed=True, completed_at=now,
            )
        except Exception:
            logger.exception("Timeline entry %s for booking %s not recorded", label, result.booking_id)
            result.warnings.append(f"Timeline entry for '{label}' was not recorded")

    # ── Deletion ─────────────────────────────────────────────

    async def delete_booking(self, booking_id: str) -> LifecycleResult:
        """Hard-delete the timeline rows, then the booking itself.

        A failed timeline delete is logged and the booking delete is still
        attempted.
        """
        booking_id = normalize_booking_id(booking_id)
        result = LifecycleResult(booking_id)
        try:
            await self._store.delete_timeline_entries(booking_id)
        except Exception:
            logger.exception("Deleting timeline of booking %s failed", booking_id)
            result.warnings.append("Timeline entries could not be deleted")

        await self._store.delete_booking(booking_id)
        logger.info("Deleted booking %s", booking_id)
        return result

    # ── Reads ────────────────────────────────────────────────

    async def get_booking(self, booking_id: str) -> BookingRead | None:
        booking = await self._store.get_booking_with_joins(normalize_booking_id(booking_id))
        if booking is None:
            return None
        return to_booking_read(booking, self._unassigned_label, self._hide_inactive)

    async def list_bookings(self) -> list[BookingRead]:
        bookings = await self._store.list_bookings_with_joins(active_only=self._hide_inactive)
        return [to_booking_read(b, self._unassigned_label, self._hide_inactive) for b in bookings]
