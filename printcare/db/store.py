"""Catalog store: the only path from the services to the database.

Every method opens its own session, commits, and publishes a change event
afterwards. No method spans more than one transaction.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from printcare.db import crud
from printcare.models import (
    Booking, Customer, GalleryImage, PrinterBrand, PrinterModel,
    Problem, ProblemCategory, Technician, TimelineEntry,
)
from printcare.services.change_notifier import ChangeNotifier
from printcare.services.errors import NotFoundError

INSERT, UPDATE, DELETE = "INSERT", "UPDATE", "DELETE"

# Display names used in not-found errors
_ENTITY_NAMES = {
    PrinterBrand: "Printer brand",
    PrinterModel: "Printer model",
    ProblemCategory: "Problem category",
    Problem: "Problem",
    Technician: "Technician",
    GalleryImage: "Gallery image",
}


class CatalogStore:
    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        notifier: ChangeNotifier | None = None,
    ):
        self._session_factory = session_factory
        self.notifier = notifier

    async def _publish(self, table: str, event: str, record_id: str = "") -> None:
        if self.notifier is not None:
            await self.notifier.publish(table, event, record_id)

    # ── Customers ────────────────────────────────────────────

    async def upsert_customer_by_phone(
        self, phone: str, name: str, email: str = "", address: str = ""
    ) -> str:
        """Update the customer with this phone number, or insert one.

        Not atomic: two concurrent first bookings from one phone number can
        both insert.
        """
        async with self._session_factory() as db:
            customer = await crud.get_customer_by_phone(db, phone)
            if customer:
                await crud.update_customer(db, customer, name=name, email=email, address=address)
                event = UPDATE
            else:
                customer = await crud.create_customer(db, name, phone, email, address)
                event = INSERT
        await self._publish(Customer.__tablename__, event, customer.id)
        return customer.id

    async def list_customers(self) -> list[Customer]:
        async with self._session_factory() as db:
            return await crud.list_customers(db)

    # ── Lookups used by booking creation ─────────────────────

    async def find_active_by_name(self, model, name: str) -> str | None:
        async with self._session_factory() as db:
            return await crud.find_active_id_by_name(db, model, name)

    async def find_one_available_technician(self) -> str | None:
        async with self._session_factory() as db:
            tech = await crud.find_available_technician(db)
        return tech.id if tech else None

    # ── Bookings ─────────────────────────────────────────────

    async def insert_booking(self, fields: dict[str, Any]) -> str:
        async with self._session_factory() as db:
            booking = await crud.create_booking(db, **fields)
        await self._publish(Booking.__tablename__, INSERT, booking.id)
        return booking.id

    async def get_booking_status(self, booking_id: str) -> str:
        async with self._session_factory() as db:
            status = await crud.get_booking_status(db, booking_id)
        if status is None:
            raise NotFoundError("Booking", booking_id)
        return status

    async def get_booking_with_joins(self, booking_id: str) -> Booking | None:
        async with self._session_factory() as db:
            return await crud.get_booking(db, booking_id)

    async def list_bookings_with_joins(self, active_only: bool = False) -> list[Booking]:
        async with self._session_factory() as db:
            return await crud.list_bookings(db, active_only=active_only)

    async def list_pending_bookings(self) -> list[Booking]:
        async with self._session_factory() as db:
            return await crud.list_pending_bookings(db)

    async def update_booking_fields(self, booking_id: str, fields: dict[str, Any]) -> None:
        async with self._session_factory() as db:
            touched = await crud.update_booking_fields(db, booking_id, **fields)
        if not touched:
            raise NotFoundError("Booking", booking_id)
        await self._publish(Booking.__tablename__, UPDATE, booking_id)

    async def delete_booking(self, booking_id: str) -> None:
        async with self._session_factory() as db:
            touched = await crud.delete_booking(db, booking_id)
        if not touched:
            raise NotFoundError("Booking", booking_id)
        await self._publish(Booking.__tablename__, DELETE, booking_id)

    async def count_bookings_by_status(self) -> dict[str, int]:
        async with self._session_factory() as db:
            return await crud.count_bookings_by_status(db)

    # ── Timeline ─────────────────────────────────────────────

    async def insert_timeline_entry(
        self,
        booking_id: str,
        status: str,
        title: str,
        description: str,
        completed: bool = True,
        completed_at: datetime | None = None,
    ) -> str:
        """Append an entry with no uniqueness check (synthetic markers)."""
        async with self._session_factory() as db:
            entry = await crud.create_timeline_entry(
                db, booking_id, status, title, description,
                completed=completed, completed_at=completed_at,
            )
        await self._publish(TimelineEntry.__tablename__, INSERT, entry.id)
        return entry.id

    async def update_timeline_entry(
        self, booking_id: str, status: str, completed: bool, completed_at: datetime | None
    ) -> int:
        async with self._session_factory() as db:
            touched = await crud.update_timeline_entry(db, booking_id, status, completed, completed_at)
        if touched:
            await self._publish(TimelineEntry.__tablename__, UPDATE, booking_id)
        return touched

    async def find_timeline_entry(self, booking_id: str, status: str) -> bool:
        async with self._session_factory() as db:
            return await crud.find_timeline_entry(db, booking_id, status) is not None

    async def list_timeline(self, booking_id: str) -> list[TimelineEntry]:
        async with self._session_factory() as db:
            return await crud.list_timeline(db, booking_id)

    async def record_status_timeline(
        self, booking_id: str, status: str, title: str, description: str, now: datetime
    ) -> None:
        """Atomically insert the entry for ``status`` or mark the existing one completed."""
        async with self._session_factory() as db:
            await crud.upsert_status_timeline(db, booking_id, status, title, description, now)
        await self._publish(TimelineEntry.__tablename__, UPDATE, booking_id)

    async def delete_timeline_entries(self, booking_id: str) -> int:
        async with self._session_factory() as db:
            removed = await crud.delete_timeline_entries(db, booking_id)
        if removed:
            await self._publish(TimelineEntry.__tablename__, DELETE, booking_id)
        return removed

    # ── Catalog reads ────────────────────────────────────────

    async def get_row(self, model, row_id: str):
        async with self._session_factory() as db:
            return await db.get(model, row_id)

    async def get_technician(self, technician_id: str) -> Technician | None:
        async with self._session_factory() as db:
            return await crud.get_technician(db, technician_id)

    async def list_brands(self) -> list[PrinterBrand]:
        async with self._session_factory() as db:
            return await crud.list_brands(db)

    async def list_categories(self) -> list[ProblemCategory]:
        async with self._session_factory() as db:
            return await crud.list_categories(db)

    async def list_technicians(self, active_only: bool = True) -> list[Technician]:
        async with self._session_factory() as db:
            return await crud.list_technicians(db, active_only=active_only)

    async def list_gallery_images(self) -> list[GalleryImage]:
        async with self._session_factory() as db:
            return await crud.list_gallery_images(db)

    async def count_active(self, model) -> int:
        async with self._session_factory() as db:
            return await crud.count_active(db, model)

    # ── Catalog writes ───────────────────────────────────────

    async def add_brand(self, name: str) -> PrinterBrand:
        async with self._session_factory() as db:
            brand = await crud.create_brand(db, name)
        await self._publish(PrinterBrand.__tablename__, INSERT, brand.id)
        return brand

    async def add_model(self, brand_id: str, name: str, type: str = "inkjet") -> PrinterModel:
        await self._require_active(PrinterBrand, brand_id)
        async with self._session_factory() as db:
            model = await crud.create_model(db, brand_id, name, type)
        await self._publish(PrinterModel.__tablename__, INSERT, model.id)
        return model

    async def add_category(self, name: str, icon: str = "Printer") -> ProblemCategory:
        async with self._session_factory() as db:
            category = await crud.create_category(db, name, icon)
        await self._publish(ProblemCategory.__tablename__, INSERT, category.id)
        return category

    async def add_problem(self, category_id: str, **fields) -> Problem:
        await self._require_active(ProblemCategory, category_id)
        async with self._session_factory() as db:
            problem = await crud.create_problem(db, category_id, **fields)
        await self._publish(Problem.__tablename__, INSERT, problem.id)
        return problem

    async def add_technician(self, **fields) -> Technician:
        async with self._session_factory() as db:
            tech = await crud.create_technician(db, **fields)
        await self._publish(Technician.__tablename__, INSERT, tech.id)
        return tech

    async def add_gallery_image(self, **fields) -> GalleryImage:
        async with self._session_factory() as db:
            img = await crud.create_gallery_image(db, **fields)
        await self._publish(GalleryImage.__tablename__, INSERT, img.id)
        return img

    async def update_row(self, model, row_id: str, **fields):
        """Partial update of an active catalog row; None values are left untouched."""
        async with self._session_factory() as db:
            row = await db.get(model, row_id)
            if row is None or not row.is_active:
                raise NotFoundError(_ENTITY_NAMES.get(model, model.__name__), row_id)
            row = await crud.update_row(db, row, **fields)
        await self._publish(model.__tablename__, UPDATE, row_id)
        return row

    async def soft_delete(self, model, row_id: str):
        return await self.update_row(model, row_id, is_active=False)

    async def _require_active(self, model, row_id: str) -> None:
        row = await self.get_row(model, row_id)
        if row is None or not row.is_active:
            raise NotFoundError(_ENTITY_NAMES.get(model, model.__name__), row_id)
