"""CRUD operations over a single AsyncSession."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import select, update, delete, func, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from ulid import ULID

from printcare.models import (
    Customer, PrinterBrand, PrinterModel, ProblemCategory, Problem,
    Technician, GalleryImage, Booking, TimelineEntry,
)


async def _save(db: AsyncSession, obj):
    db.add(obj)
    await db.commit()
    await db.refresh(obj)
    return obj


async def update_row(db: AsyncSession, obj, **kwargs):
    """Set every non-None field on an ORM row and commit."""
    for k, v in kwargs.items():
        if v is not None:
            setattr(obj, k, v)
    await db.commit()
    await db.refresh(obj)
    return obj


async def count_active(db: AsyncSession, model) -> int:
    result = await db.execute(select(func.count()).select_from(model).where(model.is_active == True))
    return result.scalar_one()


async def find_active_id_by_name(db: AsyncSession, model, name: str) -> str | None:
    """Exact-name lookup among active catalog rows; first match wins."""
    result = await db.execute(
        select(model.id).where(model.name == name, model.is_active == True).limit(1)
    )
    return result.scalars().first()


# ── Customer ──────────────────────────────────────────────

async def get_customer_by_phone(db: AsyncSession, phone: str) -> Customer | None:
    result = await db.execute(select(Customer).where(Customer.phone == phone).limit(1))
    return result.scalars().first()


async def create_customer(
    db: AsyncSession, name: str, phone: str, email: str = "", address: str = ""
) -> Customer:
    return await _save(db, Customer(name=name, phone=phone, email=email, address=address))


async def update_customer(db: AsyncSession, customer: Customer, **kwargs) -> Customer:
    return await update_row(db, customer, **kwargs)


async def list_customers(db: AsyncSession) -> list[Customer]:
    result = await db.execute(select(Customer).order_by(Customer.created_at))
    return list(result.scalars().all())


# ── Printer brands & models ───────────────────────────────

async def list_brands(db: AsyncSession) -> list[PrinterBrand]:
    result = await db.execute(
        select(PrinterBrand).where(PrinterBrand.is_active == True).order_by(PrinterBrand.name)
    )
    return list(result.scalars().all())


async def create_brand(db: AsyncSession, name: str) -> PrinterBrand:
    return await _save(db, PrinterBrand(name=name))


async def create_model(db: AsyncSession, brand_id: str, name: str, type: str = "inkjet") -> PrinterModel:
    return await _save(db, PrinterModel(brand_id=brand_id, name=name, type=type))


# ── Problem categories & problems ─────────────────────────

async def list_categories(db: AsyncSession) -> list[ProblemCategory]:
    result = await db.execute(
        select(ProblemCategory).where(ProblemCategory.is_active == True).order_by(ProblemCategory.name)
    )
    return list(result.scalars().all())


async def create_category(db: AsyncSession, name: str, icon: str = "Printer") -> ProblemCategory:
    return await _save(db, ProblemCategory(name=name, icon=icon))


async def create_problem(
    db: AsyncSession,
    category_id: str,
    name: str,
    description: str = "",
    severity: str = "medium",
    estimated_time: str = "",
    estimated_cost: str = "",
) -> Problem:
    problem = Problem(
        category_id=category_id, name=name, description=description,
        severity=severity, estimated_time=estimated_time, estimated_cost=estimated_cost,
    )
    return await _save(db, problem)


# ── Technician ────────────────────────────────────────────

async def create_technician(
    db: AsyncSession,
    name: str,
    phone: str = "",
    email: str = "",
    specialization: list[str] | None = None,
    experience: int = 0,
    rating: float = 5.0,
) -> Technician:
    tech = Technician(
        name=name, phone=phone, email=email,
        specialization=specialization or [],
        experience=experience, rating=rating,
        is_active=True, is_available=True,
    )
    return await _save(db, tech)


async def get_technician(db: AsyncSession, technician_id: str) -> Technician | None:
    return await db.get(Technician, technician_id)


async def list_technicians(db: AsyncSession, active_only: bool = True) -> list[Technician]:
    stmt = select(Technician).order_by(Technician.name)
    if active_only:
        stmt = stmt.where(Technician.is_active == True)
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def find_available_technician(db: AsyncSession) -> Technician | None:
    result = await db.execute(
        select(Technician)
        .where(Technician.is_available == True, Technician.is_active == True)
        .order_by(Technician.created_at)
        .limit(1)
    )
    return result.scalars().first()


# ── Gallery ───────────────────────────────────────────────

async def list_gallery_images(db: AsyncSession) -> list[GalleryImage]:
    result = await db.execute(
        select(GalleryImage)
        .where(GalleryImage.is_active == True)
        .order_by(GalleryImage.sort_order, GalleryImage.created_at)
    )
    return list(result.scalars().all())


async def create_gallery_image(
    db: AsyncSession, title: str, image_url: str,
    alt_text: str = "", category: str = "service", sort_order: int = 0,
) -> GalleryImage:
    img = GalleryImage(
        title=title, image_url=image_url, alt_text=alt_text,
        category=category, sort_order=sort_order,
    )
    return await _save(db, img)


# ── Booking ───────────────────────────────────────────────

async def create_booking(db: AsyncSession, **fields) -> Booking:
    return await _save(db, Booking(**fields))


async def get_booking_status(db: AsyncSession, booking_id: str) -> str | None:
    result = await db.execute(select(Booking.status).where(Booking.id == booking_id))
    return result.scalars().first()


def _bookings_query(active_only: bool):
    stmt = select(Booking).execution_options(populate_existing=True)
    if not active_only:
        return stmt
    # A NULL reference has nothing to be inactive; only joined rows are checked.
    return (
        stmt.outerjoin(PrinterBrand, Booking.printer_brand_id == PrinterBrand.id)
        .outerjoin(PrinterModel, Booking.printer_model_id == PrinterModel.id)
        .outerjoin(ProblemCategory, Booking.problem_category_id == ProblemCategory.id)
        .outerjoin(Technician, Booking.technician_id == Technician.id)
        .where(
            or_(Booking.printer_brand_id.is_(None), PrinterBrand.is_active == True),
            or_(Booking.printer_model_id.is_(None), PrinterModel.is_active == True),
            or_(Booking.problem_category_id.is_(None), ProblemCategory.is_active == True),
            or_(Booking.technician_id.is_(None), Technician.is_active == True),
        )
    )


async def get_booking(db: AsyncSession, booking_id: str) -> Booking | None:
    """Detail lookup by id; never filtered on the state of referenced rows."""
    result = await db.execute(_bookings_query(False).where(Booking.id == booking_id))
    return result.scalars().first()


async def list_bookings(db: AsyncSession, active_only: bool = False) -> list[Booking]:
    result = await db.execute(
        _bookings_query(active_only).order_by(Booking.created_at.desc(), Booking.id.desc())
    )
    return list(result.scalars().all())


async def update_booking_fields(db: AsyncSession, booking_id: str, **fields) -> int:
    """Overwrite columns on a booking. Returns the number of rows touched."""
    result = await db.execute(update(Booking).where(Booking.id == booking_id).values(**fields))
    await db.commit()
    return result.rowcount


async def delete_booking(db: AsyncSession, booking_id: str) -> int:
    result = await db.execute(delete(Booking).where(Booking.id == booking_id))
    await db.commit()
    return result.rowcount


async def count_bookings_by_status(db: AsyncSession) -> dict[str, int]:
    result = await db.execute(select(Booking.status, func.count()).group_by(Booking.status))
    return {status: count for status, count in result.all()}


async def list_pending_bookings(db: AsyncSession) -> list[Booking]:
    result = await db.execute(
        select(Booking).where(Booking.status == "pending").order_by(Booking.created_at.desc())
    )
    return list(result.scalars().all())


# ── Timeline ──────────────────────────────────────────────

async def create_timeline_entry(
    db: AsyncSession,
    booking_id: str,
    status: str,
    title: str,
    description: str = "",
    completed: bool = True,
    completed_at: datetime | None = None,
    dedup_key: str | None = None,
) -> TimelineEntry:
    entry = TimelineEntry(
        booking_id=booking_id, status=status, dedup_key=dedup_key,
        title=title, description=description,
        completed=completed, completed_at=completed_at,
    )
    return await _save(db, entry)


async def find_timeline_entry(db: AsyncSession, booking_id: str, status: str) -> TimelineEntry | None:
    result = await db.execute(
        select(TimelineEntry).where(
            TimelineEntry.booking_id == booking_id,
            TimelineEntry.status == status,
        ).limit(1)
    )
    return result.scalars().first()


async def list_timeline(db: AsyncSession, booking_id: str) -> list[TimelineEntry]:
    result = await db.execute(
        select(TimelineEntry)
        .where(TimelineEntry.booking_id == booking_id)
        .order_by(TimelineEntry.created_at)
    )
    return list(result.scalars().all())


async def update_timeline_entry(
    db: AsyncSession, booking_id: str, status: str,
    completed: bool = True, completed_at: datetime | None = None,
) -> int:
    result = await db.execute(
        update(TimelineEntry)
        .where(TimelineEntry.booking_id == booking_id, TimelineEntry.status == status)
        .values(completed=completed, completed_at=completed_at)
    )
    await db.commit()
    return result.rowcount


def _dialect_insert(db: AsyncSession):
    name = db.get_bind().dialect.name
    if name == "sqlite":
        from sqlalchemy.dialects.sqlite import insert
        return insert
    if name == "postgresql":
        from sqlalchemy.dialects.postgresql import insert
        return insert
    return None


async def upsert_status_timeline(
    db: AsyncSession, booking_id: str, status: str,
    title: str, description: str, now: datetime,
) -> None:
    """Insert the entry for ``status`` or, if it exists, mark it completed.

    Relies on the (booking_id, dedup_key) unique constraint so concurrent
    callers cannot produce two entries for one status label.
    """
    insert = _dialect_insert(db)
    if insert is None:
        try:
            await create_timeline_entry(
                db, booking_id, status, title, description,
                completed=True, completed_at=now, dedup_key=status,
            )
        except IntegrityError:
            await db.rollback()
            await update_timeline_entry(db, booking_id, status, completed=True, completed_at=now)
        return

    stmt = insert(TimelineEntry).values(
        id=str(ULID()),
        booking_id=booking_id,
        status=status,
        dedup_key=status,
        title=title,
        description=description,
        completed=True,
        completed_at=now,
    )
    stmt = stmt.on_conflict_do_update(
        index_elements=["booking_id", "dedup_key"],
        set_={"completed": True, "completed_at": now},
    )
    await db.execute(stmt)
    await db.commit()


async def delete_timeline_entries(db: AsyncSession, booking_id: str) -> int:
    result = await db.execute(delete(TimelineEntry).where(TimelineEntry.booking_id == booking_id))
    await db.commit()
    return result.rowcount
