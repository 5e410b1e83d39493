"""Denormalised read shape of a booking for the dashboard."""

from __future__ import annotations

from printcare.models import Booking
from printcare.schemas.booking import (
    BookingRead, CustomerInfo, PrinterInfo, ProblemInfo, ServiceInfo, TimelineEntryRead,
)


def _shown(ref, hide_inactive: bool):
    """A soft-deleted reference reads as absent when inactive rows are hidden."""
    if ref is None or (hide_inactive and not ref.is_active):
        return None
    return ref


def to_booking_read(booking: Booking, unassigned_label: str, hide_inactive: bool = False) -> BookingRead:
    customer = booking.customer
    brand = _shown(booking.printer_brand, hide_inactive)
    model = _shown(booking.printer_model, hide_inactive)
    category = _shown(booking.problem_category, hide_inactive)
    technician = _shown(booking.technician, hide_inactive)
    return BookingRead(
        id=booking.id,
        customer=CustomerInfo(
            name=customer.name if customer else "",
            phone=customer.phone if customer else "",
            email=(customer.email or "") if customer else "",
            address=(customer.address or "") if customer else "",
        ),
        printer=PrinterInfo(
            brand=brand.name if brand else "",
            model=model.name if model else "",
        ),
        problem=ProblemInfo(
            category=category.name if category else "",
            description=booking.problem_description or "",
        ),
        service=ServiceInfo(
            type=booking.service_type,
            date=booking.appointment_date,
            time=booking.appointment_time,
        ),
        status=booking.status,
        technician=technician.name if technician else unassigned_label,
        estimated_cost=booking.estimated_cost or "",
        actual_cost=booking.actual_cost or "",
        notes=booking.notes or "",
        timeline=[
            TimelineEntryRead(
                status=t.status,
                title=t.title,
                description=t.description,
                timestamp=t.completed_at or t.created_at,
                completed=t.completed,
            )
            for t in booking.timeline
        ],
        created_at=booking.created_at,
    )


def notification_message(booking: Booking) -> str:
    customer = booking.customer.name if booking.customer else ""
    brand = booking.printer_brand.name if booking.printer_brand else ""
    model = booking.printer_model.name if booking.printer_model else ""
    return f"Booking baru dari {customer} - {brand} {model}".rstrip()
