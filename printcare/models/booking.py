"""Service booking and its timeline log."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import String, ForeignKey, DateTime, Boolean, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from printcare.models.base import Base, ULIDMixin, utcnow


class Booking(Base, ULIDMixin):
    __tablename__ = "service_bookings"

    customer_id: Mapped[str] = mapped_column(String(26), ForeignKey("customers.id"))
    printer_brand_id: Mapped[str | None] = mapped_column(String(26), ForeignKey("printer_brands.id"), nullable=True, default=None)
    printer_model_id: Mapped[str | None] = mapped_column(String(26), ForeignKey("printer_models.id"), nullable=True, default=None)
    problem_category_id: Mapped[str | None] = mapped_column(String(26), ForeignKey("problem_categories.id"), nullable=True, default=None)
    problem_description: Mapped[str] = mapped_column(String(2000), default="")
    service_type: Mapped[str] = mapped_column(String(50))
    appointment_date: Mapped[str] = mapped_column(String(20), default="")
    appointment_time: Mapped[str] = mapped_column(String(20), default="")
    technician_id: Mapped[str | None] = mapped_column(String(26), ForeignKey("technicians.id"), nullable=True, default=None)
    status: Mapped[str] = mapped_column(String(30), default="pending")
    estimated_cost: Mapped[str] = mapped_column(String(50), default="")
    actual_cost: Mapped[str] = mapped_column(String(50), default="")
    notes: Mapped[str] = mapped_column(String(2000), default="")
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    customer = relationship("Customer", lazy="selectin")
    printer_brand = relationship("PrinterBrand", lazy="selectin")
    printer_model = relationship("PrinterModel", lazy="selectin")
    problem_category = relationship("ProblemCategory", lazy="selectin")
    technician = relationship("Technician", lazy="selectin")
    timeline = relationship(
        "TimelineEntry",
        back_populates="booking",
        lazy="selectin",
        order_by="TimelineEntry.created_at",
    )


class TimelineEntry(Base, ULIDMixin):
    __tablename__ = "booking_timeline"
    # dedup_key is the status label for status entries and NULL for
    # synthetic markers, so only status labels are unique per booking.
    __table_args__ = (UniqueConstraint("booking_id", "dedup_key", name="uq_timeline_booking_status"),)

    booking_id: Mapped[str] = mapped_column(String(26), ForeignKey("service_bookings.id"), index=True)
    status: Mapped[str] = mapped_column(String(30))
    dedup_key: Mapped[str | None] = mapped_column(String(30), nullable=True, default=None)
    title: Mapped[str] = mapped_column(String(200))
    description: Mapped[str] = mapped_column(String(500), default="")
    completed: Mapped[bool] = mapped_column(Boolean, default=False)
    completed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True, default=None)

    booking = relationship("Booking", back_populates="timeline")
