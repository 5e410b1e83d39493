"""Technician model — assigned to bookings."""

from __future__ import annotations

from sqlalchemy import String, Boolean, Integer, Float, JSON
from sqlalchemy.orm import Mapped, mapped_column

from printcare.models.base import Base, ULIDMixin, SoftDeleteMixin


class Technician(Base, ULIDMixin, SoftDeleteMixin):
    __tablename__ = "technicians"

    name: Mapped[str] = mapped_column(String(200))
    phone: Mapped[str] = mapped_column(String(50), default="")
    email: Mapped[str] = mapped_column(String(255), default="")
    specialization: Mapped[list] = mapped_column(JSON, default=list)
    experience: Mapped[int] = mapped_column(Integer, default=0)
    rating: Mapped[float] = mapped_column(Float, default=5.0)
    is_available: Mapped[bool] = mapped_column(Boolean, default=True)
