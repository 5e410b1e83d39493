"""Printer brand and model catalog."""

from __future__ import annotations

from sqlalchemy import String, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from printcare.models.base import Base, ULIDMixin, SoftDeleteMixin


class PrinterBrand(Base, ULIDMixin, SoftDeleteMixin):
    __tablename__ = "printer_brands"

    name: Mapped[str] = mapped_column(String(100))

    models = relationship("PrinterModel", back_populates="brand", lazy="selectin", order_by="PrinterModel.name")


class PrinterModel(Base, ULIDMixin, SoftDeleteMixin):
    __tablename__ = "printer_models"

    brand_id: Mapped[str] = mapped_column(String(26), ForeignKey("printer_brands.id"))
    name: Mapped[str] = mapped_column(String(150))
    type: Mapped[str] = mapped_column(String(30), default="inkjet")  # inkjet | laser | multifunction

    brand = relationship("PrinterBrand", back_populates="models")
