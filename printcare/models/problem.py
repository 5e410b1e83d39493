"""Problem taxonomy: categories and the problems filed under them."""

from __future__ import annotations

from sqlalchemy import String, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from printcare.models.base import Base, ULIDMixin, SoftDeleteMixin


class ProblemCategory(Base, ULIDMixin, SoftDeleteMixin):
    __tablename__ = "problem_categories"

    name: Mapped[str] = mapped_column(String(150))
    icon: Mapped[str] = mapped_column(String(50), default="Printer")

    problems = relationship("Problem", back_populates="category", lazy="selectin", order_by="Problem.name")


class Problem(Base, ULIDMixin, SoftDeleteMixin):
    __tablename__ = "problems"

    category_id: Mapped[str] = mapped_column(String(26), ForeignKey("problem_categories.id"))
    name: Mapped[str] = mapped_column(String(200))
    description: Mapped[str] = mapped_column(String(1000), default="")
    severity: Mapped[str] = mapped_column(String(10), default="medium")  # low | medium | high
    estimated_time: Mapped[str] = mapped_column(String(50), default="")
    estimated_cost: Mapped[str] = mapped_column(String(50), default="")

    category = relationship("ProblemCategory", back_populates="problems")
