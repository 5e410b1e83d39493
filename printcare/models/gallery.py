from __future__ import annotations

from sqlalchemy import String, Integer
from sqlalchemy.orm import Mapped, mapped_column

from printcare.models.base import Base, ULIDMixin, SoftDeleteMixin


class GalleryImage(Base, ULIDMixin, SoftDeleteMixin):
    __tablename__ = "gallery_images"

    title: Mapped[str] = mapped_column(String(200))
    alt_text: Mapped[str] = mapped_column(String(300), default="")
    image_url: Mapped[str] = mapped_column(String(1000))
    category: Mapped[str] = mapped_column(String(30), default="service")
    sort_order: Mapped[int] = mapped_column(Integer, default=0)
