"""SQLAlchemy ORM models."""

from printcare.models.base import Base
from printcare.models.customer import Customer
from printcare.models.printer import PrinterBrand, PrinterModel
from printcare.models.problem import ProblemCategory, Problem
from printcare.models.technician import Technician
from printcare.models.gallery import GalleryImage
from printcare.models.booking import Booking, TimelineEntry

__all__ = [
    "Base", "Customer", "PrinterBrand", "PrinterModel",
    "ProblemCategory", "Problem", "Technician", "GalleryImage",
    "Booking", "TimelineEntry",
]
