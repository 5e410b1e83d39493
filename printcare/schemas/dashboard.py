from __future__ import annotations
from datetime import datetime
from pydantic import BaseModel


class BookingNotification(BaseModel):
    booking_id: str
    message: str
    timestamp: datetime


class DashboardSummary(BaseModel):
    total_bookings: int
    bookings_by_status: dict[str, int]
    brands: int
    categories: int
    technicians: int
    gallery_images: int
    notifications: list[BookingNotification] = []
