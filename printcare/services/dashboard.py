"""Admin dashboard summary: counts plus new-booking notifications."""

from __future__ import annotations

from printcare.db.store import CatalogStore
from printcare.models import GalleryImage, PrinterBrand, ProblemCategory, Technician
from printcare.schemas.dashboard import BookingNotification, DashboardSummary
from printcare.services.booking_views import notification_message


async def build_summary(store: CatalogStore) -> DashboardSummary:
    by_status = await store.count_bookings_by_status()
    pending = await store.list_pending_bookings()
    return DashboardSummary(
        total_bookings=sum(by_status.values()),
        bookings_by_status=by_status,
        brands=await store.count_active(PrinterBrand),
        categories=await store.count_active(ProblemCategory),
        technicians=await store.count_active(Technician),
        gallery_images=await store.count_active(GalleryImage),
        notifications=[
            BookingNotification(
                booking_id=b.id,
                message=notification_message(b),
                timestamp=b.created_at,
            )
            for b in pending
        ],
    )
