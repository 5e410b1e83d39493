"""Pydantic request/response schemas."""

from printcare.schemas.booking import (
    BookingCreate, BookingRead, StatusUpdate, TechnicianAssign,
    ActualCostUpdate, TimelineEntryRead, LifecycleResponse,
)
from printcare.schemas.catalog import (
    BrandCreate, BrandUpdate, BrandRead, ModelCreate, ModelUpdate, ModelRead,
    CategoryCreate, CategoryUpdate, CategoryRead, ProblemCreate, ProblemUpdate, ProblemRead,
    TechnicianCreate, TechnicianUpdate, TechnicianRead,
    GalleryImageCreate, GalleryImageUpdate, GalleryImageRead,
)
from printcare.schemas.dashboard import DashboardSummary, BookingNotification
from printcare.schemas.ws_messages import ChangeEvent

__all__ = [
    "BookingCreate", "BookingRead", "StatusUpdate", "TechnicianAssign",
    "ActualCostUpdate", "TimelineEntryRead", "LifecycleResponse",
    "BrandCreate", "BrandUpdate", "BrandRead", "ModelCreate", "ModelUpdate", "ModelRead",
    "CategoryCreate", "CategoryUpdate", "CategoryRead",
    "ProblemCreate", "ProblemUpdate", "ProblemRead",
    "TechnicianCreate", "TechnicianUpdate", "TechnicianRead",
    "GalleryImageCreate", "GalleryImageUpdate", "GalleryImageRead",
    "DashboardSummary", "BookingNotification",
    "ChangeEvent",
]
