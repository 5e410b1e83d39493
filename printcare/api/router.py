"""Central router that includes all sub-routers."""

from fastapi import APIRouter

from printcare.api.bookings import router as bookings_router
from printcare.api.printers import router as printers_router
from printcare.api.problems import router as problems_router
from printcare.api.technicians import router as technicians_router
from printcare.api.gallery import router as gallery_router
from printcare.api.dashboard import router as dashboard_router
from printcare.api.websocket import router as websocket_router

api_router = APIRouter()
api_router.include_router(bookings_router)
api_router.include_router(printers_router)
api_router.include_router(problems_router)
api_router.include_router(technicians_router)
api_router.include_router(gallery_router)
api_router.include_router(dashboard_router)
api_router.include_router(websocket_router)
