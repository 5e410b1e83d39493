from __future__ import annotations
from datetime import datetime
from pydantic import BaseModel, Field

from printcare.services.booking_status import BookingStatus


class BookingCreate(BaseModel):
    customer_name: str = Field(min_length=1)
    phone: str = Field(min_length=1)
    email: str = ""
    address: str = ""
    printer_brand: str = ""
    printer_model: str = ""
    problem_category: str = ""
    problem_description: str = ""
    appointment_date: str = ""
    appointment_time: str = ""
    notes: str = ""


class StatusUpdate(BaseModel):
    status: BookingStatus


class TechnicianAssign(BaseModel):
    technician_id: str = Field(min_length=1)


class ActualCostUpdate(BaseModel):
    actual_cost: str


class CustomerInfo(BaseModel):
    name: str
    phone: str
    email: str = ""
    address: str = ""


class PrinterInfo(BaseModel):
    brand: str = ""
    model: str = ""


class ProblemInfo(BaseModel):
    category: str = ""
    description: str = ""


class ServiceInfo(BaseModel):
    type: str
    date: str
    time: str


class TimelineEntryRead(BaseModel):
    status: str
    title: str
    description: str
    timestamp: datetime
    completed: bool


class BookingRead(BaseModel):
    id: str
    customer: CustomerInfo
    printer: PrinterInfo
    problem: ProblemInfo
    service: ServiceInfo
    status: str
    technician: str
    estimated_cost: str = ""
    actual_cost: str = ""
    notes: str = ""
    timeline: list[TimelineEntryRead] = []
    created_at: datetime


class LifecycleResponse(BaseModel):
    ok: bool = True
    id: str
    changed: bool = True
    status: str | None = None
    warnings: list[str] = []
