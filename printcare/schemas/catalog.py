"""Request/response schemas for the catalog entities."""

from __future__ import annotations
from datetime import datetime
from typing import Literal
from pydantic import BaseModel, Field

PrinterType = Literal["inkjet", "laser", "multifunction"]
Severity = Literal["low", "medium", "high"]


class BrandCreate(BaseModel):
    name: str = Field(min_length=1)


class BrandUpdate(BaseModel):
    name: str = Field(min_length=1)


class ModelCreate(BaseModel):
    name: str = Field(min_length=1)
    type: PrinterType = "inkjet"


class ModelUpdate(BaseModel):
    name: str = Field(min_length=1)
    type: PrinterType = "inkjet"


class ModelRead(BaseModel):
    id: str
    name: str
    type: str

    model_config = {"from_attributes": True}


class BrandRead(BaseModel):
    id: str
    name: str
    models: list[ModelRead] = []


class CategoryCreate(BaseModel):
    name: str = Field(min_length=1)
    icon: str = "Printer"


class CategoryUpdate(BaseModel):
    name: str = Field(min_length=1)
    icon: str = "Printer"


class ProblemCreate(BaseModel):
    name: str = Field(min_length=1)
    description: str = ""
    severity: Severity = "medium"
    estimated_time: str = ""
    estimated_cost: str = ""


class ProblemUpdate(ProblemCreate):
    pass


class ProblemRead(BaseModel):
    id: str
    name: str
    description: str
    severity: str
    estimated_time: str
    estimated_cost: str

    model_config = {"from_attributes": True}


class CategoryRead(BaseModel):
    id: str
    name: str
    icon: str
    problems: list[ProblemRead] = []


class TechnicianCreate(BaseModel):
    name: str = Field(min_length=1)
    phone: str = Field(min_length=1)
    email: str = ""
    specialization: list[str] = []
    experience: int = Field(default=0, ge=0)
    rating: float = Field(default=5.0, ge=0, le=5)


class TechnicianUpdate(BaseModel):
    name: str | None = None
    phone: str | None = None
    email: str | None = None
    specialization: list[str] | None = None
    experience: int | None = Field(default=None, ge=0)
    rating: float | None = Field(default=None, ge=0, le=5)
    is_available: bool | None = None


class TechnicianRead(BaseModel):
    id: str
    name: str
    phone: str
    email: str
    specialization: list[str]
    experience: int
    rating: float
    is_active: bool
    is_available: bool
    created_at: datetime

    model_config = {"from_attributes": True}


class GalleryImageCreate(BaseModel):
    title: str = Field(min_length=1)
    alt_text: str = ""
    image_url: str = Field(min_length=1)
    category: str = "service"
    sort_order: int = 0


class GalleryImageUpdate(BaseModel):
    title: str | None = None
    alt_text: str | None = None
    image_url: str | None = None
    category: str | None = None
    sort_order: int | None = None


class GalleryImageRead(BaseModel):
    id: str
    title: str
    alt_text: str
    image_url: str
    category: str
    sort_order: int
    created_at: datetime

    model_config = {"from_attributes": True}
