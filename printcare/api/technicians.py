"""Technician roster API."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from printcare.db.store import CatalogStore
from printcare.dependencies import get_store
from printcare.models import Technician
from printcare.schemas import TechnicianCreate, TechnicianRead, TechnicianUpdate
from printcare.services.errors import NotFoundError

router = APIRouter(prefix="/api/technicians", tags=["technicians"])


@router.get("", response_model=list[TechnicianRead])
async def list_technicians(store: CatalogStore = Depends(get_store)):
    return await store.list_technicians(active_only=True)


@router.post("", response_model=TechnicianRead, status_code=201)
async def create_technician(body: TechnicianCreate, store: CatalogStore = Depends(get_store)):
    return await store.add_technician(**body.model_dump())


@router.put("/{tech_id}", response_model=TechnicianRead)
async def update_technician(
    tech_id: str, body: TechnicianUpdate, store: CatalogStore = Depends(get_store),
):
    try:
        return await store.update_row(Technician, tech_id, **body.model_dump(exclude_unset=True))
    except NotFoundError:
        raise HTTPException(404, "Technician not found")


@router.delete("/{tech_id}")
async def delete_technician(tech_id: str, store: CatalogStore = Depends(get_store)):
    try:
        tech = await store.soft_delete(Technician, tech_id)
    except NotFoundError:
        raise HTTPException(404, "Technician not found")
    return {"ok": True, "id": tech.id}
