"""Printer catalog API — brands and their models."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from printcare.db.store import CatalogStore
from printcare.dependencies import get_store
from printcare.models import PrinterBrand, PrinterModel
from printcare.schemas import BrandCreate, BrandRead, BrandUpdate, ModelCreate, ModelRead, ModelUpdate
from printcare.services.errors import NotFoundError

router = APIRouter(prefix="/api", tags=["printers"])


@router.get("/brands", response_model=list[BrandRead])
async def list_brands(store: CatalogStore = Depends(get_store)):
    brands = await store.list_brands()
    return [
        BrandRead(
            id=b.id,
            name=b.name,
            models=[ModelRead.model_validate(m) for m in b.models if m.is_active],
        )
        for b in brands
    ]


@router.post("/brands", status_code=201)
async def create_brand(body: BrandCreate, store: CatalogStore = Depends(get_store)):
    brand = await store.add_brand(body.name.strip())
    return {"id": brand.id, "name": brand.name}


@router.put("/brands/{brand_id}")
async def update_brand(brand_id: str, body: BrandUpdate, store: CatalogStore = Depends(get_store)):
    try:
        brand = await store.update_row(PrinterBrand, brand_id, name=body.name.strip())
    except NotFoundError:
        raise HTTPException(404, "Printer brand not found")
    return {"id": brand.id, "name": brand.name}


@router.delete("/brands/{brand_id}")
async def delete_brand(brand_id: str, store: CatalogStore = Depends(get_store)):
    try:
        await store.soft_delete(PrinterBrand, brand_id)
    except NotFoundError:
        raise HTTPException(404, "Printer brand not found")
    return {"ok": True, "id": brand_id}


@router.post("/brands/{brand_id}/models", response_model=ModelRead, status_code=201)
async def create_model(brand_id: str, body: ModelCreate, store: CatalogStore = Depends(get_store)):
    try:
        return await store.add_model(brand_id, body.name.strip(), body.type)
    except NotFoundError:
        raise HTTPException(404, "Printer brand not found")


@router.put("/models/{model_id}", response_model=ModelRead)
async def update_model(model_id: str, body: ModelUpdate, store: CatalogStore = Depends(get_store)):
    try:
        return await store.update_row(PrinterModel, model_id, name=body.name.strip(), type=body.type)
    except NotFoundError:
        raise HTTPException(404, "Printer model not found")


@router.delete("/models/{model_id}")
async def delete_model(model_id: str, store: CatalogStore = Depends(get_store)):
    try:
        await store.soft_delete(PrinterModel, model_id)
    except NotFoundError:
        raise HTTPException(404, "Printer model not found")
    return {"ok": True, "id": model_id}
