from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from printcare.db.store import CatalogStore
from printcare.dependencies import get_store
from printcare.models import GalleryImage
from printcare.schemas import GalleryImageCreate, GalleryImageRead, GalleryImageUpdate
from printcare.services.errors import NotFoundError

router = APIRouter(prefix="/api/gallery", tags=["gallery"])


@router.get("", response_model=list[GalleryImageRead])
async def list_gallery_images(store: CatalogStore = Depends(get_store)):
    return await store.list_gallery_images()


@router.post("", response_model=GalleryImageRead, status_code=201)
async def create_gallery_image(body: GalleryImageCreate, store: CatalogStore = Depends(get_store)):
    return await store.add_gallery_image(**body.model_dump())


@router.put("/{image_id}", response_model=GalleryImageRead)
async def update_gallery_image(
    image_id: str, body: GalleryImageUpdate, store: CatalogStore = Depends(get_store),
):
    try:
        return await store.update_row(GalleryImage, image_id, **body.model_dump(exclude_unset=True))
    except NotFoundError:
        raise HTTPException(404, "Gallery image not found")


@router.delete("/{image_id}")
async def delete_gallery_image(image_id: str, store: CatalogStore = Depends(get_store)):
    try:
        await store.soft_delete(GalleryImage, image_id)
    except NotFoundError:
        raise HTTPException(404, "Gallery image not found")
    return {"ok": True, "id": image_id}
