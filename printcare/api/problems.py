"""Problem categories and the problems filed under them."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from printcare.db.store import CatalogStore
from printcare.dependencies import get_store
from printcare.models import Problem, ProblemCategory
from printcare.schemas import (
    CategoryCreate, CategoryRead, CategoryUpdate, ProblemCreate, ProblemRead, ProblemUpdate,
)
from printcare.services.errors import NotFoundError

router = APIRouter(prefix="/api", tags=["problems"])


@router.get("/problem-categories", response_model=list[CategoryRead])
async def list_categories(store: CatalogStore = Depends(get_store)):
    categories = await store.list_categories()
    return [
        CategoryRead(
            id=c.id,
            name=c.name,
            icon=c.icon,
            problems=[ProblemRead.model_validate(p) for p in c.problems if p.is_active],
        )
        for c in categories
    ]


@router.post("/problem-categories", status_code=201)
async def create_category(body: CategoryCreate, store: CatalogStore = Depends(get_store)):
    category = await store.add_category(body.name.strip(), body.icon)
    return {"id": category.id, "name": category.name, "icon": category.icon}


@router.put("/problem-categories/{category_id}")
async def update_category(
    category_id: str, body: CategoryUpdate, store: CatalogStore = Depends(get_store),
):
    try:
        category = await store.update_row(
            ProblemCategory, category_id, name=body.name.strip(), icon=body.icon,
        )
    except NotFoundError:
        raise HTTPException(404, "Problem category not found")
    return {"id": category.id, "name": category.name, "icon": category.icon}


@router.delete("/problem-categories/{category_id}")
async def delete_category(category_id: str, store: CatalogStore = Depends(get_store)):
    try:
        await store.soft_delete(ProblemCategory, category_id)
    except NotFoundError:
        raise HTTPException(404, "Problem category not found")
    return {"ok": True, "id": category_id}


@router.post("/problem-categories/{category_id}/problems", response_model=ProblemRead, status_code=201)
async def create_problem(
    category_id: str, body: ProblemCreate, store: CatalogStore = Depends(get_store),
):
    try:
        return await store.add_problem(category_id, **body.model_dump())
    except NotFoundError:
        raise HTTPException(404, "Problem category not found")


@router.put("/problems/{problem_id}", response_model=ProblemRead)
async def update_problem(problem_id: str, body: ProblemUpdate, store: CatalogStore = Depends(get_store)):
    try:
        return await store.update_row(Problem, problem_id, **body.model_dump())
    except NotFoundError:
        raise HTTPException(404, "Problem not found")


@router.delete("/problems/{problem_id}")
async def delete_problem(problem_id: str, store: CatalogStore = Depends(get_store)):
    try:
        await store.soft_delete(Problem, problem_id)
    except NotFoundError:
        raise HTTPException(404, "Problem not found")
    return {"ok": True, "id": problem_id}
