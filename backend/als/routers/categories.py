"""Operation categories router (top-level categories and sub-categories).

Endpoints:
    GET     /api/categories/                 List categories
    POST    /api/categories/                 Create a category
    PUT     /api/categories/{category_id}    Rename / re-parent a category
    DELETE  /api/categories/{category_id}    Delete a category and its children
"""

from fastapi import APIRouter, Depends, Response

from als.deps import get_storage
from als.middleware.exceptions import ValidationFailedError
from als.schemas.category import Category
from als.services.storage import StorageFacade

router = APIRouter()


def _check_category(body: Category, category_id: str) -> None:
    if not body.name.strip():
        raise ValidationFailedError("Category name is required")
    if category_id and body.parent_id == category_id:
        raise ValidationFailedError("A category cannot be its own parent")


@router.get("/", response_model=list[Category])
async def list_categories(storage: StorageFacade = Depends(get_storage)):
    return await storage.get_categories()


@router.post("/", response_model=Category, status_code=201)
async def create_category(body: Category, storage: StorageFacade = Depends(get_storage)):
    _check_category(body, body.id)
    return await storage.save_category(body)


@router.put("/{category_id}", response_model=Category)
async def update_category(
    category_id: str,
    body: Category,
    storage: StorageFacade = Depends(get_storage),
):
    _check_category(body, category_id)
    return await storage.save_category(body, category_id)


@router.delete("/{category_id}", status_code=204)
async def delete_category(category_id: str, storage: StorageFacade = Depends(get_storage)):
    for child in await storage.get_categories():
        if child.parent_id == category_id:
            await storage.delete_category(child.id)
    await storage.delete_category(category_id)
    return Response(status_code=204)
