"""
Category Routes
CRUD for inquiry categories and their match keywords
"""
from fastapi import APIRouter, Depends, HTTPException, Response
from typing import List

from src.api.models.requests import CategoryCreate, CategoryUpdate
from src.core.exceptions import ValidationException
from src.core.logging import get_logger
from src.models.entities import Category
from src.services.storage import InMemoryStorage, get_storage

logger = get_logger(__name__)
router = APIRouter()


@router.get("", response_model=List[Category])
async def list_categories(storage: InMemoryStorage = Depends(get_storage)):
    """List categories in matching priority order"""
    return await storage.get_categories()


@router.post("", response_model=Category, status_code=201)
async def create_category(request: CategoryCreate, storage: InMemoryStorage = Depends(get_storage)):
    try:
        return await storage.create_category(request.model_dump())
    except ValidationException as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.put("/{category_id}", response_model=Category)
async def update_category(
    category_id: str,
    request: CategoryUpdate,
    storage: InMemoryStorage = Depends(get_storage)
):
    try:
        category = await storage.update_category(category_id, request.model_dump(exclude_unset=True))
    except ValidationException as e:
        raise HTTPException(status_code=400, detail=str(e))

    if not category:
        raise HTTPException(status_code=404, detail="Category not found")

    logger.info("category_updated", category_id=category_id)
    return category


@router.delete("/{category_id}", status_code=204)
async def delete_category(category_id: str, storage: InMemoryStorage = Depends(get_storage)):
    if not await storage.delete_category(category_id):
        raise HTTPException(status_code=404, detail="Category not found")

    logger.info("category_deleted", category_id=category_id)
    return Response(status_code=204)
