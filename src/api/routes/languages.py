"""
Language Routes
"""
from fastapi import APIRouter, Depends, HTTPException
from typing import List

from src.api.models.requests import LanguageCreate, LanguageUpdate
from src.core.exceptions import ValidationException
from src.models.entities import Language
from src.services.storage import InMemoryStorage, get_storage

router = APIRouter()


@router.get("", response_model=List[Language])
async def list_languages(storage: InMemoryStorage = Depends(get_storage)):
    return await storage.get_languages()


@router.get("/active", response_model=List[Language])
async def list_active_languages(storage: InMemoryStorage = Depends(get_storage)):
    return await storage.get_active_languages()


@router.post("", response_model=Language, status_code=201)
async def create_language(request: LanguageCreate, storage: InMemoryStorage = Depends(get_storage)):
    try:
        return await storage.create_language(request.model_dump())
    except ValidationException as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.put("/{language_id}", response_model=Language)
async def update_language(
    language_id: str,
    request: LanguageUpdate,
    storage: InMemoryStorage = Depends(get_storage)
):
    try:
        language = await storage.update_language(language_id, request.model_dump(exclude_unset=True))
    except ValidationException as e:
        raise HTTPException(status_code=400, detail=str(e))

    if not language:
        raise HTTPException(status_code=404, detail="Language not found")
    return language
