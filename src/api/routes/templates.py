"""
Template Routes
CRUD for reply templates, translation and success-rate feedback
"""
from fastapi import APIRouter, Depends, HTTPException, Query, Response
from typing import List, Optional

from src.api.models.requests import (
    SuccessRateUpdate,
    TemplateCreate,
    TemplateUpdate,
    TranslateRequest,
)
from src.api.models.responses import TranslateResponse
from src.core.exceptions import ValidationException
from src.core.logging import get_logger
from src.models.entities import Template
from src.services.storage import InMemoryStorage, get_storage
from src.services.translation import TranslationService, get_translation_service

logger = get_logger(__name__)
router = APIRouter()


@router.get("", response_model=List[Template])
async def list_templates(
    category_id: Optional[str] = Query(None, description="Only templates of this category"),
    language_code: Optional[str] = Query(None, description="Only templates in this language"),
    storage: InMemoryStorage = Depends(get_storage)
):
    """
    List templates

    category_id takes precedence over language_code when both are given.
    """
    if category_id:
        return await storage.get_templates_by_category(category_id)
    if language_code:
        return await storage.get_templates_by_language(language_code)
    return await storage.get_templates()


@router.post("", response_model=Template, status_code=201)
async def create_template(request: TemplateCreate, storage: InMemoryStorage = Depends(get_storage)):
    try:
        return await storage.create_template(request.model_dump())
    except ValidationException as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.put("/{template_id}", response_model=Template)
async def update_template(
    template_id: str,
    request: TemplateUpdate,
    storage: InMemoryStorage = Depends(get_storage)
):
    try:
        template = await storage.update_template(template_id, request.model_dump(exclude_unset=True))
    except ValidationException as e:
        raise HTTPException(status_code=400, detail=str(e))

    if not template:
        raise HTTPException(status_code=404, detail="Template not found")
    return template


@router.delete("/{template_id}", status_code=204)
async def delete_template(template_id: str, storage: InMemoryStorage = Depends(get_storage)):
    if not await storage.delete_template(template_id):
        raise HTTPException(status_code=404, detail="Template not found")
    return Response(status_code=204)


@router.post("/{template_id}/translate", response_model=TranslateResponse)
async def translate_template(
    template_id: str,
    request: TranslateRequest,
    storage: InMemoryStorage = Depends(get_storage),
    translator: TranslationService = Depends(get_translation_service)
):
    """Translate a template body; returns the original body if translation is unavailable"""
    template = await storage.get_template(template_id)
    if not template:
        raise HTTPException(status_code=404, detail="Template not found")

    try:
        translated = await translator.translate_template(template, request.target_language_code)
    except Exception as e:
        logger.error("template_translation_failed", template_id=template_id, error=str(e))
        raise HTTPException(status_code=500, detail="Failed to translate template")

    return TranslateResponse(translated_content=translated)


@router.put("/{template_id}/success-rate", response_model=Template)
async def update_success_rate(
    template_id: str,
    request: SuccessRateUpdate,
    storage: InMemoryStorage = Depends(get_storage)
):
    """Record the externally measured success rate of a template"""
    template = await storage.update_template_success_rate(template_id, request.success_rate)
    if not template:
        raise HTTPException(status_code=404, detail="Template not found")

    logger.info("template_success_rate_updated", template_id=template_id, success_rate=request.success_rate)
    return template
