"""
Health Routes
"""
from fastapi import APIRouter, Depends
from datetime import datetime

from src.services.storage import InMemoryStorage, get_storage
from src.services.translation import TranslationService, get_translation_service

router = APIRouter()


@router.get("/health")
async def health(
    storage: InMemoryStorage = Depends(get_storage),
    translator: TranslationService = Depends(get_translation_service)
):
    """Liveness plus a summary of the loaded routing data"""
    return {
        "status": "healthy",
        "timestamp": datetime.now().isoformat(),
        "categories": len(await storage.get_categories()),
        "templates": len(await storage.get_templates()),
        "inquiries": len(await storage.get_inquiries()),
        "translation_api_configured": translator.is_configured
    }
