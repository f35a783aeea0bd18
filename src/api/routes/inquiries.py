"""
Inquiry Routes
Intake endpoint that routes each new inquiry to a category and reply template
"""
from fastapi import APIRouter, Depends, HTTPException, Query
from datetime import datetime
from typing import List, Optional

from src.api.models.requests import InquiryCreate, InquiryPreviewRequest, InquiryUpdate
from src.api.models.responses import ErrorResponse, InquiryPreviewResponse
from src.core.config import settings
from src.core.exceptions import ValidationException
from src.core.logging import get_logger
from src.models.entities import Inquiry
from src.services.inquiry_processor import InquiryProcessor
from src.services.storage import InMemoryStorage, get_storage

logger = get_logger(__name__)
router = APIRouter()


def get_inquiry_processor(storage: InMemoryStorage = Depends(get_storage)) -> InquiryProcessor:
    return InquiryProcessor(storage)


@router.get("", response_model=List[Inquiry])
async def list_inquiries(
    recent: Optional[int] = Query(None, description="Return only the N most recent inquiries"),
    storage: InMemoryStorage = Depends(get_storage)
):
    if recent is not None:
        limit = recent if recent > 0 else settings.RECENT_INQUIRIES_DEFAULT
        return await storage.get_recent_inquiries(limit)
    return await storage.get_inquiries()


@router.post(
    "",
    response_model=Inquiry,
    status_code=201,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}}
)
async def create_inquiry(
    request: InquiryCreate,
    processor: InquiryProcessor = Depends(get_inquiry_processor)
):
    """
    Submit a customer inquiry

    Pipeline:
    1. Detect language when language_code is omitted
    2. Categorize by keyword score
    3. Select a template for category + language (with language fallback)
    4. Render the reply and mark the inquiry auto-resolved, or leave it for manual review
    """
    start_time = datetime.now()

    try:
        inquiry = await processor.process(request.model_dump())
    except ValidationException as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error("inquiry_processing_failed", error=str(e))
        raise HTTPException(status_code=500, detail=f"Inquiry processing failed: {str(e)}")

    processing_time = (datetime.now() - start_time).total_seconds() * 1000
    logger.info(
        "inquiry_request_completed",
        inquiry_id=inquiry.id,
        status=inquiry.status.value,
        processing_time_ms=int(processing_time)
    )

    return inquiry


@router.post("/preview", response_model=InquiryPreviewResponse)
async def preview_inquiry(
    request: InquiryPreviewRequest,
    processor: InquiryProcessor = Depends(get_inquiry_processor)
):
    """Show how text would be routed without storing anything"""
    return await processor.preview(
        request.content,
        language_code=request.language_code,
        customer_name=request.customer_name,
        customer_email=request.customer_email
    )


@router.put("/{inquiry_id}", response_model=Inquiry)
async def update_inquiry(
    inquiry_id: str,
    request: InquiryUpdate,
    storage: InMemoryStorage = Depends(get_storage)
):
    try:
        inquiry = await storage.update_inquiry(inquiry_id, request.model_dump(exclude_unset=True))
    except ValidationException as e:
        raise HTTPException(status_code=400, detail=str(e))

    if not inquiry:
        raise HTTPException(status_code=404, detail="Inquiry not found")
    return inquiry
