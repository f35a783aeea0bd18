"""
Analytics and Export Routes
"""
from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from datetime import datetime
from typing import Optional

from src.core.logging import get_logger
from src.services.storage import InMemoryStorage, get_storage

logger = get_logger(__name__)
router = APIRouter()

EXPORT_TYPES = ("inquiries", "analytics", "templates")


@router.get("/analytics")
async def get_analytics(
    date: Optional[str] = Query(None, description="Day in YYYY-MM-DD format"),
    storage: InMemoryStorage = Depends(get_storage)
):
    """Daily routing totals, all days or a single one"""
    if date:
        analytics = await storage.get_analytics_by_date(date)
        if not analytics:
            raise HTTPException(status_code=404, detail="Analytics not found for date")
        return analytics

    return await storage.get_analytics()


@router.get("/export/{export_type}")
async def export_data(export_type: str, storage: InMemoryStorage = Depends(get_storage)):
    """
    Download inquiries, analytics or templates as a JSON attachment
    """
    if export_type == "inquiries":
        data = await storage.get_inquiries()
    elif export_type == "analytics":
        data = await storage.get_analytics()
    elif export_type == "templates":
        data = await storage.get_templates()
    else:
        raise HTTPException(
            status_code=400,
            detail=f"Invalid export type. Expected one of: {', '.join(EXPORT_TYPES)}"
        )

    filename = f"{export_type}-export-{datetime.now().strftime('%Y-%m-%d')}.json"
    logger.info("data_exported", export_type=export_type, records=len(data))

    return JSONResponse(
        content=jsonable_encoder(data),
        headers={"Content-Disposition": f'attachment; filename="{filename}"'}
    )
