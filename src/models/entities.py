"""
Domain entities shared by the matching core, storage and API layers
"""
from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, Field


class InquiryStatus(str, Enum):
    """Lifecycle states of a customer inquiry"""
    PENDING = "pending"
    AUTO_RESOLVED = "auto-resolved"
    MANUAL_REVIEW = "manual-review"
    RESOLVED = "resolved"


class Category(BaseModel):
    """
    Named bucket of inquiry types

    Keywords are matched case-insensitively against inquiry text;
    color is a display hint only.
    """
    id: str
    name: str
    description: Optional[str] = None
    color: str = "#3B82F6"
    keywords: List[str] = Field(default_factory=list)


class Language(BaseModel):
    id: str
    code: str
    name: str
    flag: str
    is_active: bool = True


class Template(BaseModel):
    """
    Pre-written reply body tied to one category and one language

    usage_count is incremented by the caller after a selection is acted on;
    success_rate (0-100) is maintained externally.
    """
    id: str
    name: str
    category_id: str
    language_code: str
    content: str
    keywords: List[str] = Field(default_factory=list)
    usage_count: int = Field(0, ge=0)
    success_rate: int = Field(0, ge=0, le=100)


class Inquiry(BaseModel):
    id: str
    customer_name: str
    customer_email: str
    subject: str
    content: str
    category_id: Optional[str] = None
    language_code: str
    status: InquiryStatus = InquiryStatus.PENDING
    response_template_id: Optional[str] = None
    response_content: Optional[str] = None
    response_time: Optional[int] = None  # milliseconds
    created_at: datetime
    resolved_at: Optional[datetime] = None


class Analytics(BaseModel):
    """Daily routing totals, one row per YYYY-MM-DD date"""
    id: str
    date: str
    total_inquiries: int = 0
    auto_resolved: int = 0
    manual_review: int = 0
    avg_response_time: int = 0
    category_breakdown: Dict[str, int] = Field(default_factory=dict)
    language_breakdown: Dict[str, int] = Field(default_factory=dict)
