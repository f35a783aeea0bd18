from pydantic import BaseModel
from typing import Optional, List


class CategoryScore(BaseModel):
    category_id: str
    score: int


class InquiryPreviewResponse(BaseModel):
    """
    Routing decision for a piece of text, nothing persisted
    """
    language_code: str
    category_id: Optional[str]
    category_name: Optional[str]
    category_scores: List[CategoryScore]
    template_id: Optional[str]
    reply: Optional[str]


class TranslateResponse(BaseModel):
    translated_content: str


class ErrorResponse(BaseModel):
    """
    Error response model
    """
    detail: str
