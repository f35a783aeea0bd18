from pydantic import BaseModel, ConfigDict, EmailStr, Field
from typing import Optional, List

from src.models.entities import InquiryStatus


class CategoryCreate(BaseModel):
    """
    Category create/update payload
    """
    name: str = Field(..., min_length=1, description="Display name, also matched against inquiry text")
    description: Optional[str] = None
    color: str = Field("#3B82F6", description="Display color")
    keywords: List[str] = Field(default_factory=list, description="Case-insensitive match keywords")

    model_config = ConfigDict(extra='ignore')


class CategoryUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    color: Optional[str] = None
    keywords: Optional[List[str]] = None

    model_config = ConfigDict(extra='ignore')


class LanguageCreate(BaseModel):
    code: str = Field(..., min_length=2, max_length=10, description="ISO language code, e.g. 'es'")
    name: str
    flag: str = ""
    is_active: bool = True

    model_config = ConfigDict(extra='ignore')


class LanguageUpdate(BaseModel):
    code: Optional[str] = Field(None, min_length=2, max_length=10)
    name: Optional[str] = None
    flag: Optional[str] = None
    is_active: Optional[bool] = None

    model_config = ConfigDict(extra='ignore')


class TemplateCreate(BaseModel):
    """
    Template create payload

    Usage count and success rate are managed by the service and cannot be set here.
    """
    name: str = Field(..., min_length=1)
    category_id: str
    language_code: str
    content: str = Field(..., description="Reply body with {{placeholder}} variables")
    keywords: List[str] = Field(default_factory=list)

    model_config = ConfigDict(extra='ignore')


class TemplateUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    category_id: Optional[str] = None
    language_code: Optional[str] = None
    content: Optional[str] = None
    keywords: Optional[List[str]] = None

    model_config = ConfigDict(extra='ignore')


class TranslateRequest(BaseModel):
    target_language_code: str = Field(..., description="Language to translate the template into")


class SuccessRateUpdate(BaseModel):
    success_rate: int = Field(..., ge=0, le=100)


class InquiryCreate(BaseModel):
    """
    New customer inquiry

    language_code may be omitted; it is then detected from the content.
    """
    customer_name: str
    customer_email: EmailStr
    subject: str
    content: str
    language_code: Optional[str] = Field(None, description="Detected when omitted")

    model_config = ConfigDict(extra='ignore')


class InquiryUpdate(BaseModel):
    customer_name: Optional[str] = None
    customer_email: Optional[EmailStr] = None
    subject: Optional[str] = None
    content: Optional[str] = None
    category_id: Optional[str] = None
    language_code: Optional[str] = None
    status: Optional[InquiryStatus] = None
    response_template_id: Optional[str] = None
    response_content: Optional[str] = None

    model_config = ConfigDict(extra='ignore')


class InquiryPreviewRequest(BaseModel):
    content: str
    language_code: Optional[str] = None
    customer_name: str = ""
    customer_email: str = ""
