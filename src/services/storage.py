"""
Storage Service
In-memory persistence for categories, languages, templates, inquiries and analytics
"""
import asyncio
import uuid
from datetime import datetime
from typing import Any, Dict, List, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from src.core.config import settings
from src.core.logging import get_logger
from src.core.exceptions import ValidationException
from src.models.entities import (
    Analytics,
    Category,
    Inquiry,
    InquiryStatus,
    Language,
    Template,
)

logger = get_logger(__name__)

EntityT = TypeVar("EntityT", bound=BaseModel)


DEFAULT_CATEGORIES = [
    {
        "name": "Subscription",
        "description": "Subscription-related inquiries",
        "color": "#3B82F6",
        "keywords": ["subscribe", "subscription", "sign up", "register", "activate"],
    },
    {
        "name": "Billing",
        "description": "Billing and payment inquiries",
        "color": "#F59E0B",
        "keywords": ["billing", "payment", "invoice", "charge", "refund"],
    },
    {
        "name": "Technical",
        "description": "Technical support inquiries",
        "color": "#EF4444",
        "keywords": ["technical", "bug", "error", "problem", "issue"],
    },
    {
        "name": "Content Request",
        "description": "Content and feature requests",
        "color": "#8B5CF6",
        "keywords": ["content", "request", "feature", "suggestion", "feedback"],
    },
]

DEFAULT_LANGUAGES = [
    {"code": "en", "name": "English", "flag": "🇺🇸", "is_active": True},
    {"code": "es", "name": "Español", "flag": "🇪🇸", "is_active": True},
    {"code": "fr", "name": "Français", "flag": "🇫🇷", "is_active": True},
    {"code": "de", "name": "Deutsch", "flag": "🇩🇪", "is_active": True},
    {"code": "pt", "name": "Português", "flag": "🇵🇹", "is_active": True},
]


def _new_id() -> str:
    return str(uuid.uuid4())


def _build(model: Type[EntityT], data: Dict[str, Any]) -> EntityT:
    """Validate raw data into an entity, raising ValidationException on bad input"""
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise ValidationException(f"Invalid {model.__name__.lower()} data: {e}") from e


class InMemoryStorage:
    """
    In-memory store for routing data

    Features:
    - Insertion-ordered collections (category order decides scoring ties)
    - Copies in and out, so callers never hold live records
    - Writes serialized through a single asyncio lock
    """

    def __init__(self, seed: bool = True):
        """Initialize empty collections, optionally with default data"""
        self.categories: Dict[str, Category] = {}
        self.languages: Dict[str, Language] = {}
        self.templates: Dict[str, Template] = {}
        self.inquiries: Dict[str, Inquiry] = {}
        self.analytics: Dict[str, Analytics] = {}
        self._lock = asyncio.Lock()

        if seed:
            self._seed_defaults()

        logger.info(
            "in_memory_storage_initialized",
            seeded=seed,
            categories=len(self.categories),
            languages=len(self.languages)
        )

    def _seed_defaults(self) -> None:
        for data in DEFAULT_CATEGORIES:
            category = Category(id=_new_id(), **data)
            self.categories[category.id] = category

        for data in DEFAULT_LANGUAGES:
            language = Language(id=_new_id(), **data)
            self.languages[language.id] = language

    # ------------------------------------------------------------------
    # Generic helpers
    # ------------------------------------------------------------------

    async def _create(self, table: Dict[str, EntityT], model: Type[EntityT], data: Dict[str, Any]) -> EntityT:
        entity = _build(model, {**data, "id": _new_id()})
        async with self._lock:
            table[entity.id] = entity
        return entity.model_copy(deep=True)

    async def _update(
        self,
        table: Dict[str, EntityT],
        model: Type[EntityT],
        entity_id: str,
        updates: Dict[str, Any]
    ) -> Optional[EntityT]:
        async with self._lock:
            current = table.get(entity_id)
            if current is None:
                return None

            updates = {k: v for k, v in updates.items() if k != "id"}
            updated = _build(model, {**current.model_dump(), **updates})
            table[entity_id] = updated
            return updated.model_copy(deep=True)

    async def _delete(self, table: Dict[str, Any], entity_id: str) -> bool:
        async with self._lock:
            return table.pop(entity_id, None) is not None

    @staticmethod
    def _copy_all(table: Dict[str, EntityT]) -> List[EntityT]:
        return [entity.model_copy(deep=True) for entity in table.values()]

    @staticmethod
    def _copy_one(table: Dict[str, EntityT], entity_id: str) -> Optional[EntityT]:
        entity = table.get(entity_id)
        return entity.model_copy(deep=True) if entity else None

    # ------------------------------------------------------------------
    # Categories
    # ------------------------------------------------------------------

    async def get_categories(self) -> List[Category]:
        return self._copy_all(self.categories)

    async def get_category(self, category_id: str) -> Optional[Category]:
        return self._copy_one(self.categories, category_id)

    async def create_category(self, data: Dict[str, Any]) -> Category:
        category = await self._create(self.categories, Category, data)
        logger.info("category_created", category_id=category.id, name=category.name)
        return category

    async def update_category(self, category_id: str, updates: Dict[str, Any]) -> Optional[Category]:
        return await self._update(self.categories, Category, category_id, updates)

    async def delete_category(self, category_id: str) -> bool:
        return await self._delete(self.categories, category_id)

    # ------------------------------------------------------------------
    # Languages
    # ------------------------------------------------------------------

    async def get_languages(self) -> List[Language]:
        return self._copy_all(self.languages)

    async def get_active_languages(self) -> List[Language]:
        return [lang for lang in self._copy_all(self.languages) if lang.is_active]

    async def get_language(self, language_id: str) -> Optional[Language]:
        return self._copy_one(self.languages, language_id)

    async def get_language_by_code(self, code: str) -> Optional[Language]:
        for language in self.languages.values():
            if language.code == code:
                return language.model_copy(deep=True)
        return None

    async def create_language(self, data: Dict[str, Any]) -> Language:
        if await self.get_language_by_code(data.get("code", "")):
            raise ValidationException(f"Language code {data['code']} already exists")
        return await self._create(self.languages, Language, data)

    async def update_language(self, language_id: str, updates: Dict[str, Any]) -> Optional[Language]:
        code = updates.get("code")
        if code:
            existing = await self.get_language_by_code(code)
            if existing and existing.id != language_id:
                raise ValidationException(f"Language code {code} already exists")
        return await self._update(self.languages, Language, language_id, updates)

    async def delete_language(self, language_id: str) -> bool:
        return await self._delete(self.languages, language_id)

    # ------------------------------------------------------------------
    # Templates
    # ------------------------------------------------------------------

    async def get_templates(self) -> List[Template]:
        return self._copy_all(self.templates)

    async def get_templates_by_category(self, category_id: str) -> List[Template]:
        return [t for t in self._copy_all(self.templates) if t.category_id == category_id]

    async def get_templates_by_language(self, language_code: str) -> List[Template]:
        return [t for t in self._copy_all(self.templates) if t.language_code == language_code]

    async def get_template(self, template_id: str) -> Optional[Template]:
        return self._copy_one(self.templates, template_id)

    async def create_template(self, data: Dict[str, Any]) -> Template:
        # Counters always start fresh
        data = {**data, "usage_count": 0, "success_rate": 0}
        template = await self._create(self.templates, Template, data)
        logger.info(
            "template_created",
            template_id=template.id,
            category_id=template.category_id,
            language_code=template.language_code
        )
        return template

    async def update_template(self, template_id: str, updates: Dict[str, Any]) -> Optional[Template]:
        return await self._update(self.templates, Template, template_id, updates)

    async def delete_template(self, template_id: str) -> bool:
        return await self._delete(self.templates, template_id)

    async def increment_template_usage(self, template_id: str) -> None:
        async with self._lock:
            template = self.templates.get(template_id)
            if template is None:
                logger.warning("template_usage_increment_missing", template_id=template_id)
                return
            template.usage_count += 1

    async def update_template_success_rate(self, template_id: str, success_rate: int) -> Optional[Template]:
        async with self._lock:
            template = self.templates.get(template_id)
            if template is None:
                return None
            template.success_rate = max(0, min(100, int(success_rate)))
            return template.model_copy(deep=True)

    # ------------------------------------------------------------------
    # Inquiries
    # ------------------------------------------------------------------

    async def get_inquiries(self) -> List[Inquiry]:
        return self._copy_all(self.inquiries)

    async def get_recent_inquiries(self, limit: int = 10) -> List[Inquiry]:
        # reversed() so later insertions win equal timestamps
        inquiries = sorted(
            reversed(self._copy_all(self.inquiries)),
            key=lambda i: i.created_at,
            reverse=True
        )
        return inquiries[:limit]

    async def get_inquiry(self, inquiry_id: str) -> Optional[Inquiry]:
        return self._copy_one(self.inquiries, inquiry_id)

    async def create_inquiry(self, data: Dict[str, Any]) -> Inquiry:
        data = {
            "status": InquiryStatus.PENDING,
            **data,
            "created_at": datetime.now(),
            "resolved_at": None,
            "response_time": None,
        }
        return await self._create(self.inquiries, Inquiry, data)

    async def update_inquiry(self, inquiry_id: str, updates: Dict[str, Any]) -> Optional[Inquiry]:
        return await self._update(self.inquiries, Inquiry, inquiry_id, updates)

    async def delete_inquiry(self, inquiry_id: str) -> bool:
        return await self._delete(self.inquiries, inquiry_id)

    # ------------------------------------------------------------------
    # Analytics
    # ------------------------------------------------------------------

    async def get_analytics(self) -> List[Analytics]:
        return self._copy_all(self.analytics)

    async def get_analytics_by_date(self, date: str) -> Optional[Analytics]:
        for row in self.analytics.values():
            if row.date == date:
                return row.model_copy(deep=True)
        return None

    async def create_analytics(self, data: Dict[str, Any]) -> Analytics:
        return await self._create(self.analytics, Analytics, data)

    async def update_analytics(self, date: str, updates: Dict[str, Any]) -> Optional[Analytics]:
        row = await self.get_analytics_by_date(date)
        if row is None:
            return None
        return await self._update(self.analytics, Analytics, row.id, updates)

    async def record_inquiry_outcome(self, inquiry: Inquiry, category_name: Optional[str] = None) -> Analytics:
        """
        Fold one processed inquiry into today's analytics row

        Args:
            inquiry: Inquiry after routing
            category_name: Display name of the assigned category, if any

        Returns:
            Updated analytics row
        """
        today = datetime.now().strftime("%Y-%m-%d")

        async with self._lock:
            stored = next((a for a in self.analytics.values() if a.date == today), None)
            if stored is None:
                stored = Analytics(id=_new_id(), date=today)
                self.analytics[stored.id] = stored

            stored.total_inquiries += 1

            if inquiry.status == InquiryStatus.AUTO_RESOLVED:
                stored.auto_resolved += 1
                if inquiry.response_time is not None:
                    # Running mean over auto-resolved inquiries
                    previous_total = stored.avg_response_time * (stored.auto_resolved - 1)
                    stored.avg_response_time = round(
                        (previous_total + inquiry.response_time) / stored.auto_resolved
                    )
            elif inquiry.status == InquiryStatus.MANUAL_REVIEW:
                stored.manual_review += 1

            if category_name:
                stored.category_breakdown[category_name] = stored.category_breakdown.get(category_name, 0) + 1
            stored.language_breakdown[inquiry.language_code] = (
                stored.language_breakdown.get(inquiry.language_code, 0) + 1
            )

            return stored.model_copy(deep=True)


# Global storage instance shared by all routes
_storage: Optional[InMemoryStorage] = None


def get_storage() -> InMemoryStorage:
    """Get or create the shared storage"""
    global _storage
    if _storage is None:
        _storage = InMemoryStorage(seed=settings.SEED_DEFAULT_DATA)
    return _storage
