"""
Inquiry Processor
Runs the routing pipeline for new inquiries: detect language, categorize,
pick a template, render the reply, then persist the outcome
"""
import time
from datetime import datetime
from typing import Any, Dict, Optional

from src.core.config import Settings, settings as default_settings
from src.core.logging import get_logger
from src.models.entities import Inquiry, InquiryStatus
from src.services.matching import rank_categories, select_template
from src.services.storage import InMemoryStorage
from src.utils.language import DetectionMode, detect_language
from src.utils.templating import render

logger = get_logger(__name__)


class InquiryProcessor:
    """
    Intake collaborator around the matching engine

    The engine itself is pure; this class owns every write that follows a
    routing decision (category, reply, usage counter, analytics).
    """

    def __init__(self, storage: InMemoryStorage, settings: Optional[Settings] = None):
        self.storage = storage
        self.settings = settings or default_settings

    def resolve_language(self, text: str, language_code: Optional[str] = None) -> str:
        """Use the supplied language code, detecting one only when it is blank"""
        if language_code and language_code.strip():
            return language_code.strip()
        return detect_language(text, DetectionMode.PERMISSIVE)

    def build_reply_variables(self, customer_name: str, customer_email: str) -> Dict[str, str]:
        """Placeholder values available to every reply template"""
        return {
            "customer_name": customer_name,
            "customer_email": customer_email,
            "subscription_type": self.settings.DEFAULT_SUBSCRIPTION_TYPE,
            "billing_date": datetime.now().strftime(self.settings.BILLING_DATE_FORMAT),
            "support_link": self.settings.SUPPORT_LINK,
        }

    async def _route(self, text: str, language_code: str) -> Dict[str, Any]:
        """Run category and template selection over fresh storage snapshots"""
        categories = await self.storage.get_categories()
        ranked = rank_categories(text, categories)
        category_id = ranked[0].category_id if ranked else None

        template_id = None
        if category_id and self.settings.AUTO_RESPONSE_ENABLED:
            templates = await self.storage.get_templates()
            template_id = select_template(text, category_id, language_code, templates)

        category_name = next((c.name for c in categories if c.id == category_id), None)

        return {
            "category_id": category_id,
            "category_name": category_name,
            "category_scores": [
                {"category_id": m.category_id, "score": m.score} for m in ranked
            ],
            "template_id": template_id,
        }

    async def preview(
        self,
        text: str,
        language_code: Optional[str] = None,
        customer_name: str = "",
        customer_email: str = ""
    ) -> Dict[str, Any]:
        """
        Route text without writing anything

        Args:
            text: Inquiry text
            language_code: Optional language; detected when missing
            customer_name: Value for the customer_name placeholder
            customer_email: Value for the customer_email placeholder

        Returns:
            Routing decision with the rendered reply, if a template matched
        """
        language = self.resolve_language(text, language_code)
        decision = await self._route(text, language)

        reply = None
        if decision["template_id"]:
            template = await self.storage.get_template(decision["template_id"])
            if template:
                reply = render(
                    template.content,
                    self.build_reply_variables(customer_name, customer_email)
                )

        return {"language_code": language, **decision, "reply": reply}

    async def process(self, data: Dict[str, Any]) -> Inquiry:
        """
        Create an inquiry and route it

        Args:
            data: customer_name, customer_email, subject, content and an
                optional language_code

        Returns:
            Stored inquiry after routing; manual-review if routing failed
        """
        start = time.perf_counter()

        supplied_language = (data.get("language_code") or "").strip()
        language = self.resolve_language(data.get("content", ""), supplied_language)
        inquiry = await self.storage.create_inquiry({**data, "language_code": language})

        logger.info(
            "inquiry_received",
            inquiry_id=inquiry.id,
            language_code=language,
            detected=not supplied_language,
            content_length=len(inquiry.content)
        )

        category_id = None
        category_name = None
        template = None

        try:
            decision = await self._route(inquiry.content, language)
            category_id = decision["category_id"]
            category_name = decision["category_name"]
            template_id = decision["template_id"]

            updates: Dict[str, Any] = {"category_id": category_id}

            template = await self.storage.get_template(template_id) if template_id else None
            if template:
                updates.update({
                    "response_template_id": template.id,
                    "response_content": render(
                        template.content,
                        self.build_reply_variables(inquiry.customer_name, inquiry.customer_email)
                    ),
                    "status": InquiryStatus.AUTO_RESOLVED,
                    "resolved_at": datetime.now(),
                    "response_time": int((time.perf_counter() - start) * 1000),
                })
            else:
                updates["status"] = InquiryStatus.MANUAL_REVIEW

            inquiry = await self.storage.update_inquiry(inquiry.id, updates)
        except Exception as e:
            # A failed routing never leaves the inquiry pending
            logger.error("inquiry_routing_failed", inquiry_id=inquiry.id, error=str(e))
            category_id, category_name, template = None, None, None
            inquiry = await self.storage.update_inquiry(
                inquiry.id, {"status": InquiryStatus.MANUAL_REVIEW}
            )

        # Usage is only counted once the reply is stored
        if template:
            await self.storage.increment_template_usage(template.id)

        await self.storage.record_inquiry_outcome(inquiry, category_name)

        logger.info(
            "inquiry_routed",
            inquiry_id=inquiry.id,
            category_id=category_id,
            template_id=template.id if template else None,
            status=inquiry.status.value
        )

        return inquiry
