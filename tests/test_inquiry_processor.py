import pytest

from src.core.config import Settings
from src.models.entities import InquiryStatus
from src.services.inquiry_processor import InquiryProcessor


def _request(content, language_code=None, **overrides):
    data = {
        "customer_name": "Sam",
        "customer_email": "sam@example.com",
        "subject": "Question",
        "content": content,
        "language_code": language_code,
    }
    data.update(overrides)
    return data


async def _billing_setup(storage):
    billing = await storage.create_category({"name": "Billing", "keywords": ["invoice", "refund"]})
    await storage.create_category({"name": "Technical", "keywords": ["error", "bug"]})
    template = await storage.create_template({
        "name": "Refund EN",
        "category_id": billing.id,
        "language_code": "en",
        "content": "Hi {{customer_name}}, your {{subscription_type}} refund is on its way. {{support_link}}",
        "keywords": ["refund"],
    })
    return billing, template


@pytest.mark.asyncio
async def test_process_auto_resolves_with_rendered_reply(storage):
    billing, template = await _billing_setup(storage)
    processor = InquiryProcessor(storage, Settings(SUPPORT_LINK="https://help.test"))

    inquiry = await processor.process(_request("I need a refund for my invoice", "en"))

    assert inquiry.status == InquiryStatus.AUTO_RESOLVED
    assert inquiry.category_id == billing.id
    assert inquiry.response_template_id == template.id
    assert inquiry.response_content == "Hi Sam, your Premium refund is on its way. https://help.test"
    assert inquiry.resolved_at is not None
    assert inquiry.response_time >= 0

    assert (await storage.get_template(template.id)).usage_count == 1
    row = (await storage.get_analytics())[0]
    assert row.auto_resolved == 1
    assert row.category_breakdown == {"Billing": 1}


@pytest.mark.asyncio
async def test_process_detects_missing_language(storage):
    await _billing_setup(storage)
    processor = InquiryProcessor(storage)

    inquiry = await processor.process(_request("Hola, necesito un refund", None))

    # no Spanish template and no Spanish fallback -> manual review
    assert inquiry.language_code == "es"
    assert inquiry.status == InquiryStatus.MANUAL_REVIEW
    assert inquiry.response_template_id is None


@pytest.mark.asyncio
async def test_blank_language_code_is_detected(storage):
    processor = InquiryProcessor(storage)
    inquiry = await processor.process(_request("Bonjour, merci", "  "))
    assert inquiry.language_code == "fr"


@pytest.mark.asyncio
async def test_uncategorized_inquiry_goes_to_manual_review(storage):
    _, template = await _billing_setup(storage)
    processor = InquiryProcessor(storage)

    inquiry = await processor.process(_request("What are your opening hours?", "en"))

    assert inquiry.category_id is None
    assert inquiry.status == InquiryStatus.MANUAL_REVIEW
    assert (await storage.get_template(template.id)).usage_count == 0
    assert (await storage.get_analytics())[0].manual_review == 1


@pytest.mark.asyncio
async def test_category_kept_when_no_template_matches(storage):
    await _billing_setup(storage)
    processor = InquiryProcessor(storage)

    inquiry = await processor.process(_request("Bug report: error on login", "en"))

    technical = (await storage.get_categories())[1]
    # the only English template is in Billing, so the language fallback picks it
    assert inquiry.category_id == technical.id
    assert inquiry.status == InquiryStatus.AUTO_RESOLVED


@pytest.mark.asyncio
async def test_auto_response_disabled(storage):
    billing, template = await _billing_setup(storage)
    processor = InquiryProcessor(storage, Settings(AUTO_RESPONSE_ENABLED=False))

    inquiry = await processor.process(_request("refund please", "en"))

    assert inquiry.category_id == billing.id
    assert inquiry.status == InquiryStatus.MANUAL_REVIEW
    assert (await storage.get_template(template.id)).usage_count == 0


@pytest.mark.asyncio
async def test_preview_writes_nothing(storage):
    billing, template = await _billing_setup(storage)
    processor = InquiryProcessor(storage)

    decision = await processor.preview("refund for my invoice", customer_name="Ana")

    assert decision["language_code"] == "en"
    assert decision["category_id"] == billing.id
    assert decision["category_name"] == "Billing"
    assert decision["category_scores"] == [{"category_id": billing.id, "score": 20}]
    assert decision["template_id"] == template.id
    assert decision["reply"].startswith("Hi Ana,")

    assert await storage.get_inquiries() == []
    assert await storage.get_analytics() == []
    assert (await storage.get_template(template.id)).usage_count == 0


@pytest.mark.asyncio
async def test_routing_failure_falls_back_to_manual_review(storage, monkeypatch):
    _, template = await _billing_setup(storage)
    processor = InquiryProcessor(storage)

    async def broken_templates():
        raise RuntimeError("template snapshot unavailable")

    monkeypatch.setattr(storage, "get_templates", broken_templates)

    inquiry = await processor.process(_request("I need a refund for my invoice", "en"))

    assert inquiry.status == InquiryStatus.MANUAL_REVIEW
    assert inquiry.category_id is None
    assert inquiry.response_content is None
    assert [i.status for i in await storage.get_inquiries()] == [InquiryStatus.MANUAL_REVIEW]
    assert (await storage.get_template(template.id)).usage_count == 0
    assert (await storage.get_analytics())[0].manual_review == 1
