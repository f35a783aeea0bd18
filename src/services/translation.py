"""
Translation Service
Google Translate v2 client with offline fallbacks
"""
from typing import Any, Dict, List, Optional

import httpx

from src.core.config import settings
from src.core.logging import get_logger
from src.core.exceptions import TranslationException
from src.models.entities import Template
from src.utils.language import DetectionMode, detect_language

logger = get_logger(__name__)


AVAILABLE_LANGUAGES = ["en", "es", "fr", "de", "pt", "it", "nl", "pl", "ru", "ja", "ko", "zh"]


class TranslationService:
    """
    Thin async wrapper over the Google Translate REST API

    Never fails towards callers:
    - translation returns the original text when unconfigured or failing
    - detection falls back to strict marker-phrase detection
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None
    ):
        self.api_key = api_key if api_key is not None else settings.GOOGLE_TRANSLATE_API_KEY
        self.base_url = (base_url or settings.TRANSLATE_API_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.TRANSLATE_TIMEOUT_SECONDS

        logger.info(
            "translation_service_initialized",
            configured=bool(self.api_key),
            base_url=self.base_url
        )

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    async def _post(self, path: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        """POST to the API, raising TranslationException on transport or HTTP errors"""
        url = f"{self.base_url}{path}"
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(url, params={"key": self.api_key}, json=payload)
        except httpx.RequestError as e:
            raise TranslationException(f"Translation API request failed: {e}") from e

        if response.status_code >= 400:
            raise TranslationException(
                f"Translation API error: {response.status_code} {response.reason_phrase}"
            )

        try:
            return response.json()
        except ValueError as e:
            raise TranslationException("Translation API returned invalid JSON") from e

    async def translate_text(
        self,
        text: str,
        target_language: str,
        source_language: str = "auto"
    ) -> str:
        """
        Translate text

        Args:
            text: Text to translate
            target_language: Target language code
            source_language: Source language code, "auto" to let the API detect

        Returns:
            Translated text, or the original text if translation is unavailable
        """
        if not self.is_configured:
            logger.warning("translation_api_key_missing", target_language=target_language)
            return text

        payload = {"q": text, "target": target_language, "format": "text"}
        # v2 auto-detects when source is omitted
        if source_language and source_language != "auto":
            payload["source"] = source_language

        try:
            data = await self._post("", payload)
            return data["data"]["translations"][0]["translatedText"]
        except (TranslationException, KeyError, IndexError, TypeError) as e:
            logger.error("translation_failed", target_language=target_language, error=str(e))
            return text

    async def translate_template(self, template: Template, target_language_code: str) -> str:
        """Translate a template body into another language"""
        return await self.translate_text(template.content, target_language_code)

    def get_available_languages(self) -> List[str]:
        return list(AVAILABLE_LANGUAGES)

    async def detect_language(self, text: str) -> str:
        """
        Detect the language of text via the API

        Falls back to strict marker detection when the API is not configured
        or the call fails, since a single stray marker is weak evidence.
        """
        if not self.is_configured:
            return detect_language(text, DetectionMode.STRICT)

        try:
            data = await self._post("/detect", {"q": text})
            return data["data"]["detections"][0][0]["language"]
        except (TranslationException, KeyError, IndexError, TypeError) as e:
            logger.error("language_detection_failed", error=str(e))
            return detect_language(text, DetectionMode.STRICT)


# Global translation service instance
_translation_service: Optional[TranslationService] = None


def get_translation_service() -> TranslationService:
    """Get or create the shared translation service"""
    global _translation_service
    if _translation_service is None:
        _translation_service = TranslationService()
    return _translation_service
