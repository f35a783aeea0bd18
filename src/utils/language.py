"""
Marker-phrase language detection for untagged inquiries
"""
from enum import Enum
from typing import Dict, List

DEFAULT_LANGUAGE = "en"


class DetectionMode(str, Enum):
    """
    How much evidence detect_language needs

    permissive: first marker phrase found decides (inquiry intake)
    strict: a language needs two distinct markers (translation API fallback)
    """
    PERMISSIVE = "permissive"
    STRICT = "strict"


STRICT_MIN_MARKERS = 2

# Table order matters: it decides between languages sharing a marker
# ("por favor", "abonnement", "problema").
LANGUAGE_MARKERS: Dict[str, List[str]] = {
    "es": ["hola", "gracias", "por favor", "suscripción", "facturación", "problema", "ayuda"],
    "fr": ["bonjour", "merci", "s'il vous plaît", "abonnement", "facturation", "problème", "aide"],
    "de": ["hallo", "danke", "bitte", "abonnement", "rechnung", "problem", "hilfe"],
    "pt": ["olá", "obrigado", "por favor", "assinatura", "faturamento", "problema", "ajuda"],
}


def detect_language(text: str, mode: DetectionMode = DetectionMode.PERMISSIVE) -> str:
    """
    Detect language from text (marker phrase heuristic)

    Args:
        text: Input text
        mode: Evidence required before a language is accepted

    Returns:
        Language code from LANGUAGE_MARKERS, or DEFAULT_LANGUAGE
    """
    text_lower = (text or "").lower()
    required = STRICT_MIN_MARKERS if mode == DetectionMode.STRICT else 1

    for language_code, markers in LANGUAGE_MARKERS.items():
        found = 0
        for marker in markers:
            if marker in text_lower:
                found += 1
                if found >= required:
                    return language_code

    return DEFAULT_LANGUAGE
