"""
Matching Engine
Keyword scoring, category selection and template selection for inquiries

Every function here is pure: inputs are read-only snapshots and nothing
is cached between calls, so callers may share them across tasks freely.
"""
from typing import List, NamedTuple, Optional, Sequence

from src.core.logging import get_logger
from src.models.entities import Category, Template

logger = get_logger(__name__)


# Scoring weights. Kept for compatibility with existing routing data;
# they are tunable, not derived.
WHOLE_TOKEN_POINTS = 10
SUBSTRING_POINTS = 5
NAME_BONUS_POINTS = 15

SUCCESS_RATE_WEIGHT = 2
USAGE_DIVISOR = 10
USAGE_CAP = 5


class CategoryMatch(NamedTuple):
    category_id: str
    score: int


def score(
    text: str,
    keywords: Sequence[str],
    whole_text_bonus: Optional[str] = None
) -> int:
    """
    Score text against a keyword list

    Each keyword earns WHOLE_TOKEN_POINTS when it is a whitespace-delimited
    token of the text, SUBSTRING_POINTS when it only appears inside the text,
    nothing otherwise. If whole_text_bonus occurs anywhere in the text,
    NAME_BONUS_POINTS is added once. Comparison is case-insensitive and
    nothing else is normalized.

    Args:
        text: Inquiry text
        keywords: Keywords to look for
        whole_text_bonus: Optional phrase (e.g. a category name) worth a bonus

    Returns:
        Non-negative score, 0 when nothing matched
    """
    text_lower = (text or "").lower()
    tokens = set(text_lower.split())

    total = 0
    for keyword in keywords or []:
        keyword_lower = keyword.lower()
        if keyword_lower in tokens:
            total += WHOLE_TOKEN_POINTS
        elif keyword_lower in text_lower:
            total += SUBSTRING_POINTS

    if whole_text_bonus and whole_text_bonus.lower() in text_lower:
        total += NAME_BONUS_POINTS

    return total


def rank_categories(text: str, categories: Sequence[Category]) -> List[CategoryMatch]:
    """
    Rank categories with a positive score, best first

    Equal scores keep their input order.
    """
    matches = []
    for category in categories:
        category_score = score(text, category.keywords, whole_text_bonus=category.name)
        if category_score > 0:
            matches.append(CategoryMatch(category.id, category_score))

    # sorted() is stable, also with reverse=True
    return sorted(matches, key=lambda m: m.score, reverse=True)


def select_category(text: str, categories: Sequence[Category]) -> Optional[str]:
    """
    Pick the best-scoring category for an inquiry

    Args:
        text: Inquiry text
        categories: Categories in priority order (earlier wins ties)

    Returns:
        Winning category ID, or None when no category scores above 0
    """
    ranked = rank_categories(text, categories)
    if not ranked:
        return None
    return ranked[0].category_id


def score_template(text: str, template: Template) -> float:
    """Keyword score plus success-rate and usage boosts for one template"""
    keyword_score = score(text, template.keywords)
    rate_boost = (template.success_rate / 100) * SUCCESS_RATE_WEIGHT
    usage_boost = min(template.usage_count / USAGE_DIVISOR, USAGE_CAP)
    return keyword_score + rate_boost + usage_boost


def select_template(
    text: str,
    category_id: Optional[str],
    language_code: str,
    templates: Sequence[Template]
) -> Optional[str]:
    """
    Pick a reply template for a categorized inquiry

    Candidate pools, first non-empty one wins:
    1. Exact pool - same category and language. A single candidate is
       returned as-is; several are ranked with score_template, falling back
       to the highest success rate when no candidate scores above 0.
    2. Language pool - same language, any category; most used wins.
    3. Nothing - None.

    Ties always go to the earliest template in input order. Usage counters
    are not touched; the caller records usage once it acts on the result.

    Args:
        text: Inquiry text
        category_id: Category chosen for the inquiry
        language_code: Inquiry language
        templates: Template snapshot

    Returns:
        Template ID or None
    """
    exact_pool = [
        t for t in templates
        if t.category_id == category_id and t.language_code == language_code
    ]

    if len(exact_pool) == 1:
        return exact_pool[0].id

    if exact_pool:
        scores = [score_template(text, t) for t in exact_pool]
        best_index = max(range(len(exact_pool)), key=lambda i: scores[i])

        if scores[best_index] > 0:
            return exact_pool[best_index].id

        # max() keeps the first of equal elements
        best = max(exact_pool, key=lambda t: t.success_rate)
        logger.debug(
            "template_selected_by_success_rate",
            category_id=category_id,
            language_code=language_code,
            template_id=best.id
        )
        return best.id

    language_pool = [t for t in templates if t.language_code == language_code]
    if not language_pool:
        logger.debug(
            "no_template_for_language",
            category_id=category_id,
            language_code=language_code
        )
        return None

    best = max(language_pool, key=lambda t: t.usage_count)
    logger.debug(
        "template_selected_from_language_fallback",
        category_id=category_id,
        language_code=language_code,
        template_id=best.id
    )
    return best.id
