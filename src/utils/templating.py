"""
Reply template rendering
"""
import re
from typing import Mapping

# {{name}} with no braces inside; an unterminated "{{" never matches
PLACEHOLDER_PATTERN = re.compile(r"\{\{([^{}]+)\}\}")


def render(template_body: str, variables: Mapping[str, str]) -> str:
    """
    Substitute {{name}} placeholders with values from variables

    Unknown placeholders are left in place. Values are inserted verbatim.

    Args:
        template_body: Template text
        variables: Placeholder name to replacement value

    Returns:
        Rendered text
    """
    if not template_body or "{{" not in template_body:
        return template_body

    def _replace(match: re.Match) -> str:
        name = match.group(1)
        if name in variables:
            return str(variables[name])
        return match.group(0)

    return PLACEHOLDER_PATTERN.sub(_replace, template_body)
