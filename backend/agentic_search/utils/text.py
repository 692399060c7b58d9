"""Text processing helpers."""

from __future__ import annotations

_KEYWORD_STRIP = ",;"


def split_keywords(text: str) -> list[str]:
    """Split model output into keywords on whitespace, dropping list separators."""
    keywords = []
    for token in text.split():
        token = token.strip(_KEYWORD_STRIP)
        if token:
            keywords.append(token)
    return keywords


def parse_field_list(spec: str) -> list[str] | None:
    """Return the names in a comma-separated field list, or ``None`` when every field is wanted."""
    if spec.strip() == "*":
        return None
    names = [name.strip() for name in spec.split(",") if name.strip()]
    return names or None
