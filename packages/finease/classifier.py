"""Keyword heuristic tagging spend as discretionary or essential."""

from __future__ import annotations

DISCRETIONARY_KEYWORDS: tuple[str, ...] = (
    "coffee",
    "starbucks",
    "amazon",
    "restaurant",
    "dining",
    "uber",
    "entertainment",
    "clothing",
    "retail",
    "bar",
    "movie",
    "apple",
    "netflix",
    "swiggy",
    "zomato",
    "blinkit",
    "ola",
    "myntra",
)

ESSENTIAL_KEYWORDS: tuple[str, ...] = (
    "rent",
    "mortgage",
    "utility",
    "grocery",
    "groceries",
    "insurance",
    "medical",
    "bill",
    "gas",
    "fuel",
    "internet",
    "phone",
    "electricity",
    "tuition",
)


def is_discretionary(text: str) -> bool:
    """Return True when ``text`` matches a discretionary keyword and no essential one.

    ``text`` is expected lower-cased (category and merchant joined by a
    space). Matching is plain substring containment; a single essential
    keyword vetoes any number of discretionary matches.
    """

    if not any(k in text for k in DISCRETIONARY_KEYWORDS):
        return False
    return not any(k in text for k in ESSENTIAL_KEYWORDS)


def classification_text(category: str | None, merchant: str | None = None) -> str:
    """Build the lower-cased classifier input from category and merchant."""

    return f"{category or ''} {merchant or ''}".lower()


__all__ = [
    "DISCRETIONARY_KEYWORDS",
    "ESSENTIAL_KEYWORDS",
    "classification_text",
    "is_discretionary",
]
