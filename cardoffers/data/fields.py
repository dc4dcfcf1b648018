"""Offer/card feed field resolution: header alias table and list splitting.

Feeds from different sites name the same column differently ("Offer Title",
"Title", "offer", ...). Logical fields are resolved against an explicit alias
table, with a case-insensitive substring scan as a secondary strategy.
"""
import math
import re

FIELD_ALIASES: dict[str, list[str]] = {
    "credit": ["Eligible Credit Cards", "Eligible Cards"],
    "debit": ["Eligible Debit Cards", "Applicable Debit Cards"],
    "title": ["Offer Title", "Title", "Offer", "offer"],
    "image": ["Image", "Credit Card Image", "Offer Image", "image", "Image URL"],
    "link": ["Link", "Offer Link", "link", "URL"],
    "desc": ["Description", "Details", "Offer Description", "description"],
}

# Substring fallbacks tried in order when no alias is populated.
CONTAINS_FALLBACKS: dict[str, tuple[str, ...]] = {
    "credit": ("eligible credit", "credit card", "eligible cards"),
    "debit": ("eligible debit", "debit card"),
    "image": ("image",),
}

_LIST_SEPARATORS = re.compile(r",|/|;|\||\n|\r|\t|\band\b|•", re.IGNORECASE)


def _populated(value) -> bool:
    if value is None:
        return False
    if isinstance(value, float) and math.isnan(value):
        return False
    return str(value).strip() != ""


def first_field(record: dict, aliases: list[str]) -> str | None:
    """Return the value of the first alias present with a non-blank value.

    Keys are matched exactly (case-sensitive); the alias list carries the
    case variants.
    """
    if not record:
        return None
    for alias in aliases:
        if alias in record and _populated(record[alias]):
            return record[alias]
    return None


def first_field_by_contains(record: dict, substring: str) -> str | None:
    """Return the value of the first key containing `substring` (case-insensitive)."""
    if not record:
        return None
    target = substring.lower()
    for key, value in record.items():
        if target in str(key).lower() and _populated(value):
            return value
    return None


def resolve_field(record: dict, field: str, contains: tuple[str, ...] = ()) -> str | None:
    """Resolve a logical field: alias table first, then substring fallbacks."""
    value = first_field(record, FIELD_ALIASES[field])
    if value is not None:
        return value
    for substring in contains:
        value = first_field_by_contains(record, substring)
        if value is not None:
            return value
    return None


def split_list(value) -> list[str]:
    """Split a delimited card-list cell into trimmed, non-empty names.

    Separators: , / ; | newline, carriage return, tab, bullet and the
    standalone word 'and'.
    """
    if not _populated(value):
        return []
    pieces = _LIST_SEPARATORS.split(str(value))
    return [p.strip() for p in pieces if p.strip()]


def eligibility_list(
    record: dict, instrument_type: str, use_fallbacks: bool = True
) -> list[str]:
    """Raw eligible-card entries of an offer or card-list row for one instrument type.

    With use_fallbacks=False only the alias table is consulted.
    """
    if instrument_type not in ("credit", "debit"):
        raise ValueError(f"Unknown instrument type: {instrument_type}")
    contains = CONTAINS_FALLBACKS[instrument_type] if use_fallbacks else ()
    value = resolve_field(record, instrument_type, contains)
    return split_list(value)
