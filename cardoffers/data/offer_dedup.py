"""Collapse offers that appear more than once across site feeds.

Two matched offers are the same real-world offer when their normalized
(title, description, image, link) tuples are equal. The first occurrence
wins; order is preserved.
"""
from cardoffers.data.fields import (
    CONTAINS_FALLBACKS,
    FIELD_ALIASES,
    first_field,
    resolve_field,
)
from cardoffers.data.normalize import normalize_key, normalize_url
from cardoffers.data.offer_matcher import MatchedOffer


def offer_key(record: dict) -> tuple[str, str, str, str]:
    """Identity tuple for an offer row.

    The title falls back to the 'Website' column when no title alias is set.
    """
    image = resolve_field(record, "image", CONTAINS_FALLBACKS["image"])
    title = first_field(record, FIELD_ALIASES["title"]) or record.get("Website") or ""
    desc = first_field(record, FIELD_ALIASES["desc"])
    link = first_field(record, FIELD_ALIASES["link"])
    return (
        normalize_key(title),
        normalize_key(desc),
        normalize_url(image),
        normalize_url(link),
    )


def dedup_offers(
    matched: list[MatchedOffer],
    seen: set[tuple[str, str, str, str]] | None = None,
) -> list[MatchedOffer]:
    """Drop matched offers whose identity is already in `seen`.

    `seen` is shared across every site merged in one presentation pass and
    is updated in iteration order, so apply calls sequentially. A fresh set
    is used when omitted.
    """
    if seen is None:
        seen = set()
    kept = []
    for item in matched:
        key = offer_key(item.offer.record)
        if key in seen:
            continue
        seen.add(key)
        kept.append(item)
    return kept
