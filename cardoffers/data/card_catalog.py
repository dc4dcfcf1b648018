"""Distinct card catalogs built from card-list and offer feeds."""
from cardoffers.data.fields import eligibility_list
from cardoffers.data.normalize import (
    INSTRUMENT_TYPES,
    CardEntry,
    canonicalize_brand,
    make_card_entry,
    normalize_key,
    split_base_and_variant,
)
from cardoffers.data.offer_matcher import OfferRecord, is_wildcard


def collect_card_names(
    rows: list[dict],
    instrument_type: str,
    skip_wildcards: bool = False,
) -> dict[str, str]:
    """Fold rows into {normalized key: first-seen display name}.

    Each row's eligibility cell for the instrument type is split into
    names; the trailing variant is dropped and the brand spelling fixed.
    Entries that normalize to an empty key are ignored.
    """
    names: dict[str, str] = {}
    for row in rows:
        for raw in eligibility_list(row, instrument_type, use_fallbacks=False):
            if skip_wildcards and is_wildcard(raw, instrument_type):
                continue
            base, _variant = split_base_and_variant(raw)
            display = canonicalize_brand(base)
            key = normalize_key(display)
            if key and key not in names:
                names[key] = display
    return names


def _sorted_names(names: dict[str, str]) -> list[str]:
    return sorted(names.values(), key=str.lower)


def build_card_entries(card_rows: list[dict]) -> tuple[list[CardEntry], list[CardEntry]]:
    """Build dropdown entries (credit, debit) from the all-cards list, sorted by name."""
    credit = [
        make_card_entry(name, "credit")
        for name in _sorted_names(collect_card_names(card_rows, "credit"))
    ]
    debit = [
        make_card_entry(name, "debit")
        for name in _sorted_names(collect_card_names(card_rows, "debit"))
    ]
    return credit, debit


def featured_cards(offer_feeds: dict[str, list[OfferRecord]]) -> dict[str, list[str]]:
    """Card names mentioned by any offer feed, for one-click selection.

    Wildcard entries ("ALL CC" / "ALL DC") are not cards and are excluded.
    """
    rows = [offer.record for offers in offer_feeds.values() for offer in offers]
    return {
        t: _sorted_names(collect_card_names(rows, t, skip_wildcards=True))
        for t in INSTRUMENT_TYPES
    }


def select_card(name: str, instrument_type: str) -> CardEntry:
    """Identity for a card picked by name (e.g. a featured chip)."""
    return make_card_entry(name, instrument_type)
