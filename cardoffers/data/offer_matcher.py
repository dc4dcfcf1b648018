"""Match offer records against a selected card identity."""
from dataclasses import dataclass

from cardoffers.data.fields import eligibility_list
from cardoffers.data.normalize import (
    CardEntry,
    canonicalize_brand,
    normalize_key,
    split_base_and_variant,
)

# Eligibility entries meaning "every card of this instrument type".
WILDCARD_KEYS = {"credit": "all cc", "debit": "all dc"}


@dataclass(frozen=True)
class OfferRecord:
    """One offer row from a site feed."""
    record: dict
    site: str


@dataclass(frozen=True)
class MatchedOffer:
    offer: OfferRecord
    site: str
    variant_text: str = ""


def is_wildcard(entry: str, instrument_type: str) -> bool:
    return normalize_key(entry) == WILDCARD_KEYS[instrument_type]


def _match_entry(entries: list[str], norm_key: str) -> tuple[bool, str]:
    """Find the first entry whose canonical base matches norm_key.

    Returns (matched, variant) where variant is that entry's trailing
    parenthetical qualifier, or "".
    """
    for raw in entries:
        base, variant = split_base_and_variant(canonicalize_brand(raw))
        if normalize_key(base) == norm_key:
            return True, variant
    return False, ""


def match_offers(
    offers: list[OfferRecord],
    instrument_type: str,
    selected: CardEntry | None,
) -> list[MatchedOffer]:
    """Return the offers that apply to the selected card, in input order.

    An offer matches when its eligibility list for the instrument type
    contains the wildcard ("ALL CC" / "ALL DC"), or an entry whose canonical
    base name has the selected card's normalized key. Offers with missing or
    malformed eligibility fields simply do not match.

    Args:
        offers: Offer records of one site (or several).
        instrument_type: "credit" or "debit".
        selected: The chosen card, or None.
    """
    if selected is None:
        return []

    matched: list[MatchedOffer] = []
    for offer in offers:
        entries = eligibility_list(offer.record, instrument_type)
        if any(is_wildcard(e, instrument_type) for e in entries):
            matched.append(MatchedOffer(offer=offer, site=offer.site, variant_text=""))
            continue
        found, variant = _match_entry(entries, selected.norm_key)
        if found:
            matched.append(MatchedOffer(offer=offer, site=offer.site, variant_text=variant))
    return matched
