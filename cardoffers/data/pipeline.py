"""Card search and offer lookup: orchestrates feeds, ranking, matching and dedup."""
import argparse
import json
import logging
from dataclasses import dataclass, field

from cardoffers.data.card_catalog import build_card_entries, featured_cards, select_card
from cardoffers.data.feeds import load_card_rows, load_offer_feeds
from cardoffers.data.fields import FIELD_ALIASES, CONTAINS_FALLBACKS, first_field, resolve_field
from cardoffers.data.normalize import CardEntry
from cardoffers.data.offer_dedup import dedup_offers
from cardoffers.data.offer_matcher import MatchedOffer, OfferRecord, match_offers
from cardoffers.data.ranking import CardSuggestions, rank_cards
from cardoffers.data.site_config import DATA_CONFIG, VARIANT_NOTE_SITES, resolve_image

logger = logging.getLogger(__name__)


@dataclass
class FeedConfig:
    data_dir: str = DATA_CONFIG["data_dir"]
    base_url: str = DATA_CONFIG["base_url"]


@dataclass
class OfferCatalog:
    """Snapshot of loaded feeds plus the card entries derived from them."""
    card_rows: list[dict] = field(default_factory=list)
    offer_feeds: dict[str, list[OfferRecord]] = field(default_factory=dict)
    credit_entries: list[CardEntry] = field(default_factory=list)
    debit_entries: list[CardEntry] = field(default_factory=list)
    featured: dict[str, list[str]] = field(default_factory=dict)

    @classmethod
    def build(cls, card_rows: list[dict], offer_feeds: dict[str, list[OfferRecord]]) -> "OfferCatalog":
        credit, debit = build_card_entries(card_rows)
        return cls(
            card_rows=card_rows,
            offer_feeds=offer_feeds,
            credit_entries=credit,
            debit_entries=debit,
            featured=featured_cards(offer_feeds),
        )


@dataclass
class OfferResults:
    """Deduplicated matched offers per site for one selected card."""
    selected: CardEntry | None
    by_site: dict[str, list[MatchedOffer]] = field(default_factory=dict)

    @property
    def has_any(self) -> bool:
        return any(self.by_site.values())

    @property
    def no_offers(self) -> bool:
        return self.selected is not None and not self.has_any


def load_catalog(config: FeedConfig) -> OfferCatalog:
    """Load all feeds and build the card catalog."""
    card_rows = load_card_rows(data_dir=config.data_dir, base_url=config.base_url)
    offer_feeds = load_offer_feeds(data_dir=config.data_dir, base_url=config.base_url)
    catalog = OfferCatalog.build(card_rows, offer_feeds)
    logger.info(
        "Catalog ready: %d credit cards, %d debit cards, %d offers across %d sites",
        len(catalog.credit_entries),
        len(catalog.debit_entries),
        sum(len(v) for v in offer_feeds.values()),
        len(offer_feeds),
    )
    return catalog


def search_cards(catalog: OfferCatalog, query: str) -> CardSuggestions:
    return rank_cards(query, catalog.credit_entries, catalog.debit_entries)


def resolve_card(catalog: OfferCatalog, name: str, instrument_type: str) -> CardEntry:
    """Catalog entry with the same normalized key as `name`, else a new identity."""
    selected = select_card(name, instrument_type)
    entries = catalog.credit_entries if instrument_type == "credit" else catalog.debit_entries
    for entry in entries:
        if entry.norm_key == selected.norm_key:
            return entry
    return selected


def find_offers(offer_feeds: dict[str, list[OfferRecord]], selected: CardEntry | None) -> OfferResults:
    """Match every site's offers against the selected card and dedup across sites.

    Sites are processed in feed order with one shared seen-set, so an offer
    listed by two sites is kept under the first.
    """
    results = OfferResults(selected=selected)
    if selected is None:
        return results

    seen: set = set()
    for site, offers in offer_feeds.items():
        matched = match_offers(offers, selected.instrument_type, selected)
        results.by_site[site] = dedup_offers(matched, seen)
    return results


def present_offer(matched: MatchedOffer) -> dict:
    """Display fields for one matched offer.

    Title falls back to the 'Website' column, then to "Offer". The image
    falls back to the site logo when missing or a placeholder. A variant
    note is produced only for variant-note sites with a variant qualifier.
    """
    record = matched.offer.record
    image = resolve_field(record, "image", CONTAINS_FALLBACKS["image"])
    title = first_field(record, FIELD_ALIASES["title"]) or record.get("Website") or "Offer"
    desc = first_field(record, FIELD_ALIASES["desc"]) or ""
    link = first_field(record, FIELD_ALIASES["link"])
    src, using_fallback = resolve_image(matched.site, image)

    variant_note = None
    if matched.site in VARIANT_NOTE_SITES and matched.variant_text.strip():
        variant_note = f"This benefit is applicable only on {matched.variant_text} variant"

    return {
        "site": matched.site,
        "title": str(title).strip(),
        "description": str(desc).strip(),
        "image": src,
        "image_is_fallback": using_fallback,
        "link": str(link).strip() if link else None,
        "variant_text": matched.variant_text,
        "variant_note": variant_note,
    }


def main():
    """CLI entry point: search cards or list offers for a card."""
    parser = argparse.ArgumentParser(description="Find bank-card offers across shopping sites")
    parser.add_argument("--data-dir", default=DATA_CONFIG["data_dir"], help="Directory holding the CSV feeds")
    parser.add_argument("--base-url", default=DATA_CONFIG["base_url"], help="Fetch feeds from this URL instead")
    parser.add_argument("--query", help="Search card suggestions for this text")
    parser.add_argument("--card", help="Card name to list offers for")
    parser.add_argument(
        "--type",
        choices=["credit", "debit"],
        default="credit",
        help="Instrument type of --card (default: credit)",
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    catalog = load_catalog(FeedConfig(data_dir=args.data_dir, base_url=args.base_url))
    output = {}

    if args.query:
        suggestions = search_cards(catalog, args.query)
        output["suggestions"] = [
            {"heading": g["heading"], "cards": [c.display for c in g["cards"]]}
            for g in suggestions.grouped()
        ]
        output["no_matches"] = suggestions.no_matches

    if args.card:
        results = find_offers(catalog.offer_feeds, resolve_card(catalog, args.card, args.type))
        output["offers"] = {
            site: [present_offer(m) for m in matched]
            for site, matched in results.by_site.items()
            if matched
        }
        output["no_offers"] = results.no_offers

    if not output:
        output["featured"] = catalog.featured

    print(json.dumps(output, indent=2))


if __name__ == "__main__":
    main()
