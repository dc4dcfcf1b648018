"""Card Offers API.

FastAPI app serving card suggestions and matched offers from the loaded feeds.

Usage:
    uvicorn cardoffers.api.app:app --host 0.0.0.0 --port 8422

Endpoints:
    GET /health          — Health check with catalog counts
    GET /cards/search    — Ranked credit/debit card suggestions for a query
    GET /cards/featured  — Card names that appear in at least one offer feed
    GET /offers          — Deduplicated offers per site for a selected card
"""
import logging
import threading

from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from cardoffers.data.pipeline import (
    FeedConfig,
    OfferCatalog,
    find_offers,
    load_catalog,
    present_offer,
    resolve_card,
    search_cards,
)

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Card Offers",
    description="Find discount offers for a bank card across shopping sites",
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

# --- Globals (lazy-loaded) ---
_catalog: OfferCatalog | None = None
_catalog_lock = threading.Lock()


def _get_catalog() -> OfferCatalog:
    global _catalog
    with _catalog_lock:
        if _catalog is None:
            _catalog = load_catalog(FeedConfig())
    return _catalog


# --- Pydantic models ---

class CardSuggestion(BaseModel):
    display: str
    instrument_type: str


class SuggestionGroup(BaseModel):
    heading: str
    instrument_type: str
    cards: list[CardSuggestion]


class SearchResponse(BaseModel):
    query: str
    groups: list[SuggestionGroup]
    no_matches: bool


class OfferView(BaseModel):
    site: str
    title: str
    description: str
    image: str | None = None
    image_is_fallback: bool = False
    link: str | None = None
    variant_text: str = ""
    variant_note: str | None = None


class OffersResponse(BaseModel):
    card: str
    instrument_type: str
    offers: dict[str, list[OfferView]]
    no_offers: bool


@app.get("/health")
def health_check():
    """Health check endpoint."""
    try:
        catalog = _get_catalog()
    except Exception as e:
        logger.error("Catalog load failed: %s", e)
        raise HTTPException(status_code=503, detail=str(e))
    return {
        "status": "healthy",
        "credit_cards": len(catalog.credit_entries),
        "debit_cards": len(catalog.debit_entries),
        "offers": {site: len(offers) for site, offers in catalog.offer_feeds.items()},
    }


@app.get("/cards/search", response_model=SearchResponse)
def search(q: str = Query("", description="Card name typed by the user")):
    """Ranked card suggestions, credit group first."""
    suggestions = search_cards(_get_catalog(), q)
    groups = [
        SuggestionGroup(
            heading=g["heading"],
            instrument_type=g["instrument_type"],
            cards=[
                CardSuggestion(display=c.display, instrument_type=c.instrument_type)
                for c in g["cards"]
            ],
        )
        for g in suggestions.grouped()
    ]
    return SearchResponse(query=q, groups=groups, no_matches=suggestions.no_matches)


@app.get("/cards/featured")
def list_featured():
    """Card names with at least one offer, for one-click selection."""
    featured = _get_catalog().featured
    return {
        "credit": featured.get("credit", []),
        "debit": featured.get("debit", []),
    }


@app.get("/offers", response_model=OffersResponse)
def list_offers(
    card: str = Query(..., min_length=1, description="Selected card name"),
    instrument_type: str = Query(
        "credit", alias="type", pattern="^(credit|debit)$", description="credit or debit"
    ),
):
    """Offers for the selected card, grouped by site, duplicates removed."""
    catalog = _get_catalog()
    selected = resolve_card(catalog, card, instrument_type)
    results = find_offers(catalog.offer_feeds, selected)
    offers = {
        site: [OfferView(**present_offer(m)) for m in matched]
        for site, matched in results.by_site.items()
        if matched
    }
    return OffersResponse(
        card=selected.display,
        instrument_type=instrument_type,
        offers=offers,
        no_offers=results.no_offers,
    )
