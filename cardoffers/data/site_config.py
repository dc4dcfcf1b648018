"""Offer site feeds, presentation settings and data-source configuration."""
import os
import re

CARD_LIST_FILE = "allCards.csv"

# (site label, feed file). Order is the cross-site dedup order.
SITE_FEEDS: list[tuple[str, str]] = [
    ("Myntra", "Myntra.csv"),
    ("Ajio", "Ajio.csv"),
    ("Tata CLiQ", "tata_cliq.csv"),
    ("Nykaa Fashion", "nykaa_fashion.csv"),
]

# Sites whose offers show "applicable only on <variant> variant".
VARIANT_NOTE_SITES = {"Myntra", "Ajio", "Tata CLiQ", "Nykaa Fashion"}

FALLBACK_IMAGE_BY_SITE = {
    "myntra": (
        "https://assets.myntassets.com/assets/images/2020/6/5/"
        "6b25e0b3-9f2d-4f5a-bb59-9968437bf3e11591347451735-myntra-logo.png"
    ),
    "ajio": "https://assets.ajio.com/static/img/Ajio-Logo.svg",
    "tata cliq": "https://assets.tatacliq.com/medias/sys_master/images/13965856235550.png",
    "nykaa fashion": "https://images-static.nykaa.com/media/wysiwyg/2021/nykaa_fashion_logo.png",
}

_UNUSABLE_IMAGE = re.compile(r"^(na|n/a|null|undefined|-|image unavailable)$", re.IGNORECASE)

DATA_CONFIG = {
    "data_dir": os.environ.get("CARDOFFERS_DATA_DIR", "data/feeds"),
    "base_url": os.environ.get("CARDOFFERS_FEED_BASE_URL", ""),
    "timeout": 30.0,
    "user_agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
        "AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/131.0.0.0 Safari/537.36"
    ),
}


def is_usable_image(value) -> bool:
    """False for blank values and placeholder text like 'N/A' or 'image unavailable'."""
    if value is None:
        return False
    s = str(value).strip()
    if not s:
        return False
    return not _UNUSABLE_IMAGE.match(s)


def resolve_image(site: str, candidate) -> tuple[str | None, bool]:
    """Pick the image to show for an offer.

    Returns (src, using_fallback). Unusable candidates are replaced by the
    site logo when one is known; otherwise the candidate is returned as is.
    """
    fallback = FALLBACK_IMAGE_BY_SITE.get((site or "").lower())
    if not is_usable_image(candidate) and fallback:
        return fallback, True
    return (str(candidate).strip() if is_usable_image(candidate) else None), False
