"""Load card-list and offer CSV feeds from disk or over HTTP.

Feeds are fully materialized into lists of row dicts before the matching
engine sees them. A feed that cannot be fetched or parsed is logged and
treated as empty; one bad site never blocks the others.
"""
import io
import logging
from pathlib import Path
from urllib.parse import quote

import httpx
import pandas as pd

from cardoffers.data.offer_matcher import OfferRecord
from cardoffers.data.site_config import CARD_LIST_FILE, DATA_CONFIG, SITE_FEEDS

logger = logging.getLogger(__name__)


def read_csv_records(source) -> list[dict]:
    """Parse CSV (path or file-like) into row dicts with string values.

    Header names are kept exactly as written; empty cells become "".
    """
    df = pd.read_csv(
        source,
        dtype=str,
        keep_default_na=False,
        skip_blank_lines=True,
    )
    return df.to_dict(orient="records")


def fetch_csv_text(url: str) -> str | None:
    """GET a CSV feed. Returns the body, or None on HTTP failure."""
    headers = {"User-Agent": DATA_CONFIG["user_agent"]}
    try:
        resp = httpx.get(url, headers=headers, timeout=DATA_CONFIG["timeout"], follow_redirects=True)
    except httpx.HTTPError as e:
        logger.error("Feed request failed for %s: %s", url, e)
        return None
    if resp.status_code != 200:
        logger.warning("Feed %s returned %d", url, resp.status_code)
        return None
    return resp.text


def load_feed(name: str, data_dir: str | None = None, base_url: str | None = None) -> list[dict]:
    """Load one feed file by name from base_url (if set) or data_dir."""
    if base_url is None:
        base_url = DATA_CONFIG["base_url"]
    if data_dir is None:
        data_dir = DATA_CONFIG["data_dir"]

    try:
        if base_url:
            url = f"{base_url.rstrip('/')}/{quote(name)}"
            text = fetch_csv_text(url)
            if text is None:
                return []
            records = read_csv_records(io.StringIO(text))
        else:
            path = Path(data_dir) / name
            records = read_csv_records(path)
    except FileNotFoundError:
        logger.warning("Feed file not found: %s", Path(data_dir) / name)
        return []
    except (pd.errors.EmptyDataError, pd.errors.ParserError, UnicodeDecodeError) as e:
        logger.error("Could not parse feed %s: %s", name, e)
        return []

    logger.info("Loaded %d rows from %s", len(records), name)
    return records


def load_card_rows(data_dir: str | None = None, base_url: str | None = None) -> list[dict]:
    """Rows of the all-cards list used for dropdown suggestions."""
    return load_feed(CARD_LIST_FILE, data_dir=data_dir, base_url=base_url)


def load_offer_feeds(
    data_dir: str | None = None,
    base_url: str | None = None,
) -> dict[str, list[OfferRecord]]:
    """Offer records per site, in SITE_FEEDS order."""
    feeds: dict[str, list[OfferRecord]] = {}
    for site, file_name in SITE_FEEDS:
        rows = load_feed(file_name, data_dir=data_dir, base_url=base_url)
        feeds[site] = [OfferRecord(record=row, site=site) for row in rows]
    return feeds
