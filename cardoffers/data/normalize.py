"""Card name normalization and canonicalization.

Turns free-text card names from card lists and offer feeds into a stable
identity: a display base name (trailing parenthetical variant removed, brand
spelling fixed) and a normalized key used for equality.
"""
import re
import unicodedata
from dataclasses import dataclass

INSTRUMENT_TYPES = ("credit", "debit")

# Case-insensitive whole-word rewrites to the official brand capitalization.
# Each pattern targets a distinct token, so order does not change results.
BRAND_SPELLINGS: list[tuple[re.Pattern, str]] = [
    (re.compile(r"\bMakemytrip\b", re.IGNORECASE), "MakeMyTrip"),
    (re.compile(r"\bIcici\b", re.IGNORECASE), "ICICI"),
    (re.compile(r"\bHdfc\b", re.IGNORECASE), "HDFC"),
    (re.compile(r"\bSbi\b", re.IGNORECASE), "SBI"),
    (re.compile(r"\bIdfc\b", re.IGNORECASE), "IDFC"),
    (re.compile(r"\bPnb\b", re.IGNORECASE), "PNB"),
    (re.compile(r"\bRbl\b", re.IGNORECASE), "RBL"),
    (re.compile(r"\bYes\b", re.IGNORECASE), "YES"),
]

_TRAILING_VARIANT = re.compile(r"\s*\(([^)]*)\)\s*$")
_NON_WORD = re.compile(r"[^\w\s]")
_WHITESPACE = re.compile(r"\s+")
_URL_SCHEME = re.compile(r"^https?://")


@dataclass(frozen=True)
class CardEntry:
    """A de-duplicated, display-ready card identity."""
    instrument_type: str
    display: str
    norm_key: str


def _as_text(value) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def normalize_key(text) -> str:
    """Fold text into its comparison key.

    Lowercases, decomposes Unicode and drops combining marks, replaces
    punctuation with spaces, collapses whitespace.

    Examples:
        'HDFC Regalia'       -> 'hdfc regalia'
        'ICICI  Amazon-Pay'  -> 'icici amazon pay'
        'Café'               -> 'cafe'
    """
    s = unicodedata.normalize("NFKD", _as_text(text).lower())
    s = "".join(ch for ch in s if not unicodedata.combining(ch))
    s = _NON_WORD.sub(" ", s)
    return _WHITESPACE.sub(" ", s).strip()


def split_base_and_variant(name) -> tuple[str, str]:
    """Split a trailing parenthetical qualifier off a card name.

    'HDFC Regalia (Visa Signature)' -> ('HDFC Regalia', 'Visa Signature').
    Interior parentheses are left in the base.
    """
    s = _as_text(name)
    match = _TRAILING_VARIANT.search(s)
    if not match:
        return s.strip(), ""
    return s[: match.start()].strip(), match.group(1).strip()


def canonicalize_brand(text) -> str:
    """Rewrite known bank/brand tokens to their official capitalization."""
    s = _as_text(text)
    for pattern, replacement in BRAND_SPELLINGS:
        s = pattern.sub(replacement, s)
    return s


def make_card_entry(raw_name, instrument_type: str) -> CardEntry:
    base, _variant = split_base_and_variant(raw_name)
    display = canonicalize_brand(base)
    return CardEntry(
        instrument_type=instrument_type,
        display=display,
        norm_key=normalize_key(display),
    )


def normalize_url(url) -> str:
    """Normalize a URL for identity comparison.

    Lowercases, strips the http(s) scheme, a leading 'www.' and one
    trailing slash.
    """
    s = _as_text(url).strip().lower()
    s = _URL_SCHEME.sub("", s)
    if s.startswith("www."):
        s = s[4:]
    if s.endswith("/"):
        s = s[:-1]
    return s
