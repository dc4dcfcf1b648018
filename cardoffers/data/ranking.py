"""Rank card suggestions for the search box.

Pipeline per instrument type:
    score -> filter (containment / threshold / keyword boost) -> drop repeated keys
    -> sort (score desc, display asc) -> cap -> keyword-first partition.
"""
from dataclasses import dataclass, field

from cardoffers.data.normalize import CardEntry, normalize_key
from cardoffers.data.scoring import (
    LABEL_KEYWORD_MAX_DISTANCE,
    QUERY_KEYWORD_MAX_DISTANCE,
    is_keyword_like,
    score_candidate,
)

RELEVANCE_THRESHOLD = 0.3
MAX_SUGGESTIONS = 50

GROUP_HEADINGS = {"credit": "Credit Cards", "debit": "Debit Cards"}


@dataclass
class CardSuggestions:
    """Ranked suggestions for one query, kept per instrument type."""
    query: str
    credit: list[CardEntry] = field(default_factory=list)
    debit: list[CardEntry] = field(default_factory=list)

    @property
    def no_matches(self) -> bool:
        return bool(self.query.strip()) and not self.credit and not self.debit

    def grouped(self) -> list[dict]:
        """Headed groups, credit first, empty groups omitted."""
        groups = []
        for instrument_type in ("credit", "debit"):
            entries = getattr(self, instrument_type)
            if entries:
                groups.append({
                    "heading": GROUP_HEADINGS[instrument_type],
                    "instrument_type": instrument_type,
                    "cards": entries,
                })
        return groups


def _label_is_keyword_like(label: str) -> bool:
    return is_keyword_like(label, max_distance=LABEL_KEYWORD_MAX_DISTANCE)


def rank_entries(query: str, entries: list[CardEntry]) -> list[CardEntry]:
    """Rank one instrument type's card entries against a query.

    A candidate is kept when its normalized label contains the normalized
    query, when its score exceeds RELEVANCE_THRESHOLD, or when both the query
    and the label look like the tier keyword. Results are capped at
    MAX_SUGGESTIONS; for keyword-like queries, keyword labels are moved to
    the front preserving order.
    """
    q = normalize_key(query)
    if not q:
        return []
    query_has_keyword = is_keyword_like(query, max_distance=QUERY_KEYWORD_MAX_DISTANCE)

    scored = []
    seen_keys: set[str] = set()
    for entry in entries:
        if entry.norm_key in seen_keys:
            continue
        score = score_candidate(query, entry.display)
        contains = q in normalize_key(entry.display)
        boosted = query_has_keyword and _label_is_keyword_like(entry.display)
        if contains or score > RELEVANCE_THRESHOLD or boosted:
            seen_keys.add(entry.norm_key)
            scored.append((score, entry))

    scored.sort(key=lambda pair: (-pair[0], pair[1].display.lower()))
    ranked = [entry for _score, entry in scored[:MAX_SUGGESTIONS]]

    if query_has_keyword:
        keyword_first = [e for e in ranked if _label_is_keyword_like(e.display)]
        rest = [e for e in ranked if not _label_is_keyword_like(e.display)]
        ranked = keyword_first + rest
    return ranked


def rank_cards(
    query: str,
    credit_entries: list[CardEntry],
    debit_entries: list[CardEntry],
) -> CardSuggestions:
    """Rank credit and debit entries independently for one query."""
    return CardSuggestions(
        query=query,
        credit=rank_entries(query, credit_entries),
        debit=rank_entries(query, debit_entries),
    )
