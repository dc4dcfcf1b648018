"""Query-to-card similarity scoring."""
from rapidfuzz.distance import Levenshtein

from cardoffers.data.normalize import normalize_key

# Substring hits always outrank fuzzy scores, which never exceed 1.0.
MAX_SCORE = 100.0

WORD_COVERAGE_WEIGHT = 0.7
EDIT_SIMILARITY_WEIGHT = 0.3

# Marketing tier keyword users often misspell ("selct", "selet").
KEYWORD = "select"
# Free-text queries get a looser typo tolerance than controlled card labels.
QUERY_KEYWORD_MAX_DISTANCE = 2
LABEL_KEYWORD_MAX_DISTANCE = 1


def levenshtein(a: str, b: str) -> int:
    """Unit-cost edit distance between the normalized forms of a and b."""
    return Levenshtein.distance(normalize_key(a), normalize_key(b))


def score_candidate(query: str, label: str) -> float:
    """Score how well a card label answers a partial query.

    Returns MAX_SCORE when the normalized label contains the normalized
    query. Otherwise a 0-1 blend:
        word_coverage * 0.7 + edit_similarity * 0.3
    where word_coverage is the fraction of query tokens found inside some
    label token, and edit_similarity is 1 - distance / longer length.
    """
    q = normalize_key(query)
    c = normalize_key(label)
    if not q:
        return 0.0
    if q in c:
        return MAX_SCORE

    q_words = q.split()
    c_words = c.split()
    matching = sum(1 for qw in q_words if any(qw in cw for cw in c_words))
    word_coverage = matching / max(1, len(q_words))
    edit_similarity = 1 - levenshtein(q, c) / max(len(q), len(c))
    return word_coverage * WORD_COVERAGE_WEIGHT + edit_similarity * EDIT_SIMILARITY_WEIGHT


def is_keyword_like(text: str, keyword: str = KEYWORD, max_distance: int = QUERY_KEYWORD_MAX_DISTANCE) -> bool:
    """True if any token of the normalized text is the keyword or within max_distance edits of it."""
    for word in normalize_key(text).split():
        if word == keyword:
            return True
        if levenshtein(word, keyword) <= max_distance:
            return True
    return False
