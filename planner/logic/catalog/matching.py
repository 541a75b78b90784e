"""Fuzzy article matching ("did you mean ...?") for catalog deduplication.

Names are compared after normalization (case-folded, accents stripped,
trimmed) using a Levenshtein edit distance.
"""
import unicodedata
from typing import Iterable, List, Optional, Sequence

from planner.domain.Article import Article

__all__ = ['normalize', 'levenshtein', 'search_articles', 'suggest_similar', 'find_similar_article']


def normalize(name: str) -> str:
    if not isinstance(name, str):
        return ""
    decomposed = unicodedata.normalize('NFKD', name.casefold())
    stripped = ''.join(c for c in decomposed if not unicodedata.combining(c))
    return stripped.strip()


def levenshtein(a: str, b: str) -> int:
    if not a:
        return len(b)
    if not b:
        return len(a)
    previous = list(range(len(b) + 1))
    for i, ca in enumerate(a, start=1):
        current = [i] + [0] * len(b)
        for j, cb in enumerate(b, start=1):
            cost = 0 if ca == cb else 1
            current[j] = min(
                previous[j] + 1,         # deletion
                current[j - 1] + 1,      # insertion
                previous[j - 1] + cost,  # substitution
            )
        previous = current
    return previous[-1]


def _food_filter(articles: Iterable[Article], food_only: bool) -> List[Article]:
    return [a for a in articles if a.is_food or not food_only]


def search_articles(query: str, articles: Iterable[Article], food_only: bool = False) -> List[Article]:
    """Articles whose normalized name contains the normalized query (all of them for an empty query)."""
    base = _food_filter(articles, food_only)
    needle = normalize(query)
    if not needle:
        return base
    return [a for a in base if needle in normalize(a.name)]


def suggest_similar(query: str, articles: Iterable[Article], tolerance: int = 2,
                    food_only: bool = False) -> List[Article]:
    """Articles within `tolerance` edits of the query, closest first."""
    needle = normalize(query)
    if not needle:
        return []
    scored = [(levenshtein(needle, normalize(a.name)), a) for a in _food_filter(articles, food_only)]
    return [a for dist, a in sorted(scored, key=lambda pair: pair[0]) if dist <= tolerance]


def find_similar_article(name: str, articles: Sequence[Article]) -> Optional[Article]:
    """Existing article that `name` most likely duplicates, or None.

    Exact or singular/plural matches first, then one edit away, then two edits
    away for names longer than four characters.
    """
    needle = normalize(name)
    if not needle:
        return None
    normalized = [(normalize(a.name), a) for a in articles]

    def _without_s(s: str) -> str:
        return s.replace('s', '')

    for other, article in normalized:
        if other == needle or _without_s(other) == _without_s(needle):
            return article

    distances = [(levenshtein(needle, other), article) for other, article in normalized]
    for dist, article in distances:
        if dist == 1:
            return article
    if len(needle) > 4:
        for dist, article in distances:
            if dist == 2:
                return article
    return None
