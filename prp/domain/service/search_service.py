"""Fuzzy search over press releases.

Matching is recomputed per query over an in-memory working set, either the
approved corpus or one owner's items. There is no persistent index.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from difflib import SequenceMatcher

import logfire

from prp.domain.error import ValidationError
from prp.domain.model import PressRelease
from prp.domain.value import SearchableField, SearchText

from .base import Service

DEFAULT_THRESHOLD = 0.3

SEARCHABLE_FIELDS: frozenset[str] = frozenset(f.value for f in SearchableField)


@dataclass(frozen=True)
class SearchMatch:
    """A press release that matched a query."""

    item: PressRelease
    # 0.0 is an exact or substring hit, 1.0 shares nothing with the query
    distance: float


def _ratio(a: str, b: str) -> float:
    return SequenceMatcher(None, a, b).ratio()


def fuzzy_distance(query: str | SearchText, text: str | SearchText) -> float:
    """Normalised distance between a query and a field value.

    Both sides are normalised first. A substring hit scores 0. Otherwise
    the query is compared against every run of field words whose length is
    within one of the query's word count, and against the whole field; the
    best similarity ratio wins.

    Returns:
        Distance in [0, 1]
    """
    q = query if isinstance(query, SearchText) else SearchText(query)
    t = text if isinstance(text, SearchText) else SearchText(text)

    if not q.root:
        return 0.0
    if not t.root:
        return 1.0
    if q.root in t.root:
        return 0.0

    best = _ratio(q.root, t.root)
    words = t.words
    k = len(q.words)
    for size in range(max(1, k - 1), k + 2):
        if size > len(words):
            break
        for start in range(len(words) - size + 1):
            window = " ".join(words[start : start + size])
            best = max(best, _ratio(q.root, window))
            if best == 1.0:
                return 0.0

    return 1.0 - best


def validate_search_params(fields: Iterable[str], threshold: float) -> list[str]:
    """Check search fields and threshold.

    Returns:
        The field names as a list

    Raises:
        ValidationError: If the threshold is outside [0, 1] or a field is
            not searchable
    """
    if not 0.0 <= threshold <= 1.0:
        raise ValidationError(f"Search threshold must be between 0 and 1, got {threshold}")

    names = [f.value if isinstance(f, SearchableField) else f for f in fields]
    if not names:
        raise ValidationError("At least one search field is required")

    unknown = sorted(set(names) - SEARCHABLE_FIELDS)
    if unknown:
        raise ValidationError(f"Fields are not searchable: {', '.join(unknown)}")

    return names


class SearchService(Service):
    """Domain service for approximate press release search."""

    def __init__(self, default_threshold: float = DEFAULT_THRESHOLD) -> None:
        self.default_threshold = default_threshold

    def search(
        self,
        corpus: Sequence[PressRelease],
        query: str,
        fields: Iterable[str],
        threshold: float | None = None,
    ) -> list[SearchMatch]:
        """Search a corpus of press releases.

        An empty or blank query returns the whole corpus in its original
        order. Otherwise each record scores the smallest distance over the
        named fields; records within the threshold are returned best match
        first, ties keeping corpus order.

        Args:
            corpus: Records to search
            query: Free text query
            fields: Field names to match against
            threshold: Maximum accepted distance, defaults to the configured one

        Returns:
            Matching records with their distances

        Raises:
            ValidationError: If fields or threshold are invalid
        """
        threshold = self.default_threshold if threshold is None else threshold
        names = validate_search_params(fields, threshold)

        q = SearchText(query)
        with logfire.span(
            "search_service.search",
            query=q.root,
            fields=names,
            threshold=threshold,
            corpus_size=len(corpus),
        ):
            if not q.root:
                return [SearchMatch(item=item, distance=0.0) for item in corpus]

            matches: list[SearchMatch] = []
            for item in corpus:
                distance = min(
                    fuzzy_distance(q, getattr(item, name) or "") for name in names
                )
                if distance <= threshold:
                    matches.append(SearchMatch(item=item, distance=distance))

            # sorted() is stable, so equal distances keep corpus order
            matches = sorted(matches, key=lambda m: m.distance)
            logfire.info("Search completed", query=q.root, matches=len(matches))
            return matches
