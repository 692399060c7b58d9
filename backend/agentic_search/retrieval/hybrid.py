"""Score normalization and result merging utilities."""

from __future__ import annotations

from typing import Iterable, Sequence

from agentic_search.models.entities import Origin, SearchHit, SearchResultSet

_ORIGIN_ORDER = {Origin.VECTOR: 0, Origin.KEYWORD: 1}


def minmax_normalize(scores: Sequence[float]) -> list[float]:
    """Rescale one page of raw scores to [0, 1]; an all-equal page maps to 1.0."""
    if not scores:
        return []
    low, high = min(scores), max(scores)
    if high == low:
        return [1.0 for _ in scores]
    span = high - low
    return [(score - low) / span for score in scores]


def merge_and_rank(
    branches: Iterable[Sequence[SearchHit]],
    score_threshold: float,
    limit: int,
) -> SearchResultSet:
    """Union branch results, rank them and apply threshold and limit.

    Hits are not deduplicated across origins: a document found by both the
    vector and the keyword backend appears once per origin. Ties on score are
    broken Vector before Keyword, then by arrival order within a branch.
    """
    merged: list[tuple[float, int, int, SearchHit]] = []
    for hits in branches:
        for position, hit in enumerate(hits):
            merged.append((-hit.score, _ORIGIN_ORDER[hit.origin], position, hit))
    merged.sort(key=lambda item: item[:3])
    ranked = [hit for *_, hit in merged if hit.score >= score_threshold]
    return SearchResultSet.of(ranked[:limit])


__all__ = ["minmax_normalize", "merge_and_rank"]
