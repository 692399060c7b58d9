"""Tests for score normalization and merging."""

from __future__ import annotations

import pytest

from agentic_search.models.entities import Origin
from agentic_search.retrieval.hybrid import merge_and_rank, minmax_normalize

from conftest import keyword_hit, vector_hit


def test_minmax_normalize_spreads_page_to_unit_range() -> None:
    assert minmax_normalize([10, 5, 0]) == [1.0, 0.5, 0.0]


def test_minmax_normalize_equal_scores_become_one() -> None:
    assert minmax_normalize([3.2, 3.2, 3.2]) == [1.0, 1.0, 1.0]
    assert minmax_normalize([0.7]) == [1.0]


def test_minmax_normalize_empty_page() -> None:
    assert minmax_normalize([]) == []


def test_minmax_normalize_keeps_order() -> None:
    assert minmax_normalize([0.2, 0.6, 0.4]) == pytest.approx([0.0, 1.0, 0.5])


def test_tie_goes_to_vector_then_arrival_order() -> None:
    result = merge_and_rank(
        [
            [vector_hit("v1", 0.8), vector_hit("v2", 0.8)],
            [keyword_hit("k1", 0.8), keyword_hit("k2", 0.9)],
        ],
        score_threshold=0.0,
        limit=10,
    )
    assert [hit.source_identifier for hit in result] == ["k2", "v1", "v2", "k1"]


def test_tie_break_is_independent_of_branch_order() -> None:
    result = merge_and_rank(
        [[keyword_hit("k", 0.7)], [vector_hit("v", 0.7)]],
        score_threshold=0.0,
        limit=10,
    )
    assert [hit.origin for hit in result] == [Origin.VECTOR, Origin.KEYWORD]


def test_same_document_from_both_origins_is_kept_twice() -> None:
    result = merge_and_rank(
        [[vector_hit("doc-1", 0.9)], [keyword_hit("doc-1", 1.0)]],
        score_threshold=0.5,
        limit=10,
    )
    assert [(hit.source_identifier, hit.origin) for hit in result] == [
        ("doc-1", Origin.KEYWORD),
        ("doc-1", Origin.VECTOR),
    ]


def test_threshold_and_limit_applied_after_sorting() -> None:
    result = merge_and_rank(
        [
            [vector_hit("v1", 0.55), vector_hit("v2", 0.95), vector_hit("v3", 0.3)],
            [keyword_hit("k1", 1.0), keyword_hit("k2", 0.5), keyword_hit("k3", 0.0)],
        ],
        score_threshold=0.5,
        limit=3,
    )
    assert result.scores == [1.0, 0.95, 0.55]
    assert len(result) == 3


def test_result_is_sorted_non_increasing() -> None:
    result = merge_and_rank(
        [
            [vector_hit(f"v{i}", score) for i, score in enumerate([0.61, 0.99, 0.75, 0.75])],
            [keyword_hit(f"k{i}", score) for i, score in enumerate([1.0, 0.2, 0.75, 0.8])],
        ],
        score_threshold=0.5,
        limit=10,
    )
    scores = result.scores
    assert scores == sorted(scores, reverse=True)
    assert all(score >= 0.5 for score in scores)


def test_no_branches_gives_empty_result() -> None:
    assert len(merge_and_rank([], score_threshold=0.5, limit=10)) == 0
