"""Internal dataclasses passed between the search clients and the orchestrator."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterator, Sequence


class Origin(str, Enum):
    """Backend a hit or a failure comes from."""

    VECTOR = "vector"
    KEYWORD = "keyword"


@dataclass(slots=True, frozen=True)
class SearchHit:
    source_identifier: str
    score: float
    origin: Origin
    fields: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "source_identifier": self.source_identifier,
            "score": self.score,
            "origin": self.origin.value,
            "fields": self.fields,
        }


@dataclass(slots=True, frozen=True)
class SearchResultSet:
    """Ranked hits of one search call, best first."""

    hits: tuple[SearchHit, ...] = ()

    @classmethod
    def of(cls, hits: Sequence[SearchHit]) -> "SearchResultSet":
        return cls(hits=tuple(hits))

    @property
    def scores(self) -> list[float]:
        return [hit.score for hit in self.hits]

    def __iter__(self) -> Iterator[SearchHit]:
        return iter(self.hits)

    def __len__(self) -> int:
        return len(self.hits)

    def __getitem__(self, index: int) -> SearchHit:
        return self.hits[index]


__all__ = ["Origin", "SearchHit", "SearchResultSet"]
