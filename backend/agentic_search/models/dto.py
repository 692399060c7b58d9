"""Pydantic DTOs exposed via API."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field

from agentic_search.models.entities import SearchHit


class SearchRequest(BaseModel):
    query: str = Field(min_length=1, description="Natural-language query")


class HitResult(BaseModel):
    source_identifier: str
    score: float
    origin: Literal["vector", "keyword"]
    fields: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_hit(cls, hit: SearchHit) -> "HitResult":
        return cls(**hit.to_dict())


class SearchResponse(BaseModel):
    mode: Literal["vector", "keyword", "combined"]
    results: list[HitResult]


class HealthResponse(BaseModel):
    ok: bool
    mode: Literal["vector", "keyword", "combined"]


__all__ = [
    "SearchRequest",
    "HitResult",
    "SearchResponse",
    "HealthResponse",
]
