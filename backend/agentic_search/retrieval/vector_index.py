"""Similarity search against a Qdrant collection."""

from __future__ import annotations

import math
from typing import Any, Sequence

import httpx
from qdrant_client import AsyncQdrantClient
from qdrant_client.http.exceptions import ResponseHandlingException, UnexpectedResponse

from agentic_search.core.config import QdrantConfig
from agentic_search.core.errors import ExternalServiceError
from agentic_search.core.logging import get_logger
from agentic_search.models.entities import Origin, SearchHit
from agentic_search.utils.text import parse_field_list

logger = get_logger(__name__)

BACKEND = "qdrant"


class VectorIndex:
    """Runs ``query_points`` and maps scored points to hits.

    Qdrant already reports similarity with higher meaning closer, so scores
    are passed through untouched.
    """

    def __init__(self, client: AsyncQdrantClient) -> None:
        self.client = client

    @classmethod
    def from_config(cls, config: QdrantConfig, timeout: float = 30.0) -> "VectorIndex":
        # qdrant-client takes whole seconds, at least one
        client = AsyncQdrantClient(url=config.base_url, api_key=config.api_key, timeout=max(1, math.ceil(timeout)))
        return cls(client)

    async def search(
        self,
        vector: Sequence[float],
        collection: str,
        payload_field: str,
        return_fields: str = "*",
        limit: int = 10,
        score_threshold: float | None = None,
    ) -> list[SearchHit]:
        wanted = parse_field_list(return_fields)
        with_payload: bool | list[str] = True
        if wanted is not None:
            with_payload = list(dict.fromkeys([payload_field, *wanted]))
        try:
            response = await self.client.query_points(
                collection_name=collection,
                query=list(vector),
                limit=limit,
                score_threshold=score_threshold,
                with_payload=with_payload,
            )
        except UnexpectedResponse as exc:
            raise ExternalServiceError(BACKEND, "status", exc) from exc
        except (ResponseHandlingException, httpx.TransportError) as exc:
            raise ExternalServiceError(BACKEND, "network", exc) from exc
        except ValueError as exc:
            raise ExternalServiceError(BACKEND, "query", exc) from exc

        hits = [_to_hit(point, payload_field, wanted) for point in response.points]
        logger.debug("Vector search returned %d hits from %s", len(hits), collection)
        return hits

    async def close(self) -> None:
        await self.client.close()


def _to_hit(point: Any, payload_field: str, wanted: list[str] | None) -> SearchHit:
    payload: dict[str, Any] = dict(point.payload or {})
    identifier = payload.get(payload_field)
    if identifier is None:
        logger.debug("Point %s has no payload field %s; using point id", point.id, payload_field)
        identifier = point.id
    if wanted is None:
        fields = payload
    else:
        fields = {name: payload[name] for name in wanted if name in payload}
    return SearchHit(
        source_identifier=str(identifier),
        score=float(point.score),
        origin=Origin.VECTOR,
        fields=fields,
    )


__all__ = ["VectorIndex"]
