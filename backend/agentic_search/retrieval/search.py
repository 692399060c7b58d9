"""Search orchestration."""

from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass
from enum import Enum
from typing import Awaitable

from agentic_search.core.config import ResolvedConfig, SearchMode
from agentic_search.core.errors import AllBackendsFailed, BackendFailed, ExternalServiceError
from agentic_search.core.logging import get_logger
from agentic_search.core.metrics import BACKEND_FAILURES, HITS_RETURNED, SEARCH_COUNT, SEARCH_LATENCY
from agentic_search.db.postgres import PostgresDatabase
from agentic_search.models.entities import Origin, SearchHit, SearchResultSet
from agentic_search.retrieval.embeddings import EmbeddingClient
from agentic_search.retrieval.fulltext import FullTextIndex
from agentic_search.retrieval.hybrid import merge_and_rank
from agentic_search.retrieval.keywords import KeywordExtractor
from agentic_search.retrieval.vector_index import VectorIndex

logger = get_logger(__name__)


class SearchState(str, Enum):
    IDLE = "idle"
    DISPATCHING = "dispatching"
    MERGING = "merging"
    DONE = "done"
    FAILED = "failed"


@dataclass(slots=True, frozen=True)
class BackendOutcome:
    """What one branch produced: hits, or the error that stopped it."""

    origin: Origin
    hits: tuple[SearchHit, ...] = ()
    error: ExternalServiceError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class SearchOrchestrator:
    """Coordinates the vector and keyword branches for one configured mode.

    Nothing but the read-only config is shared between calls, so a single
    instance can serve concurrent requests.
    """

    def __init__(
        self,
        config: ResolvedConfig,
        embedder: EmbeddingClient | None = None,
        vector_index: VectorIndex | None = None,
        extractor: KeywordExtractor | None = None,
        fulltext: FullTextIndex | None = None,
    ) -> None:
        self.config = config
        self.mode = config.mode
        if self.mode.uses_vector and (embedder is None or vector_index is None or config.qdrant is None):
            raise ValueError(f"{self.mode.value} mode needs an embedding client, a vector index and qdrant settings")
        if self.mode.uses_keyword and (extractor is None or fulltext is None or config.postgres is None):
            raise ValueError(f"{self.mode.value} mode needs a keyword extractor, a full-text index and postgres settings")
        self.embedder = embedder
        self.vector_index = vector_index
        self.extractor = extractor
        self.fulltext = fulltext

    @classmethod
    def from_config(cls, config: ResolvedConfig) -> "SearchOrchestrator":
        """Build the orchestrator together with the clients its mode needs."""
        embedder = vector_index = extractor = fulltext = None
        if config.mode.uses_vector:
            embedder = EmbeddingClient(config.embedding_service, timeout=config.request_timeout)
            vector_index = VectorIndex.from_config(config.qdrant, timeout=config.request_timeout)
        if config.mode.uses_keyword:
            extractor = KeywordExtractor(config.chat_service, timeout=config.request_timeout)
            fulltext = FullTextIndex(
                PostgresDatabase.from_config(config.postgres),
                ts_config=config.postgres.ts_config,
            )
        return cls(config, embedder, vector_index, extractor, fulltext)

    async def execute(self, query: str) -> SearchResultSet:
        """Run one search and return hits ranked best first.

        Raises ``BackendFailed`` in the single-backend modes and
        ``AllBackendsFailed`` in combined mode when both branches fail.
        """
        start_time = time.perf_counter()
        mode = self.mode.value
        status = "failed"
        state = SearchState.IDLE
        try:
            state = self._advance(state, SearchState.DISPATCHING)
            if self.mode is SearchMode.VECTOR:
                outcomes = [await self._run(Origin.VECTOR, self._vector_branch(query))]
            elif self.mode is SearchMode.KEYWORD:
                outcomes = [await self._run(Origin.KEYWORD, self._keyword_branch(query))]
            else:
                # Both branches are awaited; a fast failure never short-circuits the other.
                outcomes = list(
                    await asyncio.gather(
                        self._run(Origin.VECTOR, self._vector_branch(query)),
                        self._run(Origin.KEYWORD, self._keyword_branch(query)),
                    )
                )

            failures = [outcome for outcome in outcomes if not outcome.ok]
            if len(failures) == len(outcomes):
                state = self._advance(state, SearchState.FAILED)
                if len(failures) == 1:
                    failed = failures[0]
                    raise BackendFailed(failed.origin, failed.error) from failed.error
                raise AllBackendsFailed([failed.error for failed in failures])

            state = self._advance(state, SearchState.MERGING)
            result = merge_and_rank(
                [outcome.hits for outcome in outcomes if outcome.ok],
                score_threshold=self.config.score_threshold,
                limit=self.config.limit,
            )
            state = self._advance(state, SearchState.DONE)
            status = "partial" if failures else "ok"
            HITS_RETURNED.labels(mode=mode).observe(len(result))
            logger.info(
                "Search completed with %d hits",
                len(result),
                extra={"ctx_mode": mode, "ctx_status": status},
            )
            return result
        except (BackendFailed, AllBackendsFailed) as exc:
            logger.error("Search failed: %s", exc, extra={"ctx_mode": mode})
            raise
        finally:
            SEARCH_LATENCY.labels(mode=mode).observe(time.perf_counter() - start_time)
            SEARCH_COUNT.labels(mode=mode, status=status).inc()

    async def close(self) -> None:
        if self.embedder is not None:
            await self.embedder.aclose()
        if self.vector_index is not None:
            await self.vector_index.close()
        if self.extractor is not None:
            await self.extractor.aclose()
        if self.fulltext is not None:
            await self.fulltext.close()

    # ------------------------------------------------------------------

    async def _vector_branch(self, query: str) -> list[SearchHit]:
        qdrant = self.config.qdrant
        vector = await self.embedder.embed(query)
        return await self.vector_index.search(
            vector,
            collection=qdrant.collection,
            payload_field=qdrant.payload_field,
            return_fields=qdrant.return_fields,
            limit=self.config.limit,
            score_threshold=self.config.score_threshold,
        )

    async def _keyword_branch(self, query: str) -> list[SearchHit]:
        postgres = self.config.postgres
        keywords = await self.extractor.extract_keywords(query, self.config.keyword_prompt)
        logger.debug("Extracted keywords: %s", keywords)
        return await self.fulltext.search(
            keywords,
            query=query,
            table=postgres.table_name,
            search_field=postgres.search_field,
            return_fields=postgres.return_field,
            limit=self.config.limit,
        )

    async def _run(self, origin: Origin, branch: Awaitable[list[SearchHit]]) -> BackendOutcome:
        try:
            hits = await branch
        except ExternalServiceError as exc:
            BACKEND_FAILURES.labels(origin=origin.value).inc()
            logger.warning("%s branch failed: %s", origin.value, exc, extra={"ctx_origin": origin.value})
            return BackendOutcome(origin=origin, error=exc)
        return BackendOutcome(origin=origin, hits=tuple(hits))

    def _advance(self, current: SearchState, target: SearchState) -> SearchState:
        logger.debug("Search state %s -> %s", current.value, target.value)
        return target


__all__ = ["SearchOrchestrator", "SearchState", "BackendOutcome"]
