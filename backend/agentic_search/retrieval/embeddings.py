"""Query embedding through an OpenAI-compatible embeddings endpoint."""

from __future__ import annotations

from agentic_search.core.errors import ExternalServiceError
from agentic_search.retrieval.service import ServiceClient


class EmbeddingClient(ServiceClient):
    """Turns a query into a vector with one ``POST /embeddings`` call.

    The vector dimension is not checked here; the vector index rejects a
    mismatched shape on its own.
    """

    backend = "embedding"

    async def embed(self, query: str) -> list[float]:
        payload = await self._post("/embeddings", self._with_model({"input": query}))
        try:
            vector = payload["data"][0]["embedding"]
            return [float(value) for value in vector]
        except (KeyError, IndexError, TypeError, ValueError) as exc:
            raise ExternalServiceError(self.backend, "unparsable", f"no embedding in response: {exc!r}") from exc


__all__ = ["EmbeddingClient"]
