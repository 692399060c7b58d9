"""Keyword extraction through an OpenAI-compatible chat completion endpoint."""

from __future__ import annotations

from agentic_search.core.config import QUERY_PLACEHOLDER
from agentic_search.core.errors import ExternalServiceError
from agentic_search.retrieval.service import ServiceClient
from agentic_search.utils.text import split_keywords


def render_prompt(prompt: str, query: str) -> str:
    """Insert ``query`` at the prompt's ``{query}`` placeholder."""
    return prompt.replace(QUERY_PLACEHOLDER, query, 1)


class KeywordExtractor(ServiceClient):
    """One-shot chat completion that reduces a query to search keywords."""

    backend = "chat"

    async def extract_keywords(self, query: str, prompt: str) -> list[str]:
        body = self._with_model(
            {
                "messages": [{"role": "user", "content": render_prompt(prompt, query)}],
                "temperature": 0,
                "stream": False,
            }
        )
        payload = await self._post("/chat/completions", body)
        try:
            content = payload["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as exc:
            raise ExternalServiceError(self.backend, "unparsable", f"no completion in response: {exc!r}") from exc
        if content is None:
            return []
        if not isinstance(content, str):
            raise ExternalServiceError(self.backend, "unparsable", f"completion is not text: {content!r}")
        return split_keywords(content)


__all__ = ["KeywordExtractor", "render_prompt"]
