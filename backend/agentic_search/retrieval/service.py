"""HTTP plumbing shared by the OpenAI-compatible AI service clients."""

from __future__ import annotations

from typing import Any

import httpx
import orjson

from agentic_search.core.config import ServiceConfig
from agentic_search.core.errors import ExternalServiceError
from agentic_search.core.logging import get_logger

logger = get_logger(__name__)

_ERROR_BODY_LIMIT = 300


class ServiceClient:
    """Stateless request/response client for one AI service."""

    backend = "service"

    def __init__(
        self,
        config: ServiceConfig,
        timeout: float = 30.0,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self.config = config
        self.timeout = timeout
        self._owns_client = http_client is None
        self._http = http_client or httpx.AsyncClient(timeout=timeout)

    def _url(self, path: str) -> str:
        return f"{self.config.url.rstrip('/')}/{path.lstrip('/')}"

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.config.api_key:
            headers["Authorization"] = f"Bearer {self.config.api_key}"
        return headers

    def _with_model(self, body: dict[str, Any]) -> dict[str, Any]:
        if self.config.model:
            body["model"] = self.config.model
        return body

    async def _post(self, path: str, body: dict[str, Any]) -> Any:
        url = self._url(path)
        try:
            response = await self._http.post(
                url,
                content=orjson.dumps(body),
                headers=self._headers(),
                timeout=self.timeout,
            )
        except httpx.TransportError as exc:
            raise ExternalServiceError(self.backend, "network", exc) from exc
        if response.is_error:
            detail = response.text[:_ERROR_BODY_LIMIT]
            raise ExternalServiceError(
                self.backend,
                "status",
                f"{url} returned {response.status_code}: {detail}",
            )
        try:
            return orjson.loads(response.content)
        except orjson.JSONDecodeError as exc:
            raise ExternalServiceError(self.backend, "unparsable", exc) from exc

    async def aclose(self) -> None:
        if self._owns_client:
            await self._http.aclose()


__all__ = ["ServiceClient"]
