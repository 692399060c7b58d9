"""Administrative routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response

from agentic_search.api.dependencies import get_app_config
from agentic_search.core.config import ResolvedConfig
from agentic_search.core.metrics import metrics_response
from agentic_search.models.dto import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse, summary="Liveness check")
async def health(config: ResolvedConfig = Depends(get_app_config)) -> HealthResponse:
    return HealthResponse(ok=True, mode=config.mode.value)


@router.get("/metrics", summary="Prometheus metrics")
async def metrics() -> Response:
    return metrics_response()
