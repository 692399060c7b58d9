"""Search API routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from agentic_search.api.dependencies import get_orchestrator
from agentic_search.core.errors import OrchestrationError
from agentic_search.models.dto import HitResult, SearchRequest, SearchResponse
from agentic_search.retrieval import SearchOrchestrator

router = APIRouter()


@router.post("/search", response_model=SearchResponse, summary="Search the corpus with a natural-language query")
async def run_search(
    request: SearchRequest,
    orchestrator: SearchOrchestrator = Depends(get_orchestrator),
) -> SearchResponse:
    try:
        result = await orchestrator.execute(request.query)
    except OrchestrationError as exc:
        raise HTTPException(status_code=502, detail=exc.to_dict()) from exc
    return SearchResponse(
        mode=orchestrator.mode.value,
        results=[HitResult.from_hit(hit) for hit in result],
    )
