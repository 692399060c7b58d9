"""Shared FastAPI dependencies."""

from __future__ import annotations

from agentic_search.core.config import ResolvedConfig
from agentic_search.retrieval import SearchOrchestrator

_CONFIG: ResolvedConfig | None = None
_ORCHESTRATOR: SearchOrchestrator | None = None


def configure(config: ResolvedConfig, orchestrator: SearchOrchestrator | None = None) -> None:
    """Install the process-wide config, and optionally a prebuilt orchestrator."""
    global _CONFIG, _ORCHESTRATOR
    _CONFIG = config
    _ORCHESTRATOR = orchestrator


def get_app_config() -> ResolvedConfig:
    if _CONFIG is None:
        raise RuntimeError("Search configuration has not been resolved")
    return _CONFIG


def get_orchestrator() -> SearchOrchestrator:
    global _ORCHESTRATOR
    if _ORCHESTRATOR is None:
        _ORCHESTRATOR = SearchOrchestrator.from_config(get_app_config())
    return _ORCHESTRATOR


async def shutdown() -> None:
    """Close backend clients and forget the orchestrator."""
    global _ORCHESTRATOR
    if _ORCHESTRATOR is not None:
        await _ORCHESTRATOR.close()
        _ORCHESTRATOR = None


__all__ = ["configure", "get_app_config", "get_orchestrator", "shutdown"]
