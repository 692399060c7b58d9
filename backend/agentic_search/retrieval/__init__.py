"""Retrieval clients and search orchestration."""

from .embeddings import EmbeddingClient
from .keywords import KeywordExtractor
from .vector_index import VectorIndex
from .fulltext import FullTextIndex
from .hybrid import merge_and_rank, minmax_normalize
from .search import BackendOutcome, SearchOrchestrator, SearchState

__all__ = [
    "EmbeddingClient",
    "KeywordExtractor",
    "VectorIndex",
    "FullTextIndex",
    "merge_and_rank",
    "minmax_normalize",
    "BackendOutcome",
    "SearchOrchestrator",
    "SearchState",
]
