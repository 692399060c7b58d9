"""Keyword search over a PostgreSQL full-text expression."""

from __future__ import annotations

import asyncio
import re
from typing import Any, Sequence

import asyncpg

from agentic_search.core.errors import ExternalServiceError
from agentic_search.core.logging import get_logger
from agentic_search.db.postgres import PostgresDatabase
from agentic_search.models.entities import Origin, SearchHit
from agentic_search.retrieval.hybrid import minmax_normalize
from agentic_search.utils.text import parse_field_list

logger = get_logger(__name__)

BACKEND = "postgres"
SCORE_COLUMN = "_fts_rank"
_WORD_RE = re.compile(r"\w")


def quote_ident(name: str) -> str:
    return '"' + name.replace('"', '""') + '"'


def quote_table(name: str) -> str:
    return ".".join(quote_ident(part) for part in name.split("."))


def build_search_term(keywords: Sequence[str], query: str) -> str:
    """OR together the keywords, or fall back to the raw query when none has a word character."""
    terms = [keyword.replace('"', " ").strip() for keyword in keywords]
    terms = [term for term in terms if _WORD_RE.search(term)]
    if not terms:
        return query
    return " or ".join(f'"{term}"' for term in terms)


def build_search_sql(table: str, search_field: str, return_fields: str) -> str:
    wanted = parse_field_list(return_fields)
    if wanted is None:
        columns = "t.*"
    else:
        columns = ", ".join(f"t.{quote_ident(name)}" for name in wanted)
    document = f"to_tsvector($3::regconfig, t.{quote_ident(search_field)}::text)"
    return (
        f"SELECT {columns}, ts_rank({document}, q.query) AS {SCORE_COLUMN} "
        f"FROM {quote_table(table)} AS t, websearch_to_tsquery($3::regconfig, $1) AS q(query) "
        f"WHERE {document} @@ q.query "
        f"ORDER BY {SCORE_COLUMN} DESC, t.ctid "
        f"LIMIT $2"
    )


class FullTextIndex:
    """Runs the match query and rescales the page's ``ts_rank`` values to [0, 1]."""

    def __init__(self, db: PostgresDatabase, ts_config: str = "simple") -> None:
        self.db = db
        self.ts_config = ts_config

    async def search(
        self,
        keywords: Sequence[str],
        query: str,
        table: str,
        search_field: str,
        return_fields: str = "*",
        limit: int = 10,
    ) -> list[SearchHit]:
        term = build_search_term(keywords, query)
        if not keywords:
            logger.info("No keywords extracted; searching with the raw query")
        sql = build_search_sql(table, search_field, return_fields)
        try:
            rows = await self.db.fetch(sql, [term, limit, self.ts_config])
        except asyncpg.PostgresError as exc:
            raise ExternalServiceError(BACKEND, "query", exc) from exc
        except (OSError, asyncpg.InterfaceError, asyncio.TimeoutError) as exc:
            raise ExternalServiceError(BACKEND, "network", exc) from exc

        records = [_split_row(row) for row in rows]
        scores = minmax_normalize([raw for _, raw in records])
        hits = [
            SearchHit(
                source_identifier=_identifier(fields),
                score=score,
                origin=Origin.KEYWORD,
                fields=fields,
            )
            for (fields, _), score in zip(records, scores)
        ]
        logger.debug("Keyword search returned %d rows from %s", len(hits), table)
        return hits

    async def close(self) -> None:
        await self.db.close()


def _split_row(row: Any) -> tuple[dict[str, Any], float]:
    fields = {key: value for key, value in row.items() if key != SCORE_COLUMN}
    return fields, float(row[SCORE_COLUMN])


def _identifier(fields: dict[str, Any]) -> str:
    for value in fields.values():
        return str(value)
    return ""


__all__ = ["FullTextIndex", "build_search_term", "build_search_sql", "quote_ident", "quote_table"]
