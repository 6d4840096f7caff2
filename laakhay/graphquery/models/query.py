"""Composite query shape models."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Table expressions that may continue from another sub-query
FROM_EXPRESSION_KEYS = ("nodes", "edges")


class SubQuery(BaseModel):
    """One named component of a composite query.

    The definition and select payloads are opaque to the pagination engine and
    are forwarded verbatim to the executor. Only ``from_`` matters here: it
    names the sub-query whose result set this one continues from.
    """

    from_: str | None = Field(default=None, alias="from")
    definition: dict[str, Any] = Field(default_factory=dict)
    select: dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True, populate_by_name=True)


class QueryShape(BaseModel):
    """The full set of sub-queries making up one logical request.

    Insertion order of ``queries`` is significant: it decides root order and
    child order in the dependency forest, and with it which leaf wins ties.
    """

    queries: dict[str, SubQuery] = Field(default_factory=dict)
    parameters: dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True)

    @field_validator("queries")
    @classmethod
    def validate_query_ids(cls, v: dict[str, SubQuery]) -> dict[str, SubQuery]:
        """Reject blank sub-query ids."""
        for query_id in v:
            if not query_id or not query_id.strip():
                raise ValueError("sub-query ids must be non-empty")
        return v

    @classmethod
    def from_query_body(cls, body: Mapping[str, Any]) -> QueryShape:
        """Build a shape from a raw instances-query body.

        Args:
            body: Mapping with ``with``, optional ``select`` and ``parameters``

        Returns:
            QueryShape whose "from" relations are read from each table expression
        """
        with_ = body.get("with") or {}
        select = body.get("select") or {}
        queries = {
            query_id: SubQuery(
                from_=_extract_from(definition),
                definition=dict(definition),
                select=dict(select.get(query_id) or {}),
            )
            for query_id, definition in with_.items()
        }
        return cls(queries=queries, parameters=dict(body.get("parameters") or {}))

    @property
    def ids(self) -> list[str]:
        return list(self.queries)

    def dependencies(self) -> dict[str, str | None]:
        """Flat map of sub-query id to the id it continues from."""
        return {query_id: query.from_ for query_id, query in self.queries.items()}

    def subset(self, ids: Iterable[str]) -> dict[str, SubQuery]:
        """Return the named sub-queries, in shape order."""
        wanted = set(ids)
        return {
            query_id: query for query_id, query in self.queries.items() if query_id in wanted
        }


def _extract_from(definition: Mapping[str, Any]) -> str | None:
    for key in FROM_EXPRESSION_KEYS:
        expression = definition.get(key)
        if isinstance(expression, Mapping) and expression.get("from"):
            return expression["from"]
    return None
