"""Unit tests for query shape models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from laakhay.graphquery.models import QueryShape, SubQuery


class TestSubQuery:
    """Test SubQuery construction."""

    def test_from_alias(self):
        """Test "from" is accepted by alias and by field name."""
        assert SubQuery.model_validate({"from": "A"}).from_ == "A"
        assert SubQuery(from_="A").from_ == "A"

    def test_defaults(self):
        """Test a bare sub-query is a root with empty payloads."""
        query = SubQuery()

        assert query.from_ is None
        assert query.definition == {}
        assert query.select == {}

    def test_frozen(self):
        """Test sub-queries cannot be reassigned."""
        query = SubQuery()

        with pytest.raises(ValidationError):
            query.from_ = "A"


class TestQueryShape:
    """Test QueryShape parsing and helpers."""

    def test_from_query_body(self):
        """Test "from" relations are read from node and edge expressions."""
        body = {
            "with": {
                "startNodes": {"nodes": {"filter": {"prefix": "x"}}, "limit": 5},
                "edges": {"edges": {"from": "startNodes"}, "limit": 5},
                "endNodes": {"nodes": {"from": "edges"}, "limit": 5},
            },
            "select": {"startNodes": {"sources": []}},
            "parameters": {"space": "test"},
        }

        shape = QueryShape.from_query_body(body)

        assert shape.ids == ["startNodes", "edges", "endNodes"]
        assert shape.dependencies() == {
            "startNodes": None,
            "edges": "startNodes",
            "endNodes": "edges",
        }
        assert shape.queries["startNodes"].select == {"sources": []}
        assert shape.queries["edges"].select == {}
        assert shape.queries["endNodes"].definition == {"nodes": {"from": "edges"}, "limit": 5}
        assert shape.parameters == {"space": "test"}

    def test_from_query_body_empty(self):
        """Test an empty body yields an empty shape."""
        shape = QueryShape.from_query_body({})

        assert shape.ids == []
        assert shape.parameters == {}

    def test_subset_keeps_shape_order(self):
        """Test subset returns queries in shape order, not argument order."""
        shape = QueryShape(queries={"A": SubQuery(), "B": SubQuery(), "C": SubQuery()})

        assert list(shape.subset(["C", "A"])) == ["A", "C"]

    def test_blank_ids_rejected(self):
        """Test blank sub-query ids fail validation."""
        with pytest.raises(ValidationError):
            QueryShape(queries={" ": SubQuery()})
