"""
Unit Tests for Stage Parameters.

Test Aspects Covered:
    ✅ Business Logic: Conversion to engine bindings
    ✅ Error Handling: Misspelt or missing parameters rejected
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from trace_query.pipeline.stages import (
    NodeDetailParams,
    NodeFilterParams,
    NodeOidParams,
    TraceNodeParams,
    filtered_name,
)


class TestBindings:
    """Test cases for to_bindings."""

    def test_trace_node_bindings(self) -> None:
        params = TraceNodeParams(input="xml/graph.graphml", oid="IT.AE.AETERM")

        assert params.to_bindings() == {
            "input": "xml/graph.graphml",
            "oid": "IT.AE.AETERM",
        }

    def test_node_oid_uses_hyphenated_names(self) -> None:
        """
        SCENARIO: Parameters built from Python field names
        EXPECTED: Bindings use the external variable names
        """
        params = NodeOidParams(
            trace_doc_name="xml/trace-node.xml",
            graph_doc_name="xml/graph.graphml",
            l1_doc_name="xml/xml-files.xml",
        )

        assert params.to_bindings() == {
            "trace-doc-name": "xml/trace-node.xml",
            "graph-doc-name": "xml/graph.graphml",
            "l1-doc-name": "xml/xml-files.xml",
        }

    def test_detail_and_filter_bindings(self) -> None:
        assert NodeDetailParams(trace_doc_name="a.xml").to_bindings() == {
            "trace-doc-name": "a.xml"
        }
        assert NodeFilterParams(trace_doc_name="b.xml").to_bindings() == {
            "trace-doc-name": "b.xml"
        }

    def test_accepts_alias(self) -> None:
        params = NodeDetailParams.model_validate({"trace-doc-name": "a.xml"})

        assert params.trace_doc_name == "a.xml"


class TestValidation:
    """Test cases for typo protection."""

    def test_unknown_parameter_rejected(self) -> None:
        with pytest.raises(ValidationError):
            NodeDetailParams(trace_doc_name="a.xml", trace_doc="typo")

    def test_missing_parameter_rejected(self) -> None:
        with pytest.raises(ValidationError):
            NodeOidParams(trace_doc_name="a.xml", graph_doc_name="g.graphml")


def test_filtered_name() -> None:
    assert filtered_name("trace-node-details.xml") == "filtered-trace-node-details.xml"
