"""
Query Stage Definitions.

Each query stage has its own parameter model whose aliases are the
external variable names declared by the query artifact. The models are
converted to the engine's name -> string map only at the executor
boundary, so a misspelt parameter fails at construction time instead of
silently binding nothing.

Stage chain:
    trace_node -> node_oid -> node_details -> [node_filter] -> render
"""

from __future__ import annotations

from typing import Dict

from pydantic import BaseModel, Field

TRACE_NODE_QUERY = "trace-node.xql"
NODE_OID_QUERY = "trace-node-oid.xql"
NODE_DETAILS_QUERY = "trace-node-details.xql"
NODE_FILTER_QUERY = "trace-node-filters.xql"

FILTERED_PREFIX = "filtered-"


class StageParameters(BaseModel):
    """Base class for the typed parameter set of a query stage."""

    model_config = {"frozen": True, "populate_by_name": True, "extra": "forbid"}

    def to_bindings(self) -> Dict[str, str]:
        """Convert to the engine's external variable bindings."""
        return {k: str(v) for k, v in self.model_dump(by_alias=True).items()}


class TraceNodeParams(StageParameters):
    """Parameters of the graph trace query."""

    input: str = Field(..., description="Graph document path")
    oid: str = Field(..., description="Identifier under trace")


class NodeOidParams(StageParameters):
    """Parameters of the node identification query."""

    trace_doc_name: str = Field(..., alias="trace-doc-name")
    graph_doc_name: str = Field(..., alias="graph-doc-name")
    l1_doc_name: str = Field(..., alias="l1-doc-name")


class NodeDetailParams(StageParameters):
    """Parameters of the node detail query."""

    trace_doc_name: str = Field(..., alias="trace-doc-name")


class NodeFilterParams(StageParameters):
    """Parameters of the Form/ItemGroup filter query."""

    trace_doc_name: str = Field(..., alias="trace-doc-name")


class StageSpec(BaseModel):
    """Descriptor for one query stage invocation."""

    name: str
    query_file: str
    parameters: StageParameters
    output_path: str
    empty_message: str

    model_config = {"frozen": True}


def filtered_name(file_name: str) -> str:
    """Output name of the filter stage for a detail document name."""
    return FILTERED_PREFIX + file_name
