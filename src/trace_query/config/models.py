"""
Configuration Models - Pydantic Model for the Trace-XML Settings.

All configuration is resolved at load time: missing keys become empty
strings and directory keys gain a single trailing separator, so callers
only ever branch on emptiness.
"""

from __future__ import annotations

import os
from typing import Any

from pydantic import BaseModel, Field, ValidationInfo, field_validator

# Top-level listing of the metadata documents, kept next to the graph
TOP_LEVEL_LISTING = "xml-files.xml"


def ensure_trailing_separator(value: str) -> str:
    """Append ``os.sep`` to a non-empty directory path that lacks one."""
    if not value or value.endswith(os.sep):
        return value
    return value + os.sep


class TraceConfig(BaseModel):
    """Root configuration object, keyed by the property file names."""

    xquery_path: str = Field(default="", alias="xquery-path")
    xml_path: str = Field(default="", alias="xml-path")

    # Intermediate and output documents (file names inside xml_path)
    trace_node: str = Field(default="", alias="trace-node")
    trace_node_unique: str = Field(default="", alias="trace-node-unique")
    trace_node_oid: str = Field(default="", alias="trace-node-oid")
    trace_node_details: str = Field(default="", alias="trace-node-details")
    l3_graph: str = Field(default="", alias="L3-graph")
    trace_xsl: str = Field(default="", alias="trace-xsl")
    text_trace_xsl: str = Field(default="", alias="text-trace-xsl")
    trace_html: str = Field(default="", alias="trace-html")

    # Unreachable node reporting
    unreachable_xsl: str = Field(default="", alias="unreachable-xsl")
    unreachable_xml: str = Field(default="", alias="unreachable-xml")
    unreachable_html: str = Field(default="", alias="unreachable-html")
    unreachable_text: str = Field(default="", alias="unreachable-text")

    # Data products and schemas
    data_collection_file: str = Field(default="", alias="data-collection-file")
    data_tabulation_file: str = Field(default="", alias="data-tabulation-file")
    data_analysis_file: str = Field(default="", alias="data-analysis-file")
    odm_xsd_file: str = Field(default="", alias="odm-xsd-file")
    define_xsd_file: str = Field(default="", alias="define-xsd-file")

    verbose: bool = False

    model_config = {"frozen": True, "populate_by_name": True, "extra": "ignore"}

    @field_validator("*", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any, info: ValidationInfo) -> Any:
        if isinstance(value, str):
            value = value.strip()
        if value is None or value == "":
            return False if info.field_name == "verbose" else ""
        return value

    @field_validator("xquery_path", "xml_path")
    @classmethod
    def _directory_separator(cls, value: str) -> str:
        return ensure_trailing_separator(value)

    def xml_file(self, name: str) -> str:
        """Full path of a document in the XML working directory."""
        return self.xml_path + name

    def query_file(self, name: str) -> str:
        """Full path of a query artifact in the query directory."""
        return self.xquery_path + name

    @property
    def graph_document(self) -> str:
        return self.xml_file(self.l3_graph) if self.l3_graph else ""

    @property
    def top_level_listing(self) -> str:
        return self.xml_file(TOP_LEVEL_LISTING)

    @property
    def trace_transform(self) -> str:
        return self.xml_file(self.trace_xsl)

    @property
    def trace_report(self) -> str:
        return self.xml_file(self.trace_html)
