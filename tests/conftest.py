"""
Pytest Configuration and Shared Fixtures.

This module contains fixtures available to all tests. The ``workspace``
fixture lays out a query directory and an XML directory under tmp_path;
each query artifact contains only its own name, which is what the
MockQueryEngine is scripted against.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Dict, List, Optional

import pytest

from trace_query.adapters.mock_engine import (
    MockQueryEngine,
    MockTransformEngine,
    RecordingViewer,
)
from trace_query.config.models import TraceConfig
from trace_query.pipeline.query_executor import QueryExecutor
from trace_query.pipeline.render_stage import RenderStage
from trace_query.pipeline.trace_pipeline import TracePipeline

QUERY_NAMES = [
    "trace-node",
    "trace-node-oid",
    "trace-node-details",
    "trace-node-filters",
]

MATCHING_RESULTS: Dict[str, List[str]] = {
    "trace-node": ['<nodes><node id="n1"/><node id="n2"/></nodes>'],
    "trace-node-oid": ['<nodes><node id="n1" oid="IT.AE.AETERM" file="define.xml"/></nodes>'],
    "trace-node-details": [
        '<nodes><node id="n1" type="ItemDef"/><node id="n2" type="Form"/></nodes>'
    ],
    "trace-node-filters": ['<nodes><node id="n1" type="ItemDef"/></nodes>'],
}


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Undo log levels set by configure_logging."""
    yield
    logging.getLogger("trace_query").setLevel(logging.NOTSET)


@pytest.fixture
def matching_results() -> Dict[str, List[str]]:
    """Scripted items for a run where every stage finds nodes."""
    return {k: list(v) for k, v in MATCHING_RESULTS.items()}


@pytest.fixture
def sample_config_path() -> Path:
    """Path to sample configuration file."""
    return Path(__file__).parent / "fixtures" / "trace-xml.cfg"


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """Query and XML directories with the graph and every query artifact."""
    xquery_dir = tmp_path / "xquery"
    xml_dir = tmp_path / "xml"
    xquery_dir.mkdir()
    xml_dir.mkdir()

    for name in QUERY_NAMES:
        (xquery_dir / f"{name}.xql").write_text(name)

    (xml_dir / "graph.graphml").write_text("<graphml/>")
    (xml_dir / "xml-files.xml").write_text("<files/>")
    (xml_dir / "trace.xsl").write_text("<xsl:stylesheet/>")
    return tmp_path


@pytest.fixture
def config_values(workspace: Path) -> Dict[str, str]:
    """Property values pointing at the workspace."""
    return {
        "xquery-path": str(workspace / "xquery"),
        "xml-path": str(workspace / "xml"),
        "trace-node": "trace-node.xml",
        "trace-node-oid": "trace-node-oid.xml",
        "trace-node-details": "trace-node-details.xml",
        "L3-graph": "graph.graphml",
        "trace-xsl": "trace.xsl",
        "trace-html": "trace.html",
    }


@pytest.fixture
def trace_config(config_values: Dict[str, str]) -> TraceConfig:
    """Configuration for the workspace."""
    return TraceConfig.model_validate(config_values)


@pytest.fixture
def matching_engine(matching_results: Dict[str, List[str]]) -> MockQueryEngine:
    """Engine where every stage finds nodes."""
    return MockQueryEngine(results=matching_results)


@pytest.fixture
def transform_engine() -> MockTransformEngine:
    return MockTransformEngine()


@pytest.fixture
def viewer() -> RecordingViewer:
    return RecordingViewer()


@pytest.fixture
def make_pipeline() -> Callable[..., TracePipeline]:
    """Factory wiring a pipeline on scripted engines."""

    def _make(
        config: TraceConfig,
        engine: MockQueryEngine,
        transform_engine: Optional[MockTransformEngine] = None,
        viewer: Optional[RecordingViewer] = None,
    ) -> TracePipeline:
        return TracePipeline(
            config=config,
            executor=QueryExecutor(engine, config),
            renderer=RenderStage(transform_engine or MockTransformEngine(), viewer),
        )

    return _make
