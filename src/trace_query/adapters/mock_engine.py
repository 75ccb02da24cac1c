"""
Mock Engines.

Scripted stand-ins for the XQuery and XSLT engines and the report viewer,
for development and testing. The query engine answers by query text, so a
query artifact containing just ``trace-node`` can be scripted as
``{"trace-node": ["<nodes><node id='1'/></nodes>"]}``.
"""

from __future__ import annotations

from html import escape
from typing import Dict, Iterator, List, Optional, Tuple

from trace_query.pipeline.query_executor import EMPTY_RESULT_MARKER, QueryEngineError
from trace_query.pipeline.render_stage import TransformEngineError


class MockQueryEngine:
    """Fake query engine returning scripted items."""

    def __init__(
        self,
        results: Optional[Dict[str, List[str]]] = None,
        failures: Optional[Dict[str, str]] = None,
        default: Optional[List[str]] = None,
    ) -> None:
        """
        Initialize mock engine.

        Args:
            results: Query text -> serialized items
            failures: Query text -> error message raised on evaluation
            default: Items for unscripted queries (empty marker if omitted)
        """
        self._results = results or {}
        self._failures = failures or {}
        self._default = default if default is not None else [EMPTY_RESULT_MARKER]
        self._bindings: Dict[str, str] = {}
        self.calls: List[Tuple[str, Dict[str, str]]] = []

    def clear_parameters(self) -> None:
        self._bindings = {}

    def bind(self, name: str, value: str) -> None:
        self._bindings[name] = value

    def evaluate(self, query_text: str) -> Iterator[str]:
        key = query_text.strip()
        self.calls.append((key, dict(self._bindings)))
        if key in self._failures:
            raise QueryEngineError(self._failures[key])
        yield from self._results.get(key, self._default)

    @property
    def evaluated(self) -> List[str]:
        """Query texts in evaluation order."""
        return [query for query, _ in self.calls]


class MockTransformEngine:
    """Fake transform engine that wraps the source in an HTML page."""

    def __init__(self, fail_with: Optional[str] = None) -> None:
        self._fail_with = fail_with
        self.calls: List[Tuple[str, str, str]] = []

    def transform(self, source: str, stylesheet: str, output: str) -> None:
        self.calls.append((source, stylesheet, output))
        if self._fail_with:
            raise TransformEngineError(self._fail_with)
        with open(source, encoding="utf-8") as f:
            body = f.read()
        with open(output, "w", encoding="utf-8") as f:
            f.write(f"<html><body><pre>{escape(body)}</pre></body></html>\n")


class RecordingViewer:
    """Viewer that records the paths it was asked to open."""

    def __init__(self, fail_with: Optional[str] = None) -> None:
        self._fail_with = fail_with
        self.opened: List[str] = []

    def open(self, path: str) -> None:
        if self._fail_with:
            raise RuntimeError(self._fail_with)
        self.opened.append(path)
