"""
Saxon Engine Adapter.

XQuery and XSLT through Saxon/C (``saxonche``). The entry point opens one
PySaxonProcessor for the run and shares it between the query engine and
the transform engine.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Iterator, Optional

from saxonche import PySaxonApiError, PySaxonProcessor

from trace_query.pipeline.query_executor import QueryEngineError
from trace_query.pipeline.render_stage import TransformEngineError

logger = logging.getLogger(__name__)


def serialize_item(item: Any) -> str:
    """Serialized form of an XDM item (markup for nodes)."""
    if item.is_node:
        return str(item.get_node_value())
    return item.string_value


class SaxonQueryEngine:
    """XQuery engine holding one evaluation context for the whole run."""

    def __init__(
        self,
        processor: PySaxonProcessor,
        base_dir: Optional[str] = None,
    ) -> None:
        """
        Initialize the engine.

        Args:
            processor: Shared Saxon processor
            base_dir: Directory used to resolve relative document paths
                (defaults to the working directory)
        """
        self.processor = processor
        self._xquery = processor.new_xquery_processor()
        self._xquery.set_cwd(base_dir or os.getcwd())

    def clear_parameters(self) -> None:
        self._xquery.clear_parameters()

    def bind(self, name: str, value: str) -> None:
        self._xquery.set_parameter(name, self.processor.make_string_value(value))

    def evaluate(self, query_text: str) -> Iterator[str]:
        """Evaluate the query and yield each item serialized."""
        try:
            self._xquery.set_query_content(query_text)
            value = self._xquery.run_query_to_value()
        except PySaxonApiError as e:
            raise QueryEngineError(str(e)) from e

        if value is None:
            return
        for index in range(value.size):
            try:
                item = serialize_item(value.item_at(index))
            except PySaxonApiError as e:
                raise QueryEngineError(str(e)) from e
            yield item


class SaxonTransformEngine:
    """XSLT 3.0 engine backed by a Saxon processor."""

    def __init__(self, processor: PySaxonProcessor) -> None:
        self.processor = processor
        self._xslt = processor.new_xslt30_processor()

    def transform(self, source: str, stylesheet: str, output: str) -> None:
        """Apply ``stylesheet`` to ``source`` and write ``output``."""
        for path in (source, stylesheet):
            if not os.path.isfile(path):
                raise TransformEngineError(f"File not found: {path}")
        try:
            executable = self._xslt.compile_stylesheet(
                stylesheet_file=os.path.abspath(stylesheet)
            )
            executable.transform_to_file(
                source_file=os.path.abspath(source),
                output_file=os.path.abspath(output),
            )
        except PySaxonApiError as e:
            raise TransformEngineError(str(e)) from e
        logger.debug(f"Transformed {source} with {stylesheet}")
