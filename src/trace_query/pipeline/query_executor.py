"""
Query Executor - Runs One Named XQuery Against the Engine.

The executor reads a query artifact from the configured query directory,
binds the stage parameters, streams every serialized item to the stage
output file and counts the items that are real matches.

Design Notes:
    - The engine (evaluation context) is shared across stages; bindings
      are cleared before each execution
    - Missing query artifacts are fatal (QueryArtifactError)
    - Engine and output errors are reported and returned in the outcome;
      the orchestrator decides whether they are terminal
"""

from __future__ import annotations

import logging
import re
from typing import Iterable, Mapping, Protocol

from trace_query.config.models import TraceConfig
from trace_query.domain.entities import QueryOutcome

logger = logging.getLogger(__name__)

# Serialized form of an explicitly empty node collection
EMPTY_RESULT_MARKER = "<nodes/>"

_XML_DECLARATION = re.compile(r"^\s*<\?xml[^>]*\?>")


class QueryArtifactError(Exception):
    """Raised when a query artifact cannot be located or read."""

    def __init__(self, message: str, query_path: str) -> None:
        super().__init__(message)
        self.message = message
        self.query_path = query_path


class QueryEngineError(Exception):
    """Raised by engines when a query fails to compile or evaluate."""


class QueryEngineProtocol(Protocol):
    """Protocol for XQuery engines."""

    def clear_parameters(self) -> None:
        ...

    def bind(self, name: str, value: str) -> None:
        ...

    def evaluate(self, query_text: str) -> Iterable[str]:
        ...


class QueryExecutor:
    """Executes query artifacts and serializes their items to disk."""

    def __init__(
        self,
        engine: QueryEngineProtocol,
        config: TraceConfig,
        empty_marker: str = EMPTY_RESULT_MARKER,
    ) -> None:
        """
        Initialize query executor.

        Args:
            engine: Shared query engine
            config: Configuration holding the query directory
            empty_marker: Serialized item that does not count as a match
        """
        self.engine = engine
        self.config = config
        self.empty_marker = empty_marker.strip().lower()

    def execute(
        self,
        query_file: str,
        parameters: Mapping[str, str],
        output_path: str,
    ) -> QueryOutcome:
        """
        Run one query and write its items to ``output_path``.

        Args:
            query_file: Artifact file name inside the query directory
            parameters: External variable bindings (name -> string value)
            output_path: File created or overwritten with the results

        Returns:
            QueryOutcome with item and match counts

        Raises:
            QueryArtifactError: If the query text cannot be read
        """
        query_text = self.read_query(query_file)

        self.engine.clear_parameters()
        for name, value in parameters.items():
            logger.debug(f"{query_file}: ${name} = {value!r}")
            self.engine.bind(name, value)

        item_count = 0
        match_count = 0
        error = None
        try:
            with open(output_path, "w", encoding="utf-8") as out:
                for item in self.engine.evaluate(query_text):
                    out.write(item)
                    out.write("\n")
                    item_count += 1
                    if not self.is_empty_item(item):
                        match_count += 1
        except QueryEngineError as e:
            error = f"Error reading results from the {query_file} XQuery. {e}"
            logger.error(error)
        except OSError as e:
            error = f"Unable to write the output of {query_file} to {output_path}. {e}"
            logger.error(error)

        return QueryOutcome(
            output_path=output_path,
            item_count=item_count,
            match_count=match_count,
            error=error,
        )

    def read_query(self, query_file: str) -> str:
        """Read the text of a query artifact."""
        query_path = self.config.query_file(query_file)
        try:
            with open(query_path, encoding="utf-8") as f:
                return f.read()
        except OSError as e:
            raise QueryArtifactError(
                f"Unable to locate or read the XQuery file {query_path}. {e.strerror or e}",
                query_path=query_path,
            ) from e

    def is_empty_item(self, item: str) -> bool:
        """True for blank items and the empty collection marker."""
        text = _XML_DECLARATION.sub("", item).strip().lower()
        return not text or text == self.empty_marker
