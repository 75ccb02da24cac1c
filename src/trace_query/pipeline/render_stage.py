"""
Render Stage - Best-Effort XSLT Rendering of the Trace.

Transforms the final trace document into the HTML report and optionally
opens it in a viewer. Nothing here escalates: the trace has already been
captured in the intermediate files, so transform and display problems are
logged and returned in the RenderResult.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Protocol

from trace_query.domain.entities import RenderResult

logger = logging.getLogger(__name__)


class TransformEngineError(Exception):
    """Raised by transform engines when a stylesheet cannot be applied."""


class TransformEngineProtocol(Protocol):
    """Protocol for XSLT engines."""

    def transform(self, source: str, stylesheet: str, output: str) -> None:
        ...


class ViewerProtocol(Protocol):
    """Protocol for report viewers."""

    def open(self, path: str) -> None:
        ...


class RenderStage:
    """Applies the trace stylesheet and displays the result."""

    name = "render"

    def __init__(
        self,
        engine: TransformEngineProtocol,
        viewer: Optional[ViewerProtocol] = None,
    ) -> None:
        """
        Initialize render stage.

        Args:
            engine: XSLT engine
            viewer: Opens the rendered report (optional)
        """
        self.engine = engine
        self.viewer = viewer

    def render(
        self,
        xml_input: str,
        transform_path: str,
        output_path: str,
        display: bool = True,
    ) -> RenderResult:
        """
        Transform ``xml_input`` into ``output_path``.

        Args:
            xml_input: Trace document to transform
            transform_path: XSLT stylesheet
            output_path: Report file to write
            display: Open the report in the viewer afterwards

        Returns:
            RenderResult describing what succeeded
        """
        result = RenderResult(output_path=output_path)
        try:
            self.engine.transform(xml_input, transform_path, output_path)
            result = result.model_copy(update={"rendered": True})
            logger.info(f"Trace report written to {output_path}")
        except (TransformEngineError, OSError) as e:
            message = f"Error transforming XML file to {output_path}. {e}"
            logger.error(message)
            result = result.model_copy(update={"error": message})

        if display and result.rendered:
            result = result.model_copy(update={"displayed": self._display(output_path)})

        return result

    def _display(self, output_path: str) -> bool:
        """Open the report; failures are logged only."""
        if self.viewer is None:
            logger.debug("No viewer configured, report not displayed")
            return False
        try:
            self.viewer.open(str(Path(output_path).resolve()))
        except Exception as e:
            logger.warning(f"Unable to load HTML file in browser: {e}")
            return False
        return True
