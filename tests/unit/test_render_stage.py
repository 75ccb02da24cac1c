"""
Unit Tests for RenderStage.

Test Aspects Covered:
    ✅ Business Logic: Transform and display
    ✅ Error Handling: Transform and viewer failures are not raised
"""

from __future__ import annotations

from pathlib import Path
from unittest.mock import Mock

import pytest

from trace_query.adapters.mock_engine import MockTransformEngine, RecordingViewer
from trace_query.pipeline.render_stage import RenderStage, TransformEngineError


@pytest.fixture
def trace_xml(tmp_path: Path) -> str:
    path = tmp_path / "trace-node-details.xml"
    path.write_text('<nodes><node id="n1"/></nodes>')
    return str(path)


class TestRender:
    """Test cases for rendering."""

    def test_renders_and_displays(self, trace_xml: str, tmp_path: Path) -> None:
        """
        SCENARIO: Transform succeeds, display requested
        EXPECTED: Report written and opened once
        """
        # Arrange
        engine = MockTransformEngine()
        viewer = RecordingViewer()
        stage = RenderStage(engine, viewer)
        out = str(tmp_path / "trace.html")

        # Act
        result = stage.render(trace_xml, "trace.xsl", out, display=True)

        # Assert
        assert result.rendered
        assert result.displayed
        assert result.error is None
        assert engine.calls == [(trace_xml, "trace.xsl", out)]
        assert viewer.opened == [str(Path(out).resolve())]
        assert "node id" in Path(out).read_text()

    def test_quiet_does_not_display(self, trace_xml: str, tmp_path: Path) -> None:
        viewer = RecordingViewer()
        stage = RenderStage(MockTransformEngine(), viewer)

        result = stage.render(trace_xml, "trace.xsl", str(tmp_path / "t.html"), display=False)

        assert result.rendered
        assert not result.displayed
        assert viewer.opened == []

    def test_no_viewer(self, trace_xml: str, tmp_path: Path) -> None:
        stage = RenderStage(MockTransformEngine())

        result = stage.render(trace_xml, "trace.xsl", str(tmp_path / "t.html"))

        assert result.rendered
        assert not result.displayed


class TestRenderFailures:
    """Test cases for best-effort behaviour."""

    def test_transform_error_returned(self, trace_xml: str, tmp_path: Path) -> None:
        """
        SCENARIO: Stylesheet cannot be applied
        EXPECTED: Error in result, nothing raised, nothing displayed
        """
        # Arrange
        viewer = RecordingViewer()
        stage = RenderStage(MockTransformEngine(fail_with="XTSE0010 bad stylesheet"), viewer)

        # Act
        result = stage.render(trace_xml, "trace.xsl", str(tmp_path / "t.html"))

        # Assert
        assert not result.rendered
        assert "XTSE0010" in result.error
        assert viewer.opened == []

    def test_os_error_returned(self, trace_xml: str, tmp_path: Path) -> None:
        engine = Mock()
        engine.transform.side_effect = PermissionError("read-only")
        stage = RenderStage(engine)

        result = stage.render(trace_xml, "trace.xsl", str(tmp_path / "t.html"))

        assert not result.rendered
        assert "read-only" in result.error

    def test_viewer_failure_logged(
        self, trace_xml: str, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        """
        SCENARIO: Browser cannot be launched
        EXPECTED: Report still rendered, warning logged
        """
        stage = RenderStage(MockTransformEngine(), RecordingViewer(fail_with="no display"))

        result = stage.render(trace_xml, "trace.xsl", str(tmp_path / "t.html"))

        assert result.rendered
        assert not result.displayed
        assert "Unable to load HTML file in browser" in caplog.text

    def test_engine_error_type(self) -> None:
        engine = MockTransformEngine(fail_with="boom")

        with pytest.raises(TransformEngineError):
            engine.transform("a", "b", "c")
