"""
Trace Pipeline - Main Orchestrator.

The TracePipeline sequences the query stages and the render stage for one
OID, threading each stage's output file into the next stage as its input.

States:
    validate -> trace_node -> node_oid -> node_details -> [node_filter]
    -> render -> COMPLETED

Any gated stage that yields no matches moves the run straight to ABORTED;
no later stage executes. Render problems never change the outcome.
"""

from __future__ import annotations

import logging
import time
import uuid
from datetime import datetime
from typing import List, Mapping, Optional, Protocol

from trace_query import __version__
from trace_query.config.models import TraceConfig
from trace_query.domain.entities import (
    FailureKind,
    QueryOutcome,
    RenderResult,
    RunStatus,
    StageResult,
    TraceOutcome,
    TraceRequest,
)
from trace_query.pipeline.query_executor import QueryArtifactError
from trace_query.pipeline.stages import (
    NODE_DETAILS_QUERY,
    NODE_FILTER_QUERY,
    NODE_OID_QUERY,
    TRACE_NODE_QUERY,
    NodeDetailParams,
    NodeFilterParams,
    NodeOidParams,
    StageSpec,
    TraceNodeParams,
    filtered_name,
)
from trace_query.validation.run_validator import RunValidator, ValidationError

logger = logging.getLogger(__name__)


class QueryExecutorProtocol(Protocol):
    """Protocol for query executors."""

    def execute(
        self, query_file: str, parameters: Mapping[str, str], output_path: str
    ) -> QueryOutcome:
        ...


class RenderStageProtocol(Protocol):
    """Protocol for the render stage."""

    def render(
        self, xml_input: str, transform_path: str, output_path: str, display: bool = True
    ) -> RenderResult:
        ...


class RunValidatorProtocol(Protocol):
    """Protocol for run validators."""

    def validate(self, request: TraceRequest, config: TraceConfig) -> None:
        ...


class EmptyResultError(Exception):
    """Raised when a gated stage produces no matches."""

    def __init__(self, message: str, stage_name: str) -> None:
        super().__init__(message)
        self.message = message
        self.stage_name = stage_name


class TracePipeline:
    """Main orchestrator for a trace run."""

    def __init__(
        self,
        config: TraceConfig,
        executor: QueryExecutorProtocol,
        renderer: RenderStageProtocol,
        validator: Optional[RunValidatorProtocol] = None,
    ) -> None:
        """
        Initialize pipeline with all dependencies.

        Args:
            config: Loaded configuration
            executor: Runs the query stages
            renderer: Renders the final document
            validator: Run validation (defaults to RunValidator)
        """
        self.config = config
        self.executor = executor
        self.renderer = renderer
        self.validator = validator or RunValidator()

    def run(self, request: TraceRequest) -> TraceOutcome:
        """
        Execute the trace workflow.

        Args:
            request: OID and run flags

        Returns:
            TraceOutcome, COMPLETED when the query chain succeeded (render
            is attempted either way), ABORTED with a diagnostic otherwise
        """
        start_time = time.perf_counter()
        if not request.run_id:
            request = request.model_copy(update={"run_id": str(uuid.uuid4())})

        audit_trail: List[StageResult] = []
        frontier: Optional[str] = None

        def aborted(kind: FailureKind, message: str, stage: Optional[str]) -> TraceOutcome:
            logger.info(f"Run {request.run_id[:8]} aborted at {stage or 'validate'}")
            return TraceOutcome(
                request=request,
                status=RunStatus.ABORTED,
                failure=kind,
                message=message,
                failed_stage=stage,
                frontier=frontier,
                stages=audit_trail,
                metadata=self._build_metadata(request, start_time),
            )

        # 1. Validate
        try:
            self.validator.validate(request, self.config)
        except ValidationError as e:
            return aborted(FailureKind.VALIDATION, e.message, None)

        # 2. Query stages
        current_stage = None
        try:
            for build in self._stage_builders(request):
                spec = build(request, frontier)
                current_stage = spec.name
                frontier = self._execute_stage(spec, frontier, audit_trail)
        except QueryArtifactError as e:
            return aborted(FailureKind.QUERY_ARTIFACT, e.message, current_stage)
        except EmptyResultError as e:
            return aborted(FailureKind.EMPTY_RESULT, e.message, e.stage_name)

        if not request.filter_nodes:
            audit_trail.append(
                StageResult(
                    stage_name="node_filter",
                    input_path=frontier,
                    output_path=frontier,
                    skipped=True,
                )
            )

        # 3. Render (best effort)
        render_result = self._render(request, frontier, audit_trail)

        return TraceOutcome(
            request=request,
            status=RunStatus.COMPLETED,
            frontier=frontier,
            report_path=render_result.output_path,
            rendered=render_result.rendered,
            stages=audit_trail,
            metadata=self._build_metadata(request, start_time),
        )

    def _stage_builders(self, request: TraceRequest) -> list:
        """Ordered stage factories for this run."""
        builders = [self.trace_node_stage, self.node_oid_stage, self.node_details_stage]
        if request.filter_nodes:
            builders.append(self.node_filter_stage)
        return builders

    def trace_node_stage(self, request: TraceRequest, frontier: Optional[str]) -> StageSpec:
        """Trace the OID through the graph document."""
        return StageSpec(
            name="trace_node",
            query_file=TRACE_NODE_QUERY,
            parameters=TraceNodeParams(
                input=self.config.graph_document, oid=request.oid
            ),
            output_path=self.config.xml_file(self.config.trace_node),
            empty_message=f"No trace was found for oid = {request.oid}",
        )

    def node_oid_stage(self, request: TraceRequest, frontier: Optional[str]) -> StageSpec:
        """Resolve each trace node to its source file and OID."""
        return StageSpec(
            name="node_oid",
            query_file=NODE_OID_QUERY,
            parameters=NodeOidParams(
                trace_doc_name=frontier,
                graph_doc_name=self.config.graph_document,
                l1_doc_name=self.config.top_level_listing,
            ),
            output_path=self.config.xml_file(self.config.trace_node_oid),
            empty_message=(
                f"Unable to retrieve the node OIDs for this trace for oid = {request.oid}"
            ),
        )

    def node_details_stage(
        self, request: TraceRequest, frontier: Optional[str]
    ) -> StageSpec:
        """Enrich the resolved nodes with their metadata."""
        return StageSpec(
            name="node_details",
            query_file=NODE_DETAILS_QUERY,
            parameters=NodeDetailParams(trace_doc_name=frontier),
            output_path=self.config.xml_file(self.config.trace_node_details),
            empty_message=(
                f"Unable to retrieve the node details for this trace for oid = {request.oid}"
            ),
        )

    def node_filter_stage(
        self, request: TraceRequest, frontier: Optional[str]
    ) -> StageSpec:
        """Drop Form and ItemGroup nodes not referenced by the trace items."""
        return StageSpec(
            name="node_filter",
            query_file=NODE_FILTER_QUERY,
            parameters=NodeFilterParams(trace_doc_name=frontier),
            output_path=self.config.xml_file(
                filtered_name(self.config.trace_node_details)
            ),
            empty_message=(
                f"Filtering removed every node from the trace for oid = {request.oid}"
            ),
        )

    def _execute_stage(
        self,
        spec: StageSpec,
        frontier: Optional[str],
        audit_trail: List[StageResult],
    ) -> str:
        """Execute a single query stage and return the new frontier."""
        stage_start = time.perf_counter()
        input_path = frontier or self.config.graph_document
        logger.info(f"Starting {spec.name} on {input_path}")

        outcome = self.executor.execute(
            spec.query_file, spec.parameters.to_bindings(), spec.output_path
        )

        stage_duration = time.perf_counter() - stage_start
        audit_trail.append(
            StageResult(
                stage_name=spec.name,
                input_path=input_path,
                output_path=outcome.output_path,
                match_count=outcome.match_count,
                duration_seconds=stage_duration,
                error=outcome.error,
            )
        )
        logger.info(
            f"Completed {spec.name}: {outcome.match_count} of {outcome.item_count} "
            f"items matched ({stage_duration:.3f}s)"
        )

        if outcome.is_empty:
            raise EmptyResultError(spec.empty_message, stage_name=spec.name)

        return outcome.output_path

    def _render(
        self,
        request: TraceRequest,
        frontier: str,
        audit_trail: List[StageResult],
    ) -> RenderResult:
        """Render the frontier into the report; never gates the run."""
        stage_start = time.perf_counter()
        result = self.renderer.render(
            frontier,
            self.config.trace_transform,
            self.config.trace_report,
            display=not request.quiet,
        )
        audit_trail.append(
            StageResult(
                stage_name="render",
                input_path=frontier,
                output_path=result.output_path,
                duration_seconds=time.perf_counter() - stage_start,
                error=result.error,
            )
        )
        return result

    def _build_metadata(self, request: TraceRequest, start_time: float) -> dict:
        """Build outcome metadata."""
        return {
            "run_id": request.run_id,
            "timestamp": datetime.now().isoformat(),
            "duration_seconds": time.perf_counter() - start_time,
            "version": __version__,
        }
