"""
Pipeline Package - Orchestration and Stage Execution.

Components:
    - TracePipeline: Main orchestrator threading the stage frontier
    - QueryExecutor: Runs one query artifact against the engine
    - RenderStage: Best-effort XSLT rendering and display

The pipeline is responsible for:
    - Validating the run before any stage executes
    - Executing the query stages in sequence
    - Aborting at the first stage without matches
    - Recording an audit trail of every stage
"""

from trace_query.pipeline.query_executor import QueryExecutor
from trace_query.pipeline.render_stage import RenderStage
from trace_query.pipeline.trace_pipeline import TracePipeline

__all__ = ["QueryExecutor", "RenderStage", "TracePipeline"]
