"""
Core Domain Entities.

This module defines the values that flow through a trace run: the request
(run context), the per-stage audit entries and the tagged outcome handed
back to the entry point.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class RunStatus(str, Enum):
    """Terminal state of a trace run."""

    COMPLETED = "COMPLETED"
    ABORTED = "ABORTED"


class FailureKind(str, Enum):
    """Category of the condition that aborted a run."""

    CONFIGURATION = "CONFIGURATION"
    VALIDATION = "VALIDATION"
    QUERY_ARTIFACT = "QUERY_ARTIFACT"
    EMPTY_RESULT = "EMPTY_RESULT"


class TraceRequest(BaseModel):
    """Input for a single trace run."""

    oid: str = Field(default="", description="Identifier of the variable to trace")
    quiet: bool = Field(default=False, description="Do not open the report")
    filter_nodes: bool = Field(
        default=False, description="Run the optional node filter stage"
    )
    run_id: str = Field(default="", description="Unique run identifier")

    model_config = {"frozen": True}


class QueryOutcome(BaseModel):
    """What one query execution produced."""

    output_path: str
    item_count: int = 0
    match_count: int = 0
    error: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        """True when no item other than the empty marker was produced."""
        return self.match_count == 0


class RenderResult(BaseModel):
    """Result of the best-effort render stage."""

    output_path: str
    rendered: bool = False
    displayed: bool = False
    error: Optional[str] = None


class StageResult(BaseModel):
    """Audit trail entry for one stage."""

    stage_name: str
    input_path: Optional[str] = None
    output_path: Optional[str] = None
    match_count: int = 0
    duration_seconds: float = 0.0
    skipped: bool = False
    error: Optional[str] = None


class TraceOutcome(BaseModel):
    """Complete result of a trace run."""

    request: TraceRequest
    status: RunStatus
    failure: Optional[FailureKind] = None
    message: str = ""
    failed_stage: Optional[str] = None
    frontier: Optional[str] = None
    report_path: Optional[str] = None
    rendered: bool = False
    stages: List[StageResult] = Field(default_factory=list)
    metadata: Dict[str, Any] = Field(default_factory=dict)

    @property
    def completed(self) -> bool:
        return self.status == RunStatus.COMPLETED

    @property
    def executed_stages(self) -> List[str]:
        """Names of the stages that actually ran, in order."""
        return [s.stage_name for s in self.stages if not s.skipped]
