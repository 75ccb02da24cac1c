"""
Command-Line Entry Point.

Usage:
    trace-query cfg=<config file> oid=<variable oid> [quiet] [filter] [verbose] [help]

The legacy ``key=value`` / bare-word tokens are rewritten to GNU-style
options before argparse sees them, so ``--oid IT.AE.AETERM`` works too.
The entry point alone decides the process exit status.
"""

from __future__ import annotations

import argparse
import logging
import sys
from enum import IntEnum
from typing import List, Optional, Sequence

from saxonche import PySaxonProcessor

from trace_query import configure_logging
from trace_query.adapters.browser_viewer import BrowserViewer
from trace_query.adapters.saxon_engine import SaxonQueryEngine, SaxonTransformEngine
from trace_query.config.loader import ConfigurationError, default_config_path, load_config
from trace_query.config.models import TraceConfig
from trace_query.domain.entities import FailureKind, TraceOutcome, TraceRequest
from trace_query.pipeline.query_executor import QueryEngineProtocol, QueryExecutor
from trace_query.pipeline.render_stage import (
    RenderStage,
    TransformEngineProtocol,
    ViewerProtocol,
)
from trace_query.pipeline.trace_pipeline import TracePipeline

logger = logging.getLogger(__name__)

USAGE = (
    "Usage: trace-query cfg=<config file> oid=<variable oid> "
    "[quiet] [filter] [verbose] [help]"
)

_VALUE_OPTIONS = ("cfg", "oid")
_FLAG_OPTIONS = ("quiet", "filter", "verbose", "help")


class ExitCode(IntEnum):
    """Process exit status per failure category."""

    OK = 0
    USAGE = 2
    CONFIGURATION = 3
    VALIDATION = 4
    QUERY_ARTIFACT = 5
    EMPTY_RESULT = 6


_FAILURE_EXIT_CODES = {
    FailureKind.CONFIGURATION: ExitCode.CONFIGURATION,
    FailureKind.VALIDATION: ExitCode.VALIDATION,
    FailureKind.QUERY_ARTIFACT: ExitCode.QUERY_ARTIFACT,
    FailureKind.EMPTY_RESULT: ExitCode.EMPTY_RESULT,
}


def normalize_args(argv: Sequence[str]) -> List[str]:
    """Rewrite ``cfg=x`` / ``quiet`` style tokens as ``--cfg=x`` / ``--quiet``."""
    normalized: List[str] = []
    for token in argv:
        key, sep, value = token.partition("=")
        if sep and key in _VALUE_OPTIONS:
            normalized.append(f"--{key}={value}")
        elif token in _FLAG_OPTIONS:
            normalized.append(f"--{token}")
        else:
            normalized.append(token)
    return normalized


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="trace-query",
        description="Produce the life-cycle trace of a variable from the Trace-XML graph.",
        add_help=False,
    )
    parser.add_argument("--cfg", default=None, help="Path to the configuration file")
    parser.add_argument("--oid", default="", help="OID of the variable to trace")
    parser.add_argument(
        "--quiet", action="store_true", help="Do not open the report in a browser"
    )
    parser.add_argument(
        "--filter",
        action="store_true",
        help="Filter out Forms and ItemGroups not referenced by the trace items",
    )
    parser.add_argument("--verbose", action="store_true", help="Debug logging")
    parser.add_argument("--help", action="store_true", help="Show usage and exit")
    return parser


def create_pipeline(
    config: TraceConfig,
    query_engine: QueryEngineProtocol,
    transform_engine: TransformEngineProtocol,
    viewer: Optional[ViewerProtocol] = None,
) -> TracePipeline:
    """Wire the executor, render stage and orchestrator for one run."""
    return TracePipeline(
        config=config,
        executor=QueryExecutor(query_engine, config),
        renderer=RenderStage(transform_engine, viewer),
    )


def exit_code_for(outcome: TraceOutcome) -> ExitCode:
    if outcome.completed or outcome.failure is None:
        return ExitCode.OK
    return _FAILURE_EXIT_CODES[outcome.failure]


def create_saxon_pipeline(
    config: TraceConfig,
    processor: PySaxonProcessor,
    viewer: Optional[ViewerProtocol] = None,
) -> TracePipeline:
    """
    Wire the pipeline on Saxon engines.

    Document paths bound to the queries are already prefixed with
    ``xml-path``, so Saxon resolves them against the working directory,
    the same base the validator and the executor use.
    """
    return create_pipeline(
        config,
        SaxonQueryEngine(processor),
        SaxonTransformEngine(processor),
        viewer,
    )


def _run_with_saxon(config: TraceConfig, request: TraceRequest) -> TraceOutcome:
    """Run the pipeline on the Saxon engines."""
    with PySaxonProcessor(license=False) as processor:
        pipeline = create_saxon_pipeline(config, processor, BrowserViewer())
        return pipeline.run(request)


def _fail(message: str, code: ExitCode) -> int:
    print(message, file=sys.stderr)
    return int(code)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Parse the command line, run one trace and return the exit status."""
    if argv is None:
        argv = sys.argv[1:]

    parser = build_parser()
    args, unknown = parser.parse_known_args(normalize_args(argv))
    if unknown:
        print(f"Unknown argument: {' '.join(unknown)}", file=sys.stderr)
        print(USAGE, file=sys.stderr)
        return int(ExitCode.USAGE)
    if args.help:
        print(USAGE, file=sys.stderr)
        return int(ExitCode.OK)

    configure_logging(logging.DEBUG if args.verbose else logging.WARNING)

    if not args.oid:
        return _fail("No OID provided for this query.", ExitCode.VALIDATION)

    cfg_path = args.cfg if args.cfg is not None else default_config_path()
    try:
        config = load_config(cfg_path)
    except ConfigurationError as e:
        return _fail(e.message, ExitCode.CONFIGURATION)

    if config.verbose and not args.verbose:
        configure_logging(logging.DEBUG)

    request = TraceRequest(oid=args.oid, quiet=args.quiet, filter_nodes=args.filter)
    outcome = _run_with_saxon(config, request)

    if not outcome.completed:
        return _fail(outcome.message, exit_code_for(outcome))

    logger.info(f"Trace for {request.oid} completed: {outcome.report_path}")
    return int(ExitCode.OK)


if __name__ == "__main__":
    sys.exit(main())
