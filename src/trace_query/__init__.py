"""
Trace Query - Life-Cycle Trace of a Variable Through Trace-XML.

Runs a fixed chain of XQuery stages over the Trace-XML graph for one
variable OID and renders the result as an HTML report. Every stage writes
its output to the XML working directory so each step can be inspected.

Architecture:
    - Ports & Adapters: the orchestrator only sees engine protocols
    - Dependency Injection for testability
    - Configuration resolved once into an immutable pydantic model

Main Components:
    - config: Configuration model and property/YAML loader
    - domain: Run request, stage results and the tagged run outcome
    - pipeline: Orchestrator, query executor, render stage
    - validation: Pre-run checks of the OID and metadata files
    - adapters: Saxon engines, browser viewer, scripted mock engines
    - cli: Command-line entry point

Example:
    >>> from trace_query.cli import main
    >>> main(["cfg=trace-xml.cfg", "oid=IT.AE.AETERM", "quiet"])
    0

"""

import logging

__version__ = "0.1.0"


def configure_logging(
    level: int = logging.INFO,
    format: str = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
) -> None:
    """
    Configure logging for Trace Query.

    Call this at application startup to see log messages.
    By default, only WARNING and above are visible.

    Args:
        level: Logging level (default: INFO)
        format: Log message format

    Example:
        >>> import trace_query
        >>> trace_query.configure_logging(logging.DEBUG)
    """
    logging.basicConfig(
        level=level,
        format=format,
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    # Set our package's logger
    logging.getLogger("trace_query").setLevel(level)
