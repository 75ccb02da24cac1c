"""
Run Validator - Validate a Trace Run Before Any Stage Executes.

Validates:
    - An OID was supplied
    - The configuration names an XML directory and a query directory
    - The configuration names a graph document that exists on disk

Design Notes:
    - Fail-fast principle
    - All problems collected into one diagnostic
"""

from __future__ import annotations

import logging
import os
from typing import List, Optional

from trace_query.config.models import TraceConfig
from trace_query.domain.entities import TraceRequest

logger = logging.getLogger(__name__)


class ValidationError(Exception):
    """Raised when run validation fails."""

    def __init__(self, message: str, field: Optional[str] = None) -> None:
        super().__init__(message)
        self.field = field
        self.message = message


class RunValidator:
    """Validates the request and the metadata files it depends on."""

    def validate(self, request: TraceRequest, config: TraceConfig) -> None:
        """
        Validate a trace request.

        Args:
            request: The trace request to validate
            config: The loaded configuration

        Raises:
            ValidationError: If validation fails
        """
        self.validate_oid(request.oid)

        errors = self._validate_metadata_files(config)
        if errors:
            error_message = "; ".join(errors)
            logger.debug(f"Run validation failed: {error_message}")
            raise ValidationError(error_message)

        logger.debug(f"Run validated: oid={request.oid}")

    def validate_oid(self, oid: str) -> None:
        """
        Validate just the OID.

        Raises:
            ValidationError: If no OID was provided
        """
        if not oid or not oid.strip():
            raise ValidationError("No OID provided for this query.", field="oid")

    def _validate_metadata_files(self, config: TraceConfig) -> List[str]:
        """Ensure each of the expected metadata files can be found."""
        errors: List[str] = []

        if not config.xml_path:
            errors.append("No XML path in the configuration file.")
        elif not config.l3_graph or not os.path.isfile(config.graph_document):
            errors.append(
                "Missing Trace-XML graph file in configuration file "
                "or the file listed is not found."
            )

        if not config.xquery_path:
            errors.append("No XQuery path in the configuration file.")

        return errors
