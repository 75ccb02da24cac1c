"""
Configuration Package - Model and Loader.

This package handles all configuration aspects of Trace Query:
    - Pydantic model for type-safe configuration
    - Property file (and YAML) loader with validation

Design Principles:
    - Read once at startup, frozen afterwards
    - Missing keys become empty strings at load time
    - Directory keys always end with a path separator
"""

from trace_query.config.loader import ConfigLoader, ConfigurationError, load_config
from trace_query.config.models import TraceConfig

__all__ = ["ConfigLoader", "ConfigurationError", "TraceConfig", "load_config"]
