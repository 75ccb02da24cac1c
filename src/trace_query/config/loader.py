"""
Configuration Loader - Property File Loading with Validation.

Loads the Trace-XML configuration once at startup and validates it with
the pydantic model. Two formats are understood:

    - Java property files (``key=value``, ``key: value`` or ``key value``,
      with escapes and ``\\`` line continuations), the default
      ``trace-xml.cfg`` format
    - YAML mappings for files ending in ``.yaml`` / ``.yml``

A missing or unreadable file is a hard failure reported as
ConfigurationError; the caller decides how to halt.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Any, Dict, Optional, Union

import javaproperties
import yaml
from pydantic import ValidationError as PydanticValidationError

from trace_query.config.models import TraceConfig

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_NAME = "trace-xml.cfg"


class ConfigurationError(Exception):
    """Raised when the configuration file cannot be loaded."""

    def __init__(self, message: str, path: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.path = path


class ConfigLoader:
    """Loads and validates configuration from property or YAML files."""

    def __init__(self, base_path: Optional[Path] = None) -> None:
        """
        Initialize config loader.

        Args:
            base_path: Base path for relative config paths
        """
        self._base_path = base_path or Path(".")

    def load(self, config_path: Union[str, Path]) -> TraceConfig:
        """
        Load configuration from a file.

        Args:
            config_path: Path to the property or YAML file

        Returns:
            Validated, frozen TraceConfig

        Raises:
            ConfigurationError: If the file is missing, unreadable or invalid
        """
        if not str(config_path):
            raise ConfigurationError("Missing config file. The query was not executed.")

        path = self._resolve_path(config_path)
        try:
            if path.suffix.lower() in (".yaml", ".yml"):
                config_dict = self._load_yaml(path)
            else:
                config_dict = self._load_properties(path)
        except FileNotFoundError as e:
            raise ConfigurationError(
                f"Configuration file not found: {path}", path=str(path)
            ) from e
        except (OSError, UnicodeDecodeError, ValueError, yaml.YAMLError) as e:
            raise ConfigurationError(
                f"Unable to load the configuration file {path}. {e}", path=str(path)
            ) from e

        config = self.load_from_dict(config_dict, source=str(path))
        logger.debug(f"Configuration loaded from {path}")
        return config

    def load_from_dict(
        self, config_dict: Dict[str, Any], source: str = "<dict>"
    ) -> TraceConfig:
        """
        Load configuration from dictionary.

        Args:
            config_dict: Configuration keyed by property names
            source: Where the values came from, for diagnostics

        Returns:
            Validated TraceConfig object
        """
        try:
            return TraceConfig.model_validate(config_dict)
        except PydanticValidationError as e:
            raise ConfigurationError(
                f"Invalid configuration in {source}: {e.errors()[0]['msg']}",
                path=source,
            ) from e

    def _resolve_path(self, path: Union[str, Path]) -> Path:
        """Resolve config path relative to base path."""
        p = Path(path)
        if p.is_absolute():
            return p
        return self._base_path / p

    def _load_yaml(self, path: Path) -> Dict[str, Any]:
        """Load YAML file."""
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ConfigurationError(
                f"Configuration file {path} must contain a mapping", path=str(path)
            )
        return data

    def _load_properties(self, path: Path) -> Dict[str, Any]:
        """Load a ``java.util.Properties`` file (ISO-8859-1, escapes, continuations)."""
        with open(path, "rb") as f:
            return javaproperties.load(f)


def default_config_path(script_path: Optional[str] = None) -> Path:
    """
    Default configuration file, next to the running script.

    Args:
        script_path: Path of the running program (defaults to sys.argv[0])
    """
    if script_path is None:
        script_path = sys.argv[0]
    return Path(script_path).resolve().parent / DEFAULT_CONFIG_NAME


def load_config(
    config_path: Union[str, Path],
    base_path: Optional[Path] = None,
) -> TraceConfig:
    """
    Convenience function to load configuration.

    Args:
        config_path: Path to the configuration file
        base_path: Base path for resolving relative paths

    Returns:
        Validated TraceConfig object
    """
    loader = ConfigLoader(base_path=base_path)
    return loader.load(config_path)
