"""Scanner module for definition discovery, resolution and staleness checks."""

from .config import ScanConfiguration, load_configuration
from .discovery import iter_files
from .errors import ConfigurationError, ScanError
from .resolver import resolve_namespace_reference, resolve_unit
from .staleness import Scanner, find_stale_units

__all__ = [
    "ScanConfiguration",
    "load_configuration",
    "iter_files",
    "ConfigurationError",
    "ScanError",
    "resolve_namespace_reference",
    "resolve_unit",
    "Scanner",
    "find_stale_units",
]
