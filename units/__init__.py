"""Value types shared by the resolver and the scanner."""

from .model import ResolvedUnit, StaleSet, resolve_namespace_reference

__all__ = ["ResolvedUnit", "StaleSet", "resolve_namespace_reference"]
