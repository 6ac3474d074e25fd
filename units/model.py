"""Data model for resolved definition files and scan results."""

from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, List, Optional


def resolve_namespace_reference(token: Optional[str], namespace: str) -> Optional[str]:
    """
    Expand a namespace reference relative to a unit's namespace.
    
    A leading ``*`` stands for ``namespace``; ``*.sub`` becomes
    ``namespace.sub`` while ``*sub`` is concatenated as is. One leading dot
    left over after the substitution is dropped, so ``*.sub`` in the root
    namespace becomes ``sub``. Anything else is returned unchanged.
    """
    if token is None or not token.startswith("*"):
        return token
    resolved = namespace + token[1:]
    if resolved.startswith("."):
        resolved = resolved[1:]
    return resolved


@dataclass(frozen=True)
class ResolvedUnit:
    """
    A definition file together with the location of its generated artifact.
    
    Built once per matched file during a scan and never changed afterwards.
    All derived paths use the platform separator.
    """
    
    base_directory: Path
    relative_input_path: str
    namespace: str
    namespace_directory: str
    artifact_name: str
    output_relative_path: str
    
    @property
    def input_file(self) -> Path:
        """Absolute path of the definition file."""
        return self.base_directory / self.relative_input_path
    
    def output_file(self, output_directory: Path) -> Path:
        """Absolute path of the artifact under ``output_directory``."""
        return output_directory / self.output_relative_path
    
    def resolve_namespace_reference(self, token: Optional[str]) -> Optional[str]:
        """Expand a ``*``-prefixed namespace reference against this unit."""
        return resolve_namespace_reference(token, self.namespace)
    
    def __str__(self) -> str:
        return f"{self.relative_input_path} -> {self.output_relative_path}"


class StaleSet:
    """
    Ordered collection of units that need regeneration.
    
    Units keep the order in which they were added, which is the
    enumeration order of the scan that produced them.
    """
    
    def __init__(self):
        self._units: List[ResolvedUnit] = []
    
    @property
    def units(self) -> List[ResolvedUnit]:
        """Return a copy of the units in order."""
        return list(self._units)
    
    def add(self, unit: ResolvedUnit) -> None:
        """Append a unit to the end of the set."""
        self._units.append(unit)
    
    def clear(self) -> None:
        """Forget all units."""
        self._units.clear()
    
    def namespaces(self) -> List[str]:
        """Return the distinct namespaces, sorted."""
        return sorted({unit.namespace for unit in self._units})
    
    def by_namespace(self, namespace: str) -> List[ResolvedUnit]:
        """Return the units of a single namespace, in order."""
        return [unit for unit in self._units if unit.namespace == namespace]
    
    def __iter__(self) -> Iterator[ResolvedUnit]:
        return iter(list(self._units))
    
    def __len__(self) -> int:
        return len(self._units)
    
    def __bool__(self) -> bool:
        return bool(self._units)
    
    def __contains__(self, unit: object) -> bool:
        return unit in self._units
    
    def __getitem__(self, index: int) -> ResolvedUnit:
        return self._units[index]
    
    def __repr__(self) -> str:
        return f"StaleSet({len(self._units)} units)"
