"""JSON exporter for stale units (machine-friendly format)."""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

from units.model import StaleSet


def to_json(
    stale: StaleSet,
    base_directory: Path,
    output_directory: Optional[Path] = None,
    indent: int = 2,
) -> str:
    """
    Convert a stale set to JSON format.
    
    Args:
        stale: The units to export.
        base_directory: Directory the units were scanned from.
        output_directory: Directory the artifacts go to, if known.
        indent: JSON indentation level.
    
    Returns:
        JSON string representation of the stale set.
    """
    units: List[Dict[str, Any]] = []
    for unit in stale:
        units.append({
            "input": _to_posix(unit.relative_input_path),
            "namespace": unit.namespace,
            "artifact": unit.artifact_name,
            "output": _to_posix(unit.output_relative_path),
        })
    
    data: Dict[str, Any] = {
        "base_directory": _to_posix(str(base_directory)),
        "output_directory": _to_posix(str(output_directory)) if output_directory else None,
        "count": len(units),
        "units": units,
    }
    
    return json.dumps(data, indent=indent)


def _to_posix(path: str) -> str:
    return path.replace("\\", "/")
