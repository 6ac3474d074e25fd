"""ASCII tree-style exporter for stale units."""

from typing import List

from units.model import StaleSet


# Unicode tree characters
UNICODE_BRANCH = "├── "
UNICODE_LAST = "└── "

# ASCII fallback characters
ASCII_BRANCH = "|-- "
ASCII_LAST = "\\-- "

DEFAULT_NAMESPACE_LABEL = "(default namespace)"


def to_ascii(stale: StaleSet, style: str = "tree") -> str:
    """
    Convert a stale set to an ASCII tree grouped by namespace.
    
    Args:
        stale: The units to export.
        style: Output style - "tree" (Unicode) or "ascii" (pure ASCII).
    
    Returns:
        ASCII tree string, empty if there are no units.
    """
    if style == "ascii":
        branch, last = ASCII_BRANCH, ASCII_LAST
    else:
        branch, last = UNICODE_BRANCH, UNICODE_LAST
    
    lines: List[str] = []
    
    namespaces = stale.namespaces()
    for i, namespace in enumerate(namespaces):
        lines.append(namespace or DEFAULT_NAMESPACE_LABEL)
        
        units = stale.by_namespace(namespace)
        for j, unit in enumerate(units):
            connector = last if j == len(units) - 1 else branch
            lines.append(f"{connector}{unit}")
        
        # Blank line between namespaces (except after last)
        if i < len(namespaces) - 1:
            lines.append("")
    
    return "\n".join(lines)
