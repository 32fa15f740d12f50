from __future__ import annotations

from typing import Any, Dict, List

from eulex.models.section import SectionNode


def render_markdown(root: SectionNode) -> str:
    """Render a navigation tree as a markdown outline, one heading per node."""

    parts: List[str] = []
    for node in root.walk():
        indent = "#" * (node.level + 1)
        block = f"{indent} {node.title}"
        if node.body:
            block = f"{block}\n{node.body}"
        parts.append(block + "\n")
    return "\n".join(parts)


def flatten_sections(root: SectionNode) -> List[Dict[str, Any]]:
    return [
        {
            "path": node.path,
            "parent_path": node.parent_path,
            "kind": node.kind,
            "number": node.number,
            "title": node.title,
            "level": node.level,
            "order": node.order,
        }
        for node in root.walk()
    ]


__all__ = ["flatten_sections", "render_markdown"]
