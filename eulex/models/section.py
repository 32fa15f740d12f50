from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List, Optional


@dataclass(slots=True)
class SectionNode:
    """Navigation node built from a parsed legal document."""

    document_id: str
    path: str
    title: str
    body: str
    level: int
    kind: str = "document"
    number: Optional[str] = None
    parent_path: Optional[str] = None
    order: int = 0
    children: List["SectionNode"] = field(default_factory=list)

    def add_child(self, child: "SectionNode") -> None:
        """Attach a child node while keeping the hierarchy consistent."""

        child.order = len(self.children)
        child.parent_path = self.path
        self.children.append(child)

    def walk(self) -> Iterator["SectionNode"]:
        yield self
        for child in self.children:
            yield from child.walk()


__all__ = ["SectionNode"]
