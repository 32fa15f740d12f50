from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path

from eulex.models.section import SectionNode


@dataclass(slots=True)
class TOCBuilderConfig:
    """Configuration for turning documents into navigation trees."""

    include_body: bool = True
    encoding: str = "utf-8"


class TOCBuilder(ABC):
    """Abstract base class for turning documents into SectionNode trees."""

    def __init__(self, config: TOCBuilderConfig | None = None) -> None:
        self.config = config or TOCBuilderConfig()

    @abstractmethod
    def build_text(self, text: str, document_id: str) -> SectionNode:
        """Parse already-loaded text and return the root SectionNode."""

    def build(self, document_path: Path) -> SectionNode:
        """Parse a single document file and return the root SectionNode."""

        if not document_path.exists():
            raise FileNotFoundError(f"Document not found: {document_path}")
        text = document_path.read_text(encoding=self.config.encoding)
        return self.build_text(text, document_path.stem)


__all__ = ["TOCBuilder", "TOCBuilderConfig"]
