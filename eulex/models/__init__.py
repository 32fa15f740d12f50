"""Data types for parsed legal documents."""

from .document import Article, Chapter, Document, Paragraph, Section
from .section import SectionNode

__all__ = ["Article", "Chapter", "Document", "Paragraph", "Section", "SectionNode"]
