"""Structural parser for EU legal texts."""

from .ingest.builder import ParseResult, parse, parse_with_issues
from .models.document import Article, Chapter, Document, Paragraph, Section
from .models.section import SectionNode

__all__ = [
    "Article",
    "Chapter",
    "Document",
    "Paragraph",
    "ParseResult",
    "Section",
    "SectionNode",
    "parse",
    "parse_with_issues",
]
