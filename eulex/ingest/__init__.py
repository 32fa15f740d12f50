"""Parsing utilities for EU legal texts."""

from .classifier import Classification, ClassificationRule, LineKind, RULES, classify
from .builder import DocumentBuilder, IssueKind, ParseIssue, ParseResult, ParserState, parse, parse_with_issues
from .toc_builder import TOCBuilder, TOCBuilderConfig
from .eu_law import EULawTOCBuilder, EULawTOCBuilderConfig
from .fetch import DocumentRetrievalError, fetch_document
from .render import flatten_sections, render_markdown

__all__ = [
    "Classification",
    "ClassificationRule",
    "DocumentBuilder",
    "DocumentRetrievalError",
    "EULawTOCBuilder",
    "EULawTOCBuilderConfig",
    "IssueKind",
    "LineKind",
    "ParseIssue",
    "ParseResult",
    "ParserState",
    "RULES",
    "TOCBuilder",
    "TOCBuilderConfig",
    "classify",
    "fetch_document",
    "flatten_sections",
    "parse",
    "parse_with_issues",
    "render_markdown",
]
