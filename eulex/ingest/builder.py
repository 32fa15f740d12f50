from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, Iterable, List, Optional

from eulex.ingest.classifier import Classification, LineKind, classify
from eulex.models.document import Article, Chapter, Document, Paragraph, Section

logger = logging.getLogger(__name__)


class IssueKind(str, Enum):
    MALFORMED_CONTEXT = "malformed_context"
    ORPHAN_CONTINUATION = "orphan_continuation"


@dataclass(frozen=True, slots=True)
class ParseIssue:
    """A line that was dropped because it had nothing to attach to."""

    kind: IssueKind
    line_number: int
    line: str
    message: str

    def to_dict(self) -> Dict[str, object]:
        return {
            "kind": self.kind.value,
            "line_number": self.line_number,
            "line": self.line,
            "message": self.message,
        }


@dataclass(slots=True)
class ParseResult:
    document: Document
    issues: List[ParseIssue] = field(default_factory=list)


@dataclass(slots=True)
class ParserState:
    """Cursors for a single parse run."""

    document: Document = field(default_factory=Document)
    current_chapter: Optional[Chapter] = None
    current_section: Optional[Section] = None
    current_article: Optional[Article] = None
    issues: List[ParseIssue] = field(default_factory=list)


class DocumentBuilder:
    """Assemble a Document from classified lines, one line at a time.

    Each builder owns its own ``ParserState``; use a new builder (or
    :func:`parse`) for every document.
    """

    def __init__(self) -> None:
        self.state = ParserState()
        self._handlers: Dict[LineKind, Callable[[Classification, int, str], None]] = {
            LineKind.TITLE: self._on_title,
            LineKind.CHAPTER: self._on_chapter,
            LineKind.SECTION: self._on_section,
            LineKind.ARTICLE: self._on_article,
            LineKind.PARAGRAPH: self._on_paragraph,
            LineKind.SUBPARAGRAPH: self._on_subparagraph,
        }

    # ------------------------------------------------------------------ public API
    def feed(self, line: str, line_number: int = 0) -> Optional[Classification]:
        line = line.rstrip("\r")
        classification = classify(line)
        if classification is not None:
            self._handlers[classification.kind](classification, line_number, line)
        return classification

    def feed_lines(self, lines: Iterable[str]) -> None:
        for line_number, line in enumerate(lines, start=1):
            self.feed(line, line_number)

    def build(self, plain_text: str) -> ParseResult:
        self.feed_lines(plain_text.split("\n"))
        return self.result()

    def result(self) -> ParseResult:
        return ParseResult(document=self.state.document, issues=list(self.state.issues))

    # ------------------------------------------------------------------ transitions
    def _on_title(self, item: Classification, line_number: int, line: str) -> None:
        self.state.document.title = item.title

    def _on_chapter(self, item: Classification, line_number: int, line: str) -> None:
        chapter = Chapter(number=item.number or "", title=item.title)
        self.state.document.chapters.append(chapter)
        self.state.current_chapter = chapter
        self.state.current_section = None
        self.state.current_article = None

    def _on_section(self, item: Classification, line_number: int, line: str) -> None:
        chapter = self.state.current_chapter
        if chapter is None:
            self._skip(IssueKind.MALFORMED_CONTEXT, line_number, line, "section heading outside of a chapter")
            return
        section = Section(number=item.number or "", title=item.title)
        chapter.sections.append(section)
        self.state.current_section = section
        self.state.current_article = None

    def _on_article(self, item: Classification, line_number: int, line: str) -> None:
        article = Article(number=item.number or "", title=item.title)
        if self.state.current_section is not None:
            self.state.current_section.articles.append(article)
        elif self.state.current_chapter is not None:
            self.state.current_chapter.articles.append(article)
        else:
            self.state.document.unassigned_articles.append(article)
        self.state.current_article = article

    def _on_paragraph(self, item: Classification, line_number: int, line: str) -> None:
        article = self.state.current_article
        if article is None:
            self._skip(IssueKind.ORPHAN_CONTINUATION, line_number, line, "paragraph outside of an article")
            return
        article.paragraphs.append(Paragraph(number=item.number, content=item.content))

    def _on_subparagraph(self, item: Classification, line_number: int, line: str) -> None:
        article = self.state.current_article
        if article is None:
            self._skip(IssueKind.ORPHAN_CONTINUATION, line_number, line, "point outside of an article")
            return
        paragraph = article.last_paragraph
        if paragraph is None:
            self._skip(IssueKind.ORPHAN_CONTINUATION, line_number, line, "point before the first paragraph")
            return
        text = f"{item.marker} {item.content}" if item.marker else item.content
        paragraph.append(text)

    def _skip(self, kind: IssueKind, line_number: int, line: str, message: str) -> None:
        logger.debug("Dropping line %d (%s): %r", line_number, message, line)
        self.state.issues.append(ParseIssue(kind=kind, line_number=line_number, line=line, message=message))


def parse_with_issues(plain_text: str) -> ParseResult:
    """Parse ``plain_text`` and report the lines that were dropped."""

    return DocumentBuilder().build(plain_text)


def parse(plain_text: str) -> Document:
    """Parse newline-delimited legal text into a Document tree.

    Never raises on malformed structure: out-of-context lines are dropped.
    An empty string yields an empty Document.
    """

    return parse_with_issues(plain_text).document


__all__ = [
    "DocumentBuilder",
    "IssueKind",
    "ParseIssue",
    "ParseResult",
    "ParserState",
    "parse",
    "parse_with_issues",
]
