from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Tuple


class LineKind(str, Enum):
    TITLE = "title"
    CHAPTER = "chapter"
    SECTION = "section"
    ARTICLE = "article"
    PARAGRAPH = "paragraph"
    SUBPARAGRAPH = "subparagraph"


STRUCTURAL_KINDS = frozenset({LineKind.TITLE, LineKind.CHAPTER, LineKind.SECTION, LineKind.ARTICLE})


@dataclass(frozen=True, slots=True)
class Classification:
    """Result of matching one line against the classification rules.

    ``number`` holds the chapter/section/article number or the paragraph
    marker (``"1."``); ``marker`` holds a lettered point marker (``"a)"``).
    """

    kind: LineKind
    number: Optional[str] = None
    title: str = ""
    content: str = ""
    marker: Optional[str] = None

    @property
    def is_structural(self) -> bool:
        return self.kind in STRUCTURAL_KINDS


_TITLE_PATTERN = re.compile(
    r"^(?P<type>Regulation|Directive|Decision|Recommendation|Opinion)\s+"
    r"(?P<identifier>\(EU\)\s+\d{4}/\d+)\s+of\s+the\s+(?P<body>.+)$",
    re.IGNORECASE,
)
_CHAPTER_PATTERN = re.compile(r"^(?i:Chapter)\s+(?P<number>\d+[a-z]?)(?:\s+(?P<title>.*?))?\s*$")
_SECTION_PATTERN = re.compile(r"^(?i:Section)\s+(?P<number>\d+)(?:\s+(?P<title>.*?))?\s*$")
_ARTICLE_PATTERN = re.compile(r"^(?i:Article)\s+(?P<number>\d+[a-z]?)(?:\s+(?P<title>.*?))?\s*$")
_PARAGRAPH_PATTERN = re.compile(r"^\s*(?!\(?[a-z]\))(?:(?P<number>\d+\.)(?:\s+|$))?(?P<content>\S.*?)\s*$")
_SUBPARAGRAPH_PATTERN = re.compile(r"^\s*(?:(?P<marker>\(?[a-z]\))\s*)?(?P<content>\S.*?)\s*$")


def _title(match: re.Match[str]) -> Classification:
    title = f"{match.group('type').strip()} {match.group('identifier').strip()} of the {match.group('body').strip()}"
    return Classification(kind=LineKind.TITLE, title=title)


def _heading(kind: LineKind) -> Callable[[re.Match[str]], Classification]:
    def extract(match: re.Match[str]) -> Classification:
        return Classification(
            kind=kind,
            number=match.group("number").strip(),
            title=(match.group("title") or "").strip(),
        )

    return extract


def _paragraph(match: re.Match[str]) -> Classification:
    number = match.group("number")
    return Classification(
        kind=LineKind.PARAGRAPH,
        number=number.strip() if number else None,
        content=match.group("content").strip(),
    )


def _subparagraph(match: re.Match[str]) -> Classification:
    marker = match.group("marker")
    return Classification(
        kind=LineKind.SUBPARAGRAPH,
        marker=marker.strip() if marker else None,
        content=match.group("content").strip(),
    )


@dataclass(frozen=True, slots=True)
class ClassificationRule:
    kind: LineKind
    pattern: re.Pattern[str]
    extract: Callable[[re.Match[str]], Classification]

    def apply(self, line: str) -> Optional[Classification]:
        match = self.pattern.match(line)
        if not match:
            return None
        return self.extract(match)


# Evaluated in order; the first matching rule decides the line.
RULES: Tuple[ClassificationRule, ...] = (
    ClassificationRule(LineKind.TITLE, _TITLE_PATTERN, _title),
    ClassificationRule(LineKind.CHAPTER, _CHAPTER_PATTERN, _heading(LineKind.CHAPTER)),
    ClassificationRule(LineKind.SECTION, _SECTION_PATTERN, _heading(LineKind.SECTION)),
    ClassificationRule(LineKind.ARTICLE, _ARTICLE_PATTERN, _heading(LineKind.ARTICLE)),
    ClassificationRule(LineKind.PARAGRAPH, _PARAGRAPH_PATTERN, _paragraph),
    ClassificationRule(LineKind.SUBPARAGRAPH, _SUBPARAGRAPH_PATTERN, _subparagraph),
)


def classify(line: str, rules: Tuple[ClassificationRule, ...] = RULES) -> Optional[Classification]:
    """Return the classification of ``line``, or ``None`` for blank lines."""

    for rule in rules:
        result = rule.apply(line)
        if result is not None:
            return result
    return None


__all__ = [
    "Classification",
    "ClassificationRule",
    "LineKind",
    "RULES",
    "STRUCTURAL_KINDS",
    "classify",
]
