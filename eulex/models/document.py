from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional


@dataclass(slots=True)
class Paragraph:
    """Numbered or unnumbered paragraph of an article."""

    number: Optional[str]
    content: str

    def append(self, text: str) -> None:
        """Extend the paragraph with a continuation line."""

        self.content = f"{self.content}\n{text}"

    def to_dict(self) -> Dict[str, Any]:
        return {"number": self.number, "content": self.content}


@dataclass(slots=True)
class Article:
    number: str
    title: str
    paragraphs: List[Paragraph] = field(default_factory=list)

    @property
    def last_paragraph(self) -> Optional[Paragraph]:
        return self.paragraphs[-1] if self.paragraphs else None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "number": self.number,
            "title": self.title,
            "paragraphs": [paragraph.to_dict() for paragraph in self.paragraphs],
        }


@dataclass(slots=True)
class Section:
    number: str
    title: str
    articles: List[Article] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "number": self.number,
            "title": self.title,
            "articles": [article.to_dict() for article in self.articles],
        }


@dataclass(slots=True)
class Chapter:
    """Chapter holding sections and the articles placed directly under it."""

    number: str
    title: str
    sections: List[Section] = field(default_factory=list)
    articles: List[Article] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "number": self.number,
            "title": self.title,
            "sections": [section.to_dict() for section in self.sections],
            "articles": [article.to_dict() for article in self.articles],
        }


@dataclass(slots=True)
class Document:
    """Root of a parsed legal text.

    Articles seen before any chapter are kept in ``unassigned_articles``.
    """

    title: str = ""
    chapters: List[Chapter] = field(default_factory=list)
    unassigned_articles: List[Article] = field(default_factory=list)

    def iter_articles(self) -> Iterator[Article]:
        """Yield every article in the order its heading appeared."""

        yield from self.unassigned_articles
        for chapter in self.chapters:
            # direct articles always precede the first section of a chapter
            yield from chapter.articles
            for section in chapter.sections:
                yield from section.articles

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "chapters": [chapter.to_dict() for chapter in self.chapters],
            "unassigned_articles": [article.to_dict() for article in self.unassigned_articles],
        }


__all__ = ["Article", "Chapter", "Document", "Paragraph", "Section"]
