from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from typing import DefaultDict, Dict, List

from eulex.ingest.builder import ParseIssue, parse_with_issues
from eulex.ingest.toc_builder import TOCBuilder, TOCBuilderConfig
from eulex.ingest.utils import slugify, unique_slug
from eulex.models.document import Article, Document
from eulex.models.section import SectionNode


@dataclass(slots=True)
class EULawTOCBuilderConfig(TOCBuilderConfig):
    """Configuration for EU legal text navigation trees."""

    document_title_fallback: str = "Document"
    unassigned_title: str = "Unassigned Articles"


def heading_label(kind: str, number: str, title: str) -> str:
    """Display label such as ``Article 12a: Definitions``."""

    label = f"{kind.capitalize()} {number}".strip()
    return f"{label}: {title}" if title else label


def article_body(article: Article) -> str:
    lines: List[str] = []
    for paragraph in article.paragraphs:
        lines.append(f"{paragraph.number} {paragraph.content}" if paragraph.number else paragraph.content)
    return "\n".join(lines)


class EULawTOCBuilder(TOCBuilder):
    """Parse EU legal texts and expose them as SectionNode trees.

    Node paths are slug based (``gdpr/chapter-1/section-2/article-5``) and
    unique among siblings, so callers can use them as stable keys.
    """

    config: EULawTOCBuilderConfig

    def __init__(self, config: EULawTOCBuilderConfig | None = None) -> None:
        super().__init__(config or EULawTOCBuilderConfig())
        assert isinstance(self.config, EULawTOCBuilderConfig)
        self.last_issues: List[ParseIssue] = []

    def build_text(self, text: str, document_id: str) -> SectionNode:
        result = parse_with_issues(text)
        self.last_issues = result.issues
        return self.build_document(result.document, document_id)

    def build_document(self, document: Document, document_id: str) -> SectionNode:
        root = SectionNode(
            document_id=document_id,
            path=slugify(document_id, fallback="document"),
            title=document.title or document_id or self.config.document_title_fallback,
            body="",
            level=0,
            kind="document",
        )
        slug_counts: DefaultDict[str, Dict[str, int]] = defaultdict(dict)

        def attach(parent: SectionNode, kind: str, number: str | None, title: str, body: str = "") -> SectionNode:
            slug = unique_slug(f"{kind} {number or ''}", slug_counts[parent.path], fallback=kind)
            node = SectionNode(
                document_id=document_id,
                path=f"{parent.path}/{slug}",
                title=title,
                body=body,
                level=parent.level + 1,
                kind=kind,
                number=number,
            )
            parent.add_child(node)
            return node

        def attach_article(parent: SectionNode, article: Article) -> None:
            body = article_body(article) if self.config.include_body else ""
            attach(parent, "article", article.number, heading_label("article", article.number, article.title), body)

        if document.unassigned_articles:
            group = attach(root, "unassigned", None, self.config.unassigned_title)
            for article in document.unassigned_articles:
                attach_article(group, article)

        for chapter in document.chapters:
            chapter_node = attach(
                root, "chapter", chapter.number, heading_label("chapter", chapter.number, chapter.title)
            )
            for article in chapter.articles:
                attach_article(chapter_node, article)
            for section in chapter.sections:
                section_node = attach(
                    chapter_node, "section", section.number, heading_label("section", section.number, section.title)
                )
                for article in section.articles:
                    attach_article(section_node, article)

        return root


__all__ = ["EULawTOCBuilder", "EULawTOCBuilderConfig", "article_body", "heading_label"]
