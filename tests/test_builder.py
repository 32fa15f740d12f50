from eulex import parse, parse_with_issues
from eulex.ingest.builder import DocumentBuilder, IssueKind


SAMPLE = """Regulation (EU) 2016/679 of the European Parliament and of the Council
Article 1 Subject-matter and objectives
1. This Regulation lays down rules.
Chapter 1 General provisions
Article 2 Material scope
1. This Regulation applies to processing.
a) in the course of an activity;
b) by a Member State;
2. This Regulation does not apply.
Section 1 Transparency
Article 12 Transparent information
Article 12a Modalities
Section 2 Information
Article 13 Information to be provided
Chapter 2 Principles
Article 5 Principles relating to processing
"""


def test_title_line_and_unassigned_article():
    document = parse(
        "Regulation (EU) 2020/123 of the European Parliament\nArticle 1 Scope\n1. This applies.\n"
    )

    assert document.title == "Regulation (EU) 2020/123 of the European Parliament"
    assert document.chapters == []
    assert document.to_dict()["unassigned_articles"] == [
        {"number": "1", "title": "Scope", "paragraphs": [{"number": "1.", "content": "This applies."}]}
    ]


def test_article_attaches_to_chapter_without_section():
    document = parse("Chapter 1 General\nArticle 2 Definitions\n")

    assert len(document.chapters) == 1
    chapter = document.chapters[0]
    assert (chapter.number, chapter.title) == ("1", "General")
    assert chapter.sections == []
    assert [a.to_dict() for a in chapter.articles] == [{"number": "2", "title": "Definitions", "paragraphs": []}]
    assert document.unassigned_articles == []


def test_article_attaches_to_current_section():
    document = parse("Chapter 1 General\nSection 1 Scope\nArticle 3 Terms\n")

    chapter = document.chapters[0]
    assert chapter.articles == []
    assert len(chapter.sections) == 1
    section = chapter.sections[0]
    assert (section.number, section.title) == ("1", "Scope")
    assert [(a.number, a.title) for a in section.articles] == [("3", "Terms")]


def test_section_without_chapter_is_dropped():
    result = parse_with_issues("Section 1 Orphan\nArticle 4 Lonely\n")

    assert result.document.chapters == []
    assert [a.number for a in result.document.unassigned_articles] == ["4"]
    assert len(result.issues) == 1
    issue = result.issues[0]
    assert issue.kind is IssueKind.MALFORMED_CONTEXT
    assert issue.line_number == 1
    assert issue.line == "Section 1 Orphan"


def test_empty_input_yields_empty_document():
    result = parse_with_issues("")

    assert result.document.to_dict() == {"title": "", "chapters": [], "unassigned_articles": []}
    assert result.issues == []


def test_lettered_points_continue_previous_paragraph():
    document = parse(SAMPLE)

    article = document.chapters[0].articles[0]
    assert [p.number for p in article.paragraphs] == ["1.", "2."]
    assert article.paragraphs[0].content == (
        "This Regulation applies to processing.\na) in the course of an activity;\nb) by a Member State;"
    )


def test_unmarked_line_after_paragraph_is_new_paragraph():
    document = parse("Article 1 Scope\n1. First.\nSecond without number.\n")

    paragraphs = document.unassigned_articles[0].paragraphs
    assert [(p.number, p.content) for p in paragraphs] == [("1.", "First."), (None, "Second without number.")]


def test_point_without_paragraph_is_dropped():
    result = parse_with_issues("Article 1 Scope\na) dangling point\n1. Real paragraph.\n")

    article = result.document.unassigned_articles[0]
    assert [p.content for p in article.paragraphs] == ["Real paragraph."]
    assert [issue.kind for issue in result.issues] == [IssueKind.ORPHAN_CONTINUATION]


def test_paragraph_before_any_article_is_dropped():
    result = parse_with_issues("Preamble text\n(a) a recital point\nChapter 1 General\nLoose text\n")

    assert result.document.unassigned_articles == []
    assert result.document.chapters[0].articles == []
    assert [issue.line_number for issue in result.issues] == [1, 2, 4]
    assert {issue.kind for issue in result.issues} == {IssueKind.ORPHAN_CONTINUATION}


def test_new_chapter_resets_section_and_article():
    document = parse(SAMPLE)

    second = document.chapters[1]
    assert [a.number for a in second.articles] == ["5"]
    assert second.sections == []
    first_sections = document.chapters[0].sections
    assert [a.number for a in first_sections[-1].articles] == ["13"]


def test_new_chapter_stops_paragraphs_attaching_to_previous_article():
    result = parse_with_issues("Chapter 1 A\nArticle 1 X\n1. Kept.\nChapter 2 B\n1. Dropped.\n")

    assert [p.content for p in result.document.chapters[0].articles[0].paragraphs] == ["Kept."]
    assert result.issues[0].line_number == 5


def test_ordering_follows_input():
    document = parse(SAMPLE)

    assert [c.number for c in document.chapters] == ["1", "2"]
    assert [s.number for s in document.chapters[0].sections] == ["1", "2"]
    assert [a.number for a in document.chapters[0].sections[0].articles] == ["12", "12a"]
    assert [a.number for a in document.iter_articles()] == ["1", "2", "12", "12a", "13", "5"]


def test_every_article_has_exactly_one_container():
    document = parse(SAMPLE)

    containers = [document.unassigned_articles]
    for chapter in document.chapters:
        containers.append(chapter.articles)
        containers.extend(section.articles for section in chapter.sections)

    placements = [id(article) for container in containers for article in container]
    assert len(placements) == len(set(placements)) == 6


def test_parsing_is_idempotent():
    assert parse(SAMPLE).to_dict() == parse(SAMPLE).to_dict()
    assert parse(SAMPLE) == parse(SAMPLE)


def test_later_title_line_replaces_title():
    document = parse(
        "Directive (EU) 2019/1 of the Council\nDecision (EU) 2020/2 of the Commission\n"
    )

    assert document.title == "Decision (EU) 2020/2 of the Commission"


def test_windows_line_endings_are_tolerated():
    document = parse("Chapter 1 General\r\nArticle 1 Scope\r\n1. Text.\r\n")

    article = document.chapters[0].articles[0]
    assert article.title == "Scope"
    assert article.paragraphs[0].content == "Text."


def test_arbitrary_text_never_raises():
    noisy = "\n".join(["", "Section 9", ")))", "Article", "b)", "12.", "Chapter x", "\t \t", "é ü"])

    document = parse(noisy)

    assert document.title == ""
    assert document.chapters == []


def test_builder_can_be_fed_incrementally():
    builder = DocumentBuilder()
    builder.feed("Chapter 1 General", 1)
    builder.feed("Article 1 Scope", 2)
    classification = builder.feed("1. Text.", 3)

    assert classification.number == "1."
    assert builder.state.current_article is builder.state.document.chapters[0].articles[0]
    assert builder.result().document.chapters[0].articles[0].paragraphs[0].content == "Text."


def test_new_section_stops_paragraphs_attaching_to_previous_article():
    result = parse_with_issues("Chapter 1 A\nArticle 1 X\n1. Kept.\nSection 1 S\n2. After.\n")

    article = result.document.chapters[0].articles[0]
    assert [p.content for p in article.paragraphs] == ["Kept."]
    assert result.document.chapters[0].sections[0].articles == []
    assert [(issue.kind, issue.line_number) for issue in result.issues] == [
        (IssueKind.ORPHAN_CONTINUATION, 5)
    ]
