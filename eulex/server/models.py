from __future__ import annotations

from typing import Any, Dict, List

from pydantic import BaseModel, Field, field_validator, model_validator


class FetchRequest(BaseModel):
    """Client payload for retrieving a document's raw text."""

    url: str = Field(min_length=1, description="http(s) URL of a plain-text legal document")

    @field_validator("url")
    @classmethod
    def _strip_url(cls, value: str) -> str:
        return value.strip()


class ParseRequest(BaseModel):
    """Client payload for parsing either a URL or inline text."""

    url: str | None = Field(default=None, description="Fetch the text from this URL")
    text: str | None = Field(default=None, description="Parse this text directly")
    document_id: str | None = Field(default=None, description="Identifier used as the outline root path")

    @model_validator(mode="after")
    def _exactly_one_source(self) -> "ParseRequest":
        if (self.url is None) == (self.text is None):
            raise ValueError("Provide exactly one of 'url' or 'text'")
        if self.url is not None and not self.url.strip():
            raise ValueError("'url' must not be blank")
        return self


class FetchResponse(BaseModel):
    plain_text: str


class ArticleSummary(BaseModel):
    number: str
    title: str


class IssueModel(BaseModel):
    kind: str
    line_number: int
    line: str
    message: str


class ParseResponse(BaseModel):
    document: Dict[str, Any]
    articles: List[ArticleSummary] = Field(default_factory=list)
    issues: List[IssueModel] = Field(default_factory=list)


class OutlineSection(BaseModel):
    path: str
    parent_path: str | None = None
    kind: str
    number: str | None = None
    title: str
    level: int
    order: int


class OutlineResponse(BaseModel):
    document_id: str
    body: str
    sections: List[OutlineSection] = Field(default_factory=list)


__all__ = [
    "ArticleSummary",
    "FetchRequest",
    "FetchResponse",
    "IssueModel",
    "OutlineResponse",
    "OutlineSection",
    "ParseRequest",
    "ParseResponse",
]
