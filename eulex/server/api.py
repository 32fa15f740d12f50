from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator
from urllib.parse import urlparse

from fastapi import Depends, FastAPI, HTTPException
from fastapi.concurrency import run_in_threadpool
from fastapi.middleware.cors import CORSMiddleware

from eulex.ingest.builder import parse_with_issues
from eulex.ingest.eu_law import EULawTOCBuilder
from eulex.ingest.fetch import DocumentRetrievalError, fetch_document
from eulex.ingest.render import flatten_sections, render_markdown
from eulex.server.models import (
    ArticleSummary,
    FetchRequest,
    FetchResponse,
    IssueModel,
    OutlineResponse,
    OutlineSection,
    ParseRequest,
    ParseResponse,
)
from eulex.server.settings import Settings, get_settings

logger = logging.getLogger(__name__)

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(settings: Settings) -> logging.Logger:
    """Attach a stream handler to the package logger at the configured level."""

    package_logger = logging.getLogger("eulex")
    package_logger.setLevel(settings.log_level)
    if not package_logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_LOG_FORMAT))
        package_logger.addHandler(handler)
    return package_logger


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    configure_logging(get_settings())
    yield


settings = get_settings()
app = FastAPI(title="EU Law Document Parser API", version="0.1.0", lifespan=lifespan)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)


async def _retrieve(url: str, settings: Settings) -> str:
    try:
        return await run_in_threadpool(
            fetch_document,
            url,
            timeout=settings.fetch_timeout_seconds,
            max_bytes=settings.max_document_bytes,
        )
    except DocumentRetrievalError as exc:
        raise HTTPException(status_code=502, detail=f"Failed to fetch the document: {exc.reason}") from exc


async def _resolve_text(payload: ParseRequest, settings: Settings) -> str:
    if payload.text is not None:
        return payload.text
    return await _retrieve(payload.url or "", settings)


def _document_id(payload: ParseRequest) -> str:
    if payload.document_id:
        return payload.document_id
    if payload.url:
        stem = urlparse(payload.url).path.rstrip("/").rsplit("/", 1)[-1]
        return stem.rsplit(".", 1)[0] or "document"
    return "document"


@app.post("/api/fetch-document")
async def fetch_text(payload: FetchRequest, settings: Settings = Depends(get_settings)) -> FetchResponse:
    plain_text = await _retrieve(payload.url, settings)
    return FetchResponse(plain_text=plain_text)


@app.post("/api/parse")
async def parse_document(payload: ParseRequest, settings: Settings = Depends(get_settings)) -> ParseResponse:
    text = await _resolve_text(payload, settings)
    result = parse_with_issues(text)
    document = result.document
    logger.info(
        "Parsed document %r: %d chapters, %d unassigned articles, %d dropped lines",
        document.title,
        len(document.chapters),
        len(document.unassigned_articles),
        len(result.issues),
    )
    return ParseResponse(
        document=document.to_dict(),
        articles=[ArticleSummary(number=article.number, title=article.title) for article in document.iter_articles()],
        issues=[IssueModel(**issue.to_dict()) for issue in result.issues],
    )


@app.post("/api/outline")
async def outline_document(payload: ParseRequest, settings: Settings = Depends(get_settings)) -> OutlineResponse:
    text = await _resolve_text(payload, settings)
    document_id = _document_id(payload)
    root = EULawTOCBuilder().build_text(text, document_id)
    return OutlineResponse(
        document_id=document_id,
        body=render_markdown(root),
        sections=[OutlineSection(**entry) for entry in flatten_sections(root)],
    )


@app.get("/api/healthz")
async def healthz() -> dict[str, str]:
    return {"status": "ok"}


__all__ = ["app"]
