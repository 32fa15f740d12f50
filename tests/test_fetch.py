from __future__ import annotations

from email.message import Message
from http.client import IncompleteRead
from urllib.error import HTTPError, URLError

import pytest

import eulex.ingest.fetch as fetch_module
from eulex.ingest.fetch import DocumentRetrievalError, fetch_document


class _FakeResponse:
    def __init__(self, body: bytes, status: int = 200, charset: str | None = "utf-8") -> None:
        self._body = body
        self.status = status
        self.headers = Message()
        if charset:
            self.headers["Content-Type"] = f"text/plain; charset={charset}"

    def read(self, size: int = -1) -> bytes:
        return self._body if size < 0 else self._body[:size]

    def __enter__(self) -> "_FakeResponse":
        return self

    def __exit__(self, *exc_info) -> None:
        return None


def _patch_urlopen(monkeypatch, response=None, error: Exception | None = None):
    calls = []

    def fake_urlopen(request, timeout=None):
        calls.append((request.full_url, timeout))
        if error is not None:
            raise error
        return response

    monkeypatch.setattr(fetch_module, "urlopen", fake_urlopen)
    return calls


def test_fetch_document_decodes_body(monkeypatch):
    calls = _patch_urlopen(monkeypatch, _FakeResponse("Article 1 Définitions".encode("utf-8")))

    text = fetch_document("https://example.org/reg.txt", timeout=5)

    assert text == "Article 1 Définitions"
    assert calls == [("https://example.org/reg.txt", 5)]


def test_fetch_document_uses_declared_charset(monkeypatch):
    _patch_urlopen(monkeypatch, _FakeResponse("Artikel ü".encode("latin-1"), charset="latin-1"))

    assert fetch_document("http://example.org/doc") == "Artikel ü"


def test_fetch_document_rejects_non_http_scheme(monkeypatch):
    calls = _patch_urlopen(monkeypatch, _FakeResponse(b""))

    with pytest.raises(DocumentRetrievalError) as excinfo:
        fetch_document("file:///etc/passwd")

    assert "unsupported URL scheme" in str(excinfo.value)
    assert calls == []


def test_fetch_document_wraps_http_errors(monkeypatch):
    error = HTTPError("https://example.org/missing", 404, "Not Found", Message(), None)
    _patch_urlopen(monkeypatch, error=error)

    with pytest.raises(DocumentRetrievalError) as excinfo:
        fetch_document("https://example.org/missing")

    assert excinfo.value.status == 404


def test_fetch_document_wraps_connection_errors(monkeypatch):
    _patch_urlopen(monkeypatch, error=URLError("connection refused"))

    with pytest.raises(DocumentRetrievalError) as excinfo:
        fetch_document("https://unreachable.invalid/doc")

    assert excinfo.value.status is None
    assert "connection refused" in excinfo.value.reason


def test_fetch_document_rejects_non_success_status(monkeypatch):
    _patch_urlopen(monkeypatch, _FakeResponse(b"moved", status=304))

    with pytest.raises(DocumentRetrievalError) as excinfo:
        fetch_document("https://example.org/doc")

    assert excinfo.value.status == 304


def test_fetch_document_enforces_size_limit(monkeypatch):
    _patch_urlopen(monkeypatch, _FakeResponse(b"x" * 11))

    with pytest.raises(DocumentRetrievalError):
        fetch_document("https://example.org/doc", max_bytes=10)


def test_fetch_document_rejects_malformed_url(monkeypatch):
    calls = _patch_urlopen(monkeypatch, _FakeResponse(b""))

    with pytest.raises(DocumentRetrievalError) as excinfo:
        fetch_document("http://[::1/doc")

    assert "malformed URL" in excinfo.value.reason
    assert calls == []


def test_fetch_document_wraps_truncated_body(monkeypatch):
    class _TruncatedResponse(_FakeResponse):
        def read(self, size: int = -1) -> bytes:
            raise IncompleteRead(b"Article 1", 100)

    _patch_urlopen(monkeypatch, _TruncatedResponse(b""))

    with pytest.raises(DocumentRetrievalError) as excinfo:
        fetch_document("https://example.org/doc")

    assert isinstance(excinfo.value.__cause__, IncompleteRead)
