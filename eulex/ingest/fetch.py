from __future__ import annotations

import logging
from email.message import Message
from http.client import HTTPException
from urllib.error import HTTPError, URLError
from urllib.parse import urlparse
from urllib.request import Request, urlopen

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 30.0
DEFAULT_MAX_BYTES = 10 * 1024 * 1024
_ALLOWED_SCHEMES = {"http", "https"}


class DocumentRetrievalError(RuntimeError):
    """Raised when the text of a document cannot be retrieved."""

    def __init__(self, url: str, reason: str, status: int | None = None) -> None:
        super().__init__(f"Failed to fetch {url}: {reason}")
        self.url = url
        self.reason = reason
        self.status = status


def _charset(headers: Message | None, default: str = "utf-8") -> str:
    if headers is None:
        return default
    return headers.get_content_charset() or default


def fetch_document(
    url: str,
    *,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
    max_bytes: int = DEFAULT_MAX_BYTES,
) -> str:
    """Download ``url`` and return its body decoded as text."""

    try:
        scheme = urlparse(url).scheme.lower()
    except ValueError as exc:
        raise DocumentRetrievalError(url, f"malformed URL: {exc}") from exc
    if scheme not in _ALLOWED_SCHEMES:
        raise DocumentRetrievalError(url, f"unsupported URL scheme '{scheme or 'none'}'")

    try:
        request = Request(url, headers={"Accept": "text/plain, text/*;q=0.9, */*;q=0.1"})
    except ValueError as exc:
        raise DocumentRetrievalError(url, f"malformed URL: {exc}") from exc
    try:
        with urlopen(request, timeout=timeout) as response:
            status = getattr(response, "status", 200)
            if not 200 <= status < 300:
                raise DocumentRetrievalError(url, f"HTTP status {status}", status=status)
            raw = response.read(max_bytes + 1)
            charset = _charset(response.headers)
    except HTTPError as exc:
        logger.warning("Fetching %s failed with HTTP %s", url, exc.code)
        raise DocumentRetrievalError(url, f"HTTP status {exc.code}", status=exc.code) from exc
    except (URLError, OSError, HTTPException, ValueError) as exc:
        logger.warning("Fetching %s failed: %s", url, exc)
        raise DocumentRetrievalError(url, str(exc)) from exc

    if len(raw) > max_bytes:
        raise DocumentRetrievalError(url, f"document exceeds {max_bytes} bytes")

    logger.info("Fetched %d bytes from %s", len(raw), url)
    try:
        return raw.decode(charset, errors="replace")
    except LookupError:
        return raw.decode("utf-8", errors="replace")


__all__ = ["DEFAULT_MAX_BYTES", "DEFAULT_TIMEOUT_SECONDS", "DocumentRetrievalError", "fetch_document"]
