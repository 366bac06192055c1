"""URL normalisation helpers."""

from __future__ import annotations

import re
from urllib.parse import urljoin, urlsplit, urlunsplit

from newsreader.scraper.errors import InvalidInputError, MissingUrlError
from newsreader.scraper.models import ArticleKind, ExtractionRequest

_SCHEME_RE = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.\-]*://")
_ALLOWED_SCHEMES = {"http", "https"}


def normalize_url(url: str) -> str:
    """Return *url* trimmed, without fragment, and with an ``http(s)`` scheme.

    Scheme-less input (``example.com/a`` or ``//example.com/a``) gets
    ``https://`` prepended.

    Raises:
        MissingUrlError: If *url* is empty.
        InvalidInputError: If *url* uses another scheme or has no host.
    """
    if not isinstance(url, str) or not url.strip():
        raise MissingUrlError()

    candidate = url.strip().split("#", 1)[0]
    if not _SCHEME_RE.match(candidate):
        candidate = "https://" + candidate.lstrip("/")

    parts = urlsplit(candidate)
    if parts.scheme.lower() not in _ALLOWED_SCHEMES:
        raise InvalidInputError(f"Unsupported URL scheme: {parts.scheme!r}", url=url)
    if not parts.netloc:
        raise InvalidInputError(f"Invalid URL: {url!r}", url=url)

    return urlunsplit((parts.scheme.lower(), parts.netloc, parts.path, parts.query, ""))


def make_request(url: str, kind: ArticleKind = ArticleKind.ARTICLE) -> ExtractionRequest:
    return ExtractionRequest(target_url=normalize_url(url), kind=kind)


def absolutize(href: str, base_url: str) -> str:
    """Resolve *href* (relative, root-relative or ``//``-prefixed) against *base_url*."""
    href = (href or "").strip()
    if not href:
        return ""
    return urljoin(base_url, href)
