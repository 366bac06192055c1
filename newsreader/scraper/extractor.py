"""Content extraction: turns a rendered :class:`RawPage` into an :class:`ArticleResult`."""

from __future__ import annotations

import logging
import re
from typing import Iterable, Optional, Sequence, Union

from bs4 import BeautifulSoup, Comment, Tag

from newsreader.config import settings
from newsreader.scraper.errors import ContentNotFoundError
from newsreader.scraper.models import ArticleResult, RawPage
from newsreader.scraper.selectors import (
    CHALLENGE_BODY_MARKERS,
    CHALLENGE_TITLE_MARKERS,
    CONTENT_SELECTORS,
    DEFAULT_TITLE,
    DESCRIPTION_RULES,
    NOISE_SELECTORS,
    TITLE_RULES,
    FieldRule,
)

logger = logging.getLogger(__name__)

_WS_RE = re.compile(r"\s+")

Node = Union[BeautifulSoup, Tag]


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _text(node: Node) -> str:
    """Whitespace-collapsed text of *node*."""
    return _WS_RE.sub(" ", node.get_text(" ", strip=True)).strip()


def _first_field(soup: BeautifulSoup, rules: Iterable[FieldRule]) -> str:
    """Return the first non-empty value produced by *rules*, or ``""``."""
    for rule in rules:
        for el in soup.select(rule.selector):
            if rule.attribute:
                value = el.get(rule.attribute) or ""
                if isinstance(value, list):
                    value = " ".join(value)
                value = _WS_RE.sub(" ", value).strip()
            else:
                value = _text(el)
            if value:
                return value
    return ""


def _document_title(soup: BeautifulSoup) -> str:
    """``<title>`` text up to the first ``|`` (site names follow the bar)."""
    if soup.title is None:
        return ""
    return _text(soup.title).split("|")[0].strip()


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def is_challenge_page(title: str, body_text: str) -> bool:
    """Return ``True`` if the page looks like an anti-bot interstitial."""
    title = (title or "").lower()
    body = (body_text or "").lower()
    return any(m in title for m in CHALLENGE_TITLE_MARKERS) or any(
        m in body for m in CHALLENGE_BODY_MARKERS
    )


def select_main_content(
    soup: BeautifulSoup,
    selectors: Sequence[str] = CONTENT_SELECTORS,
    min_length: Optional[int] = None,
) -> Node:
    """Pick the main content container.

    Selectors are tried in order and the first element whose stripped text is
    longer than *min_length* wins.  The last selector is accepted as soon as
    it matches, whatever its length.  When nothing matches at all the whole
    document is returned.
    """
    threshold = settings.min_content_length if min_length is None else min_length
    last = len(selectors) - 1
    for index, selector in enumerate(selectors):
        el = soup.select_one(selector)
        if el is None:
            continue
        if index == last or len(el.get_text().strip()) > threshold:
            logger.debug("Main content matched %r", selector)
            return el
    return soup.body or soup


def extract_title(soup: BeautifulSoup) -> str:
    return _first_field(soup, TITLE_RULES) or _document_title(soup) or DEFAULT_TITLE


def extract_description(soup: BeautifulSoup) -> str:
    return _first_field(soup, DESCRIPTION_RULES)


def prune_empty(root: Node) -> int:
    """Remove every descendant of *root* left with no text and no child tags.

    Walks the subtree once in post-order (children before parents), so a
    parent emptied by the removal of its children is removed in the same
    pass.  Returns the number of removed elements.
    """
    removed = 0
    for el in reversed(root.find_all(True)):
        if el.find(True) is None and not el.get_text(strip=True):
            el.decompose()
            removed += 1
    return removed


def clean_content(root: Node, noise: Sequence[str] = NOISE_SELECTORS) -> Node:
    """Strip comments, noise elements and empty leaves from *root* in place."""
    for comment in root.find_all(string=lambda s: isinstance(s, Comment)):
        comment.extract()
    for el in root.select(", ".join(noise)):
        # An ancestor may already have been decomposed in this loop.
        if not el.decomposed:
            el.decompose()
    prune_empty(root)
    return root


def extract_article(raw: RawPage) -> ArticleResult:
    """Extract title, description and cleaned content markup from *raw*.

    Raises:
        ContentNotFoundError: If the selected container holds no text at all.
    """
    soup = BeautifulSoup(raw.html, "html.parser")

    # Read the metadata first: cleaning may drop the header holding the h1.
    title = extract_title(soup)
    description = extract_description(soup)

    container = clean_content(select_main_content(soup))
    if not container.get_text(strip=True):
        raise ContentNotFoundError(
            f"No readable content found at {raw.url}", url=raw.url
        )

    content = container.decode_contents().strip()
    return ArticleResult(title=title, description=description, content=content, url=raw.url)
