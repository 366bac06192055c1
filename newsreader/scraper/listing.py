"""Category page parsing: turns listing HTML into :class:`ArticleSummary` items."""

from __future__ import annotations

import logging
import re
from typing import List, Optional, Sequence

from bs4 import BeautifulSoup, Tag

from newsreader.scraper.models import ArticleSummary
from newsreader.scraper.selectors import LISTING_STRATEGIES, ListingStrategy
from newsreader.scraper.urls import absolutize

logger = logging.getLogger(__name__)

_WS_RE = re.compile(r"\s+")


def _clean(text: str) -> str:
    return _WS_RE.sub(" ", text or "").strip()


def _image_src(img: Optional[Tag]) -> str:
    """Prefer lazy-load ``data-src`` over ``src``; skip inline data URIs."""
    if img is None:
        return ""
    for attr in ("data-src", "data-original", "src"):
        value = (img.get(attr) or "").strip()
        if value and not value.startswith("data:"):
            return value
    return ""


def _summary_from_card(
    card: Tag,
    strategy: ListingStrategy,
    base_url: str,
) -> Optional[ArticleSummary]:
    """Read one card; ``None`` when it lacks a title or a link."""
    title_el = card.select_one(strategy.title)
    title = _clean(title_el.get_text(" ")) if title_el is not None else ""
    if not title and title_el is not None:
        title = _clean(title_el.get("title") or "")

    href = ""
    if strategy.link:
        link_el = card.select_one(strategy.link)
        href = link_el.get("href", "") if link_el is not None else ""
    if not href and title_el is not None and title_el.name == "a":
        href = title_el.get("href", "")
    if not href:
        fallback = card.select_one("a[href]")
        href = fallback.get("href", "") if fallback is not None else ""

    url = absolutize(href, base_url)
    if not title or not url or url.startswith(("javascript:", "mailto:")):
        return None

    desc_el = card.select_one(strategy.description)
    description = _clean(desc_el.get_text(" ")) if desc_el is not None else ""

    image = absolutize(_image_src(card.select_one(strategy.image)), base_url)

    return ArticleSummary(title=title, url=url, description=description, image=image)


def run_strategy(
    soup: BeautifulSoup,
    strategy: ListingStrategy,
    base_url: str,
) -> List[ArticleSummary]:
    """Apply one strategy to the whole document, keeping valid summaries only."""
    summaries = []
    for card in soup.select(strategy.root):
        summary = _summary_from_card(card, strategy, base_url)
        if summary is not None:
            summaries.append(summary)
    return summaries


def extract_summaries(
    html: str,
    base_url: str,
    *,
    category: str = "",
    source: str = "",
    limit: int = 15,
    strategies: Sequence[ListingStrategy] = LISTING_STRATEGIES,
) -> List[ArticleSummary]:
    """Return up to *limit* summaries from the first strategy that finds any.

    An empty list means every strategy came back empty.
    """
    soup = BeautifulSoup(html, "html.parser")
    for strategy in strategies:
        summaries = run_strategy(soup, strategy, base_url)
        if not summaries:
            continue
        logger.debug(
            "Listing strategy %r matched %d article(s) on %s",
            strategy.name, len(summaries), base_url,
        )
        result = summaries[:limit]
        for summary in result:
            summary.source = source
            summary.category = category
        return result
    return []
