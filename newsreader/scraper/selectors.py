"""Selector strategy tables.

Every cascade used by the extractors lives here as data.  Order matters:
entries are tried top to bottom and the first acceptable match wins.
Site-tuned selectors (VnExpress, Tuoi Tre, Dan Tri, ...) come first,
generic HTML5 fallbacks last.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class FieldRule:
    """Where to read one text field from.

    ``attribute`` names a tag attribute to read instead of the element text
    (used for ``<meta content=...>``).
    """

    selector: str
    attribute: Optional[str] = None


@dataclass(frozen=True)
class ListingStrategy:
    """How to find article cards on a listing page and read each field.

    ``link`` is optional: when unset, the href of the title element is used,
    falling back to the first ``a[href]`` inside the card.
    """

    name: str
    root: str
    title: str
    description: str
    image: str
    link: Optional[str] = None


# ---------------------------------------------------------------------------
# Article pages
# ---------------------------------------------------------------------------

# Waited for (non-fatally) after navigation.
ARTICLE_READY_SELECTOR = (
    "article, .fck_detail, .content-detail, .article-content, "
    ".article-body, .article-detail, .content, main"
)

# Main-content candidates.  The last entry is accepted unconditionally.
CONTENT_SELECTORS: Tuple[str, ...] = (
    "article.fck_detail",
    "article.content-detail",
    "article.article-detail",
    ".fck_detail",
    ".content-detail",
    ".article-content",
    ".article-body",
    ".article_content",
    ".detail-content",
    ".singular-content",
    ".entry-content",
    ".post-content",
    "article",
    "main",
    ".main-content",
    "#main-content",
    "#content",
    ".content",
    "body",
)

TITLE_RULES: Tuple[FieldRule, ...] = (
    FieldRule("h1.title-detail"),
    FieldRule("h1.title-news"),
    FieldRule("h1.title_news_detail"),
    FieldRule("h1.title_news"),
    FieldRule("h1.detail-title"),
    FieldRule("h1.article-title"),
    FieldRule("h1"),
)

DESCRIPTION_RULES: Tuple[FieldRule, ...] = (
    FieldRule("p.description"),
    FieldRule(".description"),
    FieldRule(".sapo"),
    FieldRule(".sapo-detail"),
    FieldRule(".detail-sapo"),
    FieldRule(".singular-sapo"),
    FieldRule(".lead"),
    FieldRule(".summary"),
    FieldRule('meta[property="og:description"]', attribute="content"),
    FieldRule('meta[name="description"]', attribute="content"),
)

# Removed from the selected container before it is returned.
NOISE_SELECTORS: Tuple[str, ...] = (
    # structural / interactive
    "script", "style", "noscript", "template", "iframe", "link", "meta",
    "button", "form", "input", "select", "textarea", "label",
    "nav", "header", "footer", "aside",
    # media
    "figure", "figcaption", "img", "picture", "video", "audio", "source",
    "track", "svg", "canvas", "map", "object", "embed",
    # ads, social and related-content boxes
    ".ad", ".ads", ".advertisement", ".banner", ".popup",
    ".social", ".social-share", ".social-button", ".share",
    ".comment", ".related-news", ".tplCaption", ".image", ".photo",
    '[class^="box-"]', '[class*=" box-"]',
)

# Bot-challenge interstitials (Cloudflare and friends).
CHALLENGE_TITLE_MARKERS: Tuple[str, ...] = (
    "just a moment",
    "attention required",
    "verifying you are human",
)
CHALLENGE_BODY_MARKERS: Tuple[str, ...] = (
    "checking your browser",
    "verify you are human",
    "enable javascript and cookies to continue",
)

DEFAULT_TITLE = "Không có tiêu đề"

# ---------------------------------------------------------------------------
# Category listing pages
# ---------------------------------------------------------------------------

LISTING_READY_SELECTOR = "article, .item-news, .news-item, .story"

LISTING_STRATEGIES: Tuple[ListingStrategy, ...] = (
    ListingStrategy(
        name="vnexpress",
        root="article.item-news",
        title="h2.title-news a, h3.title-news a, h2 a, h3 a",
        description=".description a, .description",
        image=".thumb-art img, .thumb-art picture img, img.thumb, img[data-src]",
    ),
    ListingStrategy(
        name="vnexpress-common",
        root=(
            ".item-news, .item-news-common, "
            ".list-news-subfolder .item-news, .list-news-subfolder .item-news-common"
        ),
        title="h2 a, h3 a, h2.title-news a, h3.title-news a, a.title-news, .title-news a",
        description=".description, .description a, .sapo, .sapo a",
        image="img[data-src], img[src]",
    ),
    ListingStrategy(
        name="generic-cards",
        root="article, .news-item, .story, .news-story",
        title="h2 a, h3 a, .title-news a, .title a, h2, h3, .title, .title-news, a[title]",
        description="p.description, .description, .sapo, .lead, .summary",
        image="img[data-src], img[src]",
        link="a[href]",
    ),
    ListingStrategy(
        name="generic-lists",
        root=".list-news li, .list-article .article-item, .list-news .news-item",
        title="h2 a, h3 a, .title-news a, .title a, .title-news",
        description=".description, .sapo, .lead, .summary, p",
        image="img[data-src], img[src]",
    ),
)
