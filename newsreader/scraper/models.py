"""Records passed between the renderer, the parsers and the HTTP layer."""

from __future__ import annotations

import enum
from dataclasses import asdict, dataclass, field
from typing import Any, List


class ArticleKind(str, enum.Enum):
    ARTICLE = "article"
    CATEGORY = "category"


@dataclass(frozen=True)
class ExtractionRequest:
    """A normalised navigation target.  Build with :func:`urls.make_request`."""

    target_url: str
    kind: ArticleKind = ArticleKind.ARTICLE


@dataclass
class RawPage:
    """Snapshot of a rendered page, handed from the fetcher to the extractors."""

    url: str
    html: str
    status_code: int
    final_url: str = ""
    title: str = ""


@dataclass
class ArticleResult:
    """Readable content extracted from a single article page."""

    title: str
    description: str
    content: str
    url: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class ArticleSummary:
    """One entry of a category listing."""

    title: str
    url: str
    description: str = ""
    image: str = ""
    source: str = ""
    category: str = ""

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class CategoryListing:
    """A category page reduced to its article summaries."""

    category: str
    source: str
    source_name: str
    source_url: str
    articles: List[ArticleSummary] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Serialise with the camelCase keys clients expect."""
        return {
            "category": self.category,
            "articles": [a.to_dict() for a in self.articles],
            "source": self.source,
            "sourceName": self.source_name,
            "sourceUrl": self.source_url,
        }
