"""Static category registry and the list of popular news sources."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from types import MappingProxyType
from typing import Any, Mapping

from newsreader.scraper.errors import UnknownCategoryError

VNEXPRESS_URL = "https://vnexpress.net"
VNEXPRESS_SOURCE_ID = "vnexpress"
VNEXPRESS_SOURCE_NAME = "VnExpress"

_CATEGORY_SLUGS = (
    "thoi-su",
    "the-gioi",
    "kinh-doanh",
    "giai-tri",
    "the-thao",
    "phap-luat",
    "giao-duc",
    "suc-khoe",
    "doi-song",
    "du-lich",
    "khoa-hoc",
    "so-hoa",
    "xe",
    "tuan-viet-nam",
    "bat-dong-san",
    "ban-doc",
)

# category id -> canonical listing URL
CATEGORY_REGISTRY: Mapping[str, str] = MappingProxyType(
    {slug: f"{VNEXPRESS_URL}/{slug}" for slug in _CATEGORY_SLUGS}
)


@dataclass(frozen=True)
class NewsSource:
    id: str
    name: str
    url: str
    logo: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


POPULAR_SOURCES = (
    NewsSource(
        id="vnexpress",
        name="VnExpress",
        url="https://vnexpress.net",
        logo="https://s1.vnecdn.net/vnexpress/restruct/i/v866/logo_default.jpg",
    ),
    NewsSource(
        id="dantri",
        name="Dân Trí",
        url="https://dantri.com.vn",
        logo="https://cdnweb.dantri.com.vn/2024/03/07/logo-dt-65-65x65.png",
    ),
    NewsSource(
        id="zingnews",
        name="Zing News",
        url="https://zingnews.vn",
        logo="https://static-znews.zadn.vn/images/logo-zing-home.svg",
    ),
    NewsSource(
        id="tuoitre",
        name="Tuổi Trẻ",
        url="https://tuoitre.vn",
        logo="https://tuoitre.urbexs.com/photo/1-0/logo-tuoi-tre-online.png",
    ),
    NewsSource(
        id="thanhnien",
        name="Thanh Niên",
        url="https://thanhnien.vn",
        logo="https://static.thanhnien.com.vn/Resources/Origin/Images/logo-01.png",
    ),
)


def normalize_category_id(category_id: str) -> str:
    """Trim, lower-case and strip surrounding slashes from *category_id*."""
    return (category_id or "").strip().lower().strip("/")


def resolve_category(
    category_id: str,
    registry: Mapping[str, str] = CATEGORY_REGISTRY,
) -> str:
    """Return the listing URL registered for *category_id*.

    Raises:
        UnknownCategoryError: If the id is not registered.
    """
    key = normalize_category_id(category_id)
    try:
        return registry[key]
    except KeyError:
        raise UnknownCategoryError(category_id) from None
