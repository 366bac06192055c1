"""Runtime settings for the news reader: server, browser, timeouts and cache.

Every field has a default and an environment variable that overrides it.
A `.env` next to `pyproject.toml` is read on import without clobbering
variables that are already set.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# newsreader/config.py -> repo root
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_env_path, override=False)

_DESKTOP_UA = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/122.0.0.0 Safari/537.36"
)


def _env_flag(name: str, default: str) -> bool:
    return os.environ.get(name, default).strip().lower() in {"1", "true", "yes", "on"}


@dataclass
class Settings:
    # ------------------------------------------------------------------
    # HTTP server
    # ------------------------------------------------------------------
    host: str = field(default_factory=lambda: os.environ.get("HOST", "0.0.0.0"))
    port: int = field(default_factory=lambda: int(os.environ.get("PORT", "3000")))
    # Serverless deployments import the app but never call listen().
    serverless: bool = field(default_factory=lambda: _env_flag("SERVERLESS", "false"))
    log_level: str = field(
        default_factory=lambda: os.environ.get("LOG_LEVEL", "INFO").upper()
    )

    # ------------------------------------------------------------------
    # Browser
    # ------------------------------------------------------------------
    headless: bool = field(default_factory=lambda: _env_flag("BROWSER_HEADLESS", "true"))
    browser_executable: str = field(
        default_factory=lambda: os.environ.get("BROWSER_EXECUTABLE", "")
    )
    browser_launch_timeout: float = field(
        default_factory=lambda: float(os.environ.get("BROWSER_LAUNCH_TIMEOUT", "60.0"))
    )
    viewport_width: int = field(
        default_factory=lambda: int(os.environ.get("VIEWPORT_WIDTH", "1920"))
    )
    viewport_height: int = field(
        default_factory=lambda: int(os.environ.get("VIEWPORT_HEIGHT", "1080"))
    )
    user_agent: str = field(
        default_factory=lambda: os.environ.get("SCRAPER_USER_AGENT", _DESKTOP_UA)
    )
    accept_language: str = field(
        default_factory=lambda: os.environ.get(
            "SCRAPER_ACCEPT_LANGUAGE", "vi-VN,vi;q=0.9,en-US;q=0.8,en;q=0.7"
        )
    )
    locale: str = field(default_factory=lambda: os.environ.get("SCRAPER_LOCALE", "vi-VN"))

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------
    navigation_timeout: float = field(
        default_factory=lambda: float(os.environ.get("NAVIGATION_TIMEOUT", "30.0"))
    )
    selector_timeout: float = field(
        default_factory=lambda: float(os.environ.get("SELECTOR_TIMEOUT", "10.0"))
    )
    # "domcontentloaded" | "load" | "networkidle" | "commit"
    wait_until: str = field(
        default_factory=lambda: os.environ.get("NAVIGATION_WAIT_UNTIL", "domcontentloaded")
    )
    challenge_wait: float = field(
        default_factory=lambda: float(os.environ.get("CHALLENGE_WAIT", "5.0"))
    )

    # ------------------------------------------------------------------
    # Extraction
    # ------------------------------------------------------------------
    min_content_length: int = field(
        default_factory=lambda: int(os.environ.get("MIN_CONTENT_LENGTH", "300"))
    )
    category_limit: int = field(
        default_factory=lambda: int(os.environ.get("CATEGORY_LIMIT", "15"))
    )

    # ------------------------------------------------------------------
    # Result cache
    # ------------------------------------------------------------------
    cache_ttl: float = field(
        default_factory=lambda: float(os.environ.get("CACHE_TTL", "900"))
    )
    cache_maxsize: int = field(
        default_factory=lambda: int(os.environ.get("CACHE_MAXSIZE", "512"))
    )
    cache_check_period: float = field(
        default_factory=lambda: float(os.environ.get("CACHE_CHECK_PERIOD", "120"))
    )

    @property
    def render_deadline(self) -> float:
        """Upper bound in seconds for one complete page render."""
        return self.navigation_timeout + self.selector_timeout + self.challenge_wait + 5.0


# Module-level singleton, import this everywhere:
#   from newsreader.config import settings
settings = Settings()
