"""Process-wide logging configuration.

Every module logs through ``logging.getLogger(__name__)``; this only decides
where the records go.  Safe to call more than once.
"""

from __future__ import annotations

import logging
import sys

_FORMAT = "%(asctime)s %(levelname)-7s [%(name)s] %(message)s"
_configured = False


def configure_logging(level: str = "INFO") -> None:
    """Attach a single stderr handler to the ``newsreader`` logger tree."""
    global _configured

    root = logging.getLogger("newsreader")
    root.setLevel(level)
    if _configured:
        return

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(_FORMAT))
    root.addHandler(handler)
    _configured = True
