"""HTTP surface of the news reader.

Public re-export so callers can write::

    from newsreader.api import app

    uvicorn newsreader.api:app --reload
"""

from newsreader.api.app import app, create_app

__all__ = ["app", "create_app"]
