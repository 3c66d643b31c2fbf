"""FastAPI HTTP layer package.

Public re-export so callers can write::

    from urlqa.api import app

    uvicorn urlqa.api:app --reload
"""

from urlqa.api.app import app, create_app

__all__ = ["app", "create_app"]
