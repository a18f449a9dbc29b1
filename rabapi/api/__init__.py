"""FastAPI HTTP layer package.

Public re-export so callers can write::

    from rabapi.api import app

    uvicorn rabapi.api:app --reload
"""

from rabapi.api.app import app, create_app

__all__ = ["app", "create_app"]
