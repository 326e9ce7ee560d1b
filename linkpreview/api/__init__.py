"""FastAPI HTTP layer package.

Public re-export so callers can write::

    from linkpreview.api import app

    uvicorn linkpreview.api:app --reload
"""

from linkpreview.api.app import app

__all__ = ["app"]
