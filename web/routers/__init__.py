"""Router modules for the dev server."""

from web.routers import health

__all__ = ["health"]
