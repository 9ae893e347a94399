"""HTTP API package."""

from trackmatch.api.routes import router

__all__ = ["router"]
