"""Web API for sanctum."""

from .app import create_app

__all__ = ["create_app"]
