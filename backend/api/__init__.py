"""
Floe API package.

Provides the FastAPI application for the Floe CMS backend.
"""

from .app import app, create_app

__all__ = ["app", "create_app"]
