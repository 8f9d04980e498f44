"""ASGI entry point, e.g. ``uvicorn main:app``."""

from coretrack.main import app, create_app

__all__ = ["app", "create_app"]
