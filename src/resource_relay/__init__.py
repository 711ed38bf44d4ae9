"""
Resource Relay package.

This package contains the components that relay read-only resource listing requests
to authenticated upstream endpoints. It includes the FastAPI application factory, its
settings, and the request handlers.
"""

from .app import configure_app, create_app
from .config import Settings
from .handlers import ResourceListerHandler

__all__ = [
    "create_app",
    "configure_app",
    "Settings",
    "ResourceListerHandler",
]
