"""Handlers to process requests."""

from .healthz import HealthzHandler
from .resource_lister import ResourceListerHandler

__all__ = ["ResourceListerHandler", "HealthzHandler"]
