"""
Resource Relay API.

This module defines the FastAPI application for the Resource Relay, which lists
resources from upstream endpoints on behalf of its callers, presenting a bearer
credential the callers never see.
"""

import logging
import ssl
from contextlib import asynccontextmanager
from typing import Optional, Union

import httpx
from fastapi import FastAPI

from .config import Settings
from .handlers import HealthzHandler, ResourceListerHandler

logger = logging.getLogger(__name__)

# Every method reaches the handler, so that non-GET requests get its error body
LISTER_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


def build_client(settings: Settings) -> httpx.AsyncClient:
    """Create the HTTP client shared by all lister routes."""
    verify: Union[bool, ssl.SSLContext] = settings.upstream_verify_tls
    if settings.upstream_verify_tls and settings.upstream_ca_file:
        verify = ssl.create_default_context(cafile=str(settings.upstream_ca_file))

    return httpx.AsyncClient(
        timeout=httpx.Timeout(timeout=settings.upstream_timeout),
        verify=verify,
        http2=True,
    )


def configure_app(
    app: FastAPI,
    settings: Optional[Settings] = None,
    *,
    client: httpx.AsyncClient,
) -> FastAPI:
    """
    Mount the health and lister routes onto an existing FastAPI application.

    The caller owns the application's lifespan and must close ``client`` on
    shutdown; ``build_client`` creates one configured from ``settings``.
    """
    settings = settings or Settings()
    token = settings.token()

    if settings.healthz_prefix:
        app.include_router(HealthzHandler().router, prefix=settings.healthz_prefix)

    for route, upstream_url in settings.listers.items():
        handler = ResourceListerHandler(
            bearer_token=token,
            upstream_url=str(upstream_url),
            client=client,
        )
        app.add_api_route(route, handler.list_resources, methods=LISTER_METHODS)

    return app


def create_app(
    settings: Optional[Settings] = None,
    client: Optional[httpx.AsyncClient] = None,
) -> FastAPI:
    """FastAPI Application Factory."""
    settings = settings or Settings()
    client = client or build_client(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        assert settings

        logger.info(
            "Relaying resource listings:\n%s",
            "\n".join(
                [f" - {route} -> {url}" for route, url in settings.listers.items()]
            ),
        )

        yield

        await client.aclose()

    app = FastAPI(
        openapi_url=None,
        lifespan=lifespan,
    )

    return configure_app(app, settings, client=client)
