"""Relay of resource listing requests to an authenticated upstream endpoint."""

import logging
import time
from dataclasses import dataclass, field
from typing import AsyncIterator, Union

import httpx
from fastapi import Request
from starlette.background import BackgroundTask
from starlette.responses import Response, StreamingResponse

from ..errors import ErrorKind, ListerError
from ..utils import safe_headers

logger = logging.getLogger(__name__)


def _describe(exc: Exception) -> str:
    # Some httpx errors (e.g. timeouts) carry an empty message
    return str(exc) or exc.__class__.__name__


@dataclass(frozen=True)
class ResourceListerHandler:
    """List resources of one kind from the upstream, on behalf of the caller.

    Every listing is issued as a GET against ``upstream_url`` carrying the configured
    bearer credential. The caller receives the upstream body unaltered when the
    upstream answers 200, and a ``{"error": ...}`` body otherwise.
    """

    bearer_token: str = field(repr=False)
    upstream_url: str
    client: httpx.AsyncClient = field(repr=False)

    async def fetch(self, request: Request) -> Union[ListerError, httpx.Response]:
        """Issue the upstream listing request for an inbound request.

        Returns the open, streaming upstream response when the upstream answered 200.
        The caller owns that response and must close it. Every other outcome is
        returned as a ``ListerError``, with any upstream response already closed.
        """
        if request.method != "GET":
            logger.warning(
                "Rejected %s request to %s", request.method, request.url.path
            )
            return ListerError(
                ErrorKind.CLIENT_MISUSE, "invalid method: only GET is allowed"
            )

        try:
            rp_req = self.client.build_request(
                "GET",
                self.upstream_url,
                headers={"Authorization": f"Bearer {self.bearer_token}"},
            )
        except (httpx.InvalidURL, ValueError) as e:
            logger.warning(
                "Failed to build request for %r: %s", self.upstream_url, _describe(e)
            )
            return ListerError(
                ErrorKind.LOCAL_CONSTRUCTION_FAILURE,
                f"failed to create GET request: {_describe(e)}",
            )

        logger.debug(f"Listing resources from {rp_req.url}")

        start_time = time.perf_counter()
        try:
            rp_resp = await self.client.send(rp_req, stream=True)
        except httpx.RequestError as e:
            logger.warning("GET %s failed: %s", rp_req.url, _describe(e))
            return ListerError(
                ErrorKind.UPSTREAM_UNREACHABLE, f"GET request failed: {_describe(e)}"
            )
        proxy_time = time.perf_counter() - start_time

        logger.debug(
            f"Received response status {rp_resp.status_code!r} from {rp_req.url} in {proxy_time:.3f}s"
        )

        if rp_resp.status_code != httpx.codes.OK:
            await rp_resp.aclose()
            upstream_status = f"{rp_resp.status_code} {rp_resp.reason_phrase}".strip()
            logger.warning(
                "Upstream %s refused to list resources: %s", rp_req.url, upstream_status
            )
            return ListerError(
                ErrorKind.UPSTREAM_REJECTED,
                f"console service account cannot list resource: {upstream_status}",
            )

        return rp_resp

    async def list_resources(self, request: Request) -> Response:
        """Relay a listing request to the upstream and stream back its response."""
        result = await self.fetch(request)
        if isinstance(result, ListerError):
            return result.to_response()

        # The generator closes the upstream body once iterated; the background task
        # covers a response that is never iterated. Closing twice is a no-op.
        return StreamingResponse(
            self._relay_body(result),
            status_code=result.status_code,
            headers=safe_headers(result.headers),
            background=BackgroundTask(result.aclose),
        )

    async def _relay_body(self, rp_resp: httpx.Response) -> AsyncIterator[bytes]:
        try:
            async for chunk in rp_resp.aiter_bytes():
                yield chunk
        except httpx.HTTPError as e:
            logger.error(
                "Relaying body from %s failed after status was sent: %s",
                self.upstream_url,
                _describe(e),
            )
            raise
        finally:
            await rp_resp.aclose()
