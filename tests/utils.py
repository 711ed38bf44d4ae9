"""Utilities for testing."""

from dataclasses import dataclass, field
from typing import Callable, Optional, Sequence, Union

import httpx

from resource_relay import Settings, create_app

UPSTREAM_URL = "https://upstream.example.com/api/v1/configmaps"
TEST_TOKEN = "test-token"


class AppFactory:
    """Factory for creating test apps with default settings."""

    def __init__(self, **defaults):
        """Initialize the factory with default settings."""
        self.defaults = defaults

    def __call__(self, *, client: httpx.AsyncClient, **overrides) -> Callable:
        """Create a new app with the given overrides, relaying through ``client``."""
        return create_app(
            Settings.model_validate(
                {
                    "bearer_token": TEST_TOKEN,
                    **self.defaults,
                    **overrides,
                },
            ),
            client=client,
        )


@dataclass
class TrackedAsyncStream(httpx.AsyncByteStream):
    """Mock async stream that counts how many times it was closed."""

    chunks: Sequence[bytes]
    fail_after: Optional[int] = None
    close_count: int = 0

    async def __aiter__(self):
        """Yield the chunks, failing midway if requested."""
        for i, chunk in enumerate(self.chunks):
            if self.fail_after is not None and i >= self.fail_after:
                raise httpx.ReadError("connection reset by peer")
            yield chunk

    async def aclose(self):
        """Record the close."""
        self.close_count += 1


@dataclass
class FakeUpstream:
    """Stand-in for the upstream listing service, recording every request it receives."""

    status_code: int = 200
    chunks: Sequence[bytes] = (b'{"kind": "ConfigMapList", "items": []}',)
    headers: Union[dict[str, str], list[tuple[str, str]]] = field(
        default_factory=lambda: {"content-type": "application/json"}
    )
    error: Optional[Exception] = None
    fail_after: Optional[int] = None

    requests: list[httpx.Request] = field(default_factory=list)
    streams: list[TrackedAsyncStream] = field(default_factory=list)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        """Answer one upstream request."""
        self.requests.append(request)
        if self.error is not None:
            raise self.error

        stream = TrackedAsyncStream(list(self.chunks), fail_after=self.fail_after)
        self.streams.append(stream)
        return httpx.Response(
            self.status_code,
            headers=self.headers,
            stream=stream,
        )

    @property
    def call_count(self) -> int:
        """Number of requests the upstream received."""
        return len(self.requests)

    @property
    def body(self) -> bytes:
        """The full body the upstream sends."""
        return b"".join(self.chunks)

    def client(self) -> httpx.AsyncClient:
        """Create a client whose requests are answered by this upstream."""
        return httpx.AsyncClient(transport=httpx.MockTransport(self))
