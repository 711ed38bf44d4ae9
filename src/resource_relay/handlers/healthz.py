"""Liveness endpoint for the relay itself."""

from dataclasses import dataclass, field

from fastapi import APIRouter


@dataclass
class HealthzHandler:
    """Report that the relay is serving requests. The upstream is never contacted."""

    router: APIRouter = field(default_factory=APIRouter)

    def __post_init__(self):
        """Register the health route."""
        self.router.add_api_route("", self.healthz, methods=["GET"])

    async def healthz(self) -> dict[str, str]:
        """Return the relay status."""
        return {"status": "ok"}
