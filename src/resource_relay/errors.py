"""Failure outcomes of a resource listing request."""

from dataclasses import dataclass
from enum import Enum

from fastapi import status
from starlette.responses import JSONResponse


class ErrorKind(str, Enum):
    """Ways a listing request can fail, each mapped to one inbound status."""

    CLIENT_MISUSE = "client_misuse"
    LOCAL_CONSTRUCTION_FAILURE = "local_construction_failure"
    UPSTREAM_UNREACHABLE = "upstream_unreachable"
    UPSTREAM_REJECTED = "upstream_rejected"

    @property
    def status_code(self) -> int:
        """HTTP status reported to the caller for this kind of failure."""
        return _STATUS_CODES[self]


# Upstream rejections are normalized to 500 whatever the upstream returned.
_STATUS_CODES = {
    ErrorKind.CLIENT_MISUSE: status.HTTP_405_METHOD_NOT_ALLOWED,
    ErrorKind.LOCAL_CONSTRUCTION_FAILURE: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorKind.UPSTREAM_UNREACHABLE: status.HTTP_502_BAD_GATEWAY,
    ErrorKind.UPSTREAM_REJECTED: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


@dataclass(frozen=True)
class ListerError:
    """A failed listing request, rendered to the caller as ``{"error": message}``."""

    kind: ErrorKind
    message: str

    @property
    def status_code(self) -> int:
        return self.kind.status_code

    def to_response(self) -> JSONResponse:
        """Render the error as the structured JSON body sent to the caller."""
        return JSONResponse({"error": self.message}, status_code=self.status_code)
