"""Audit log entries."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from ..exceptions import UnrecognisedStateError
from .types import parse_timestamp

SUPPORTED_LOG_VERSION = "1.0"


@dataclass(frozen=True)
class LogRequest:
    """The request half of a log event."""

    body: Any
    headers: dict[str, str]
    method: str
    url: str


@dataclass(frozen=True)
class LogResponse:
    body: Any
    headers: dict[str, str]
    status_code: int


@dataclass(frozen=True)
class LogUser:
    email: str
    id: str


@dataclass(frozen=True)
class LogEntry:
    """A CLI command or API request executed against the environment."""

    id: str
    creation_time: datetime
    request: LogRequest
    response: LogResponse
    user: LogUser | None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> LogEntry:
        """Build a log entry.

        Raises:
            UnrecognisedStateError: If the entry uses a log format other than 1.0.
        """
        version = data.get("logVersion")
        if version != SUPPORTED_LOG_VERSION:
            raise UnrecognisedStateError(f"Unknown log version {version!r}.")

        request = data["request"]
        response = data["response"]
        user = data.get("user")
        return cls(
            id=data["id"],
            creation_time=parse_timestamp(data["createdAt"]),
            request=LogRequest(
                body=request.get("body"),
                headers=request.get("headers") or {},
                method=request["method"],
                url=request["url"],
            ),
            response=LogResponse(
                body=response.get("body"),
                headers=response.get("headers") or {},
                status_code=response["statusCode"],
            ),
            user=LogUser(email=user["email"], id=user["id"]) if user else None,
        )
