"""HTTP plumbing shared by the client, its namespaces and the models."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import IO, Any

import httpx

from .auth.dispatcher import AuthDispatcher
from .auth.types import NO_AUTH, CredentialRequirement
from .exceptions import APIError, AuthenticationError, ClientError, ServerError

logger = logging.getLogger(__name__)

# 5xx bodies that mean "there was nothing to delete" on idempotent delete endpoints.
_BENIGN_DELETE_MESSAGES = ("No VMs with that name are currently deployed",)


@dataclass
class Request:
    """An outgoing API request, before credentials are attached."""

    method: str
    path: str
    requirement: CredentialRequirement = NO_AUTH
    params: dict[str, Any] | None = None
    json: Any = None
    files: dict[str, Any] | None = None
    headers: httpx.Headers = field(default_factory=httpx.Headers)


def handle_response(response: httpx.Response) -> Any:
    """Process HTTP response, raising appropriate errors for failures."""
    if response.status_code == 401:
        raise AuthenticationError(
            message=response.text or "Invalid or missing credentials",
            status_code=response.status_code,
            response=response,
        )

    if 400 <= response.status_code < 500:
        raise ClientError(
            message=response.text or "Orka API call failed",
            status_code=response.status_code,
            response=response,
        )

    if response.status_code >= 500:
        raise ServerError(
            message=response.text or "Orka API call failed",
            status_code=response.status_code,
            response=response,
        )

    if response.content:
        return response.json()
    return {}


def compact(**kwargs: Any) -> dict[str, Any]:
    """Build a JSON body or query, dropping keys whose value is None."""
    return {k: v for k, v in kwargs.items() if v is not None}


def is_benign_delete_error(error: APIError) -> bool:
    """Whether a failed idempotent delete actually means there was nothing to delete.

    The server reports this case as a 5xx with a fixed message instead of a
    success, so it is recognised by matching the body text.
    """
    if not isinstance(error, ServerError):
        return False
    return any(message in error.message for message in _BENIGN_DELETE_MESSAGES)


class Connection:
    """Sends requests to one Orka endpoint, attaching credentials on the way out."""

    def __init__(self, client: httpx.Client, base_url: str, dispatcher: AuthDispatcher) -> None:
        self._client = client
        self._base_url = base_url
        self._dispatcher = dispatcher

    @property
    def base_url(self) -> str:
        return self._base_url

    def _prepare(self, request: Request) -> Request:
        return self._dispatcher.apply(request, request.requirement)

    def send(self, request: Request) -> Any:
        """Send ``request`` and return the decoded JSON body.

        Raises:
            AuthConfigurationError: If a required credential is not configured.
            APIError: If the server answers with a 4xx or 5xx status.
            httpx.TransportError: On network failures.
        """
        self._prepare(request)
        logger.debug("%s %s (auth: %r)", request.method, request.path, request.requirement)
        response = self._client.request(
            request.method,
            f"{self._base_url}/{request.path}",
            params=request.params,
            json=request.json,
            files=request.files,
            headers=request.headers,
        )
        return handle_response(response)

    def request(
        self,
        method: str,
        path: str,
        *,
        auth: CredentialRequirement = NO_AUTH,
        params: dict[str, Any] | None = None,
        json: Any = None,
        files: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        """Shorthand for building a :class:`Request` and sending it."""
        return self.send(
            Request(
                method=method,
                path=path,
                requirement=auth,
                params=params,
                json=json,
                files=files,
                headers=httpx.Headers(headers or {}),
            )
        )

    def download(self, path: str, to: IO[bytes], *, auth: CredentialRequirement = NO_AUTH) -> int:
        """Stream the body of ``GET path`` into ``to``. Returns the number of bytes written."""
        request = self._prepare(Request(method="GET", path=path, requirement=auth))
        logger.debug("GET %s (streamed, auth: %r)", path, auth)
        written = 0
        with self._client.stream("GET", f"{self._base_url}/{path}", headers=request.headers) as response:
            if response.status_code >= 400:
                response.read()
                handle_response(response)
            for chunk in response.iter_bytes():
                to.write(chunk)
                written += len(chunk)
        return written
