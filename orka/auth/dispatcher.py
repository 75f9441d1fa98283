"""Attaches credentials to outgoing requests based on what each endpoint declares."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..exceptions import AuthConfigurationError
from .constants import LICENSE_HEADER, TOKEN_HEADER
from .credentials import CredentialStore
from .types import CredentialKind, CredentialRequirement

if TYPE_CHECKING:
    from .._http import Request


class AuthDispatcher:
    """Resolves a request's credential requirement against a credential store.

    Each required kind is looked up independently. If any of them is missing the
    request is rejected before a single header is written.
    """

    def __init__(self, store: CredentialStore) -> None:
        self._store = store

    @property
    def store(self) -> CredentialStore:
        return self._store

    def apply(self, request: Request, requirement: CredentialRequirement) -> Request:
        """Set the auth headers ``requirement`` calls for on ``request``.

        Headers the caller set explicitly on the request are left alone.

        Raises:
            AuthConfigurationError: If a required credential is not configured.
        """
        pending: dict[str, str] = {}

        for kind in requirement:
            if kind is CredentialKind.NONE:
                continue

            value = self._store.get(kind)
            if value is None:
                raise AuthConfigurationError(f"Missing {kind.value} credential.")

            if kind is CredentialKind.TOKEN:
                pending[TOKEN_HEADER] = f"Bearer {value}"
            elif kind is CredentialKind.LICENSE:
                pending[LICENSE_HEADER] = value
            else:  # pragma: no cover - CredentialKind is closed
                raise AuthConfigurationError(f"Invalid Orka auth type: {kind!r}.")

        for header, value in pending.items():
            if header not in request.headers:
                request.headers[header] = value

        return request
