"""Tokens namespace for the Orka SDK."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..auth.types import NO_AUTH, TOKEN
from ..models._lazy import KeyLike, key_of
from ..models.token_info import TokenInfo

if TYPE_CHECKING:
    from .._http import Connection


class TokensNamespace:
    """Namespace for authentication tokens."""

    def __init__(self, conn: Connection) -> None:
        self._conn = conn

    def create(self, user: KeyLike, password: str) -> str:
        """Create a token from a user's email and password. Needs no credentials.

        Returns:
            The new token. Pass it to a new client to use it.
        """
        body = self._conn.request(
            "POST",
            "token",
            auth=NO_AUTH,
            json={"email": key_of(user), "password": password},
        )
        return body["token"]

    def revoke(self) -> None:
        """Revoke the token this client is using."""
        self._conn.request("DELETE", "token", auth=TOKEN)

    def info(self) -> TokenInfo:
        """Whether this client's token is valid, and whom it belongs to."""
        body = self._conn.request("GET", "token", auth=TOKEN)
        return TokenInfo.from_dict(body, conn=self._conn)
