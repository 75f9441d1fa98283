"""Information about the client's token."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from .user import User

if TYPE_CHECKING:
    from .._http import Connection


@dataclass
class TokenInfo:
    """Whether the token is usable, and whom it belongs to."""

    authenticated: bool
    token_revoked: bool
    user: User

    @classmethod
    def from_dict(cls, data: dict[str, Any], *, conn: Connection) -> TokenInfo:
        return cls(
            authenticated=bool(data.get("authenticated")),
            token_revoked=bool(data.get("is_token_revoked")),
            user=User(data["email"], conn=conn),
        )
