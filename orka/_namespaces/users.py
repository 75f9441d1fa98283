"""Users namespace for the Orka SDK."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .._http import compact
from ..auth.types import LICENSE, TOKEN
from ..models.sequence import LazySequence
from ..models.user import User, flatten_user_groups, group_to_api

if TYPE_CHECKING:
    from .._http import Connection


class UsersNamespace:
    """Namespace for user management."""

    def __init__(self, conn: Connection) -> None:
        self._conn = conn

    def list(self) -> LazySequence[User]:
        """List the users in the environment. Requires a license key.

        The request runs when the sequence is first consumed.
        """

        def produce() -> list[User]:
            body = self._conn.request("GET", "users", auth=LICENSE)
            return [User.from_dict(entry, conn=self._conn) for entry in flatten_user_groups(body)]

        return LazySequence(produce)

    def get(self, email: str) -> User:
        """Get a lazily-loaded user. No request is made until an attribute is read.

        Returning successfully does not mean the user exists.
        """
        return User(email, conn=self._conn)

    def create(self, email: str, password: str, *, group: str | None = None) -> User:
        """Create a user. Requires a license key.

        Args:
            email: The user's email, which is also their username.
            password: At least 6 characters.
            group: The user's group. Cannot be changed later.
        """
        self._conn.request(
            "POST",
            "users",
            auth=LICENSE,
            json=compact(email=email, password=password, group=group),
        )
        return User.from_dict({"email": email, "group": group_to_api(group)}, conn=self._conn)

    def update_credentials(self, *, email: str | None = None, password: str | None = None) -> None:
        """Change the email and/or password of the user the token belongs to. Requires a token."""
        if email is None and password is None:
            raise ValueError("Must update either the email or password, or both.")
        self._conn.request("PUT", "users", auth=TOKEN, json=compact(email=email, password=password))
