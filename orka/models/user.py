"""Orka users."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Iterable

from .._http import Request
from ..auth.types import LICENSE, TOKEN_AND_LICENSE
from ._lazy import LazyModel, lazy_attr

if TYPE_CHECKING:
    from .._http import Connection

# The API's name for "no group".
UNGROUPED = "$ungrouped"


def group_from_api(group: str | None) -> str | None:
    return None if group == UNGROUPED else group


def group_to_api(group: str | None) -> str:
    return group or UNGROUPED


def flatten_user_groups(body: dict[str, Any]) -> list[dict[str, Any]]:
    """Turn the ``users`` listing into one ``{"email", "group"}`` entry per user.

    Clusters with user groups answer with ``user_groups`` (group -> emails);
    older ones answer with a flat ``user_list``.
    """
    groups = body.get("user_groups")
    if groups is None:
        return [{"email": email, "group": UNGROUPED} for email in body.get("user_list") or []]
    return [{"email": email, "group": group} for group, emails in groups.items() for email in emails]


class User(LazyModel):
    """A user with an assigned license, identified by email."""

    _resource_name = "user"
    _match_field = "email"

    group = lazy_attr("The group the user is in, or None.")

    def __init__(self, email: str, *, conn: Connection, data: dict[str, Any] | None = None) -> None:
        super().__init__(email, conn=conn, data=data)

    @property
    def email(self) -> str:
        return self._key

    def _fetch_request(self) -> Request:
        return Request("GET", "users", requirement=LICENSE)

    def _extract_entries(self, body: Any) -> Iterable[dict[str, Any]]:
        return flatten_user_groups(body)

    def _deserialize(self, entry: dict[str, Any]) -> dict[str, Any]:
        return {"group": group_from_api(entry.get("group"))}

    def delete(self) -> None:
        """Delete the user. This invalidates all of the user's tokens.

        The user must have no Orka resources left other than their tokens.
        Requires a token and a license key.
        """
        self._conn.request("DELETE", f"users/{self.email}", auth=TOKEN_AND_LICENSE)

    def reset_password(self, password: str) -> None:
        """Reset the user's password. Requires a token and a license key."""
        self._conn.request(
            "POST",
            "users/password",
            auth=TOKEN_AND_LICENSE,
            json={"email": self.email, "password": password},
        )

    def change_group(self, group: str | None) -> None:
        """Move the user to ``group`` (None removes the group). Requires a license key."""
        self._conn.request("POST", f"users/groups/{group_to_api(group)}", auth=LICENSE, json=[self.email])
        self._update_cached(group=group)

    def remove_group(self) -> None:
        self.change_group(None)
