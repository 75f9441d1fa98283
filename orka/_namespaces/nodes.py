"""Nodes namespace for the Orka SDK."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..auth.types import token_or_admin
from ..models.node import Node, node_list_path
from ..models.sequence import LazySequence

if TYPE_CHECKING:
    from .._http import Connection


class NodesNamespace:
    """Namespace for nodes.

    With ``admin=True`` nodes dedicated to other users are included, which
    needs a license key on top of the token.
    """

    def __init__(self, conn: Connection) -> None:
        self._conn = conn

    def list(self, *, admin: bool = False) -> LazySequence[Node]:
        def produce() -> list[Node]:
            body = self._conn.request("GET", node_list_path(admin), auth=token_or_admin(admin))
            return [Node.from_dict(entry, conn=self._conn, admin=admin) for entry in body.get("nodes") or []]

        return LazySequence(produce)

    def get(self, name: str, *, admin: bool = False) -> Node:
        return Node(name, conn=self._conn, admin=admin)
