"""Logs namespace for the Orka SDK."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .._http import compact
from ..auth.types import LICENSE, TOKEN_AND_LICENSE
from ..models.log_entry import LogEntry
from ..models.sequence import LazySequence

if TYPE_CHECKING:
    from .._http import Connection


class LogsNamespace:
    """Namespace for the environment's audit log."""

    def __init__(self, conn: Connection) -> None:
        self._conn = conn

    def list(self, *, limit: int | None = None) -> LazySequence[LogEntry]:
        """CLI commands and API requests run against the environment. Requires a license key.

        Args:
            limit: Maximum number of entries to return.
        """

        def produce() -> list[LogEntry]:
            body = self._conn.request("POST", "logs/query", auth=LICENSE, params=compact(limit=limit))
            return [LogEntry.from_dict(entry) for entry in body.get("logs") or []]

        return LazySequence(produce)

    def delete(self) -> None:
        """Delete every log entry. Requires a token and a license key."""
        self._conn.request("DELETE", "logs", auth=TOKEN_AND_LICENSE)
