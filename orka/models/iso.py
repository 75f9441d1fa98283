"""ISO images used to install macOS on a VM. Intel nodes only."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .._http import Request, compact
from ..auth.types import TOKEN
from ._lazy import LazyModel, lazy_attr
from .types import parse_timestamp

if TYPE_CHECKING:
    from .._http import Connection


class ISO(LazyModel):
    """An ``.iso`` disk image, attached to a VM at deployment time."""

    _resource_name = "ISO"
    _entries_field = "iso_attributes"
    _match_field = "iso"

    size = lazy_attr()
    modification_time = lazy_attr()

    def __init__(self, name: str, *, conn: Connection, data: dict[str, Any] | None = None) -> None:
        super().__init__(name, conn=conn, data=data)

    @property
    def name(self) -> str:
        return self._key

    def _fetch_request(self) -> Request:
        return Request("GET", "resources/iso/list", requirement=TOKEN)

    def _deserialize(self, entry: dict[str, Any]) -> dict[str, Any]:
        return {
            "size": entry.get("iso_size"),
            "modification_time": parse_timestamp(entry["modified"]),
        }

    def rename(self, new_name: str) -> ISO:
        """Rename this ISO. VMs with the old name attached can no longer boot from it."""
        self._conn.request(
            "POST",
            "resources/iso/rename",
            auth=TOKEN,
            json=compact(iso=self.name, new_name=new_name),
        )
        return ISO(new_name, conn=self._conn)

    def copy(self, new_name: str) -> ISO:
        self._conn.request(
            "POST",
            "resources/iso/copy",
            auth=TOKEN,
            json=compact(iso=self.name, new_name=new_name),
        )
        return ISO(new_name, conn=self._conn)

    def delete(self) -> None:
        self._conn.request("POST", "resources/iso/delete", auth=TOKEN, json={"iso": self.name})


class RemoteISO:
    """An ISO in the Orka remote repo rather than local storage."""

    def __init__(self, name: str, *, conn: Connection) -> None:
        self.name = name
        self._conn = conn

    def pull(self, new_name: str) -> ISO:
        self._conn.request(
            "POST",
            "resources/iso/pull",
            auth=TOKEN,
            json=compact(image=self.name, new_name=new_name),
        )
        return ISO(new_name, conn=self._conn)

    def __repr__(self) -> str:
        return f"<RemoteISO {self.name!r}>"
