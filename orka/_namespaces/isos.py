"""ISOs namespace for the Orka SDK."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..auth.types import TOKEN
from ..models.iso import ISO, RemoteISO
from ..models.sequence import LazySequence
from ._upload import FileLike, upload_file

if TYPE_CHECKING:
    from .._http import Connection


class ISOsNamespace:
    """Namespace for ISOs. Everything here requires a token."""

    def __init__(self, conn: Connection) -> None:
        self._conn = conn

    def list(self) -> LazySequence[ISO]:
        def produce() -> list[ISO]:
            body = self._conn.request("GET", "resources/iso/list", auth=TOKEN)
            return [ISO.from_dict(entry, conn=self._conn) for entry in body.get("iso_attributes") or []]

        return LazySequence(produce)

    def get(self, name: str) -> ISO:
        return ISO(name, conn=self._conn)

    def list_remote(self) -> LazySequence[RemoteISO]:
        def produce() -> list[RemoteISO]:
            body = self._conn.request("GET", "resources/iso/list-remote", auth=TOKEN)
            return [RemoteISO(name, conn=self._conn) for name in body.get("isos") or []]

        return LazySequence(produce)

    def get_remote(self, name: str) -> RemoteISO:
        return RemoteISO(name, conn=self._conn)

    def upload(self, file: FileLike, *, name: str | None = None) -> ISO:
        uploaded = upload_file(self._conn, "resources/iso/upload", "iso", file, name)
        return ISO(uploaded, conn=self._conn)
