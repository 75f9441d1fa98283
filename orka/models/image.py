"""Base images and empty disks in Orka storage."""

from __future__ import annotations

import os
from typing import IO, TYPE_CHECKING, Any, Union

from .._http import Request, compact
from ..auth.types import TOKEN
from ._lazy import LazyModel, lazy_attr
from .types import NOT_AVAILABLE, parse_timestamp

if TYPE_CHECKING:
    from .._http import Connection

PathOrFile = Union[str, "os.PathLike[str]", IO[bytes]]


class Image(LazyModel):
    """A disk image holding a VM's storage, OS included."""

    _resource_name = "image"
    _entries_field = "image_attributes"
    _match_field = "image"

    size = lazy_attr(
        "The size of this image. Generated empty disks are listed at ~192k until "
        "attached and formatted."
    )
    modification_time = lazy_attr()
    creation_time = lazy_attr("When the image was first created, or None if unknown.")
    owner = lazy_attr()

    def __init__(self, name: str, *, conn: Connection, data: dict[str, Any] | None = None) -> None:
        super().__init__(name, conn=conn, data=data)

    @property
    def name(self) -> str:
        return self._key

    def _fetch_request(self) -> Request:
        return Request("GET", "resources/image/list", requirement=TOKEN)

    def _deserialize(self, entry: dict[str, Any]) -> dict[str, Any]:
        date_added = entry.get("date_added")
        return {
            "size": entry.get("image_size"),
            "modification_time": parse_timestamp(entry["modified"]),
            "creation_time": None if date_added in (None, NOT_AVAILABLE) else parse_timestamp(date_added),
            "owner": entry.get("owner"),
        }

    def rename(self, new_name: str) -> Image:
        """Rename this image.

        VM configurations based on the old name can no longer be deployed.
        This object keeps pointing at the old name.

        Returns:
            A lazily-loaded handle for the renamed image.
        """
        self._conn.request(
            "POST",
            "resources/image/rename",
            auth=TOKEN,
            json=compact(image=self.name, new_name=new_name),
        )
        return Image(new_name, conn=self._conn)

    def copy(self, new_name: str) -> Image:
        self._conn.request(
            "POST",
            "resources/image/copy",
            auth=TOKEN,
            json=compact(image=self.name, new_name=new_name),
        )
        return Image(new_name, conn=self._conn)

    def delete(self) -> None:
        """Delete this image from Orka storage. Make sure it is not in use."""
        self._conn.request("POST", "resources/image/delete", auth=TOKEN, json={"image": self.name})

    def download(self, to: PathOrFile) -> int:
        """Download this image from cluster storage. Intel (``.img``) images only.

        Args:
            to: An open binary file, a file path, or a directory (the image name
                is used as the file name).

        Returns:
            The number of bytes written.
        """
        if hasattr(to, "write"):
            return self._conn.download(f"resources/image/download/{self.name}", to, auth=TOKEN)

        path = os.fspath(to)
        if os.path.isdir(path):
            path = os.path.join(path, self.name)
        with open(path, "wb") as f:
            return self._conn.download(f"resources/image/download/{self.name}", f, auth=TOKEN)

    def checksum(self) -> str | None:
        """The MD5 checksum of this image, or None while it is still being computed."""
        body = self._conn.request("GET", f"resources/image/checksum/{self.name}", auth=TOKEN)
        return (body or {}).get("checksum")


class RemoteImage:
    """An image in the Orka remote repo rather than local storage."""

    def __init__(self, name: str, *, conn: Connection) -> None:
        self.name = name
        self._conn = conn

    def pull(self, new_name: str) -> Image:
        """Copy this image into local storage. This can take a while.

        Returns:
            The lazily-loaded local image.
        """
        self._conn.request(
            "POST",
            "resources/image/pull",
            auth=TOKEN,
            json=compact(image=self.name, new_name=new_name),
        )
        return Image(new_name, conn=self._conn)

    def __repr__(self) -> str:
        return f"<RemoteImage {self.name!r}>"
