"""Images namespace for the Orka SDK."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..auth.types import TOKEN
from ..models.image import Image, RemoteImage
from ..models.sequence import LazySequence
from ._upload import FileLike, upload_file

if TYPE_CHECKING:
    from .._http import Connection


class ImagesNamespace:
    """Namespace for base images and empty disks. Everything here requires a token."""

    def __init__(self, conn: Connection) -> None:
        self._conn = conn

    def list(self) -> LazySequence[Image]:
        def produce() -> list[Image]:
            body = self._conn.request("GET", "resources/image/list", auth=TOKEN)
            return [Image.from_dict(entry, conn=self._conn) for entry in body.get("image_attributes") or []]

        return LazySequence(produce)

    def get(self, name: str) -> Image:
        return Image(name, conn=self._conn)

    def list_remote(self) -> LazySequence[RemoteImage]:
        """Base images in the Orka remote repo. Use :meth:`RemoteImage.pull` to copy one locally."""

        def produce() -> list[RemoteImage]:
            body = self._conn.request("GET", "resources/image/list-remote", auth=TOKEN)
            return [RemoteImage(name, conn=self._conn) for name in body.get("images") or []]

        return LazySequence(produce)

    def get_remote(self, name: str) -> RemoteImage:
        """Return a remote image object. Makes no request and does not check that it exists."""
        return RemoteImage(name, conn=self._conn)

    def generate_empty(self, name: str, *, size: str) -> Image:
        """Generate an empty disk image. Intel only.

        Args:
            name: Name of the new image.
            size: Size in K, M, G or T, e.g. ``"10G"``.
        """
        self._conn.request(
            "POST",
            "resources/image/generate",
            auth=TOKEN,
            json={"file_name": name, "file_size": size},
        )
        return Image(name, conn=self._conn)

    def upload(self, file: FileLike, *, name: str | None = None) -> Image:
        """Upload an image (Intel ``.img`` only).

        Args:
            file: A file path or an open binary file.
            name: Name to give the image. Defaults to the local file name.
        """
        uploaded = upload_file(self._conn, "resources/image/upload", "image", file, name)
        return Image(uploaded, conn=self._conn)
