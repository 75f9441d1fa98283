"""Multipart upload helper shared by the images and ISOs namespaces."""

from __future__ import annotations

import os
from typing import IO, TYPE_CHECKING, Union

from ..auth.types import TOKEN

if TYPE_CHECKING:
    from .._http import Connection

UPLOAD_CONTENT_TYPE = "application/x-iso9660-image"

FileLike = Union[str, "os.PathLike[str]", IO[bytes]]


def upload_file(conn: Connection, path: str, field: str, file: FileLike, name: str | None) -> str:
    """Upload ``file`` as multipart form field ``field``.

    Returns:
        The name the file was uploaded under: ``name``, or else the local file name.
    """
    if hasattr(file, "read"):
        upload_name = name or os.path.basename(getattr(file, "name", "") or "")
        if not upload_name:
            raise ValueError("A name is required when uploading from a file object without one.")
        conn.request("POST", path, auth=TOKEN, files={field: (upload_name, file, UPLOAD_CONTENT_TYPE)})
        return upload_name

    local_path = os.fspath(file)
    upload_name = name or os.path.basename(local_path)
    with open(local_path, "rb") as f:
        conn.request("POST", path, auth=TOKEN, files={field: (upload_name, f, UPLOAD_CONTENT_TYPE)})
    return upload_name
