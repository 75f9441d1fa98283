"""VM configurations: templates that VMs are deployed from."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .._http import Request
from ..auth.types import TOKEN
from ._lazy import LazyModel, lazy_attr
from .image import Image
from .iso import ISO
from .types import NOT_AVAILABLE, Scheduler
from .user import User

if TYPE_CHECKING:
    from .._http import Connection
    from .vm_deployment_result import VMDeploymentResult


class VMConfiguration(LazyModel):
    """A base image, snapshot image and CPU count, ready to be deployed to a node.

    Configurations cannot be modified once created. Deleting a VM does not
    delete the configuration it came from.
    """

    _resource_name = "VM configuration"
    _entries_field = "configs"
    _match_field = "orka_vm_name"

    owner = lazy_attr("The user who created this configuration.")
    base_image = lazy_attr("The image newly deployed VMs boot from.")
    cpu_cores = lazy_attr()
    vcpu_count = lazy_attr()
    iso_image = lazy_attr("The ISO attached to deployed VMs, or None.")
    attached_disk = lazy_attr("The storage disk attached to deployed VMs, or None.")
    vnc_console = lazy_attr()
    io_boost = lazy_attr()
    net_boost = lazy_attr()
    use_saved_state = lazy_attr("Whether VMs start from a saved state instead of a clean base image.")
    gpu_passthrough = lazy_attr()
    system_serial = lazy_attr("The custom system serial number, or None.")
    tag = lazy_attr("The node tag VMs should be deployed to, or None.")
    tag_required = lazy_attr()
    scheduler = lazy_attr()
    memory = lazy_attr("RAM in gigabytes, or None to let Orka choose on deployment.")

    def __init__(self, name: str, *, conn: Connection, data: dict[str, Any] | None = None) -> None:
        super().__init__(name, conn=conn, data=data)

    @property
    def name(self) -> str:
        return self._key

    def _fetch_request(self) -> Request:
        return Request("GET", f"resources/vm/configs/{self.name}", requirement=TOKEN)

    def _deserialize(self, entry: dict[str, Any]) -> dict[str, Any]:
        iso_image = entry.get("iso_image")
        attached_disk = entry.get("attached_disk")
        system_serial = entry.get("system_serial")
        memory = entry.get("memory")
        return {
            "owner": User(entry["owner"], conn=self._conn),
            "base_image": Image(entry["orka_base_image"], conn=self._conn),
            "cpu_cores": entry.get("orka_cpu_core"),
            "vcpu_count": entry.get("vcpu_count"),
            "iso_image": None if iso_image in (None, "None") else ISO(iso_image, conn=self._conn),
            "attached_disk": (
                None if attached_disk in (None, "None") else Image(attached_disk, conn=self._conn)
            ),
            "vnc_console": entry.get("vnc_console"),
            "io_boost": entry.get("io_boost"),
            "net_boost": entry.get("net_boost"),
            "use_saved_state": entry.get("use_saved_state"),
            "gpu_passthrough": entry.get("gpu_passthrough"),
            "system_serial": None if system_serial in (None, NOT_AVAILABLE) else system_serial,
            "tag": entry.get("tag") or None,
            "tag_required": entry.get("tag_required"),
            "scheduler": Scheduler.parse(entry.get("scheduler")),
            "memory": None if memory in (None, "automatic") else memory,
        }

    def deploy(self, **options: Any) -> VMDeploymentResult:
        """Deploy this configuration to a node.

        Accepts the same keyword arguments as :meth:`VMResource.deploy`.
        """
        from .vm_resource import VMResource

        return VMResource(self.name, conn=self._conn).deploy(**options)

    def purge(self) -> None:
        """Remove this configuration and every VM deployed from it."""
        from .vm_resource import VMResource

        VMResource(self.name, conn=self._conn).purge()

    def delete_saved_state(self) -> None:
        """Delete the saved VM state so new deployments boot from the base image.

        The state must not be in use by a deployed VM. Intel nodes only.
        """
        self._conn.request("DELETE", f"resources/vm/configs/{self.name}/delete-state", auth=TOKEN)
