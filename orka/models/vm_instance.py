"""Deployed virtual machines."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .._http import compact
from ..auth.types import TOKEN, token_or_admin
from ._lazy import KeyLike, key_of
from .image import Image
from .node import Node
from .sequence import LazySequence
from .types import Disk, ProtocolPortMapping, count_or_zero, parse_timestamp, port_or_none
from .user import User
from .vm_configuration import VMConfiguration

if TYPE_CHECKING:
    from .._http import Connection


class VMInstance:
    """A VM deployed on a node from a VM configuration.

    The data is a snapshot taken when the instance was listed. Power and state
    operations do not update it; fetch the owning :class:`VMResource` again
    to see the new status.
    """

    def __init__(self, data: dict[str, Any], *, conn: Connection, admin: bool = False) -> None:
        self._conn = conn
        self._admin = admin

        self.id: str = data["virtual_machine_id"]
        self.name: str = data["virtual_machine_name"]
        self.owner = User(data["owner"], conn=conn)
        self.node = Node(data["node_location"], conn=conn, admin=admin)
        self.node_status: str | None = data.get("node_status")
        self.ip: str | None = data.get("virtual_machine_ip")
        self.vnc_port = port_or_none(data.get("vnc_port"))
        self.screen_sharing_port = port_or_none(data.get("screen_sharing_port"))
        self.ssh_port = port_or_none(data.get("ssh_port"))
        self.cpu_cores: int | None = data.get("cpu")
        self.vcpu_count: int | None = data.get("vcpu")
        self.gpu_count = count_or_zero(data.get("gpu"))
        self.ram: str | None = data.get("RAM")
        self.base_image = Image(data["base_image"], conn=conn)
        self.config = VMConfiguration(data["image"], conn=conn)
        self.configuration_template: str | None = data.get("configuration_template")
        self.status: str | None = data.get("vm_status")
        self.io_boost: bool = bool(data.get("io_boost"))
        self.net_boost: bool = bool(data.get("net_boost"))
        self.use_saved_state: bool = bool(data.get("use_saved_state"))
        self.reserved_ports = [ProtocolPortMapping.from_dict(m) for m in data.get("reserved_ports") or []]
        self.creation_time = parse_timestamp(data["creation_timestamp"])
        self.tag: str | None = data.get("tag") or None
        self.tag_required: bool = bool(data.get("tag_required"))

    def _exec(self, action: str) -> None:
        self._conn.request("POST", f"resources/vm/exec/{action}", auth=TOKEN, json={"orka_vm_name": self.id})

    def delete(self) -> None:
        """Remove this VM.

        Needs a token for your own VMs, and a token plus license key for
        other users' VMs.
        """
        self._conn.request(
            "DELETE",
            "resources/vm/delete",
            auth=token_or_admin(self._admin),
            json={"orka_vm_name": self.id},
        )

    def start(self) -> None:
        """Power on the VM. Intel nodes only."""
        self._exec("start")

    def stop(self) -> None:
        """Power off the VM. Intel nodes only."""
        self._exec("stop")

    def suspend(self) -> None:
        self._exec("suspend")

    def resume(self) -> None:
        """Resume a suspended VM."""
        self._exec("resume")

    def revert(self) -> None:
        """Revert the VM to the latest state of its base image. This restarts it."""
        self._exec("revert")

    def disks(self) -> LazySequence[Disk]:
        """Disks attached to the VM. The VM must be non-scaled. Intel nodes only."""

        def produce() -> list[Disk]:
            body = self._conn.request("GET", "resources/vm/list-disks", auth=TOKEN)
            return [
                Disk(type=d["type"], device=d["device"], target=d["target"], source=d["source"])
                for d in body.get("drives") or []
            ]

        return LazySequence(produce)

    def attach_disk(self, *, image: KeyLike, mount_point: str) -> None:
        """Attach a disk to the VM.

        The VM needs a manual stop and start before the OS sees the disk.
        """
        self._conn.request(
            "POST",
            "resources/vm/attach-disk",
            auth=TOKEN,
            json=compact(orka_vm_name=self.id, image_name=key_of(image), mount_point=mount_point),
        )

    def save_state(self) -> None:
        """Save the VM's disk and memory state, overwriting any previous one."""
        self._conn.request(
            "POST",
            "resources/vm/configs/save-state",
            auth=TOKEN,
            json={"orka_vm_name": self.id},
        )

    def commit_to_base_image(self) -> None:
        """Write the VM's current disk back into its base image.

        Every VM configuration using that base image is affected.
        """
        self._conn.request("POST", "resources/image/commit", auth=TOKEN, json={"orka_vm_name": self.id})

    def save_new_base_image(self, image_name: str) -> Image:
        self._conn.request(
            "POST",
            "resources/image/save",
            auth=TOKEN,
            json=compact(orka_vm_name=self.id, new_name=image_name),
        )
        return Image(image_name, conn=self._conn)

    def resize_image(self, *, username: str, password: str, image_name: str, image_size: str) -> Image:
        """Resize the VM's disk and save it as a new base image.

        Args:
            username: A user on the VM.
            password: That user's password.
            image_name: Name for the resized image.
            image_size: New size in k, M, G or T, e.g. ``"100G"``.
        """
        self._conn.request(
            "POST",
            "resources/image/resize",
            auth=TOKEN,
            json=compact(
                orka_vm_name=self.id,
                vm_username=username,
                vm_password=password,
                new_image_size=image_size,
                new_image_name=image_name,
            ),
        )
        return Image(image_name, conn=self._conn)

    def __repr__(self) -> str:
        return f"<VMInstance {self.id!r} on {self.node.name!r} ({self.status})>"
