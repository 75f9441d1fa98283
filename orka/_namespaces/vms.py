"""VM resources and VM configurations namespaces for the Orka SDK."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .._http import compact
from ..auth.types import TOKEN, token_or_admin
from ..models._lazy import KeyLike, key_of
from ..models.sequence import LazySequence
from ..models.types import Scheduler
from ..models.vm_configuration import VMConfiguration
from ..models.vm_resource import VMResource, vm_list_path

if TYPE_CHECKING:
    from .._http import Connection


class VMResourcesNamespace:
    """Namespace for VMs and the configurations they are deployed from."""

    def __init__(self, conn: Connection) -> None:
        self._conn = conn

    def list(self, *, user: KeyLike = None) -> LazySequence[VMResource]:
        """List VM resources.

        Args:
            user: List another user's resources instead of the token owner's,
                or ``"all"`` for every user. This needs a license key on top of
                the token.
        """
        email = key_of(user)
        admin = email is not None

        def produce() -> list[VMResource]:
            body = self._conn.request(
                "GET",
                vm_list_path(email),
                auth=token_or_admin(admin),
                params={"expand": ""},
            )
            return [
                VMResource.from_dict(entry, conn=self._conn, admin=admin)
                for entry in body.get("virtual_machine_resources") or []
            ]

        return LazySequence(produce)

    def get(self, name: str, *, admin: bool = False) -> VMResource:
        """Get a lazily-loaded VM resource.

        Args:
            admin: Allow resources of other users, which needs a license key.
        """
        return VMResource(name, conn=self._conn, admin=admin)


class VMConfigurationsNamespace:
    """Namespace for VM configurations. Everything here requires a token."""

    def __init__(self, conn: Connection) -> None:
        self._conn = conn

    def list(self) -> LazySequence[VMConfiguration]:
        def produce() -> list[VMConfiguration]:
            body = self._conn.request("GET", "resources/vm/configs", auth=TOKEN)
            return [VMConfiguration.from_dict(entry, conn=self._conn) for entry in body.get("configs") or []]

        return LazySequence(produce)

    def get(self, name: str) -> VMConfiguration:
        return VMConfiguration(name, conn=self._conn)

    def create(
        self,
        name: str,
        *,
        base_image: KeyLike,
        snapshot_image: KeyLike,
        cpu_cores: int,
        vcpu_count: int,
        iso_image: KeyLike = None,
        attached_disk: KeyLike = None,
        vnc_console: bool | None = None,
        system_serial: str | None = None,
        io_boost: bool | None = None,
        gpu_passthrough: bool | None = None,
        tag: str | None = None,
        tag_required: bool | None = None,
        scheduler: Scheduler | str | None = None,
    ) -> VMConfiguration:
        """Create a VM configuration ready for deployment.

        Args:
            name: Lowercase letters, digits and dashes, starting and ending with
                an alphanumeric character, at most 38 characters.
            base_image: The image to boot from. Use an empty disk when
                installing from an ISO.
            snapshot_image: Name for the snapshot image, usually ``name``.
            cpu_cores: 3, 4, 6, 8, 12 or 24.
            vcpu_count: Equal to ``cpu_cores`` up to 3, otherwise half or all of it.
            iso_image: ISO to attach on deployment (Intel only).
            attached_disk: Extra storage to attach on deployment (Intel only).
            vnc_console: Defaults to enabled.
            system_serial: An owned macOS system serial number.
            io_boost: Enable IO performance improvements.
            gpu_passthrough: Enable GPU passthrough. Disables VNC.
            tag: Prefer nodes with this tag.
            tag_required: Require a node with ``tag``.
            scheduler: :class:`Scheduler` mode.
        """
        body = compact(
            orka_vm_name=name,
            orka_base_image=key_of(base_image),
            orka_image=key_of(snapshot_image),
            orka_cpu_core=cpu_cores,
            vcpu_count=vcpu_count,
            iso_image=key_of(iso_image),
            attached_disk=key_of(attached_disk),
            vnc_console=vnc_console,
            system_serial=system_serial,
            io_boost=io_boost,
            gpu_passthrough=gpu_passthrough,
            tag=tag,
            tag_required=tag_required,
            scheduler=None if scheduler is None else Scheduler(scheduler).value,
        )
        self._conn.request("POST", "resources/vm/create", auth=TOKEN, json=body)
        return VMConfiguration(name, conn=self._conn)
