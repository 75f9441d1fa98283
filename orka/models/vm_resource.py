"""VM resources: a VM configuration together with the VMs deployed from it."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Iterable

from .._http import Request, compact, is_benign_delete_error
from ..auth.types import TOKEN, token_or_admin
from ..exceptions import APIError, UnrecognisedStateError
from ._lazy import KeyLike, LazyModel, key_of, lazy_attr
from .image import Image
from .types import PortMapping, Scheduler
from .user import User
from .vm_configuration import VMConfiguration
from .vm_deployment_result import VMDeploymentResult
from .vm_instance import VMInstance

if TYPE_CHECKING:
    from .._http import Connection

logger = logging.getLogger(__name__)

_DEPLOYMENT_STATUSES = {"Deployed": True, "Not Deployed": False}


def vm_list_path(user: str | None) -> str:
    return f"resources/vm/list/{user}" if user else "resources/vm/list"


class VMResource(LazyModel):
    """A VM configuration and its deployed instances, looked up by name.

    Methods on this class change remote state but not this object's cached
    data; call :meth:`refresh` to see their effect on :attr:`deployed` and
    :attr:`instances`.

    The configuration details (``owner``, ``cpu``, ...) are only reported
    while nothing is deployed and are None otherwise.
    """

    _resource_name = "VM resource"
    _entries_field = "virtual_machine_resources"
    _match_field = "virtual_machine_name"

    deployed = lazy_attr("True if any VM instances are deployed.")
    instances = lazy_attr("The deployed VM instances.")
    owner = lazy_attr()
    cpu = lazy_attr()
    vcpu = lazy_attr()
    base_image = lazy_attr()
    config = lazy_attr("The matching VMConfiguration.")
    io_boost = lazy_attr()
    use_saved_state = lazy_attr()
    gpu_passthrough = lazy_attr()
    configuration_template = lazy_attr()

    def __init__(
        self,
        name: str,
        *,
        conn: Connection,
        admin: bool = False,
        data: dict[str, Any] | None = None,
    ) -> None:
        self._admin = admin
        super().__init__(name, conn=conn, data=data)

    @property
    def name(self) -> str:
        return self._key

    def _fetch_request(self) -> Request:
        return Request("GET", f"resources/vm/status/{self.name}", requirement=token_or_admin(self._admin))

    def _deserialize(self, entry: dict[str, Any]) -> dict[str, Any]:
        status = entry.get("vm_deployment_status")
        if status not in _DEPLOYMENT_STATUSES:
            raise UnrecognisedStateError(f"Unrecognised VM deployment status {status!r}.")
        deployed = _DEPLOYMENT_STATUSES[status]

        attributes: dict[str, Any] = {
            "deployed": deployed,
            "instances": [],
            "owner": None,
            "cpu": None,
            "vcpu": None,
            "base_image": None,
            "config": None,
            "io_boost": None,
            "use_saved_state": None,
            "gpu_passthrough": None,
            "configuration_template": None,
        }
        if deployed:
            attributes["instances"] = [
                VMInstance(instance, conn=self._conn, admin=self._admin) for instance in entry.get("status") or []
            ]
        else:
            attributes.update(
                owner=User(entry["owner"], conn=self._conn),
                cpu=entry.get("cpu"),
                vcpu=entry.get("vcpu"),
                base_image=Image(entry["base_image"], conn=self._conn),
                config=VMConfiguration(entry["image"], conn=self._conn),
                io_boost=entry.get("io_boost"),
                use_saved_state=entry.get("use_saved_state"),
                gpu_passthrough=entry.get("gpu_passthrough"),
                configuration_template=entry.get("configuration_template"),
            )
        return attributes

    def deploy(
        self,
        *,
        node: KeyLike = None,
        replicas: int | None = None,
        reserved_ports: Iterable[PortMapping] | None = None,
        iso_install: bool | None = None,
        iso_image: KeyLike = None,
        attach_disk: bool | None = None,
        attached_disk: KeyLike = None,
        vnc_console: bool | None = None,
        vm_metadata: dict[str, str] | None = None,
        system_serial: str | None = None,
        gpu_passthrough: bool | None = None,
        tag: str | None = None,
        tag_required: bool | None = None,
        scheduler: Scheduler | str | None = None,
    ) -> VMDeploymentResult:
        """Deploy this VM configuration. Requires a token.

        Settings left as None fall back to the VM configuration, then to the
        cluster default.

        Args:
            node: Node to deploy to. Orka picks one if not given.
            replicas: Scale of the deployment (Intel nodes only).
            reserved_ports: Extra ports to forward to the VM. Ports 22, 443,
                6443, 5000-5014, 5999-6013 and 8822-8836 are reserved.
            iso_install: Set to True to install from an ISO.
            iso_image: ISO to attach, overriding the configuration.
            attach_disk: Set to True to attach extra storage.
            attached_disk: Storage disk to attach, overriding the configuration.
            vnc_console: Enable or disable VNC.
            vm_metadata: Custom metadata injected into the VM.
            system_serial: An owned macOS system serial number.
            gpu_passthrough: Enable GPU passthrough. Disables VNC.
            tag: Prefer nodes with this tag.
            tag_required: Require a node with ``tag``.
            scheduler: :class:`Scheduler` mode.
        """
        body = compact(
            orka_vm_name=self.name,
            orka_node_name=key_of(node),
            replicas=replicas,
            reserved_ports=None if reserved_ports is None else [str(m) for m in reserved_ports],
            iso_install=iso_install,
            iso_image=key_of(iso_image),
            attach_disk=attach_disk,
            attached_disk=key_of(attached_disk),
            vnc_console=vnc_console,
            vm_metadata=(
                None
                if vm_metadata is None
                else {"items": [{"key": k, "value": v} for k, v in vm_metadata.items()]}
            ),
            system_serial=system_serial,
            gpu_passthrough=gpu_passthrough,
            tag=tag,
            tag_required=tag_required,
            scheduler=None if scheduler is None else Scheduler(scheduler).value,
        )
        result = self._conn.request("POST", "resources/vm/deploy", auth=TOKEN, json=body)
        return VMDeploymentResult.from_dict(result, conn=self._conn, admin=self._admin)

    def delete_all_instances(self, *, node: KeyLike = None) -> None:
        """Remove every deployed instance, optionally only those on ``node``.

        Succeeds quietly when nothing is deployed.
        """
        try:
            self._conn.request(
                "DELETE",
                "resources/vm/delete",
                auth=token_or_admin(self._admin),
                json=compact(orka_vm_name=self.name, orka_node_name=key_of(node)),
            )
        except APIError as exc:
            if not is_benign_delete_error(exc):
                raise
            logger.debug("No instances of %r deployed, nothing to delete", self.name)

    def purge(self) -> None:
        """Remove every deployed instance and the VM configuration."""
        self._conn.request(
            "DELETE",
            "resources/vm/purge",
            auth=token_or_admin(self._admin),
            json={"orka_vm_name": self.name},
        )

    def _exec_on_node(self, action: str, node: KeyLike) -> None:
        if node is None:
            raise ValueError("Node cannot be None.")
        self._conn.request(
            "POST",
            f"resources/vm/exec/{action}",
            auth=TOKEN,
            json={"orka_vm_name": self.name, "orka_node_name": key_of(node)},
        )

    def start_all_on_node(self, node: KeyLike) -> None:
        """Power on every instance of this VM on ``node``."""
        self._exec_on_node("start", node)

    def stop_all_on_node(self, node: KeyLike) -> None:
        self._exec_on_node("stop", node)

    def suspend_all_on_node(self, node: KeyLike) -> None:
        self._exec_on_node("suspend", node)

    def resume_all_on_node(self, node: KeyLike) -> None:
        self._exec_on_node("resume", node)

    def revert_all_on_node(self, node: KeyLike) -> None:
        """Revert every instance on ``node`` to its base image. This restarts them."""
        self._exec_on_node("revert", node)
