"""Details returned when a VM is deployed."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from .types import NOT_AVAILABLE, port_or_none

if TYPE_CHECKING:
    from .._http import Connection
    from .vm_resource import VMResource


def _flag(value: Any) -> bool:
    return False if value == NOT_AVAILABLE else bool(value)


@dataclass
class VMDeploymentResult:
    """The just-deployed VM."""

    ram: str | None
    vcpu_count: int
    cpu_cores: int
    ip: str | None
    ssh_port: int
    screen_sharing_port: int
    resource: VMResource
    io_boost: bool
    use_saved_state: bool
    gpu_passthrough: bool
    vnc_port: int | None

    @classmethod
    def from_dict(cls, data: dict[str, Any], *, conn: Connection, admin: bool = False) -> VMDeploymentResult:
        from .vm_resource import VMResource

        return cls(
            ram=data.get("ram"),
            vcpu_count=int(data["vcpu"]),
            cpu_cores=int(data["host_cpu"]),
            ip=data.get("ip"),
            ssh_port=int(data["ssh_port"]),
            screen_sharing_port=int(data["screen_share_port"]),
            resource=VMResource(data["vm_id"], conn=conn, admin=admin),
            io_boost=bool(data.get("io_boost")),
            use_saved_state=_flag(data.get("use_saved_state")),
            gpu_passthrough=_flag(data.get("gpu_passthrough")),
            vnc_port=port_or_none(data.get("vnc_port")),
        )
