"""Orka nodes: the physical or logical hosts VMs run on."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .._http import Request
from ..auth.types import TOKEN, TOKEN_AND_LICENSE, token_or_admin
from ._lazy import LazyModel, lazy_attr
from .sequence import LazySequence
from .types import ProtocolPortMapping, count_or_zero
from .user import group_to_api

if TYPE_CHECKING:
    from .._http import Connection


def node_list_path(admin: bool) -> str:
    return "resources/node/list/all" if admin else "resources/node/list"


class Node(LazyModel):
    """A host that provides compute for VMs. Usually a physical Mac."""

    _resource_name = "node"
    _entries_field = "nodes"
    _match_field = "name"

    host_name = lazy_attr("The host name of this node.")
    address = lazy_attr("The IP address of this node.")
    host_ip = lazy_attr("The host IP address of this node.")
    available_cpu_cores = lazy_attr("Free CPU cores.")
    allocatable_cpu_cores = lazy_attr("CPU cores that can be allocated to VMs.")
    available_gpu_count = lazy_attr("Free GPUs.")
    allocatable_gpu_count = lazy_attr("GPUs that can be allocated to VMs.")
    available_memory = lazy_attr("Free RAM, e.g. ``'24.00G'``.")
    total_cpu_cores = lazy_attr()
    total_memory = lazy_attr()
    type = lazy_attr("WORKER, FOUNDATION or SANDBOX.")
    state = lazy_attr()
    orka_group = lazy_attr("The user group this node is dedicated to, or None.")
    tags = lazy_attr("Tags assigned to this node.")

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
        # /resources/node/status/{name} only returns partial data, so scan the full list.
        return Request("GET", node_list_path(self._admin), requirement=token_or_admin(self._admin))

    def _deserialize(self, entry: dict[str, Any]) -> dict[str, Any]:
        return {
            "host_name": entry.get("host_name"),
            "address": entry.get("address"),
            "host_ip": entry.get("hostIP"),
            "available_cpu_cores": entry.get("available_cpu"),
            "allocatable_cpu_cores": entry.get("allocatable_cpu"),
            "available_gpu_count": count_or_zero(entry.get("available_gpu")),
            "allocatable_gpu_count": count_or_zero(entry.get("allocatable_gpu")),
            "available_memory": entry.get("available_memory"),
            "total_cpu_cores": entry.get("total_cpu"),
            "total_memory": entry.get("total_memory"),
            "type": entry.get("node_type"),
            "state": entry.get("state"),
            "orka_group": entry.get("orka_group"),
            "tags": list(entry.get("orka_tags") or []),
        }

    def reserved_ports(self) -> LazySequence[ProtocolPortMapping]:
        """Ports reserved on this node, as host-to-guest mappings. Requires a token."""

        def produce() -> list[ProtocolPortMapping]:
            body = self._conn.request("GET", "resources/ports", auth=TOKEN)
            return [
                ProtocolPortMapping.from_dict(mapping)
                for mapping in body.get("reserved_ports") or []
                if mapping.get("orka_node_name") == self.name
            ]

        return LazySequence(produce)

    def enable_sandbox(self) -> None:
        """Tag this node as sandbox, limiting it to Kubernetes deployments. Intel nodes only."""
        self._conn.request(
            "POST",
            "resources/node/sandbox",
            auth=TOKEN_AND_LICENSE,
            json={"orka_node_name": self.name},
        )

    def disable_sandbox(self) -> None:
        self._conn.request(
            "DELETE",
            "resources/node/sandbox",
            auth=TOKEN_AND_LICENSE,
            json={"orka_node_name": self.name},
        )

    def dedicate_to_group(self, group: str | None) -> None:
        """Only let users in ``group`` deploy to this node. None makes it available to everyone."""
        self._conn.request(
            "POST",
            f"resources/node/groups/{group_to_api(group)}",
            auth=TOKEN_AND_LICENSE,
            json=[self.name],
        )
        self._update_cached(orka_group=group)

    def remove_group_dedication(self) -> None:
        self.dedicate_to_group(None)

    def tag(self, tag_name: str) -> None:
        """Assign a tag to this node, enabling node affinity for VMs that request it."""
        self._conn.request(
            "POST",
            f"resources/node/tag/{tag_name}",
            auth=TOKEN_AND_LICENSE,
            json={"orka_node_name": self.name},
        )
        if self.loaded and tag_name not in self._attributes["tags"]:
            self._update_cached(tags=[*self._attributes["tags"], tag_name])

    def untag(self, tag_name: str) -> None:
        self._conn.request(
            "DELETE",
            f"resources/node/tag/{tag_name}",
            auth=TOKEN_AND_LICENSE,
            json={"orka_node_name": self.name},
        )
        if self.loaded:
            self._update_cached(tags=[t for t in self._attributes["tags"] if t != tag_name])
