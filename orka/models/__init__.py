"""Models returned by the Orka SDK."""

from ._lazy import LazyModel, LoadState, lazy_attr
from .image import Image, RemoteImage
from .iso import ISO, RemoteISO
from .kube_account import KubeAccount
from .log_entry import LogEntry, LogRequest, LogResponse, LogUser
from .node import Node
from .sequence import LazySequence
from .token_info import TokenInfo
from .types import Disk, PasswordRequirements, PortMapping, ProtocolPortMapping, Scheduler
from .user import User
from .vm_configuration import VMConfiguration
from .vm_deployment_result import VMDeploymentResult
from .vm_instance import VMInstance
from .vm_resource import VMResource

__all__ = [
    "Disk",
    "ISO",
    "Image",
    "KubeAccount",
    "LazyModel",
    "LazySequence",
    "LoadState",
    "LogEntry",
    "LogRequest",
    "LogResponse",
    "LogUser",
    "Node",
    "PasswordRequirements",
    "PortMapping",
    "ProtocolPortMapping",
    "RemoteISO",
    "RemoteImage",
    "Scheduler",
    "TokenInfo",
    "User",
    "VMConfiguration",
    "VMDeploymentResult",
    "VMInstance",
    "VMResource",
    "lazy_attr",
]
