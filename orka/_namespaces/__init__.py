"""Namespace classes for the Orka SDK."""

from .images import ImagesNamespace
from .isos import ISOsNamespace
from .kube_accounts import KubeAccountsNamespace
from .logs import LogsNamespace
from .nodes import NodesNamespace
from .tokens import TokensNamespace
from .users import UsersNamespace
from .vms import VMConfigurationsNamespace, VMResourcesNamespace

__all__ = [
    "ImagesNamespace",
    "ISOsNamespace",
    "KubeAccountsNamespace",
    "LogsNamespace",
    "NodesNamespace",
    "TokensNamespace",
    "UsersNamespace",
    "VMConfigurationsNamespace",
    "VMResourcesNamespace",
]
