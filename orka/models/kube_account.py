"""Kubernetes service accounts."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .._http import compact
from ..auth.types import TOKEN_AND_LICENSE

if TYPE_CHECKING:
    from .._http import Connection


class KubeAccount:
    """An account used for Kubernetes operations.

    Every operation requires a token and a license key.
    """

    def __init__(
        self,
        name: str,
        *,
        conn: Connection,
        email: str | None = None,
        kubeconfig: str | None = None,
    ) -> None:
        self.name = name
        self.email = email
        self._kubeconfig = kubeconfig
        self._conn = conn

    def regenerate(self) -> str:
        """Regenerate this kube-account. Returns the new kubeconfig."""
        body = self._conn.request(
            "POST",
            "resources/kube-account/regenerate",
            auth=TOKEN_AND_LICENSE,
            json=compact(name=self.name, email=self.email),
        )
        self._kubeconfig = body["kubeconfig"]
        return self._kubeconfig

    def kubeconfig(self) -> str:
        """The kubeconfig for this account.

        Fetched once and then cached. :meth:`regenerate` and
        ``client.kube_accounts.create`` fill the cache too.
        """
        if self._kubeconfig is None:
            body = self._conn.request(
                "GET",
                "resources/kube-account/download",
                auth=TOKEN_AND_LICENSE,
                json=compact(name=self.name, email=self.email),
            )
            self._kubeconfig = body["kubeconfig"]
        return self._kubeconfig

    def __repr__(self) -> str:
        return f"<KubeAccount {self.name!r}>"
