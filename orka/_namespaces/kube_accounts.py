"""Kube-accounts namespace for the Orka SDK."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .._http import compact
from ..auth.types import TOKEN_AND_LICENSE
from ..models._lazy import KeyLike, key_of
from ..models.kube_account import KubeAccount
from ..models.sequence import LazySequence

if TYPE_CHECKING:
    from .._http import Connection


class KubeAccountsNamespace:
    """Namespace for Kubernetes accounts. Everything here requires a token and a license key.

    ``user`` defaults to the user the client's token belongs to.
    """

    def __init__(self, conn: Connection) -> None:
        self._conn = conn

    def list(self, *, user: KeyLike = None) -> LazySequence[KubeAccount]:
        email = key_of(user)

        def produce() -> list[KubeAccount]:
            body = self._conn.request(
                "GET",
                "resources/kube-account",
                auth=TOKEN_AND_LICENSE,
                json=compact(email=email),
            )
            return [
                KubeAccount(name, conn=self._conn, email=email) for name in body.get("serviceAccounts") or []
            ]

        return LazySequence(produce)

    def get(self, name: str, *, user: KeyLike = None) -> KubeAccount:
        """Return a kube-account object without checking that it exists."""
        return KubeAccount(name, conn=self._conn, email=key_of(user))

    def create(self, name: str, *, user: KeyLike = None) -> KubeAccount:
        email = key_of(user)
        body = self._conn.request(
            "POST",
            "resources/kube-account",
            auth=TOKEN_AND_LICENSE,
            json=compact(name=name, email=email),
        )
        return KubeAccount(name, conn=self._conn, email=email, kubeconfig=body.get("kubeconfig"))

    def delete_all(self, *, user: KeyLike = None) -> None:
        """Delete every kube-account belonging to ``user``."""
        self._conn.request(
            "DELETE",
            "resources/kube-account",
            auth=TOKEN_AND_LICENSE,
            json=compact(email=key_of(user)),
        )
