"""Credential kinds and per-endpoint credential requirements."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Iterator, Union

from ..exceptions import AuthConfigurationError


class CredentialKind(str, enum.Enum):
    """A kind of credential an endpoint can require."""

    NONE = "none"
    TOKEN = "token"
    LICENSE = "license"


KindLike = Union[CredentialKind, str]


@dataclass(frozen=True)
class CredentialRequirement:
    """The fixed set of credential kinds an API operation needs.

    Order carries no meaning. Every kind in the set must be satisfied.
    """

    kinds: frozenset[CredentialKind] = frozenset()

    @classmethod
    def of(cls, *kinds: KindLike) -> CredentialRequirement:
        """Build a requirement from kinds or their string names.

        Raises:
            AuthConfigurationError: If a kind is not one of none, token or license.
        """
        resolved = set()
        for kind in kinds:
            try:
                resolved.add(CredentialKind(kind))
            except ValueError:
                raise AuthConfigurationError(f"Invalid Orka auth type: {kind!r}.") from None
        return cls(frozenset(resolved))

    def __iter__(self) -> Iterator[CredentialKind]:
        return iter(sorted(self.kinds, key=lambda kind: kind.value))

    def __contains__(self, kind: object) -> bool:
        return kind in self.kinds

    def __or__(self, other: CredentialRequirement) -> CredentialRequirement:
        return CredentialRequirement(self.kinds | other.kinds)

    def __bool__(self) -> bool:
        return any(kind is not CredentialKind.NONE for kind in self.kinds)

    def __repr__(self) -> str:
        names = ", ".join(kind.value for kind in self) or "none"
        return f"CredentialRequirement({names})"


NO_AUTH = CredentialRequirement.of(CredentialKind.NONE)
TOKEN = CredentialRequirement.of(CredentialKind.TOKEN)
LICENSE = CredentialRequirement.of(CredentialKind.LICENSE)
TOKEN_AND_LICENSE = CredentialRequirement.of(CredentialKind.TOKEN, CredentialKind.LICENSE)


def token_or_admin(admin: bool) -> CredentialRequirement:
    """Token for the caller's own resources; token and license when acting for other users."""
    return TOKEN_AND_LICENSE if admin else TOKEN

