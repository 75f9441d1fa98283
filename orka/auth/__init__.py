"""Authentication utilities for the Orka SDK."""

from .credentials import (
    CredentialStore,
    clear_config,
    load_config,
    resolve_base_url,
    resolve_credentials,
    save_config,
)
from .dispatcher import AuthDispatcher
from .types import (
    LICENSE,
    NO_AUTH,
    TOKEN,
    TOKEN_AND_LICENSE,
    CredentialKind,
    CredentialRequirement,
    token_or_admin,
)

__all__ = [
    "AuthDispatcher",
    "CredentialKind",
    "CredentialRequirement",
    "CredentialStore",
    "LICENSE",
    "NO_AUTH",
    "TOKEN",
    "TOKEN_AND_LICENSE",
    "clear_config",
    "load_config",
    "resolve_base_url",
    "resolve_credentials",
    "save_config",
    "token_or_admin",
]
