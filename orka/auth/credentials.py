"""Credential storage for the Orka SDK.

Settings live in ~/.orka/config.json with restrictive permissions, the same
pattern used by ~/.aws/credentials or ~/.npmrc. The in-memory
``CredentialStore`` is what the client actually authenticates with.
"""

from __future__ import annotations

import json
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from .constants import CONFIG_DIR, CONFIG_FILE, ENV_API_URL, ENV_LICENSE_KEY, ENV_TOKEN
from .types import CredentialKind


@dataclass(frozen=True)
class CredentialStore:
    """The credentials a client was constructed with. Never mutated."""

    token: str | None = None
    license_key: str | None = None

    def get(self, kind: CredentialKind) -> str | None:
        """Look up the credential for ``kind``. Absence is reported as ``None``."""
        if kind is CredentialKind.TOKEN:
            return self.token
        if kind is CredentialKind.LICENSE:
            return self.license_key
        return None

    def __repr__(self) -> str:
        return (
            f"CredentialStore(token={'set' if self.token else None}, "
            f"license_key={'set' if self.license_key else None})"
        )


def get_config_path() -> Path:
    return Path.home() / CONFIG_DIR / CONFIG_FILE


def load_config() -> dict[str, Any] | None:
    """Load config from ~/.orka/config.json.

    Returns None if file doesn't exist, is corrupt, or is not a dict.
    """
    config_path = get_config_path()
    if not config_path.exists():
        return None
    try:
        data = json.loads(config_path.read_text())
        if not isinstance(data, dict):
            return None
        return data
    except (json.JSONDecodeError, OSError):
        return None


def save_config(
    *,
    base_url: str | None = None,
    token: str | None = None,
    license_key: str | None = None,
) -> None:
    """Merge settings into ~/.orka/config.json with atomic write and restrictive permissions.

    - Directory: 0700 (owner read/write/execute only)
    - File: 0600 (owner read/write only)
    - Atomic: writes to temp file in same dir, then os.replace()
    """
    config_path = get_config_path()
    config_dir = config_path.parent
    config_dir.mkdir(parents=True, exist_ok=True)
    os.chmod(config_dir, 0o700)

    data = load_config() or {}
    updates = {"base_url": base_url, "token": token, "license_key": license_key}
    data.update({k: v for k, v in updates.items() if v is not None})
    content = json.dumps(data, indent=2)

    fd, tmp_path = tempfile.mkstemp(dir=config_dir, prefix=".config_", suffix=".tmp")
    try:
        with os.fdopen(fd, "w") as f:
            f.write(content)
        os.chmod(tmp_path, 0o600)
        os.replace(tmp_path, config_path)
    except BaseException:
        if os.path.exists(tmp_path):
            os.unlink(tmp_path)
        raise


def clear_config() -> bool:
    """Delete the config file if it exists. Returns True if something was removed."""
    config_path = get_config_path()
    if config_path.exists():
        config_path.unlink()
        return True
    return False


_PLACEHOLDER_VALUES = frozenset({"YOUR_TOKEN", "YOUR_LICENSE_KEY", "YOUR_API_URL"})


def _is_real_value(value: str | None) -> bool:
    return bool(value and value.strip() and value.strip() not in _PLACEHOLDER_VALUES)


def _resolve(explicit: str | None, env_var: str, config_key: str) -> str | None:
    """Resolve one setting: explicit parameter > environment variable > config file."""
    if _is_real_value(explicit):
        return explicit

    env_value = os.environ.get(env_var)
    if _is_real_value(env_value):
        return env_value

    config = load_config()
    if config:
        stored = config.get(config_key)
        if isinstance(stored, str) and _is_real_value(stored):
            return stored

    return None


def resolve_base_url(base_url: str | None = None) -> str | None:
    return _resolve(base_url, ENV_API_URL, "base_url")


def resolve_credentials(token: str | None = None, license_key: str | None = None) -> CredentialStore:
    """Build the client's credential store using the standard precedence chain.

    Placeholder values like ``"YOUR_TOKEN"`` are treated as missing. Missing
    credentials are not an error here; the dispatcher reports them when an
    endpoint actually needs one.
    """
    return CredentialStore(
        token=_resolve(token, ENV_TOKEN, "token"),
        license_key=_resolve(license_key, ENV_LICENSE_KEY, "license_key"),
    )
