"""Configuration helpers for the Orka SDK."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

DEFAULT_TIMEOUT_SECONDS = 120.0

# The Orka API version this SDK is written against. Older versions may not work.
API_VERSION = "1.7.0"

try:
    _SDK_VERSION = version("orka")
except PackageNotFoundError:
    _SDK_VERSION = "0.1.0"

USER_AGENT = f"orka-python/{_SDK_VERSION}"


def sanitize_base_url(url: str) -> str:
    """Ensure the base URL never ends with a trailing slash."""

    return url.rstrip("/")
