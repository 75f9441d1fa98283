"""Orka Python SDK - Client for the Orka virtualization-management API."""

from importlib.metadata import PackageNotFoundError, version

from .client import OrkaClient
from .config import API_VERSION
from .exceptions import (
    APIError,
    AuthConfigurationError,
    AuthenticationError,
    ClientError,
    ConfigurationError,
    OrkaSDKError,
    ResourceNotFoundError,
    ServerError,
    UnrecognisedStateError,
)
from .models import LazySequence

__all__ = [
    "API_VERSION",
    "OrkaClient",
    "LazySequence",
    "OrkaSDKError",
    "ConfigurationError",
    "AuthConfigurationError",
    "ResourceNotFoundError",
    "UnrecognisedStateError",
    "APIError",
    "ClientError",
    "AuthenticationError",
    "ServerError",
]

try:
    __version__ = version("orka")
except PackageNotFoundError:
    __version__ = "0.1.0"
