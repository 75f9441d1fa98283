"""Custom exceptions raised by the Orka SDK."""

from __future__ import annotations

from typing import Any, Optional


class OrkaSDKError(Exception):
    """Base exception for all SDK specific failures."""


class ConfigurationError(OrkaSDKError):
    """Raised when the client is missing a setting it needs, such as the API URL."""


class AuthConfigurationError(ConfigurationError):
    """Raised when an endpoint requires a credential the client was not configured with."""


class ResourceNotFoundError(OrkaSDKError):
    """Raised when a specific resource is requested but does not exist in the Orka backend."""


class UnrecognisedStateError(OrkaSDKError):
    """Raised when the server returns a value this client does not understand.

    This usually means the server is newer than the SDK.
    """


class APIError(OrkaSDKError):
    """Raised when the Orka API returns a non-successful response."""

    def __init__(self, message: str, status_code: int, response: Optional[Any] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.response = response

    def __str__(self) -> str:
        return f"{self.status_code}: {self.message}"


class ClientError(APIError):
    """Raised for 4xx responses."""


class AuthenticationError(ClientError):
    """Raised when the server rejects the supplied token or license key."""


class ServerError(APIError):
    """Raised for 5xx responses."""
