"""Synchronous HTTP client for the Orka SDK."""

from __future__ import annotations

from typing import Any

import httpx

from ._http import Connection
from ._namespaces import (
    ImagesNamespace,
    ISOsNamespace,
    KubeAccountsNamespace,
    LogsNamespace,
    NodesNamespace,
    TokensNamespace,
    UsersNamespace,
    VMConfigurationsNamespace,
    VMResourcesNamespace,
)
from .auth.credentials import resolve_base_url, resolve_credentials
from .auth.dispatcher import AuthDispatcher
from .auth.types import NO_AUTH
from .config import DEFAULT_TIMEOUT_SECONDS, USER_AGENT, sanitize_base_url
from .exceptions import AuthenticationError, ConfigurationError
from .models.image import Image
from .models.types import PasswordRequirements


class OrkaClient:
    """Synchronous client for the Orka API.

    Example:
        >>> from orka import OrkaClient
        >>> client = OrkaClient("http://10.221.188.100", token="...", license_key="...")
        >>> node = client.nodes.get("macpro-1")
        >>> print(node.available_cpu_cores)
        >>> for vm in client.vm_resources.list():
        ...     print(vm.name, vm.deployed)

    Objects returned by ``get`` methods and sequences returned by ``list``
    methods are lazy: the request happens when they are first used.

    The client provides namespaced access to different API areas:
        - client.users: User management
        - client.tokens: Token creation, revocation and info
        - client.vm_resources: VM resources and deployed VMs
        - client.vm_configurations: VM configurations
        - client.nodes: Nodes
        - client.images: Base images and empty disks
        - client.isos: ISOs
        - client.kube_accounts: Kubernetes accounts
        - client.logs: Audit logs
    """

    def __init__(
        self,
        base_url: str | None = None,
        *,
        token: str | None = None,
        license_key: str | None = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        """Initialize the Orka client.

        Args:
            base_url: The Orka API URL. If not provided, reads ORKA_API_URL or
                the saved config.
            token: Token for user-level endpoints. If not provided, reads
                ORKA_TOKEN or the saved config. A client without a token can
                still create one with ``client.tokens.create``.
            license_key: License key for administrative endpoints. If not
                provided, reads ORKA_LICENSE_KEY or the saved config.
            timeout: Request timeout in seconds (default: 120).

        Raises:
            ConfigurationError: If no API URL is provided or found.
        """
        resolved_url = resolve_base_url(base_url)
        if not resolved_url:
            raise ConfigurationError(
                "No API URL provided. Run 'orka auth login', set ORKA_API_URL, or pass base_url."
            )

        self._base_url = sanitize_base_url(resolved_url)
        self._credentials = resolve_credentials(token, license_key)
        self._client = httpx.Client(timeout=timeout, headers={"User-Agent": USER_AGENT})
        self._conn = Connection(self._client, self._base_url, AuthDispatcher(self._credentials))

        # Initialize namespaces
        self.users = UsersNamespace(self._conn)
        self.tokens = TokensNamespace(self._conn)
        self.vm_resources = VMResourcesNamespace(self._conn)
        self.vm_configurations = VMConfigurationsNamespace(self._conn)
        self.nodes = NodesNamespace(self._conn)
        self.images = ImagesNamespace(self._conn)
        self.isos = ISOsNamespace(self._conn)
        self.kube_accounts = KubeAccountsNamespace(self._conn)
        self.logs = LogsNamespace(self._conn)

    def get_api_version(self) -> str:
        """The API version the Orka environment runs. Needs no credentials."""
        return self._conn.request("GET", "health-check", auth=NO_AUTH)["api_version"]

    def get_password_requirements(self) -> PasswordRequirements:
        """The rules new user passwords must follow. Needs no credentials."""
        body = self._conn.request("GET", "validation-requirements", auth=NO_AUTH)
        return PasswordRequirements(length=body["password_length"])

    def is_license_key_valid(self, license_key: str | None = None) -> bool:
        """Check a license key with the server. Needs no credentials.

        Args:
            license_key: The key to check. Defaults to the client's license key.
        """
        license_key = license_key or self._credentials.license_key
        if license_key is None:
            raise ValueError("License key is required.")

        try:
            self._conn.request("GET", "validate-license-key", auth=NO_AUTH, json={"licenseKey": license_key})
        except AuthenticationError:
            return False
        return True

    def get_default_base_image(self) -> Image:
        """The environment's default base image, lazily loaded. Needs no credentials."""
        body = self._conn.request("GET", "default-base-image", auth=NO_AUTH)
        return Image(body["default_base_image"], conn=self._conn)

    def close(self) -> None:
        """Release the underlying HTTP client resources."""
        self._client.close()

    def __enter__(self) -> OrkaClient:
        return self

    def __exit__(self, exc_type: type | None, exc: BaseException | None, traceback: Any) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"<OrkaClient {self._base_url!r}>"
