"""Plain value types returned by the Orka API."""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from ..exceptions import UnrecognisedStateError

# Placeholder the API uses for missing values.
NOT_AVAILABLE = "N/A"


_FRACTION = re.compile(r"\.(\d+)")


def _six_digit_fraction(match: re.Match[str]) -> str:
    return "." + match.group(1)[:6].ljust(6, "0")


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO 8601 timestamp, including the trailing ``Z`` form.

    Fractional seconds of any precision are accepted; digits past
    microseconds are dropped.

    Raises:
        UnrecognisedStateError: If ``value`` is not an ISO 8601 timestamp.
    """
    normalized = value[:-1] + "+00:00" if value.endswith("Z") else value
    normalized = _FRACTION.sub(_six_digit_fraction, normalized, count=1)
    try:
        return datetime.fromisoformat(normalized)
    except ValueError:
        raise UnrecognisedStateError(f"Unrecognised timestamp {value!r}.") from None


def count_or_zero(value: Any) -> int:
    """GPU counts come back as ``"N/A"`` on nodes without GPUs."""
    if value in (None, NOT_AVAILABLE):
        return 0
    return int(value)


def port_or_none(value: Any) -> int | None:
    """Ports are reported as ``"N/A"`` when the service is off, e.g. VNC with GPU passthrough."""
    if value in (None, NOT_AVAILABLE, ""):
        return None
    return int(value)


class Scheduler(str, enum.Enum):
    """How VMs are spread across nodes on deployment."""

    DEFAULT = "default"
    MOST_ALLOCATED = "most-allocated"

    @classmethod
    def parse(cls, value: str | None) -> Scheduler:
        if value is None:
            return cls.DEFAULT
        try:
            return cls(value)
        except ValueError:
            raise UnrecognisedStateError(f"Unrecognised scheduler {value!r}.") from None


@dataclass(frozen=True)
class PortMapping:
    """A port forwarded from a host node to a guest VM."""

    host_port: int
    guest_port: int

    def __str__(self) -> str:
        return f"{self.host_port}:{self.guest_port}"


@dataclass(frozen=True)
class ProtocolPortMapping(PortMapping):
    """A port mapping with its transport protocol, typically TCP."""

    protocol: str = "tcp"

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ProtocolPortMapping:
        return cls(
            host_port=int(data["host_port"]),
            guest_port=int(data["guest_port"]),
            protocol=data.get("protocol", "tcp"),
        )


@dataclass(frozen=True)
class Disk:
    """A disk attached to a VM."""

    type: str
    device: str
    target: str
    source: str


@dataclass(frozen=True)
class PasswordRequirements:
    """The rules enforced for passwords when creating a user."""

    length: int
