"""
Design (models.py)
- Purpose: Define simple, typed data structures for domain entities (Device, DeviceStatus, StatusReport).
- Inputs: Field values (str, DeviceStatus).
- Outputs: Dataclass / enum instances.
- Side effects: None.
- Thread-safety: Dataclasses are plain containers; DeviceRegistry protects concurrent access.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict


class DeviceStatus(Enum):
    """Operational status. The value is the name written to disk."""
    OFFLINE = "Offline"
    MAINTENANCE = "Maintenance"
    ONLINE = "Online"

    @classmethod
    def parse(cls, text: str | None) -> "DeviceStatus | None":
        """
        Purpose: Case-insensitive lookup by status name ("online", " Maintenance ").
        Outputs: DeviceStatus or None when the text names no status.
        """
        if text is None:
            return None
        wanted = text.strip().lower()
        for status in cls:
            if status.value.lower() == wanted:
                return status
        return None


# Sort order for status grouping; independent of declaration order above.
STATUS_RANK: Dict[DeviceStatus, int] = {
    DeviceStatus.OFFLINE: 0,
    DeviceStatus.MAINTENANCE: 1,
    DeviceStatus.ONLINE: 2,
}


def status_rank(status: DeviceStatus) -> int:
    return STATUS_RANK[status]


@dataclass
class Device:
    """
    Design (Device)
    - Purpose: Represents a single network device in the inventory.
    - Fields:
        id: unique key (compared case-insensitively by the registry).
        name: free-text display name.
        ip_address: dotted-quad IPv4 address.
        status: DeviceStatus, Offline unless given.
    """
    id: str
    name: str
    ip_address: str
    status: DeviceStatus = DeviceStatus.OFFLINE


@dataclass(frozen=True)
class StatusReport:
    total: int
    online: int
    offline: int
    maintenance: int
