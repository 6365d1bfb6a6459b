"""
Design (storage.py)
- Purpose: Load and save the device list to/from disk (JSON), with an optional timestamped backup.
- Inputs: Path and backup flag (from Settings), list of Device for save.
- Outputs: list[Device] on load; None on save.
- Side effects: Reads/writes/copies files. On load failure returns empty list; on save failure ignores.
  Failures are reported to the optional event log as warnings, never raised.
- Thread-safety: Call from the registry only (it holds its lock around save_all).
"""

import json
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Generic, List, Set, TypeVar

from .event_log import EventLog
from .models import Device, DeviceStatus
from .utils import is_blank, is_valid_ipv4, make_backup_path

T = TypeVar("T")


@dataclass(frozen=True)
class StoreResult(Generic[T]):
    """Outcome of one store operation: value on success, error text on failure."""
    value: T
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def device_to_dict(device: Device) -> Dict[str, str]:
    return {
        "Id": device.id,
        "Name": device.name,
        "IpAddress": device.ip_address,
        "Status": device.status.value,
    }


def device_from_dict(item: Dict[str, Any]) -> Device | None:
    """
    Rebuild a Device from one JSON object. Returns None when a field is missing,
    not a string, or the status names no DeviceStatus.
    """
    fields = [item.get(key) for key in ("Id", "Name", "IpAddress")]
    if not all(isinstance(v, str) for v in fields):
        return None
    raw_status = item.get("Status", DeviceStatus.OFFLINE.value)
    status = DeviceStatus.parse(raw_status) if isinstance(raw_status, str) else None
    if status is None:
        return None
    device_id, name, ip = fields
    return Device(id=device_id, name=name, ip_address=ip, status=status)


def is_admissible(device: Device) -> bool:
    """Same field rules the registry applies on add (id, name, IPv4)."""
    return not is_blank(device.id) and not is_blank(device.name) and is_valid_ipv4(device.ip_address)


class JsonDeviceStore:
    """
    Design (JsonDeviceStore)
    - State:
        path: JSON file holding the whole collection
        backup_enabled: copy the current file aside before each overwrite
        event_log: optional sink for swallowed failures
    """

    def __init__(self, path: Path, backup_enabled: bool = True, event_log: EventLog | None = None) -> None:
        self.path = path
        self.backup_enabled = backup_enabled
        self.event_log = event_log

    # -------- Public contract (never raises) --------

    def load(self) -> List[Device]:
        """
        Load devices from JSON file. Returns empty list on missing file or parse error.
        """
        result = self._read()
        if not result.ok:
            self._warn(f"Failed to load devices: {result.error}")
        return result.value

    def save_all(self, devices: List[Device]) -> None:
        """
        Save the full device list to the JSON file. Ignores OSError (e.g. read-only location).
        """
        result = self._write(devices)
        if not result.ok:
            self._warn(f"Failed to save devices: {result.error}")

    # -------- Internals --------

    def _read(self) -> StoreResult[List[Device]]:
        if not self.path.exists():
            return StoreResult([])
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError, RecursionError) as exc:
            return StoreResult([], error=str(exc))
        if not isinstance(data, list):
            return StoreResult([], error="expected a JSON array")
        devices: List[Device] = []
        seen_ids: Set[str] = set()
        for item in data:
            if not isinstance(item, dict):
                continue
            device = device_from_dict(item)
            if device is None or not is_admissible(device):
                continue
            # first occurrence of an id wins, compared case-insensitively
            key = device.id.casefold()
            if key in seen_ids:
                continue
            seen_ids.add(key)
            devices.append(device)
        return StoreResult(devices)

    def _write(self, devices: List[Device]) -> StoreResult[None]:
        data = [device_to_dict(d) for d in devices]
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            if self.backup_enabled and self.path.exists():
                shutil.copyfile(self.path, make_backup_path(self.path))
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
        except OSError as exc:
            return StoreResult(None, error=str(exc))
        return StoreResult(None)

    def _warn(self, message: str) -> None:
        if self.event_log is not None:
            self.event_log.warning(message)
