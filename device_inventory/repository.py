"""
Design (repository.py)
- Purpose: Encapsulate the device collection behind a small API (and a lock), so the menu
           never touches the list directly. Every mutation is validated, persisted and logged.
- Inputs: Device objects, ids, statuses, sort criteria.
- Outputs: Booleans for mutations; Device / lists (copies) for reads.
- Side effects: Mutations call store.save_all() and event_log.log(); status changes may notify.
- Thread-safety: All operations take the internal lock, persistence included.
"""

import threading
from typing import List

from .event_log import EventLog
from .models import Device, DeviceStatus, StatusReport, status_rank
from .notifier import StatusNotifier
from .storage import JsonDeviceStore
from .utils import is_blank, is_valid_ipv4


class DeviceRegistry:
    """
    Design (DeviceRegistry)
    - State:
        _devices: ordered list; insertion order until a sort reorders it in place
        _store: persistence port (load at startup, save_all after each mutation)
        _event_log: logging port
        _notifier: optional status-change notifier
        _lock: threading.Lock around each operation and its save
    """

    def __init__(self, store: JsonDeviceStore, event_log: EventLog, notifier: StatusNotifier | None = None) -> None:
        if store is None:
            raise TypeError("DeviceRegistry requires a store")
        if event_log is None:
            raise TypeError("DeviceRegistry requires an event log")
        self._lock = threading.Lock()
        self._store = store
        self._event_log = event_log
        self._notifier = notifier
        self._devices: List[Device] = list(store.load())
        self._event_log.log(f"Loaded {len(self._devices)} devices from file")

    # -------- CRUD --------

    def add(self, device: Device) -> bool:
        """
        Purpose: Admit a new device.
        Inputs: device (Device)
        Outputs: True if stored; False for missing id/name, invalid ip, or duplicate id.
        Side effects: On success appends, saves, logs. On rejection only logs.
        Thread-safety: Protected by _lock.
        """
        with self._lock:
            reason = self._rejection_reason(device)
            if reason is not None:
                self._event_log.log(
                    f"Failed to add device ({reason}): ID: {device.id}, Name: {device.name}, IP: {device.ip_address}"
                )
                return False
            self._devices.append(device)
            self._store.save_all(self._devices)
            self._event_log.log(f"Device added: {device.name} ({device.id})")
            return True

    def find_by_id(self, device_id: str) -> Device | None:
        """
        Purpose: Case-insensitive exact id lookup.
        Outputs: Device or None
        Thread-safety: Protected by _lock (returns object reference; change status via update_status()).
        """
        with self._lock:
            return self._find(device_id)

    def search(self, query: str) -> List[Device]:
        """
        Purpose: Match on exact id or name substring, both case-insensitive.
        Inputs: query (stripped; blank returns [])
        Outputs: Matches in collection order.
        """
        query = (query or "").strip()
        if not query:
            return []
        needle = query.casefold()
        with self._lock:
            return [
                d for d in self._devices
                if d.id.casefold() == needle or needle in d.name.casefold()
            ]

    def update_status(self, device_id: str, new_status: DeviceStatus) -> bool:
        """
        Purpose: Overwrite a device's status in place.
        Outputs: False (logged, nothing saved) if the id is unknown; else True.
        Side effects: Saves, logs old -> new, notifies when the status actually changed.
        Thread-safety: Protected by _lock.
        """
        with self._lock:
            device = self._find(device_id)
            if device is None:
                self._event_log.log(f"Failed to update status: Device not found. ID: {device_id}")
                return False
            previous = device.status
            device.status = new_status
            self._store.save_all(self._devices)
            self._event_log.log(
                f"Device status updated: {device.name} ({device.id}) {previous.value} -> {new_status.value}"
            )
        if self._notifier is not None and previous is not new_status:
            self._notifier.status_changed(device, previous)
        return True

    def remove(self, device_id: str) -> bool:
        """
        Purpose: Remove a device by id; the rest keep their order.
        Outputs: False (logged) if the id is unknown; else True.
        Side effects: Saves and logs on success.
        """
        with self._lock:
            device = self._find(device_id)
            if device is None:
                self._event_log.log(f"Failed to remove device: Device not found. ID: {device_id}")
                return False
            self._devices.remove(device)
            self._store.save_all(self._devices)
            self._event_log.log(f"Device removed: {device.name} ({device.id})")
            return True

    # -------- Ordering --------

    def sort_by_name(self) -> None:
        with self._lock:
            self._devices.sort(key=lambda d: d.name.casefold())

    def sort_by_status_then_name(self) -> None:
        """Offline, then Maintenance, then Online; each group by name (case-insensitive)."""
        with self._lock:
            self._devices.sort(key=lambda d: (status_rank(d.status), d.name.casefold()))

    def sort_by(self, criterion: str) -> bool:
        """
        Purpose: Dispatch "name" / "status" (case-insensitive) to the sorts above.
        Outputs: False, with the order untouched, for anything else.
        """
        key = (criterion or "").strip().lower()
        if key == "name":
            self.sort_by_name()
        elif key == "status":
            self.sort_by_status_then_name()
        else:
            self._event_log.log(f"Failed to sort devices: Invalid criteria '{criterion}'")
            return False
        self._event_log.log(f"Devices sorted by {key}")
        return True

    # -------- Persistence & snapshots --------

    def save(self) -> None:
        with self._lock:
            self._store.save_all(self._devices)

    @property
    def devices(self) -> List[Device]:
        """Copy of the collection in its current order."""
        with self._lock:
            return list(self._devices)

    def __len__(self) -> int:
        with self._lock:
            return len(self._devices)

    def report(self) -> StatusReport:
        with self._lock:
            statuses = [d.status for d in self._devices]
        return StatusReport(
            total=len(statuses),
            online=statuses.count(DeviceStatus.ONLINE),
            offline=statuses.count(DeviceStatus.OFFLINE),
            maintenance=statuses.count(DeviceStatus.MAINTENANCE),
        )

    # -------- Internals (caller holds _lock) --------

    def _find(self, device_id: str) -> Device | None:
        if device_id is None:
            return None
        wanted = device_id.casefold()
        for device in self._devices:
            if device.id.casefold() == wanted:
                return device
        return None

    def _rejection_reason(self, device: Device) -> str | None:
        if is_blank(device.id):
            return "missing id"
        if is_blank(device.name):
            return "missing name"
        if not is_valid_ipv4(device.ip_address):
            return "invalid ip"
        if self._find(device.id) is not None:
            return "duplicate id"
        return None
