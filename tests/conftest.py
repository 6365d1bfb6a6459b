from pathlib import Path
from typing import List

import pytest

from device_inventory.models import Device
from device_inventory.repository import DeviceRegistry
from device_inventory.storage import JsonDeviceStore


class FakeEventLog:
    """Collects messages instead of writing a file."""

    def __init__(self) -> None:
        self.messages: List[str] = []
        self.warnings: List[str] = []

    def log(self, message: str) -> None:
        self.messages.append(message)

    def warning(self, message: str) -> None:
        self.warnings.append(message)

    def close(self) -> None:
        pass


class FakeStore:
    """In-memory store that records every save as a list of copies."""

    def __init__(self, initial: List[Device] | None = None) -> None:
        self.initial = list(initial or [])
        self.saves: List[List[Device]] = []

    def load(self) -> List[Device]:
        return list(self.initial)

    def save_all(self, devices: List[Device]) -> None:
        self.saves.append([Device(d.id, d.name, d.ip_address, d.status) for d in devices])


@pytest.fixture
def event_log() -> FakeEventLog:
    return FakeEventLog()


@pytest.fixture
def fake_store() -> FakeStore:
    return FakeStore()


@pytest.fixture
def registry(fake_store, event_log) -> DeviceRegistry:
    return DeviceRegistry(fake_store, event_log)


@pytest.fixture
def data_path(tmp_path: Path) -> Path:
    return tmp_path / "data" / "devices.json"


@pytest.fixture
def file_registry(data_path, event_log) -> DeviceRegistry:
    return DeviceRegistry(JsonDeviceStore(data_path, backup_enabled=False), event_log)
