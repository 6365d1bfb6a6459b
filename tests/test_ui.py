from typing import List

from conftest import FakeEventLog, FakeStore
from device_inventory.models import Device, DeviceStatus
from device_inventory.repository import DeviceRegistry
from device_inventory.ui import MenuUI


class Script:
    """Feeds canned answers to input(); raises EOFError when exhausted."""

    def __init__(self, answers: List[str]) -> None:
        self.answers = list(answers)
        self.prompts: List[str] = []

    def __call__(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if not self.answers:
            raise EOFError
        return self.answers.pop(0)


def _menu(answers, devices=None):
    store = FakeStore(devices)
    event_log = FakeEventLog()
    registry = DeviceRegistry(store, event_log)
    output: List[str] = []
    menu = MenuUI(registry, event_log, input_func=Script(answers), output_func=output.append)
    return menu, registry, store, output


def test_add_device_flow():
    menu, registry, _, output = _menu(["1", "A1", "Sensor 1", "10.0.0.1", "8"])
    menu.run()
    assert registry.find_by_id("A1") == Device("A1", "Sensor 1", "10.0.0.1")
    assert "Device added successfully." in output
    assert output[-1] == "Devices saved. Goodbye."


def test_add_duplicate_stops_before_other_prompts():
    menu, registry, _, output = _menu(["a1"], [Device("A1", "Sensor 1", "10.0.0.1")])
    menu.add_device()
    assert output == ["Error: Device ID already exists."]
    assert len(registry) == 1


def test_add_invalid_ip_is_rejected():
    menu, registry, _, output = _menu(["B1", "Box", "300.1.1.1"])
    menu.add_device()
    assert output == ["Error: Invalid IP address format."]
    assert len(registry) == 0


def test_add_blank_name_reports_failure():
    menu, registry, _, output = _menu(["B1", "  ", "10.0.0.2"])
    menu.add_device()
    assert output == ["Failed to add device. Check inputs."]
    assert len(registry) == 0


def test_update_status_flow():
    menu, registry, _, output = _menu(["A1", "maintenance"], [Device("A1", "Sensor 1", "10.0.0.1")])
    menu.update_status()
    assert output == ["Current status: Offline", "Status updated."]
    assert registry.find_by_id("A1").status is DeviceStatus.MAINTENANCE


def test_update_status_unknown_device_and_bad_status():
    menu, registry, _, output = _menu(["Z9"], [Device("A1", "Sensor 1", "10.0.0.1")])
    menu.update_status()
    assert output == ["Device not found."]

    menu, registry, _, output = _menu(["A1", "broken"], [Device("A1", "Sensor 1", "10.0.0.1")])
    menu.update_status()
    assert output[-1] == "Invalid status."
    assert registry.find_by_id("A1").status is DeviceStatus.OFFLINE


def test_search_prints_table_or_message():
    devices = [Device("E1", "Gateway", "10.0.0.7"), Device("F1", "Temp Sensor", "10.0.0.8")]
    menu, _, _, output = _menu(["temp"], devices)
    menu.search_device()
    assert output[0].startswith("ID")
    assert output[2].startswith("F1")
    assert len(output) == 3

    menu, _, _, output = _menu([""], devices)
    menu.search_device()
    assert output == ["No matching devices found."]


def test_sort_saves_and_prints():
    devices = [Device("B", "Bravo", "10.0.0.2"), Device("A", "Alpha", "10.0.0.1")]
    menu, registry, store, output = _menu(["Name"], devices)
    menu.sort_devices()
    assert [d.id for d in registry.devices] == ["A", "B"]
    assert [d.id for d in store.saves[-1]] == ["A", "B"]
    assert "Devices sorted." in output


def test_sort_invalid_criteria():
    menu, _, store, output = _menu(["ip"], [Device("B", "Bravo", "10.0.0.2")])
    menu.sort_devices()
    assert output == ["Invalid sort criteria. Use Name or Status."]
    assert store.saves == []


def test_remove_flow():
    menu, registry, _, output = _menu(["a", "a"], [Device("A", "Alpha", "10.0.0.1")])
    menu.remove_device()
    menu.remove_device()
    assert output == ["Device removed.", "Device not found."]
    assert len(registry) == 0


def test_view_all_empty():
    menu, _, _, output = _menu([])
    menu.view_all()
    assert output == ["No devices found."]


def test_report():
    devices = [
        Device("1", "a", "10.0.0.1", DeviceStatus.ONLINE),
        Device("2", "b", "10.0.0.2"),
        Device("3", "c", "10.0.0.3", DeviceStatus.MAINTENANCE),
    ]
    menu, _, _, output = _menu([], devices)
    menu.generate_report()
    assert output[2:] == ["Total Devices: 3", "Online: 1", "Offline: 1", "Maintenance: 1"]


def test_invalid_choice_keeps_looping():
    menu, _, store, output = _menu(["9", "x", "8"])
    menu.run()
    assert output.count("Invalid choice. Please try again.") == 2
    assert len(store.saves) == 1


def test_end_of_input_saves_and_exits():
    menu, _, store, _ = _menu(["1", "A1"])
    menu.run()
    assert len(store.saves) == 1


def test_unexpected_error_is_reported_and_loop_continues():
    menu, registry, _, output = _menu(["6", "8"])
    menu.event_log = FakeEventLog()

    def boom():
        raise RuntimeError("kaput")

    menu._actions["6"] = boom
    menu.run()
    assert "An error occurred: kaput. Please try again." in output
    assert menu.event_log.warnings == ["Error in main loop: kaput"]
    assert output[-1] == "Devices saved. Goodbye."
