"""
Design (ui.py)
- Purpose: Drive the registry from a numbered text menu (add, update status, search, sort,
           remove, view all, report, save & exit).
- Inputs: DeviceRegistry (shared state), EventLog, and injectable input/output callables.
- Outputs: None (prints tables and acknowledgements).
- Side effects: Mutates the registry; saves on sort and on exit.
- Thread-safety: Runs on the main thread only.
"""

from typing import Callable, Dict, List

from .event_log import EventLog
from .models import Device, DeviceStatus
from .repository import DeviceRegistry
from .utils import format_device_table, is_valid_ipv4

MENU_ITEMS = [
    "[1] Add New Device",
    "[2] Update Device Status",
    "[3] Search for a Device",
    "[4] Sort Devices",
    "[5] Remove a Device",
    "[6] View All Devices",
    "[7] Generate Report",
    "[8] Save & Exit",
]

EXIT_CHOICE = "8"


class MenuUI:
    """
    Design (MenuUI)
    - Purpose: Encapsulate all prompts and printing.
    - Public methods:
        run(): loop until "Save & Exit" or end of input
        handle(choice): perform one menu action; returns False when the loop should stop
    """

    def __init__(
        self,
        registry: DeviceRegistry,
        event_log: EventLog,
        input_func: Callable[[str], str] | None = None,
        output_func: Callable[[str], None] | None = None,
    ) -> None:
        self.registry = registry
        self.event_log = event_log
        self._input = input_func or input
        self._out = output_func or print
        self._actions: Dict[str, Callable[[], None]] = {
            "1": self.add_device,
            "2": self.update_status,
            "3": self.search_device,
            "4": self.sort_devices,
            "5": self.remove_device,
            "6": self.view_all,
            "7": self.generate_report,
        }

    # ---------- Loop ----------

    def run(self) -> None:
        self._out("IoT Device Monitor")
        self._out("------------------")
        while True:
            for line in MENU_ITEMS:
                self._out(line)
            try:
                choice = self._input(f"Please enter your choice (1-{len(MENU_ITEMS)}): ")
                keep_going = self.handle(choice)
            except EOFError:
                # stdin closed: persist and leave like Save & Exit
                self.registry.save()
                return
            if not keep_going:
                return
            self._out("")

    def handle(self, choice: str) -> bool:
        """
        Purpose: Dispatch one choice.
        Outputs: False after Save & Exit, True otherwise.
        Side effects: Unexpected errors are printed and logged; the loop continues.
        """
        choice = (choice or "").strip()
        if choice == EXIT_CHOICE:
            self.registry.save()
            self._out("Devices saved. Goodbye.")
            return False
        action = self._actions.get(choice)
        if action is None:
            self._out("Invalid choice. Please try again.")
            return True
        try:
            action()
        except EOFError:
            raise
        except Exception as exc:
            self._out(f"An error occurred: {exc}. Please try again.")
            self.event_log.warning(f"Error in main loop: {exc}")
        return True

    # ---------- Actions ----------

    def add_device(self) -> None:
        device_id = self._ask("Enter Device ID: ")
        if self.registry.find_by_id(device_id) is not None:
            self._out("Error: Device ID already exists.")
            return
        name = self._ask("Enter Device Name: ")
        ip = self._ask("Enter Device IP Address: ")
        if not is_valid_ipv4(ip):
            self._out("Error: Invalid IP address format.")
            return
        if self.registry.add(Device(id=device_id, name=name, ip_address=ip)):
            self._out("Device added successfully.")
        else:
            self._out("Failed to add device. Check inputs.")

    def update_status(self) -> None:
        device_id = self._ask("Enter Device ID: ")
        device = self.registry.find_by_id(device_id)
        if device is None:
            self._out("Device not found.")
            return
        self._out(f"Current status: {device.status.value}")
        status = DeviceStatus.parse(self._ask("Enter new status (Online, Offline, Maintenance): "))
        if status is None:
            self._out("Invalid status.")
            return
        if self.registry.update_status(device_id, status):
            self._out("Status updated.")
        else:
            self._out("Device not found.")

    def search_device(self) -> None:
        matches = self.registry.search(self._ask("Enter Device ID or Name: "))
        if not matches:
            self._out("No matching devices found.")
            return
        self._print_devices(matches)

    def sort_devices(self) -> None:
        if not self.registry.sort_by(self._ask("Sort by 'Name' or 'Status': ")):
            self._out("Invalid sort criteria. Use Name or Status.")
            return
        self.registry.save()
        self._out("Devices sorted.")
        self._print_devices(self.registry.devices)

    def remove_device(self) -> None:
        if self.registry.remove(self._ask("Enter Device ID to remove: ")):
            self._out("Device removed.")
        else:
            self._out("Device not found.")

    def view_all(self) -> None:
        self._print_devices(self.registry.devices)

    def generate_report(self) -> None:
        report = self.registry.report()
        self._out("Device Report")
        self._out("-------------")
        self._out(f"Total Devices: {report.total}")
        self._out(f"Online: {report.online}")
        self._out(f"Offline: {report.offline}")
        self._out(f"Maintenance: {report.maintenance}")

    # ---------- Helpers ----------

    def _ask(self, prompt: str) -> str:
        return (self._input(prompt) or "").strip()

    def _print_devices(self, devices: List[Device]) -> None:
        lines = format_device_table(devices)
        if not lines:
            self._out("No devices found.")
            return
        for line in lines:
            self._out(line)
