"""
Design (main.py)
- Purpose: Entry point. Load settings, wire event log, store, notifier and registry, run the menu.
- Inputs: Optional argv[1] = path to the settings JSON (default ./appsettings.json).
- Outputs: Process exit code.
- Side effects: Reads settings and device file; appends to the event log.
"""

import sys
from pathlib import Path
from typing import List

from device_inventory.config import SETTINGS_FILENAME, load_settings
from device_inventory.event_log import EventLog
from device_inventory.notifier import StatusNotifier
from device_inventory.repository import DeviceRegistry
from device_inventory.storage import JsonDeviceStore
from device_inventory.ui import MenuUI


def main(argv: List[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else argv
    settings_path = Path(args[0]) if args else Path.cwd() / SETTINGS_FILENAME
    settings = load_settings(settings_path)

    event_log = EventLog(Path(settings.log_file_path))
    try:
        store = JsonDeviceStore(Path(settings.data_file_path), settings.backup_enabled, event_log)
        notifier = StatusNotifier(settings.notifications_enabled, event_log)
        registry = DeviceRegistry(store, event_log, notifier)
        MenuUI(registry, event_log).run()
    except KeyboardInterrupt:
        print()
    finally:
        event_log.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
