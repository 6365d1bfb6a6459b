"""
Design (notifier.py)
- Purpose: Raise a desktop notification when a device changes status.
- Inputs: Device, previous status.
- Outputs: None.
- Side effects: Calls plyer.notification (OS notification center).
- Thread-safety: Stateless apart from the enabled flag.
"""

from plyer import notification

from .config import NOTIFY_TIMEOUT_SEC, NOTIFY_TITLE
from .event_log import EventLog
from .models import Device, DeviceStatus


class StatusNotifier:
    def __init__(self, enabled: bool, event_log: EventLog | None = None) -> None:
        self.enabled = enabled
        self.event_log = event_log

    def status_changed(self, device: Device, previous: DeviceStatus) -> None:
        """
        Purpose: Notify "<name> (<id>) is now <status>" if enabled.
        Side effects: A failed notification (no backend, headless session) is logged and ignored.
        """
        if not self.enabled:
            return
        try:
            notification.notify(
                title=NOTIFY_TITLE,
                message=f"{device.name} ({device.id}) is now {device.status.value} (was {previous.value})",
                timeout=NOTIFY_TIMEOUT_SEC,
            )
        except Exception as exc:
            if self.event_log is not None:
                self.event_log.warning(f"Notification failed: {exc}")
