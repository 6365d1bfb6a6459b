"""
Design (config.py)
- Purpose: Centralize constants and the runtime Settings passed to the registry.
- Inputs: Optional appsettings.json (DataFilePath, BackupEnabled, LogFilePath, NotificationsEnabled).
- Outputs: Constants and a Settings instance.
- Side effects: load_settings() reads one file; nothing else touches disk.
- Thread-safety: Settings is frozen; safe to share.
"""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict

SETTINGS_FILENAME = "appsettings.json"

DEFAULT_DATA_FILE_PATH = "data/devices.json"
DEFAULT_LOG_FILE_PATH = "logs/device_log.txt"
DEFAULT_BACKUP_ENABLED = True
DEFAULT_NOTIFICATIONS_ENABLED = False

# Backup copies are named <stem>_backup_<stamp><suffix>
BACKUP_STAMP_FORMAT = "%Y%m%d_%H%M%S"

# Fixed-width columns for the device table
COL_ID_WIDTH = 12
COL_NAME_WIDTH = 20
COL_IP_WIDTH = 16

NOTIFY_TITLE = "Device Status Change"
NOTIFY_TIMEOUT_SEC = 5


@dataclass(frozen=True)
class Settings:
    """
    Design (Settings)
    - Purpose: Explicit configuration handed to the store, event log and notifier.
    - Fields:
        data_file_path: where the JSON device collection lives.
        backup_enabled: copy the existing file to a timestamped backup before each overwrite.
        log_file_path: where registry events are appended.
        notifications_enabled: raise a desktop notification on status transitions.
    """
    data_file_path: str = DEFAULT_DATA_FILE_PATH
    backup_enabled: bool = DEFAULT_BACKUP_ENABLED
    log_file_path: str = DEFAULT_LOG_FILE_PATH
    notifications_enabled: bool = DEFAULT_NOTIFICATIONS_ENABLED


def _as_bool(value: Any, default: bool) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered == "true":
            return True
        if lowered == "false":
            return False
    return default


def _as_path(value: Any, default: str) -> str:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return default


def load_settings(path: Path) -> Settings:
    """
    Load Settings from a JSON file. Returns defaults on missing file or parse error;
    any key that is absent or of the wrong type keeps its default.
    """
    if not path.exists():
        return Settings()
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError, RecursionError):
        return Settings()
    if not isinstance(data, dict):
        return Settings()
    raw: Dict[str, Any] = data
    return Settings(
        data_file_path=_as_path(raw.get("DataFilePath"), DEFAULT_DATA_FILE_PATH),
        backup_enabled=_as_bool(raw.get("BackupEnabled"), DEFAULT_BACKUP_ENABLED),
        log_file_path=_as_path(raw.get("LogFilePath"), DEFAULT_LOG_FILE_PATH),
        notifications_enabled=_as_bool(raw.get("NotificationsEnabled"), DEFAULT_NOTIFICATIONS_ENABLED),
    )
