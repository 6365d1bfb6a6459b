"""
Design (utils.py)
- Purpose: Reusable helpers: IPv4 validation, blank-field checks, backup path naming,
           and fixed-width table formatting for the menu.
- Inputs: Various helper parameters (ip, device, path, timestamp).
- Outputs: Helper results (bools, strings, paths).
- Side effects: None.
- Thread-safety: Stateless; safe to call from any thread.
"""

import re
from datetime import datetime
from pathlib import Path
from typing import Iterable, List

from .config import BACKUP_STAMP_FORMAT, COL_ID_WIDTH, COL_IP_WIDTH, COL_NAME_WIDTH
from .models import Device

_OCTET = r"(25[0-5]|2[0-4]\d|[01]?\d\d?)"
_IPV4_RE = re.compile(rf"{_OCTET}\.{_OCTET}\.{_OCTET}\.{_OCTET}", re.ASCII)


def is_valid_ipv4(ip: str | None) -> bool:
    """
    Purpose: Strict dotted-quad check (each octet 0-255).
    Inputs: ip (may be None or blank).
    Outputs: True only for a full IPv4 match; IPv6, hostnames and padded strings are rejected.
    Side Effects: None.
    Thread-safety: Safe.
    """
    if not ip:
        return False
    return _IPV4_RE.fullmatch(ip) is not None


def is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


def make_backup_path(path: Path, now: datetime | None = None) -> Path:
    """
    Purpose: Name the backup copy for a data file.
    Inputs: path of the data file, optional timestamp (defaults to now).
    Outputs: <dir>/<stem>_backup_YYYYMMDD_HHMMSS<suffix>
    """
    stamp = (now or datetime.now()).strftime(BACKUP_STAMP_FORMAT)
    return path.with_name(f"{path.stem}_backup_{stamp}{path.suffix}")


def format_device_row(device: Device) -> str:
    return (
        f"{device.id:<{COL_ID_WIDTH}} "
        f"{device.name:<{COL_NAME_WIDTH}} "
        f"{device.ip_address:<{COL_IP_WIDTH}} "
        f"{device.status.value}"
    )


def format_device_table(devices: Iterable[Device]) -> List[str]:
    """
    Purpose: Render devices as header + separator + one fixed-width line each.
    Outputs: List of lines ([] when there are no devices; caller prints its own message).
    """
    rows = [format_device_row(d) for d in devices]
    if not rows:
        return []
    header = (
        f"{'ID':<{COL_ID_WIDTH}} "
        f"{'Name':<{COL_NAME_WIDTH}} "
        f"{'IP':<{COL_IP_WIDTH}} "
        "Status"
    )
    return [header, "-" * 62, *rows]
