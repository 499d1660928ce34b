"""sysfs battery provider — reads /sys/class/power_supply/<id>/ attributes.

Status comes from ``status``, energy from ``energy_full`` and ``energy_now``.
The file read itself is injectable so the provider can run against any
directory tree (or none at all, in tests).
"""

import logging
from pathlib import Path
from typing import Callable, Optional

from pwr_notify.core.errors import AttributeParseError, AttributeReadError
from pwr_notify.core.provider import BatteryProvider
from pwr_notify.core.types import BatteryStatus, EnergyKind

log = logging.getLogger(__name__)

POWER_SUPPLY_DIR = Path("/sys/class/power_supply")

_STATUS_ATTRIBUTE = "status"


def _read_sysfs(path: Path) -> str:
    return path.read_text()


class SysfsProvider(BatteryProvider):
    """Battery provider reading sysfs power_supply attribute files."""

    def __init__(self, root: Path = POWER_SUPPLY_DIR,
                 read_text: Optional[Callable[[Path], str]] = None):
        self._root = Path(root)
        self._read_text = read_text or _read_sysfs

    @property
    def name(self) -> str:
        return "sysfs"

    @property
    def root(self) -> Path:
        return self._root

    def attribute_path(self, battery_id: str, attribute: str) -> Path:
        return self._root / battery_id / attribute

    def read_status(self, battery_id: str) -> BatteryStatus:
        content = self._read_attribute(battery_id, _STATUS_ATTRIBUTE)
        status = BatteryStatus.from_text(content)
        if status is BatteryStatus.UNKNOWN:
            log.debug("%s reports status %r, treating as unknown", battery_id, content)
        return status

    def read_energy(self, battery_id: str, kind: EnergyKind) -> int:
        content = self._read_attribute(battery_id, kind.attribute)
        # int() would also accept "+5", " 5" or "5_000"; sysfs only ever has digits.
        if not (content.isascii() and content.isdigit()):
            raise AttributeParseError(battery_id, kind.attribute, content)
        return int(content)

    def _read_attribute(self, battery_id: str, attribute: str) -> str:
        """Read an attribute file and return its stripped content."""
        path = self.attribute_path(battery_id, attribute)
        try:
            raw = self._read_text(path)
        except (OSError, UnicodeDecodeError) as e:
            reason = getattr(e, "strerror", None) or str(e)
            raise AttributeReadError(battery_id, attribute, path, reason) from e
        return raw.strip()
