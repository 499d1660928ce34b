"""Find battery power supplies through udev, for ``pwr-notify --list``."""

import logging
from dataclasses import dataclass
from typing import List, Optional

import pyudev

log = logging.getLogger(__name__)


@dataclass
class BatteryDevice:
    """A power_supply device of type Battery as udev describes it."""
    name: str
    status: str = "Unknown"
    capacity: Optional[int] = None
    energy_full: Optional[int] = None
    energy_now: Optional[int] = None
    model: str = ""
    manufacturer: str = ""

    @property
    def has_energy(self) -> bool:
        """Whether energy_full/energy_now exist. Charge-based batteries lack them."""
        return self.energy_full is not None and self.energy_now is not None


def _int_prop(props, key: str) -> Optional[int]:
    value = props.get(key)
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        log.debug("Non-numeric %s: %r", key, value)
        return None


def list_batteries(context: Optional[pyudev.Context] = None) -> List[BatteryDevice]:
    """Return all batteries in the power_supply subsystem, sorted by name."""
    context = context or pyudev.Context()
    results = []
    for device in context.list_devices(subsystem="power_supply"):
        props = device.properties
        if props.get("POWER_SUPPLY_TYPE") != "Battery":
            continue
        results.append(BatteryDevice(
            name=device.sys_name,
            status=props.get("POWER_SUPPLY_STATUS") or "Unknown",
            capacity=_int_prop(props, "POWER_SUPPLY_CAPACITY"),
            energy_full=_int_prop(props, "POWER_SUPPLY_ENERGY_FULL"),
            energy_now=_int_prop(props, "POWER_SUPPLY_ENERGY_NOW"),
            model=props.get("POWER_SUPPLY_MODEL_NAME") or "",
            manufacturer=props.get("POWER_SUPPLY_MANUFACTURER") or "",
        ))
    results.sort(key=lambda d: d.name)
    return results
