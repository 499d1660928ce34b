"""Core data types for battery polling and the critical-level decision."""

from dataclasses import dataclass
from enum import Enum, auto
from pathlib import Path
from typing import Tuple


class BatteryStatus(Enum):
    """Charging state as reported by the power_supply ``status`` attribute."""
    DISCHARGING = auto()
    CHARGING = auto()
    UNKNOWN = auto()

    @classmethod
    def from_text(cls, text: str) -> "BatteryStatus":
        """Map raw status text to a status. Exact match only; anything else is UNKNOWN."""
        if text == "Discharging":
            return cls.DISCHARGING
        if text == "Charging":
            return cls.CHARGING
        return cls.UNKNOWN


class EnergyKind(Enum):
    """Which energy attribute to read. Values are the sysfs file names."""
    FULL_CAPACITY = "energy_full"
    CURRENT_ENERGY = "energy_now"

    @property
    def attribute(self) -> str:
        return self.value


@dataclass(frozen=True)
class EnergyReading:
    """Rated and instantaneous energy of one battery, in the device's unit."""
    full_capacity: int
    current_energy: int


@dataclass(frozen=True)
class CombinedState:
    """All monitored batteries seen as one logical power source."""
    combined_percent: int
    any_charging: bool


@dataclass(frozen=True)
class Settings:
    """Runtime configuration, fixed for the life of the process."""
    batteries: Tuple[str, ...] = ("BAT1",)
    threshold: int = 20
    timeout: int = 10
    polling_interval: int = 180
    icon: str = "battery"
    app_name: str = "pwr-notify"
    backend: str = "notify-send"
    power_supply_dir: Path = Path("/sys/class/power_supply")
