"""Abstract base class for battery state providers."""

from abc import ABC, abstractmethod

from pwr_notify.core.types import BatteryStatus, EnergyKind, EnergyReading


class BatteryProvider(ABC):
    """A source of per-battery status and energy values.

    Implementations:
    - SysfsProvider: /sys/class/power_supply/<id>/
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable name (e.g., 'sysfs')."""
        ...

    @abstractmethod
    def read_status(self, battery_id: str) -> BatteryStatus:
        """Read the current charging state.

        Raises ReadError if the status cannot be read. Readable but
        unrecognised text is BatteryStatus.UNKNOWN, not an error.
        """
        ...

    @abstractmethod
    def read_energy(self, battery_id: str, kind: EnergyKind) -> int:
        """Read one energy attribute as a non-negative integer.

        Raises ReadError if the attribute is unreadable or not an integer.
        """
        ...

    def read_reading(self, battery_id: str) -> EnergyReading:
        """Read full capacity and current energy for one battery."""
        return EnergyReading(
            full_capacity=self.read_energy(battery_id, EnergyKind.FULL_CAPACITY),
            current_energy=self.read_energy(battery_id, EnergyKind.CURRENT_ENERGY),
        )

    def close(self) -> None:
        """Clean up resources."""
        pass
