"""Core types, error taxonomy and decision logic for battery monitoring."""

from pwr_notify.core.types import (
    BatteryStatus,
    EnergyKind,
    EnergyReading,
    CombinedState,
    Settings,
)
from pwr_notify.core.errors import (
    PowerSupplyError,
    ReadError,
    AttributeReadError,
    AttributeParseError,
    AggregationError,
    ZeroCapacityError,
    ConfigError,
)
from pwr_notify.core.provider import BatteryProvider
from pwr_notify.core.aggregate import combine, combine_energy, combine_status, is_critical
from pwr_notify.core.monitor import BatteryMonitor, CycleResult

__all__ = [
    "BatteryStatus",
    "EnergyKind",
    "EnergyReading",
    "CombinedState",
    "Settings",
    "PowerSupplyError",
    "ReadError",
    "AttributeReadError",
    "AttributeParseError",
    "AggregationError",
    "ZeroCapacityError",
    "ConfigError",
    "BatteryProvider",
    "combine",
    "combine_energy",
    "combine_status",
    "is_critical",
    "BatteryMonitor",
    "CycleResult",
]
