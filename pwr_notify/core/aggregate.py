"""Combine per-battery readings into one logical power source.

Energies are summed before dividing so batteries of different capacity are
weighted by what they actually hold. Averaging per-battery percentages would
let a small, empty secondary battery drag a large primary one down.
"""

from typing import Iterable

from pwr_notify.core.errors import ZeroCapacityError
from pwr_notify.core.types import BatteryStatus, CombinedState, EnergyReading


def combine_energy(readings: Iterable[EnergyReading]) -> int:
    """Return floor(100 * sum(current) / sum(full)) across all readings.

    Raises ZeroCapacityError when the summed full capacity is zero, which
    includes an empty sequence. Values above 100 are returned unchanged when
    a battery reports more current energy than full capacity.
    """
    full_sum = 0
    now_sum = 0
    for reading in readings:
        full_sum += reading.full_capacity
        now_sum += reading.current_energy

    if full_sum == 0:
        raise ZeroCapacityError()
    return (100 * now_sum) // full_sum


def combine_status(statuses: Iterable[BatteryStatus]) -> bool:
    """True if at least one battery is charging."""
    return any(s is BatteryStatus.CHARGING for s in statuses)


def is_critical(any_charging: bool, combined_percent: int, threshold: int) -> bool:
    """Critical means nothing is charging and the level is strictly below threshold."""
    return not any_charging and combined_percent < threshold


def combine(readings: Iterable[EnergyReading],
            statuses: Iterable[BatteryStatus]) -> CombinedState:
    return CombinedState(
        combined_percent=combine_energy(readings),
        any_charging=combine_status(statuses),
    )
