"""Battery monitor — polls the configured batteries and sends notifications.

Each cycle reads every battery's status, then every battery's energy,
combines them and decides whether the critical-level notification is due.
Nothing is carried from one cycle to the next except the settings.
"""

import logging
import threading
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from pwr_notify.core.aggregate import combine_energy, combine_status, is_critical
from pwr_notify.core.errors import AggregationError, PowerSupplyError, ReadError
from pwr_notify.core.provider import BatteryProvider
from pwr_notify.core.types import BatteryStatus, Settings

log = logging.getLogger(__name__)

STATUS_FAILED = "Reading Battery Status Failed!"
LEVEL_FAILED = "Reading Battery Level Failed!"
LEVEL_CRITICAL = "Battery Level Critical!"


@dataclass
class CycleResult:
    """What a single poll cycle saw and did."""
    statuses: Dict[str, BatteryStatus] = field(default_factory=dict)
    percent: Optional[int] = None
    any_charging: bool = False
    alerted: bool = False
    errors: List[PowerSupplyError] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "statuses": {k: v.name.lower() for k, v in self.statuses.items()},
            "percent": self.percent,
            "any_charging": self.any_charging,
            "alerted": self.alerted,
            "errors": [str(e) for e in self.errors],
        }


class BatteryMonitor:
    """Runs poll cycles against a provider and reports through a notifier."""

    def __init__(self, settings: Settings, provider: BatteryProvider, notifier):
        self._settings = settings
        self._provider = provider
        self._notifier = notifier

    @property
    def settings(self) -> Settings:
        return self._settings

    def run_cycle(self) -> CycleResult:
        result = CycleResult()
        batteries = self._settings.batteries

        for battery in batteries:
            try:
                result.statuses[battery] = self._provider.read_status(battery)
            except ReadError as e:
                log.warning("Status read failed for %s: %s", battery, e)
                result.errors.append(e)
                self._notify(STATUS_FAILED, str(e), 0)

        # Batteries whose status could not be read are left out of the check.
        result.any_charging = combine_status(result.statuses.values())

        try:
            readings = [self._provider.read_reading(b) for b in batteries]
            result.percent = combine_energy(readings)
        except (ReadError, AggregationError) as e:
            log.warning("Battery level unavailable: %s", e)
            result.errors.append(e)
            self._notify(LEVEL_FAILED, str(e), 0)
            return result

        log.debug(
            "Combined level %d%% (charging=%s, threshold=%d)",
            result.percent, result.any_charging, self._settings.threshold,
        )

        if is_critical(result.any_charging, result.percent, self._settings.threshold):
            log.info("Battery level critical: %d%%", result.percent)
            result.alerted = True
            self._notify(LEVEL_CRITICAL, f"{result.percent}%", self._settings.timeout)

        return result

    def run_forever(self, stop_event: Optional[threading.Event] = None) -> None:
        """Poll until stop_event is set. Without an event this never returns."""
        if stop_event is None:
            stop_event = threading.Event()

        log.info(
            "Monitoring %s every %ds (threshold %d%%)",
            ", ".join(self._settings.batteries),
            self._settings.polling_interval,
            self._settings.threshold,
        )
        while not stop_event.is_set():
            try:
                self.run_cycle()
            except Exception:
                log.exception("Poll cycle failed")
            stop_event.wait(timeout=self._settings.polling_interval)
        log.info("Monitor stopped")

    def close(self) -> None:
        self._provider.close()

    def _notify(self, summary: str, body: str, timeout: int) -> None:
        self._notifier.send(summary, body, timeout, icon=self._settings.icon)
