"""Shared fixtures: a fake /sys/class/power_supply tree and a recording notifier."""

from pathlib import Path

import pytest

from pwr_notify.core.types import Settings
from pwr_notify.providers.sysfs import SysfsProvider


class RecordingNotifier:
    """Notifier double that remembers every notification instead of showing it."""

    def __init__(self, result: bool = True):
        self.sent = []
        self._result = result

    def send(self, summary, body, timeout, icon=None):
        self.sent.append((summary, body, timeout, icon))
        return self._result

    def summaries(self):
        return [s[0] for s in self.sent]


def write_battery(root: Path, name: str, status=None, energy_full=None, energy_now=None):
    """Create a battery directory. Attributes left as None are not written."""
    bat = root / name
    bat.mkdir(parents=True, exist_ok=True)
    (bat / "type").write_text("Battery\n")
    if status is not None:
        (bat / "status").write_text(f"{status}\n")
    if energy_full is not None:
        (bat / "energy_full").write_text(f"{energy_full}\n")
    if energy_now is not None:
        (bat / "energy_now").write_text(f"{energy_now}\n")
    return bat


@pytest.fixture
def power_supply(tmp_path):
    root = tmp_path / "power_supply"
    root.mkdir()
    return root


@pytest.fixture
def provider(power_supply):
    return SysfsProvider(root=power_supply)


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def make_settings(power_supply):
    def _make(**kwargs):
        kwargs.setdefault("power_supply_dir", power_supply)
        if "batteries" in kwargs:
            kwargs["batteries"] = tuple(kwargs["batteries"])
        return Settings(**kwargs)
    return _make
