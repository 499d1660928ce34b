"""Tests for udev battery discovery, using a stand-in udev context."""

import types

from pwr_notify.discovery import BatteryDevice, list_batteries


class FakeContext:
    def __init__(self, devices):
        self._devices = devices
        self.subsystems = []

    def list_devices(self, subsystem=None):
        self.subsystems.append(subsystem)
        return iter(self._devices)


def _device(sys_name, **props):
    return types.SimpleNamespace(sys_name=sys_name, properties=props)


def test_only_batteries_sorted_by_name():
    ctx = FakeContext([
        _device("BAT1", POWER_SUPPLY_TYPE="Battery", POWER_SUPPLY_STATUS="Charging",
                POWER_SUPPLY_CAPACITY="80"),
        _device("AC", POWER_SUPPLY_TYPE="Mains", POWER_SUPPLY_ONLINE="1"),
        _device("BAT0", POWER_SUPPLY_TYPE="Battery", POWER_SUPPLY_STATUS="Discharging",
                POWER_SUPPLY_ENERGY_FULL="57020000", POWER_SUPPLY_ENERGY_NOW="41230000",
                POWER_SUPPLY_MODEL_NAME="5B10W13930", POWER_SUPPLY_MANUFACTURER="SMP"),
    ])

    devices = list_batteries(ctx)

    assert ctx.subsystems == ["power_supply"]
    assert [d.name for d in devices] == ["BAT0", "BAT1"]
    assert devices[0] == BatteryDevice(
        name="BAT0", status="Discharging", capacity=None,
        energy_full=57020000, energy_now=41230000,
        model="5B10W13930", manufacturer="SMP",
    )
    assert devices[0].has_energy
    assert devices[1].capacity == 80
    assert not devices[1].has_energy


def test_bad_numbers_become_none():
    ctx = FakeContext([
        _device("BAT0", POWER_SUPPLY_TYPE="Battery", POWER_SUPPLY_CAPACITY="n/a"),
    ])
    device = list_batteries(ctx)[0]
    assert device.capacity is None
    assert device.status == "Unknown"


def test_no_power_supplies():
    assert list_batteries(FakeContext([])) == []
