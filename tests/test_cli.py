"""Tests for the command line entry point."""

import json

import pytest

from pwr_notify import cli
from pwr_notify.core.monitor import LEVEL_CRITICAL
from pwr_notify.discovery import BatteryDevice

from conftest import RecordingNotifier, write_battery


@pytest.fixture
def isolated(tmp_path, monkeypatch, power_supply):
    """No user config file, a fake sysfs tree, and notifications recorded."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    recorder = RecordingNotifier()
    monkeypatch.setattr(cli, "Notifier", lambda **kwargs: recorder)
    cfg = tmp_path / "config.json"
    cfg.write_text(json.dumps({"power_supply_dir": str(power_supply)}))
    return cfg, recorder


class TestOverrides:
    def test_only_given_flags(self):
        args = cli._build_parser().parse_args(["--threshold", "10"])
        assert cli._overrides_from_args(args) == {"threshold": 10}

    def test_all_flags(self):
        args = cli._build_parser().parse_args([
            "-b", "BAT0", "BAT1", "--threshold", "15", "--timeout", "0",
            "--polling-intervall", "60",
        ])
        assert cli._overrides_from_args(args) == {
            "batteries": ["BAT0", "BAT1"],
            "threshold": 15,
            "notifications": {"timeout": 0},
            "polling": {"interval_seconds": 60},
        }


class TestOnce:
    def test_critical_json(self, isolated, power_supply, capsys):
        cfg, recorder = isolated
        write_battery(power_supply, "BAT0", "Discharging", 5000, 1000)
        write_battery(power_supply, "BAT1", "Discharging", 5000, 900)

        rc = cli.main(["-c", str(cfg), "-b", "BAT0", "BAT1", "--once", "--json"])

        assert rc == 0
        out = json.loads(capsys.readouterr().out)
        assert out["percent"] == 19
        assert out["alerted"] is True
        assert recorder.sent == [(LEVEL_CRITICAL, "19%", 10, "battery")]

    def test_text_output(self, isolated, power_supply, capsys):
        cfg, recorder = isolated
        write_battery(power_supply, "BAT1", "Charging", 100, 55)

        assert cli.main(["-c", str(cfg), "--once"]) == 0

        out = capsys.readouterr().out
        assert "BAT1: charging" in out
        assert "Combined: 55% (charging)" in out
        assert recorder.sent == []

    def test_errors_printed(self, isolated, capsys):
        cfg, recorder = isolated
        assert cli.main(["-c", str(cfg), "-b", "BAT9", "--once"]) == 0
        assert capsys.readouterr().out.count("Error:") == 2

    def test_invalid_threshold_is_usage_error(self, isolated):
        cfg, _ = isolated
        with pytest.raises(SystemExit) as exc_info:
            cli.main(["-c", str(cfg), "--threshold", "150", "--once"])
        assert exc_info.value.code == 2


class TestDaemon:
    def test_runs_until_stopped(self, isolated, monkeypatch):
        cfg, _ = isolated
        seen = {}

        def fake_run_forever(self, stop_event=None):
            seen["settings"] = self.settings
            seen["stop_event"] = stop_event

        monkeypatch.setattr(cli.BatteryMonitor, "run_forever", fake_run_forever)
        monkeypatch.setattr(cli.signal, "signal", lambda *args: None)

        assert cli.main(["-c", str(cfg), "--polling-interval", "30"]) == 0
        assert seen["settings"].polling_interval == 30
        assert not seen["stop_event"].is_set()


def test_list(monkeypatch, capsys):
    monkeypatch.setattr(cli, "list_batteries", lambda: [
        BatteryDevice(name="BAT0", status="Discharging", capacity=71,
                      energy_full=100, energy_now=71),
        BatteryDevice(name="BAT1", status="Full", capacity=100),
    ])

    assert cli.main(["--list"]) == 0

    out = capsys.readouterr().out
    assert "Found 2 battery(s)" in out
    assert "Capacity: 71%" in out
    assert "cannot be monitored" in out


def test_list_json(monkeypatch, capsys):
    monkeypatch.setattr(cli, "list_batteries", lambda: [BatteryDevice(name="BAT0")])
    assert cli.main(["--list", "--json"]) == 0
    assert json.loads(capsys.readouterr().out)[0]["name"] == "BAT0"
