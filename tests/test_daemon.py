import sys
import types

from fakes import _Keys, _Launcher
from rogcontrol.commands import ApplyChargeLimitCommand, MediaKey
from rogcontrol.config import ConfigManager
from rogcontrol.daemon import Daemon, parse_args


def _daemon(tmp_path):
    battery = tmp_path / "BAT0"
    battery.mkdir()
    config = ConfigManager()
    config._config = {
        "store_path": str(tmp_path / "config.json"),
        "acpi_profile_path": str(tmp_path / "platform_profile"),
        "battery_path": str(battery),
        "ac_path": str(tmp_path / "AC0"),
    }
    return Daemon(config, keys=_Keys(), launcher=_Launcher())


def test_event_runs_on_action_queue(tmp_path):
    daemon = _daemon(tmp_path)
    daemon.store.set("m3", 1)

    daemon.dispatcher.dispatch(124)
    assert daemon.dispatcher.keys.pressed == []

    daemon.actions.run_pending()
    assert daemon.dispatcher.keys.pressed == [MediaKey.PLAY_PAUSE]


def test_power_event_reapplies_charge_limit(tmp_path):
    daemon = _daemon(tmp_path)
    daemon.store.set("charge_limit", 80)

    daemon.on_power_event(88)

    assert daemon.actions.pending() == 1
    daemon.actions.run_pending()
    assert (tmp_path / "BAT0" / "charge_control_end_threshold").read_text() == "80"


def test_charge_limit_command_type(tmp_path):
    daemon = _daemon(tmp_path)
    daemon.on_power_event(87)

    command = daemon.actions._queue.get_nowait()
    assert isinstance(command, ApplyChargeLimitCommand)


def test_parse_args():
    args = parse_args(["--event", "56", "--log-level", "DEBUG"])

    assert args.event == 56
    assert args.log_level == "DEBUG"
    assert args.sensors is False


def test_daemon_starts_without_key_backend(tmp_path, monkeypatch):
    monkeypatch.setitem(sys.modules, "pynput", types.ModuleType("pynput"))
    monkeypatch.setitem(sys.modules, "pynput.keyboard", None)
    config = ConfigManager()
    config._config = {
        "store_path": str(tmp_path / "config.json"),
        "acpi_profile_path": str(tmp_path / "platform_profile"),
        "ac_path": str(tmp_path / "AC0"),
    }

    daemon = Daemon(config, launcher=_Launcher())
    daemon.dispatcher.dispatch(124)
    daemon.dispatcher.dispatch(174)
    daemon.actions.run_pending()

    assert daemon.store.get_int("performance_mode") == 1
    assert (tmp_path / "platform_profile").read_text() == "quiet"


def test_charge_limit_command_is_exported():
    import rogcontrol

    assert rogcontrol.ApplyChargeLimitCommand is ApplyChargeLimitCommand
    assert "ApplyChargeLimitCommand" in rogcontrol.__all__
