import json

import pytest

from fakes import _Controller, _Keys, _Launcher
from rogcontrol.commands import (
    CycleLightingModeCommand, CyclePerformanceModeCommand, LaunchCommand,
    MediaKey, PressKeyCommand, ToggleVisibilityCommand,
)
from rogcontrol.dispatcher import EventDispatcher
from rogcontrol.store import ConfigStore


@pytest.fixture
def store(tmp_path):
    return ConfigStore(tmp_path / "config.json")


def _dispatcher(store):
    handed_off = []
    dispatcher = EventDispatcher(
        store, _Controller(), _Keys(), _Launcher(), handoff=handed_off.append
    )
    return dispatcher, handed_off


def _run(dispatcher, event_id):
    command = dispatcher.dispatch(event_id)
    if command is not None:
        command.execute()
    return command


def test_m4_custom_launches_exactly_the_command(store):
    store.set("m4", 2)
    store.set("m4_custom", "foo.exe")
    dispatcher, handed_off = _dispatcher(store)

    command = _run(dispatcher, 56)

    assert isinstance(command, LaunchCommand)
    assert handed_off == [command]
    assert dispatcher.launcher.launched == ["foo.exe"]
    assert dispatcher.controller.calls == []
    assert dispatcher.keys.pressed == []


@pytest.mark.parametrize("mapping, expected", [
    (None, CyclePerformanceModeCommand),
    (0, CyclePerformanceModeCommand),
    (1, ToggleVisibilityCommand),
    (7, CyclePerformanceModeCommand),
])
def test_m4_mappings(store, mapping, expected):
    if mapping is not None:
        store.set("m4", mapping)
    dispatcher, _ = _dispatcher(store)

    assert isinstance(dispatcher.resolve(56), expected)


@pytest.mark.parametrize("mapping, expected", [
    (None, PressKeyCommand),
    (1, PressKeyCommand),
    (2, CycleLightingModeCommand),
    (3, LaunchCommand),
])
def test_m3_mappings(store, mapping, expected):
    if mapping is not None:
        store.set("m3", mapping)
    dispatcher, _ = _dispatcher(store)

    assert isinstance(dispatcher.resolve(124), expected)


def test_m3_keys(store):
    dispatcher, _ = _dispatcher(store)
    _run(dispatcher, 124)

    store.set("m3", 1)
    _run(dispatcher, 124)

    assert dispatcher.keys.pressed == [MediaKey.VOLUME_MUTE, MediaKey.PLAY_PAUSE]


def test_m3_custom_without_command_launches_empty(store):
    store.set("m3", 3)
    dispatcher, _ = _dispatcher(store)

    command = _run(dispatcher, 124)

    assert command.command == ""
    assert dispatcher.launcher.launched == [""]


def test_fn_keys(store):
    dispatcher, _ = _dispatcher(store)

    _run(dispatcher, 174)
    _run(dispatcher, 179)

    assert dispatcher.controller.calls == ["cycle_performance_mode", "cycle_lighting_mode"]


@pytest.mark.parametrize("event_id", [87, 88, 9999, 0, -1])
def test_events_without_action(store, event_id):
    before = store.path.read_text(encoding="utf-8")
    dispatcher, handed_off = _dispatcher(store)

    assert dispatcher.dispatch(event_id) is None
    assert handed_off == []
    assert dispatcher.controller.calls == []
    assert store.path.read_text(encoding="utf-8") == before
    assert json.loads(before) == {"performance_mode": 0}


def test_mapping_is_read_at_dispatch_time(store):
    dispatcher, _ = _dispatcher(store)
    assert isinstance(dispatcher.resolve(56), CyclePerformanceModeCommand)

    store.set("m4", 1)
    assert isinstance(dispatcher.resolve(56), ToggleVisibilityCommand)


def test_resolve_does_not_execute(store):
    dispatcher, _ = _dispatcher(store)

    dispatcher.resolve(174)

    assert dispatcher.controller.calls == []
