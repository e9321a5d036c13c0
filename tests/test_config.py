import pytest

from rogcontrol.config import DEFAULT_KEYCODE_MAP, ConfigManager, find_config_file


def test_defaults_without_file(monkeypatch, tmp_path):
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    config = ConfigManager()

    assert config.acpi_profile_path == "/sys/firmware/acpi/platform_profile"
    assert config.profile_names == {0: "balanced", 1: "quiet", 2: "performance"}
    assert config.keycode_map == DEFAULT_KEYCODE_MAP
    assert config.store_path == tmp_path / "rogcontrol" / "config.json"
    assert config.log_file is None


def test_loads_yaml(tmp_path):
    path = tmp_path / "rogcontrol.yaml"
    path.write_text(
        "store_path: /tmp/rog.json\n"
        "lighting_modes: 2\n"
        "profile_names:\n"
        "  0: balanced\n"
        "  1: low-power\n"
        "  2: performance\n"
        "keycode_map:\n"
        "  148: 56\n"
    )

    config = ConfigManager(str(path))

    assert str(config.store_path) == "/tmp/rog.json"
    assert config.lighting_modes == 2
    assert config.profile_names[1] == "low-power"
    assert config.keycode_map == {148: 56}


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        ConfigManager(str(tmp_path / "nope.yaml"))


def test_invalid_yaml_raises(tmp_path):
    path = tmp_path / "rogcontrol.yaml"
    path.write_text("key: [unclosed\n")

    with pytest.raises(ValueError):
        ConfigManager(str(path))


def test_non_mapping_raises(tmp_path):
    path = tmp_path / "rogcontrol.yaml"
    path.write_text("- a\n- b\n")

    with pytest.raises(ValueError):
        ConfigManager(str(path))


def test_find_config_file(monkeypatch, tmp_path):
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    assert find_config_file("/explicit.yaml") == "/explicit.yaml"

    user_file = tmp_path / "rogcontrol" / "rogcontrol.yaml"
    user_file.parent.mkdir()
    user_file.write_text("log_level: DEBUG\n")
    assert find_config_file() == str(user_file)
