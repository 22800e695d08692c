from pathlib import Path

import platformdirs
import pytest

from qpmu import paths


@pytest.fixture
def dirs(tmp_path, monkeypatch):
    config = tmp_path / "config"
    data = tmp_path / "data"
    monkeypatch.setattr(platformdirs, "user_config_dir", lambda *a, **k: str(config))
    monkeypatch.setattr(platformdirs, "user_data_dir", lambda *a, **k: str(data))
    return config, data


def test_config_dir_and_path(dirs):
    config, _ = dirs
    assert paths.config_dir() == config / "qpmu"
    assert paths.config_path() == config / "qpmu" / "config.toml"


def test_data_dir(dirs):
    _, data = dirs
    assert paths.data_dir() == data / "qpmu"


def test_plugin_directory_is_under_plugins(dirs):
    assert paths.plugin_data_directory("calc") == paths.data_dir() / "plugins" / "calc"


def test_plugin_binary_named_after_plugin(dirs):
    binary = paths.plugin_binary_path("calc")
    assert binary.parent == paths.plugin_data_directory("calc")
    assert binary.name == "calc"


def test_plugin_manifest_and_database(dirs):
    directory = paths.plugin_data_directory("apps")
    assert paths.plugin_manifest_path("apps") == directory / "manifest.toml"
    assert paths.plugin_database_path("apps") == directory / "data.db"


def test_paths_are_absolute_under_given_dirs(dirs):
    _, data = dirs
    assert Path(paths.plugin_database_path("x")).is_relative_to(data)