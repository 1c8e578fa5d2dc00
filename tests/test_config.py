import pytest

from astrometry_client.config import INDEX_PATH_ENV, Config, load_config
from astrometry_client.solver.types import DEFAULT_DOCKER_IMAGE, DEFAULT_TIMEOUT_S


def test_load_missing_explicit_path_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "nope.toml")


def test_load_missing_default_returns_defaults(monkeypatch, tmp_path):
    monkeypatch.setattr("astrometry_client.config.DEFAULT_CONFIG_PATH", tmp_path / "config.toml")
    monkeypatch.delenv(INDEX_PATH_ENV, raising=False)
    config = load_config()
    assert config.docker_image == DEFAULT_DOCKER_IMAGE
    assert config.timeout_s == DEFAULT_TIMEOUT_S
    assert config.docker_use_exec is False
    assert config.index_path is None


def test_load_toml(tmp_path):
    path = tmp_path / "config.toml"
    path.write_text(
        "[docker]\n"
        'image = "local/solver:dev"\n'
        "use_exec = true\n"
        'container_name = "astro"\n'
        "\n"
        "[solver]\n"
        f'index_path = "{tmp_path}"\n'
        "timeout_s = 60\n"
    )
    config = load_config(path)
    assert config.docker_image == "local/solver:dev"
    assert config.docker_use_exec is True
    assert config.docker_container_name == "astro"
    assert config.index_path == str(tmp_path)
    assert config.timeout_s == 60.0


def test_index_path_from_env(monkeypatch, tmp_path):
    monkeypatch.setenv(INDEX_PATH_ENV, str(tmp_path))
    assert Config({}).index_path == str(tmp_path)


def test_index_path_file_beats_env(monkeypatch, tmp_path):
    monkeypatch.setenv(INDEX_PATH_ENV, "/from/env")
    config = Config({"solver": {"index_path": str(tmp_path)}})
    assert config.index_path == str(tmp_path)


def test_client_config_overrides(monkeypatch):
    monkeypatch.delenv(INDEX_PATH_ENV, raising=False)
    config = Config({"solver": {"timeout_s": 10}})
    client_config = config.client_config(index_path="/data", timeout_s=None, container_name="c")
    assert client_config.index_path == "/data"
    assert client_config.timeout_s == 10.0
    assert client_config.container_name == "c"
    assert client_config.docker_image == DEFAULT_DOCKER_IMAGE
