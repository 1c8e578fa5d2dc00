import os
from pathlib import Path
from typing import TYPE_CHECKING

from astrometry_client.solver.types import ClientConfig, DEFAULT_DOCKER_IMAGE, DEFAULT_TIMEOUT_S

if TYPE_CHECKING:
    import tomli as tomllib
else:
    try:
        import tomllib
    except ModuleNotFoundError:  # Python < 3.11
        import tomli as tomllib

DEFAULT_CONFIG_PATH = Path.home() / ".config" / "astrometry-client" / "config.toml"
INDEX_PATH_ENV = "ASTROMETRY_INDEX_PATH"


class Config:
    def __init__(self, data: dict):
        self._data = data

    @property
    def docker_image(self):
        return self._data.get("docker", {}).get("image", DEFAULT_DOCKER_IMAGE)

    @property
    def docker_use_exec(self):
        return self._data.get("docker", {}).get("use_exec", False)

    @property
    def docker_container_name(self):
        return self._data.get("docker", {}).get("container_name", None)

    @property
    def index_path(self):
        path = self._data.get("solver", {}).get("index_path", None) or os.environ.get(INDEX_PATH_ENV)
        if not path:
            return None
        return str(Path(path).expanduser())

    @property
    def temp_dir(self):
        path = self._data.get("solver", {}).get("temp_dir", None)
        if not path:
            return None
        return str(Path(path).expanduser())

    @property
    def timeout_s(self):
        return float(self._data.get("solver", {}).get("timeout_s", DEFAULT_TIMEOUT_S))

    def client_config(self, **overrides) -> ClientConfig:
        """Build a ClientConfig; keyword overrides that are None are ignored."""
        values = {
            "index_path": self.index_path or "",
            "docker_image": self.docker_image,
            "temp_dir": self.temp_dir,
            "timeout_s": self.timeout_s,
            "use_docker_exec": self.docker_use_exec,
            "container_name": self.docker_container_name,
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return ClientConfig(**values)


def load_config(path: Path | None = None) -> Config:
    explicit_path = path
    path = path or DEFAULT_CONFIG_PATH

    if not path.exists():
        if explicit_path is not None:
            raise FileNotFoundError(f"Config file not found: {path}")
        # Return default config if default file missing
        return Config({})

    with open(path, "rb") as f:
        data = tomllib.load(f)

    return Config(data)
