"""Public entry point for plate solving through a dockerised astrometry.net.

Example::

    from astrometry_client import Client, ClientConfig, SolveOptions

    client = Client(ClientConfig(index_path="~/astrometry-data"))
    result = client.solve("image.jpg", SolveOptions(scale_low=1, scale_high=3))
    if result.solved:
        print(result.ra_deg, result.dec_deg)

By default each solve spawns a fresh container (``docker run``). Set
``use_docker_exec`` and ``container_name`` to reuse a running container,
which is faster when solving many images.
"""

import os
import tempfile
from dataclasses import replace
from pathlib import Path
from typing import Optional

from astrometry_client.errors import InvalidInputError
from astrometry_client.solver import get_solver_backend
from astrometry_client.solver.types import (
    ClientConfig,
    DEFAULT_DOCKER_IMAGE,
    DEFAULT_TIMEOUT_S,
    Result,
    SolveOptions,
)


def default_client_config() -> ClientConfig:
    return ClientConfig()


def default_solve_options() -> SolveOptions:
    return SolveOptions()


class Client:
    def __init__(self, config: Optional[ClientConfig] = None):
        config = config or default_client_config()

        if not config.index_path:
            raise InvalidInputError("invalid input parameters: index_path is required")
        index_path = str(Path(config.index_path).expanduser())
        if not os.path.exists(index_path):
            raise InvalidInputError(
                f"invalid input parameters: index_path does not exist: {index_path}"
            )
        if config.use_docker_exec and not config.container_name:
            raise InvalidInputError(
                "invalid input parameters: container_name is required with use_docker_exec"
            )

        self.config = replace(
            config,
            index_path=index_path,
            docker_image=config.docker_image or DEFAULT_DOCKER_IMAGE,
            timeout_s=config.timeout_s or DEFAULT_TIMEOUT_S,
            temp_dir=config.temp_dir or tempfile.gettempdir(),
        )
        self._backend = get_solver_backend(self.config)

    def solve(self, image_path: str | Path, options: Optional[SolveOptions] = None) -> Result:
        """Plate-solve an image file."""
        return self._backend.solve(image_path, options or default_solve_options())

    def solve_bytes(self, data: bytes, fmt: str, options: Optional[SolveOptions] = None) -> Result:
        """Plate-solve in-memory image data written to a temporary ``.<fmt>`` file."""
        return self._backend.solve_bytes(data, fmt, options or default_solve_options())

    def is_available(self) -> dict:
        return self._backend.is_available()
