from .docker import DockerSolverBackend
from .types import ClientConfig, Result, SolveOptions
from .base import SolverBackend
from .wcs import parse_wcs_file, parse_wcs_header, read_wcs_header


def get_solver_backend(config: ClientConfig) -> SolverBackend:
    # docker run and docker exec are both handled by the Docker backend
    return DockerSolverBackend(config)


__all__ = [
    "ClientConfig",
    "DockerSolverBackend",
    "Result",
    "SolveOptions",
    "SolverBackend",
    "get_solver_backend",
    "parse_wcs_file",
    "parse_wcs_header",
    "read_wcs_header",
]
