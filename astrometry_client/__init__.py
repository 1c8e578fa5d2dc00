__version__ = "0.1.0"

from astrometry_client.client import Client, default_client_config, default_solve_options
from astrometry_client.errors import (
    AstrometryError,
    DockerFailedError,
    InvalidInputError,
    NoSolutionError,
    SolveTimeoutError,
    WCSParseError,
    WCSReadError,
)
from astrometry_client.solver.types import ClientConfig, Result, SolveOptions
from astrometry_client.solver.wcs import parse_wcs_file

__all__ = [
    "AstrometryError",
    "Client",
    "ClientConfig",
    "DockerFailedError",
    "InvalidInputError",
    "NoSolutionError",
    "Result",
    "SolveOptions",
    "SolveTimeoutError",
    "WCSParseError",
    "WCSReadError",
    "__version__",
    "default_client_config",
    "default_solve_options",
    "parse_wcs_file",
]
