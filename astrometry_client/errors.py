class AstrometryError(Exception):
    """Base exception for astrometry client errors."""


class InvalidInputError(AstrometryError, ValueError):
    """Raised for invalid configuration or input parameters."""


class SolveTimeoutError(AstrometryError):
    """Raised when a solve exceeds its timeout."""


class DockerFailedError(AstrometryError):
    """Raised when the docker command fails for a reason other than no solution."""

    def __init__(self, message: str, output: str | None = None):
        super().__init__(message)
        self.output = output


class NoSolutionError(AstrometryError):
    """Raised when solve-field could not solve the image."""


class WCSReadError(AstrometryError):
    """Raised when a WCS file cannot be opened or read."""


class WCSParseError(AstrometryError):
    """Raised when a WCS file holds no usable solution."""
