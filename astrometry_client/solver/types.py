from dataclasses import dataclass, field
from typing import Optional, Dict, List

from astrometry_client.errors import NoSolutionError

DEFAULT_DOCKER_IMAGE = "diarmuidk/astrometry-dockerised-solver"
DEFAULT_TIMEOUT_S = 300.0

SCALE_UNITS = ("degwidth", "arcminwidth", "arcsecperpix")


@dataclass
class ClientConfig:
    index_path: str = ""
    docker_image: str = DEFAULT_DOCKER_IMAGE
    temp_dir: Optional[str] = None
    timeout_s: float = DEFAULT_TIMEOUT_S
    # docker exec into an already running container instead of docker run
    use_docker_exec: bool = False
    container_name: Optional[str] = None


@dataclass
class SolveOptions:
    scale_low: float = 0.0
    scale_high: float = 0.0
    scale_units: str = "arcminwidth"
    downsample_factor: int = 2
    depth_low: int = 10
    depth_high: int = 20
    no_plots: bool = True
    ra_deg: Optional[float] = None  # search hint, J2000
    dec_deg: Optional[float] = None
    radius_deg: float = 0.0
    overwrite_existing: bool = False
    verbose: bool = False
    keep_temp_files: bool = False


@dataclass(frozen=True)
class Result:
    solved: bool
    ra_deg: float = 0.0
    dec_deg: float = 0.0
    pixel_scale_arcsec: float = 0.0
    rotation_deg: float = 0.0
    field_width_deg: float = 0.0
    field_height_deg: float = 0.0
    wcs_header: Dict[str, str] = field(default_factory=dict)
    output_files: List[str] = field(default_factory=list)
    solve_time_s: float = 0.0
    raw_output: Optional[str] = None

    def raise_for_solution(self) -> "Result":
        """Return self, or raise NoSolutionError when the image was not solved."""
        if not self.solved:
            raise NoSolutionError("no solution found")
        return self

    def to_json_dict(self) -> dict:
        return {
            "solved": self.solved,
            "ra": self.ra_deg,
            "dec": self.dec_deg,
            "pixel_scale": self.pixel_scale_arcsec,
            "rotation": self.rotation_deg,
            "field_width": self.field_width_deg,
            "field_height": self.field_height_deg,
            "solve_time": self.solve_time_s,
            "output_files": list(self.output_files),
            "wcs_header": dict(self.wcs_header),
        }
