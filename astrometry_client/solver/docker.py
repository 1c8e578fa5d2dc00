import logging
import os
import shutil
import subprocess
import tempfile
import time
from dataclasses import replace
from pathlib import Path
from typing import Optional

from astrometry_client.errors import (
    DockerFailedError,
    InvalidInputError,
    SolveTimeoutError,
    WCSReadError,
)
from .base import SolverBackend
from .types import ClientConfig, Result, SolveOptions
from .wcs import parse_wcs_file

CONTAINER_DATA_DIR = "/data"
CONTAINER_INDEX_DIR = "/usr/local/astrometry/data"
OUTPUT_EXTENSIONS = (".wcs", ".corr", ".solved", ".match", ".rdls", ".axy", "-indx.xyls")
NO_SOLUTION_MARKERS = ("Did not solve", "Failed to solve")


def _summarize_failure(output: str) -> str:
    lines = [line.strip() for line in output.splitlines() if line.strip()]
    if not lines:
        return "Unknown error"
    priority = [
        "Unable to find image",
        "No such container",
        "Cannot connect to the Docker daemon",
        "ERROR",
        "Error",
    ]
    for p in priority:
        for line in lines:
            if p in line:
                return line
    return lines[-1]


def collect_output_files(work_dir: str | Path, image_filename: str) -> list[str]:
    stem = Path(image_filename).stem
    files = []
    for ext in OUTPUT_EXTENSIONS:
        path = Path(work_dir) / (stem + ext)
        if path.exists():
            files.append(str(path))
    return files


class DockerSolverBackend(SolverBackend):
    def __init__(self, config: ClientConfig):
        self.config = config

    def build_solve_args(self, image_filename: str, work_dir: str, options: SolveOptions) -> list[str]:
        args = ["solve-field"]

        if options.scale_low > 0 and options.scale_high > 0:
            args += ["-L", f"{options.scale_low:.6f}"]
            args += ["-H", f"{options.scale_high:.6f}"]
            args += ["-u", options.scale_units]

        if options.downsample_factor > 0:
            args += ["--downsample", str(options.downsample_factor)]

        if options.depth_low > 0 and options.depth_high > 0:
            args += ["--depth", f"{options.depth_low}-{options.depth_high}"]

        if options.no_plots:
            args.append("--no-plots")

        if options.ra_deg is not None and options.dec_deg is not None:
            args += ["--ra", f"{options.ra_deg:.6f}"]
            args += ["--dec", f"{options.dec_deg:.6f}"]
            if options.radius_deg > 0:
                args += ["--radius", f"{options.radius_deg:.6f}"]

        if options.overwrite_existing:
            args.append("--overwrite")

        if not options.verbose:
            args.append("--no-verify")

        if self.config.use_docker_exec:
            # exec mode shares the host temp dir with the running container
            out_dir = work_dir
            image_path = os.path.join(work_dir, image_filename)
        else:
            out_dir = CONTAINER_DATA_DIR
            image_path = f"{CONTAINER_DATA_DIR}/{image_filename}"

        args += ["--dir", out_dir, image_path]
        return args

    def build_docker_args(self, image_filename: str, work_dir: str, options: SolveOptions) -> list[str]:
        solve_args = self.build_solve_args(image_filename, work_dir, options)
        if self.config.use_docker_exec:
            return ["docker", "exec", str(self.config.container_name)] + solve_args
        index_path = os.path.abspath(self.config.index_path)
        return [
            "docker",
            "run",
            "--rm",
            "-v",
            f"{work_dir}:{CONTAINER_DATA_DIR}",
            "-v",
            f"{index_path}:{CONTAINER_INDEX_DIR}",
            self.config.docker_image,
        ] + solve_args

    def solve(self, image_path: str | Path, options: Optional[SolveOptions] = None) -> Result:
        options = options or SolveOptions()
        if not os.path.isfile(image_path):
            raise InvalidInputError(f"image file does not exist: {image_path}")

        abs_image = Path(image_path).resolve()
        work_dir = tempfile.mkdtemp(prefix="astrometry-", dir=self.config.temp_dir)
        try:
            image_filename = abs_image.name
            shutil.copyfile(abs_image, Path(work_dir) / image_filename)
            return self._run(image_filename, work_dir, options)
        finally:
            if options.keep_temp_files:
                logging.info(f"Keeping temp files: temp directory preserved at {work_dir}")
            else:
                try:
                    shutil.rmtree(work_dir)
                except OSError as e:
                    logging.warning(f"Failed to remove temp directory {work_dir}: {e}")

    def _run(self, image_filename: str, work_dir: str, options: SolveOptions) -> Result:
        cmd = self.build_docker_args(image_filename, work_dir, options)
        logging.debug(f"Running: {' '.join(cmd)}")

        start = time.monotonic()
        try:
            proc = subprocess.run(cmd, capture_output=True, text=True, timeout=self.config.timeout_s)
        except subprocess.TimeoutExpired as e:
            raise SolveTimeoutError(f"solve operation timed out after {self.config.timeout_s}s") from e
        except FileNotFoundError as e:
            raise DockerFailedError("docker command failed: docker not found in PATH") from e
        solve_time = time.monotonic() - start

        output = (proc.stdout or "") + (proc.stderr or "")
        raw_output = output if options.verbose else None

        if proc.returncode != 0:
            if any(marker in output for marker in NO_SOLUTION_MARKERS):
                return Result(solved=False, solve_time_s=solve_time, raw_output=raw_output)
            reason = _summarize_failure(output)
            raise DockerFailedError(
                f"docker command failed (exit {proc.returncode}): {reason}", output=output
            )

        wcs_path = Path(work_dir) / (Path(image_filename).stem + ".wcs")
        try:
            result = parse_wcs_file(wcs_path)
        except WCSReadError as e:
            if isinstance(e.__cause__, FileNotFoundError):
                return Result(solved=False, solve_time_s=solve_time, raw_output=raw_output)
            raise

        return replace(
            result,
            solve_time_s=solve_time,
            output_files=collect_output_files(work_dir, image_filename),
            raw_output=raw_output,
        )

    def solve_bytes(self, data: bytes, fmt: str, options: Optional[SolveOptions] = None) -> Result:
        fd, tmp_path = tempfile.mkstemp(prefix="image-", suffix=f".{fmt}", dir=self.config.temp_dir)
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(data)
            return self.solve(tmp_path, options)
        finally:
            try:
                os.remove(tmp_path)
            except OSError as e:
                logging.debug(f"Could not remove temp image {tmp_path}: {e}")

    def is_available(self) -> dict:
        try:
            result = subprocess.run(
                ["docker", "version", "--format", "{{.Server.Version}}"],
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                timeout=5,
            )
            if result.returncode == 0:
                return {"ok": True, "detail": f"server {result.stdout.strip()}"}
            else:
                return {"ok": False, "detail": "daemon not reachable"}
        except FileNotFoundError:
            return {"ok": False, "detail": "not found in PATH"}
        except subprocess.TimeoutExpired:
            return {"ok": False, "detail": "timeout"}
