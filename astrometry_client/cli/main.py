import argparse
import sys

from astrometry_client import __version__
from astrometry_client.cli.commands import (
    run_doctor,
    run_fov,
    run_indexes,
    run_solve,
    run_view,
    run_wcs,
)
from astrometry_client.solver.types import SCALE_UNITS


def _add_common_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--config", help="Path to config.toml")
    parser.add_argument(
        "--log-level",
        choices=["debug", "info", "warn", "error"],
        help="Enable logging at this level",
    )
    parser.add_argument("--json", action="store_true", help="Output result as JSON")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="astro-cli")
    parser.add_argument("--version", action="store_true", help="Show version and exit")

    subparsers = parser.add_subparsers(dest="command")

    doctor_parser = subparsers.add_parser("doctor", help="Check docker and index setup")
    _add_common_args(doctor_parser)

    solve_parser = subparsers.add_parser("solve", help="Plate solve an image with solve-field")
    _add_common_args(solve_parser)
    solve_parser.add_argument("--image", required=True, help="Image file to solve")
    solve_parser.add_argument("--index-path", help="Directory holding astrometry index files")
    solve_parser.add_argument("--docker-image", help="Solver docker image")
    solve_parser.add_argument("--scale-low", type=float, default=0.0, help="Lower scale bound")
    solve_parser.add_argument("--scale-high", type=float, default=0.0, help="Upper scale bound")
    solve_parser.add_argument(
        "--scale-units", choices=SCALE_UNITS, default="arcminwidth", help="Units of the scale bounds"
    )
    solve_parser.add_argument("--downsample", type=int, default=2, help="Downsample factor")
    solve_parser.add_argument("--depth", help="Search depth range, e.g. 10-20")
    solve_parser.add_argument("--ra", type=float, help="RA hint in degrees")
    solve_parser.add_argument("--dec", type=float, help="Dec hint in degrees")
    solve_parser.add_argument("--radius", type=float, default=0.0, help="Search radius in degrees")
    solve_parser.add_argument("--timeout", type=float, help="Timeout in seconds")
    solve_parser.add_argument("--docker-exec", action="store_true", help="Use docker exec")
    solve_parser.add_argument("--container", help="Container name for --docker-exec")
    solve_parser.add_argument("--overwrite", action="store_true", help="Overwrite existing outputs")
    solve_parser.add_argument("--keep-temp", action="store_true", help="Keep the temp directory")
    solve_parser.add_argument("--verbose", action="store_true", help="Show solve-field output")

    wcs_parser = subparsers.add_parser("wcs", help="Parse a .wcs file")
    _add_common_args(wcs_parser)
    wcs_parser.add_argument("--in", dest="input_wcs", required=True, help="Input .wcs file path")
    wcs_parser.add_argument("--verbose", action="store_true", help="Print all header keys")

    fov_parser = subparsers.add_parser("fov", help="Field of view for a lens and sensor")
    _add_common_args(fov_parser)
    fov_parser.add_argument("--focal-length", type=float, help="Focal length in mm")
    fov_parser.add_argument("--max-focal-length", type=float, help="Tele end of a zoom in mm")
    fov_parser.add_argument("--sensor", help="Sensor preset, e.g. full-frame, apsc-canon")
    fov_parser.add_argument("--image", help="Read camera and focal length from EXIF")

    indexes_parser = subparsers.add_parser("indexes", help="Recommend index files to download")
    _add_common_args(indexes_parser)
    indexes_parser.add_argument("--fov", type=float, help="Field width in degrees")
    indexes_parser.add_argument("--focal-length", type=float, help="Focal length in mm")
    indexes_parser.add_argument("--max-focal-length", type=float, help="Tele end of a zoom in mm")
    indexes_parser.add_argument("--sensor", help="Sensor preset (default apsc-nikon)")
    indexes_parser.add_argument("--margin", type=float, default=1.5, help="FOV margin factor")
    indexes_parser.add_argument("--script", action="store_true", help="Print a download script")

    view_parser = subparsers.add_parser("view", help="Print a FITS header (requires astropy)")
    _add_common_args(view_parser)
    view_parser.add_argument("--in", dest="input_fits", required=True, help="Input FITS file path")

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.version:
        print(f"astrometry-client {__version__}")
        return 0

    if args.command == "doctor":
        return run_doctor(args)

    if args.command == "solve":
        return run_solve(args)

    if args.command == "wcs":
        return run_wcs(args)

    if args.command == "fov":
        return run_fov(args)

    if args.command == "indexes":
        return run_indexes(args)

    if args.command == "view":
        return run_view(args)

    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
