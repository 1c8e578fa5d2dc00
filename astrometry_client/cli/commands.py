import datetime
import json
import logging
import os
import sys
from dataclasses import asdict
from pathlib import Path

from astrometry_client.client import Client
from astrometry_client.config import load_config
from astrometry_client.errors import (
    AstrometryError,
    DockerFailedError,
    InvalidInputError,
    SolveTimeoutError,
    WCSParseError,
    WCSReadError,
)
from astrometry_client.fov import (
    APSC_NIKON,
    analyze_image,
    calculate_fov,
    calculate_fov_range,
    recommend_indexes,
    recommend_indexes_for_lens,
    sensor_from_name,
)
from astrometry_client.solver import get_solver_backend, parse_wcs_file
from astrometry_client.solver.types import Result, SolveOptions
from astrometry_client.util.format import deg_to_dms, deg_to_hms

ERROR_CODES = (
    (SolveTimeoutError, "timeout"),
    (DockerFailedError, "docker_failed"),
    (WCSReadError, "wcs_read_failed"),
    (WCSParseError, "wcs_parse_failed"),
    (InvalidInputError, "invalid_input"),
)


def _json_envelope(command: str, ok: bool, data=None, error=None) -> dict:
    return {
        "ok": ok,
        "command": command,
        "timestamp_utc": datetime.datetime.now(datetime.timezone.utc).isoformat(),
        "data": data,
        "error": error,
    }


def _print_json(payload: dict) -> None:
    print(json.dumps(payload, indent=2, default=str))


def _init_logging(level: str | None) -> None:
    if not level:
        return
    level_map = {
        "debug": logging.DEBUG,
        "info": logging.INFO,
        "warn": logging.WARNING,
        "error": logging.ERROR,
    }
    logging.basicConfig(level=level_map.get(level, logging.INFO))


def _config_path_from_args(args) -> Path | None:
    if args is None:
        return None
    path = getattr(args, "config", None)
    return Path(path) if path else None


def _error_code(exc: Exception) -> str:
    for exc_type, code in ERROR_CODES:
        if isinstance(exc, exc_type):
            return code
    return "error"


def _report_error(command: str, args, exc: Exception, code: str | None = None) -> None:
    if getattr(args, "json", False):
        details = None
        output = getattr(exc, "output", None)
        if output and getattr(args, "verbose", False):
            details = {"raw_output": output}
        _print_json(
            _json_envelope(
                command=command,
                ok=False,
                error={
                    "code": code or _error_code(exc),
                    "message": str(exc),
                    "details": details,
                },
            )
        )
    else:
        print(f"Error: {exc}", file=sys.stderr)


def _print_result(result: Result, verbose: bool = False) -> None:
    print(f"Solved: {result.solved}")
    if result.solved:
        print(f"RA (J2000):   {result.ra_deg:.6f}° ({deg_to_hms(result.ra_deg)})")
        print(f"Dec (J2000):  {result.dec_deg:.6f}° ({deg_to_dms(result.dec_deg)})")
        print(f"Pixel scale:  {result.pixel_scale_arcsec:.2f} arcsec/pixel")
        print(f"Rotation:     {result.rotation_deg:.2f}°")
        print(f"Field width:  {result.field_width_deg:.4f}°")
        print(f"Field height: {result.field_height_deg:.4f}°")
    if result.solve_time_s:
        print(f"Solve time:   {result.solve_time_s:.2f}s")
    if result.output_files:
        print("Output files:")
        for path in result.output_files:
            print(f"  - {path}")
    if verbose and result.raw_output:
        print("\n--- solve-field output ---")
        print(result.raw_output)


def _solve_options_from_args(args) -> SolveOptions:
    options = SolveOptions(
        scale_low=args.scale_low,
        scale_high=args.scale_high,
        scale_units=args.scale_units,
        downsample_factor=args.downsample,
        ra_deg=args.ra,
        dec_deg=args.dec,
        radius_deg=args.radius,
        overwrite_existing=args.overwrite,
        verbose=args.verbose,
        keep_temp_files=args.keep_temp,
    )
    if args.depth:
        low, _, high = args.depth.partition("-")
        options.depth_low = int(low)
        options.depth_high = int(high)
    return options


def run_solve(args) -> int:
    _init_logging(getattr(args, "log_level", None))
    config = load_config(_config_path_from_args(args))

    if (args.ra is None) != (args.dec is None):
        print("Both --ra and --dec are required for a search hint.", file=sys.stderr)
        return 2
    try:
        options = _solve_options_from_args(args)
    except ValueError:
        print("--depth must be in LOW-HIGH format", file=sys.stderr)
        return 2

    client_config = config.client_config(
        index_path=args.index_path,
        docker_image=args.docker_image,
        timeout_s=args.timeout,
        use_docker_exec=True if args.docker_exec else None,
        container_name=args.container,
    )
    try:
        client = Client(client_config)
    except InvalidInputError as e:
        _report_error("solve", args, e)
        return 2

    try:
        result = client.solve(args.image, options)
    except AstrometryError as e:
        _report_error("solve", args, e)
        return 1

    if args.json:
        _print_json(
            _json_envelope(
                command="solve",
                ok=result.solved,
                data=result.to_json_dict(),
                error=None
                if result.solved
                else {"code": "no_solution", "message": "no solution found", "details": None},
            )
        )
    else:
        _print_result(result, verbose=args.verbose)
    return 0 if result.solved else 1


def run_wcs(args) -> int:
    _init_logging(getattr(args, "log_level", None))
    try:
        result = parse_wcs_file(args.input_wcs)
    except (WCSReadError, WCSParseError) as e:
        _report_error("wcs", args, e)
        return 1

    if args.json:
        _print_json(_json_envelope(command="wcs", ok=True, data=result.to_json_dict()))
    else:
        _print_result(result)
        if getattr(args, "verbose", False):
            print("WCS header:")
            for key, value in result.wcs_header.items():
                print(f"  {key:8} = {value}")
    return 0


def run_fov(args) -> int:
    _init_logging(getattr(args, "log_level", None))
    sensor = APSC_NIKON
    focal_length = args.focal_length
    camera = None

    if args.image:
        try:
            info = analyze_image(args.image)
        except FileNotFoundError as e:
            _report_error("fov", args, e, code="file_not_found")
            return 1
        if info.has_exif:
            camera = f"{info.make} {info.model}".strip()
            sensor = info.sensor or sensor
            if focal_length is None and info.focal_length_mm > 0:
                focal_length = info.focal_length_mm
    if args.sensor:
        try:
            sensor = sensor_from_name(args.sensor)
        except ValueError as e:
            _report_error("fov", args, e, code="invalid_input")
            return 2
    if not focal_length or focal_length <= 0:
        print("A positive focal length is required (--focal-length or an image with EXIF).", file=sys.stderr)
        return 2

    if args.max_focal_length:
        narrowest, widest = calculate_fov_range(focal_length, args.max_focal_length, sensor)
    else:
        narrowest = widest = calculate_fov(focal_length, sensor)

    if args.json:
        _print_json(
            _json_envelope(
                command="fov",
                ok=True,
                data={
                    "camera": camera,
                    "sensor": sensor.name,
                    "focal_length_mm": focal_length,
                    "max_focal_length_mm": args.max_focal_length,
                    "widest": asdict(widest),
                    "narrowest": asdict(narrowest),
                    "scale_low_arcminwidth": narrowest.width_arcmin / 1.2,
                    "scale_high_arcminwidth": widest.width_arcmin * 1.2,
                },
            )
        )
    else:
        if camera:
            print(f"Camera: {camera}")
        print(f"Sensor: {sensor.name} ({sensor.width_mm} x {sensor.height_mm} mm)")
        if args.max_focal_length:
            print(f"FOV (wide, {focal_length:.0f}mm): {widest}")
            print(f"FOV (tele, {args.max_focal_length:.0f}mm): {narrowest}")
        else:
            print(f"FOV ({focal_length:.0f}mm): {widest}")
            print(f"Diagonal: {widest.diagonal_deg:.2f}°")
        print(
            f"Recommended scale: {narrowest.width_arcmin / 1.2:.0f}-{widest.width_arcmin * 1.2:.0f} arcminwidth"
        )
    return 0


def run_indexes(args) -> int:
    _init_logging(getattr(args, "log_level", None))
    if not args.margin > 0:
        print("--margin must be positive.", file=sys.stderr)
        return 2
    if args.fov is not None:
        rec = recommend_indexes(args.fov, args.margin)
    elif args.focal_length is not None:
        try:
            sensor = sensor_from_name(args.sensor) if args.sensor else APSC_NIKON
        except ValueError as e:
            _report_error("indexes", args, e, code="invalid_input")
            return 2
        max_focal = args.max_focal_length or args.focal_length
        rec = recommend_indexes_for_lens(args.focal_length, max_focal, sensor, args.margin)
    else:
        print("Either --fov or --focal-length is required.", file=sys.stderr)
        return 2

    if args.json:
        _print_json(
            _json_envelope(
                command="indexes",
                ok=True,
                data={
                    "indexes": [
                        {
                            "name": idx.name,
                            "min_fov_deg": idx.min_fov_deg,
                            "max_fov_deg": idx.max_fov_deg,
                            "size_mb": idx.size_mb,
                            "url": idx.download_url,
                        }
                        for idx in rec.indexes
                    ],
                    "total_size_mb": rec.total_size_mb,
                    "download_script": rec.download_script,
                },
            )
        )
    elif args.script:
        print(rec.download_script, end="")
    else:
        print(rec, end="")
    if not rec.indexes:
        print("No 4100-series index covers this field of view.", file=sys.stderr)
        return 1
    return 0


def run_view(args) -> int:
    _init_logging(getattr(args, "log_level", None))
    try:
        from astropy.io import fits
    except ModuleNotFoundError:
        message = "astropy is required for 'astro-cli view'. Install with: pip install -e .[tools]"
        if getattr(args, "json", False):
            _print_json(
                _json_envelope(
                    command="view",
                    ok=False,
                    error={"code": "dependency_missing", "message": message, "details": None},
                )
            )
        else:
            print(message, file=sys.stderr)
        return 2

    fits_path = args.input_fits
    if not os.path.isfile(fits_path):
        message = f"Input file not found: {fits_path}"
        if getattr(args, "json", False):
            _print_json(
                _json_envelope(
                    command="view",
                    ok=False,
                    error={"code": "file_not_found", "message": message, "details": None},
                )
            )
        else:
            print(message, file=sys.stderr)
        return 1
    try:
        with fits.open(fits_path) as hdul:
            header_text = hdul[0].header.tostring(sep="\n")
    except OSError as e:
        _report_error("view", args, e, code="view_failed")
        return 1

    if getattr(args, "json", False):
        _print_json(
            _json_envelope(command="view", ok=True, data={"path": fits_path, "header": header_text})
        )
    else:
        print("FITS Header:")
        print(header_text)
    return 0


def run_doctor(args=None) -> int:
    _init_logging(getattr(args, "log_level", None))

    config_check = {"ok": True, "detail": "loaded (defaults applied if missing)"}
    try:
        config = load_config(_config_path_from_args(args))
    except (OSError, ValueError) as e:
        # TOMLDecodeError is a ValueError
        config_check = {"ok": False, "detail": f"invalid config: {e}"}
        config = load_config(None)
    client_config = config.client_config()

    def check_index_path():
        path = client_config.index_path
        if not path:
            return {"ok": False, "detail": "not configured (set solver.index_path or ASTROMETRY_INDEX_PATH)"}
        if not os.path.isdir(path):
            return {"ok": False, "detail": f"does not exist: {path}"}
        count = len(list(Path(path).glob("index-*.fits")))
        if count == 0:
            return {"ok": False, "detail": f"no index-*.fits files in {path}"}
        return {"ok": True, "detail": f"{count} index files in {path}"}

    def check_container():
        if not client_config.use_docker_exec:
            return {"ok": True, "detail": f"docker run with {client_config.docker_image}"}
        if not client_config.container_name:
            return {"ok": False, "detail": "docker exec enabled but container_name not set"}
        return {"ok": True, "detail": f"docker exec into {client_config.container_name}"}

    checks = {
        "config": config_check,
        "docker": get_solver_backend(client_config).is_available(),
        "index_path": check_index_path(),
        "container": check_container(),
    }

    ok = all(c["ok"] for c in checks.values())

    if args is not None and getattr(args, "json", False):
        _print_json(
            _json_envelope(
                command="doctor",
                ok=ok,
                data={"checks": checks},
                error=None
                if ok
                else {"code": "doctor_failed", "message": "one or more checks failed", "details": None},
            )
        )
    else:
        print("Astrometry Client Doctor Report")
        print("===============================")

        for name, result in checks.items():
            status = "OK" if result["ok"] else "MISSING"
            print(f"{name:12} : {status} ({result['detail']})")

        if ok:
            print("\nSystem ready.")
        else:
            print("\nSome components are missing or not configured.")

    return 0 if ok else 1
