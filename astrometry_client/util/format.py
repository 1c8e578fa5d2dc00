from typing import Tuple


def deg_to_arcmin(deg: float) -> float:
    return deg * 60.0


def deg_to_arcsec(deg: float) -> float:
    return deg * 3600.0


def _split_dms(angle_deg: float, precision: int) -> Tuple[int, int, int, float]:
    sign = -1 if angle_deg < 0 else 1
    total_seconds = round(abs(angle_deg) * 3600.0, precision)
    deg = int(total_seconds // 3600)
    rem = total_seconds - deg * 3600
    minutes = int(rem // 60)
    seconds = rem - minutes * 60
    return sign, deg, minutes, seconds


def _split_hms(angle_deg: float, precision: int) -> Tuple[int, int, float]:
    hours = (angle_deg / 15.0) % 24.0
    total_seconds = round(hours * 3600.0, precision) % (24.0 * 3600.0)
    hours_int = int(total_seconds // 3600)
    rem = total_seconds - hours_int * 3600
    minutes = int(rem // 60)
    seconds = rem - minutes * 60
    return hours_int, minutes, seconds


def _format_seconds(seconds: float, precision: int) -> str:
    width = 3 + precision if precision > 0 else 2
    return f"{seconds:0{width}.{precision}f}"


def deg_to_hms(ra_deg: float, precision: int = 2) -> str:
    h, m, s = _split_hms(ra_deg, precision)
    s_fmt = _format_seconds(s, precision)
    return f"{h:02d}:{m:02d}:{s_fmt}"


def deg_to_dms(dec_deg: float, precision: int = 2) -> str:
    sign_val, d, m, s = _split_dms(dec_deg, precision)
    sign = "-" if sign_val < 0 else "+"
    s_fmt = _format_seconds(s, precision)
    return f"{sign}{d:02d}:{m:02d}:{s_fmt}"


def format_angle(deg: float, style: str = "deg", precision: int = 2) -> str:
    if style == "deg":
        return f"{deg:.{precision}f}°"
    if style == "arcmin":
        return f"{deg_to_arcmin(deg):.{precision}f}'"
    if style == "arcsec":
        return f'{deg_to_arcsec(deg):.{precision}f}"'
    if style == "hms":
        return deg_to_hms(deg, precision=precision)
    if style == "dms":
        return deg_to_dms(deg, precision=precision)
    raise ValueError(f"Unknown angle style: {style}")
