import math
from dataclasses import dataclass


@dataclass(frozen=True)
class SensorSize:
    width_mm: float
    height_mm: float
    name: str


FULL_FRAME = SensorSize(width_mm=36.0, height_mm=24.0, name="Full Frame (35mm)")
APSC_CANON = SensorSize(width_mm=22.3, height_mm=14.9, name="APS-C Canon")
APSC_NIKON = SensorSize(width_mm=23.6, height_mm=15.7, name="APS-C Nikon/Sony")
APSC_FUJI = SensorSize(width_mm=23.5, height_mm=15.6, name="APS-C Fujifilm")
MICRO_FOUR_THIRDS = SensorSize(width_mm=17.3, height_mm=13.0, name="Micro Four Thirds")
ONE_INCH = SensorSize(width_mm=13.2, height_mm=8.8, name='1" sensor')

SENSOR_PRESETS = {
    "full-frame": FULL_FRAME,
    "apsc-canon": APSC_CANON,
    "apsc-nikon": APSC_NIKON,
    "apsc-sony": APSC_NIKON,
    "apsc-fuji": APSC_FUJI,
    "m43": MICRO_FOUR_THIRDS,
    "1-inch": ONE_INCH,
}


@dataclass(frozen=True)
class FieldOfView:
    width_deg: float
    height_deg: float
    width_arcmin: float
    height_arcmin: float
    diagonal_deg: float

    def __str__(self) -> str:
        return (
            f"{self.width_deg:.2f}° x {self.height_deg:.2f}° "
            f"({self.width_arcmin:.1f}' x {self.height_arcmin:.1f}')"
        )


def _angle_deg(size_mm: float, focal_length_mm: float) -> float:
    return math.degrees(2.0 * math.atan(size_mm / (2.0 * focal_length_mm)))


def calculate_fov(focal_length_mm: float, sensor: SensorSize) -> FieldOfView:
    """Angular field of view, ``2 * atan(size / (2 * f))`` per axis."""
    width = _angle_deg(sensor.width_mm, focal_length_mm)
    height = _angle_deg(sensor.height_mm, focal_length_mm)
    diagonal = _angle_deg(math.hypot(sensor.width_mm, sensor.height_mm), focal_length_mm)
    return FieldOfView(
        width_deg=width,
        height_deg=height,
        width_arcmin=width * 60.0,
        height_arcmin=height * 60.0,
        diagonal_deg=diagonal,
    )


def calculate_fov_range(
    min_focal_length_mm: float, max_focal_length_mm: float, sensor: SensorSize
) -> tuple[FieldOfView, FieldOfView]:
    """Return ``(narrowest, widest)`` for a zoom lens."""
    narrowest = calculate_fov(max_focal_length_mm, sensor)
    widest = calculate_fov(min_focal_length_mm, sensor)
    return narrowest, widest


def sensor_from_name(name: str) -> SensorSize:
    key = name.strip().lower()
    if key not in SENSOR_PRESETS:
        raise ValueError(
            f"Unknown sensor: {name} (choose from {', '.join(sorted(SENSOR_PRESETS))})"
        )
    return SENSOR_PRESETS[key]
