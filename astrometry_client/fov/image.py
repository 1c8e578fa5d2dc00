import logging
import os
from dataclasses import dataclass
from pathlib import Path

from PIL import Image as PILImage
from PIL import UnidentifiedImageError
from PIL.ExifTags import IFD, TAGS

from .fov import FieldOfView, SensorSize, calculate_fov
from .sensors import detect_sensor

SCALE_MARGIN = 1.2


@dataclass
class ImageInfo:
    make: str = ""
    model: str = ""
    focal_length_mm: float = 0.0
    sensor: SensorSize | None = None
    fov: FieldOfView | None = None
    scale_low: float = 0.0  # arcminwidth
    scale_high: float = 0.0
    has_exif: bool = False
    detected_from: str = ""

    def __str__(self) -> str:
        if not self.has_exif:
            return "No EXIF data found"
        lines = [f"Camera: {self.make} {self.model}"]
        if self.focal_length_mm > 0:
            lines.append(f"Focal Length: {self.focal_length_mm:.0f}mm")
        if self.sensor is not None:
            lines.append(f"Sensor: {self.sensor.name} ({self.detected_from})")
        if self.fov is not None and self.fov.width_deg > 0:
            lines.append(f"FOV: {self.fov}")
            lines.append(
                f"Recommended scale: {self.scale_low:.0f}-{self.scale_high:.0f} arcminwidth"
            )
        return "\n".join(lines)


def _rational_to_float(value) -> float:
    if hasattr(value, "numerator") and hasattr(value, "denominator"):
        if not value.denominator:
            return 0.0
        return float(value.numerator) / float(value.denominator)
    if isinstance(value, tuple) and len(value) == 2:
        return float(value[0]) / float(value[1]) if value[1] else 0.0
    return float(value)


def read_exif(path: str | Path) -> dict:
    """Return EXIF tags by name, merging the base IFD and the Exif sub-IFD."""
    with PILImage.open(path) as img:
        exif_obj = img.getexif()
        tags = {TAGS.get(tag_id, str(tag_id)): value for tag_id, value in exif_obj.items()}
        for tag_id, value in exif_obj.get_ifd(IFD.Exif).items():
            tags[TAGS.get(tag_id, str(tag_id))] = value
    return tags


def analyze_image(path: str | Path) -> ImageInfo:
    """Read camera make, model and focal length from EXIF and derive the FOV.

    A missing file raises FileNotFoundError. Files Pillow cannot read, or
    that carry no EXIF, give ``ImageInfo(has_exif=False)``.
    """
    if not os.path.isfile(path):
        raise FileNotFoundError(f"Image not found: {path}")

    try:
        tags = read_exif(path)
    except (UnidentifiedImageError, OSError) as e:
        logging.debug(f"Could not read EXIF from {path}: {e}")
        return ImageInfo(has_exif=False)
    if not tags:
        return ImageInfo(has_exif=False)

    info = ImageInfo(has_exif=True)
    info.make = str(tags.get("Make", "")).strip().strip("\x00")
    info.model = str(tags.get("Model", "")).strip().strip("\x00")

    focal = tags.get("FocalLength")
    if focal is not None:
        try:
            info.focal_length_mm = _rational_to_float(focal)
        except (TypeError, ValueError, ZeroDivisionError):
            info.focal_length_mm = 0.0

    info.sensor, info.detected_from = detect_sensor(info.make, info.model)

    if info.focal_length_mm > 0 and info.sensor.width_mm > 0:
        info.fov = calculate_fov(info.focal_length_mm, info.sensor)
        info.scale_low = info.fov.width_arcmin / SCALE_MARGIN
        info.scale_high = info.fov.width_arcmin * SCALE_MARGIN

    return info
