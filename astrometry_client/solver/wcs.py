"""Parse solve-field ``.wcs`` headers into a :class:`Result`.

The file is a bare FITS header: fixed 80-byte ASCII records, no line
terminators, space padded, closed by an ``END`` record. Only ``KEY = VALUE``
cards are kept; values stay strings until the transform step picks out the
numeric keys it needs.
"""

from __future__ import annotations

import math
import os
from dataclasses import dataclass
from typing import BinaryIO, Mapping, Optional

from astrometry_client.errors import WCSParseError, WCSReadError
from .types import Result

RECORD_SIZE = 80
ARCSEC_PER_DEG = 3600.0


def read_wcs_header(stream: BinaryIO) -> dict[str, str]:
    header: dict[str, str] = {}
    while True:
        record = stream.read(RECORD_SIZE)
        if len(record) != RECORD_SIZE:
            break
        line = record.decode("ascii", errors="replace")

        if line.startswith("END"):
            continue

        key, sep, value = line.partition("=")
        if not sep:
            # blank padding or a continuation card
            continue

        value = value.strip()
        slash = value.find("/")
        if slash != -1:
            value = value[:slash]
        value = value.strip().strip("'").strip()

        header[key.strip()] = value
    return header


def _header_float(header: Mapping[str, str], key: str) -> Optional[float]:
    """Return the value of ``key`` as a float, or None when absent or unparsable."""
    raw = header.get(key)
    if raw is None or "_" in raw:
        # digit separators are not valid in FITS numbers
        return None
    try:
        return float(raw)
    except ValueError:
        return None


def _or_zero(value: Optional[float]) -> float:
    return 0.0 if value is None else value


def _image_extent(header: Mapping[str, str], preferred: str, fallback: str) -> float:
    # The preferred key wins whenever it is present, even if it fails to parse.
    if preferred in header:
        return _or_zero(_header_float(header, preferred))
    if fallback in header:
        return _or_zero(_header_float(header, fallback))
    return 0.0


@dataclass(frozen=True)
class WCSTransform:
    crval1: float
    crval2: float
    crpix1: float
    crpix2: float
    cd11: float
    cd12: float
    cd21: float
    cd22: float
    image_w: float
    image_h: float
    available: bool

    @classmethod
    def from_header(cls, header: Mapping[str, str]) -> "WCSTransform":
        crval1 = _header_float(header, "CRVAL1")
        return cls(
            crval1=_or_zero(crval1),
            crval2=_or_zero(_header_float(header, "CRVAL2")),
            crpix1=_or_zero(_header_float(header, "CRPIX1")),
            crpix2=_or_zero(_header_float(header, "CRPIX2")),
            cd11=_or_zero(_header_float(header, "CD1_1")),
            cd12=_or_zero(_header_float(header, "CD1_2")),
            cd21=_or_zero(_header_float(header, "CD2_1")),
            cd22=_or_zero(_header_float(header, "CD2_2")),
            image_w=_image_extent(header, "IMAGEW", "NAXIS1"),
            image_h=_image_extent(header, "IMAGEH", "NAXIS2"),
            # Only CRVAL1 gates the full matrix transform.
            available=crval1 is not None,
        )

    @property
    def has_extent(self) -> bool:
        return self.image_w > 0 and self.image_h > 0

    def field_center(self) -> tuple[float, float]:
        """Sky position of the image centre, applying the CD matrix from CRPIX."""
        dx = self.image_w / 2.0 - self.crpix1
        dy = self.image_h / 2.0 - self.crpix2
        d_ra = self.cd11 * dx + self.cd12 * dy
        d_dec = self.cd21 * dx + self.cd22 * dy
        return self.crval1 + d_ra, self.crval2 + d_dec

    def pixel_scale_arcsec(self) -> float:
        return math.hypot(self.cd11, self.cd21) * ARCSEC_PER_DEG

    def rotation_deg(self) -> float:
        """Position angle of image "up", degrees E of N, in [0, 360)."""
        rotation = 180.0 - math.degrees(math.atan2(self.cd12, self.cd11))
        while rotation < 0:
            rotation += 360.0
        while rotation >= 360.0:
            rotation -= 360.0
        return rotation


def _field_extent(header: Mapping[str, str], primary: str, secondary: str, scale: float) -> float:
    extent = 0.0
    # NaN must not propagate into the field size
    if not scale > 0:
        return extent
    pixels = _header_float(header, primary)
    if pixels is not None:
        extent = pixels * scale / ARCSEC_PER_DEG
    # NAXIS overwrites an IMAGEW/IMAGEH derived value when both are present.
    pixels = _header_float(header, secondary)
    if pixels is not None:
        extent = pixels * scale / ARCSEC_PER_DEG
    return extent


def parse_wcs_header(header: Mapping[str, str]) -> Result:
    """Derive field centre, pixel scale, rotation and field size from a header.

    Uses the full CD matrix when CRVAL1 parsed and the image extent is known;
    otherwise falls back to CRVAL as the centre, ``|CD1_1|`` as the scale and
    the raw CROTA2 as the rotation.

    Raises
    ------
    WCSParseError
        If RA, Dec and pixel scale all come out as zero.
    """
    transform = WCSTransform.from_header(header)

    if transform.available and transform.has_extent:
        ra, dec = transform.field_center()
        pixel_scale = transform.pixel_scale_arcsec()
        rotation = transform.rotation_deg()
    else:
        ra, dec = transform.crval1, transform.crval2
        pixel_scale = abs(transform.cd11) * ARCSEC_PER_DEG if transform.cd11 != 0 else 0.0
        rotation = _or_zero(_header_float(header, "CROTA2"))

    field_width = _field_extent(header, "IMAGEW", "NAXIS1", pixel_scale)
    field_height = _field_extent(header, "IMAGEH", "NAXIS2", pixel_scale)

    # A field centred exactly on (0, 0) with no scale is indistinguishable from
    # an empty header here.
    if ra == 0 and dec == 0 and pixel_scale == 0:
        raise WCSParseError("failed to parse WCS output: no valid WCS fields found")

    return Result(
        solved=True,
        ra_deg=ra,
        dec_deg=dec,
        pixel_scale_arcsec=pixel_scale,
        rotation_deg=rotation,
        field_width_deg=field_width,
        field_height_deg=field_height,
        wcs_header=dict(header),
    )


def parse_wcs_file(path: str | os.PathLike) -> Result:
    try:
        with open(path, "rb") as f:
            header = read_wcs_header(f)
    except OSError as e:
        raise WCSReadError(f"failed to open WCS file: {path}: {e}") from e
    return parse_wcs_header(header)
