from .format import (
    deg_to_arcmin,
    deg_to_arcsec,
    deg_to_dms,
    deg_to_hms,
    format_angle,
)

__all__ = [
    "deg_to_arcmin",
    "deg_to_arcsec",
    "deg_to_dms",
    "deg_to_hms",
    "format_angle",
]
