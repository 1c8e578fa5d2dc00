"""Camera model to sensor size lookup.

Detection upper-cases the EXIF make and model and walks an ordered list of
(pattern, sensor) pairs for the manufacturer; the first pattern contained in
the model wins, so longer or more specific patterns come first.
"""

from .fov import (
    APSC_CANON,
    APSC_NIKON,
    FULL_FRAME,
    MICRO_FOUR_THIRDS,
    SensorSize,
)

SOURCE_EXIF = "exif"
SOURCE_DEFAULT = "default"

CANON_MAPPINGS = [
    # full frame mirrorless
    ("EOS C50", FULL_FRAME),
    ("EOS R1", FULL_FRAME),
    ("EOS R3", FULL_FRAME),
    ("EOS R5 MARK II", FULL_FRAME),
    ("EOS R5", FULL_FRAME),
    ("EOS R6 MARK II", FULL_FRAME),
    ("EOS R6", FULL_FRAME),
    ("EOS R8", FULL_FRAME),
    ("EOS RA", FULL_FRAME),
    ("EOS RP", FULL_FRAME),
    # full frame DSLR
    ("EOS-1D C", FULL_FRAME),
    ("EOS-1D X MARK III", FULL_FRAME),
    ("EOS-1D X MARK II", FULL_FRAME),
    ("EOS-1D X", FULL_FRAME),
    ("EOS-1DS MARK III", FULL_FRAME),
    ("EOS-1DS MARK II", FULL_FRAME),
    ("EOS-1DS", FULL_FRAME),
    ("EOS 5D MARK IV", FULL_FRAME),
    ("EOS 5D MARK III", FULL_FRAME),
    ("EOS 5D MARK II", FULL_FRAME),
    ("EOS 5DS", FULL_FRAME),
    ("EOS 5D", FULL_FRAME),
    ("EOS 6D MARK II", FULL_FRAME),
    ("EOS 6D", FULL_FRAME),
    # APS-C
    ("EOS M", APSC_CANON),
    ("EOS R7", APSC_CANON),
    ("EOS R10", APSC_CANON),
    ("EOS M5", APSC_CANON),
    ("EOS 7D", APSC_CANON),
    ("EOS 77D", APSC_CANON),
    ("EOS 80D", APSC_CANON),
    ("EOS 90D", APSC_CANON),
    ("REBEL", APSC_CANON),
    ("KISS", APSC_CANON),
]

# APS-C first, otherwise "Z 5" would claim the Z 50.
NIKON_MAPPINGS = [
    ("Z FC", APSC_NIKON),
    ("Z 50", APSC_NIKON),
    ("Z50", APSC_NIKON),
    ("D7500", APSC_NIKON),
    ("D7200", APSC_NIKON),
    ("D7100", APSC_NIKON),
    ("D5600", APSC_NIKON),
    ("D5500", APSC_NIKON),
    ("D5300", APSC_NIKON),
    ("D3500", APSC_NIKON),
    ("D3400", APSC_NIKON),
    ("D3300", APSC_NIKON),
    ("D500", APSC_NIKON),
    # full frame mirrorless, with and without spaces
    ("Z 5 II", FULL_FRAME),
    ("Z5II", FULL_FRAME),
    ("Z 5", FULL_FRAME),
    ("Z5", FULL_FRAME),
    ("Z 6 III", FULL_FRAME),
    ("Z6III", FULL_FRAME),
    ("Z 6 II", FULL_FRAME),
    ("Z6II", FULL_FRAME),
    ("Z 6", FULL_FRAME),
    ("Z6", FULL_FRAME),
    ("Z 7 II", FULL_FRAME),
    ("Z7II", FULL_FRAME),
    ("Z 7", FULL_FRAME),
    ("Z7", FULL_FRAME),
    ("Z 8", FULL_FRAME),
    ("Z8", FULL_FRAME),
    ("Z 9", FULL_FRAME),
    ("Z9", FULL_FRAME),
    ("Z F", FULL_FRAME),
    ("ZF", FULL_FRAME),
    ("Z R", FULL_FRAME),
    ("ZR", FULL_FRAME),
    # full frame DSLR; trailing spaces keep D3 off D3500 and friends
    ("D3S", FULL_FRAME),
    ("D3X", FULL_FRAME),
    ("D3 ", FULL_FRAME),
    ("D4S", FULL_FRAME),
    ("D4 ", FULL_FRAME),
    ("D5 ", FULL_FRAME),
    ("D6 ", FULL_FRAME),
    ("D600", FULL_FRAME),
    ("D610", FULL_FRAME),
    ("D700", FULL_FRAME),
    ("D750 ", FULL_FRAME),
    ("D780", FULL_FRAME),
    ("D800", FULL_FRAME),
    ("D810A", FULL_FRAME),
    ("D810", FULL_FRAME),
    ("D850", FULL_FRAME),
    ("DF ", FULL_FRAME),
]

SONY_MAPPINGS = [
    ("ILCE-1", FULL_FRAME),  # a1
    ("A1", FULL_FRAME),
    ("ILCE-7M5", FULL_FRAME),
    ("ILCE-7M4", FULL_FRAME),
    ("ILCE-7M3", FULL_FRAME),
    ("ILCE-7M2", FULL_FRAME),
    ("ILCE-7", FULL_FRAME),
    ("ILCE-7RM5", FULL_FRAME),
    ("ILCE-7RM4", FULL_FRAME),
    ("ILCE-7RM3", FULL_FRAME),
    ("ILCE-7RM2", FULL_FRAME),
    ("ILCE-7SM3", FULL_FRAME),
    ("ILCE-7SM2", FULL_FRAME),
    ("ILCE-9M3", FULL_FRAME),
    ("ILCE-9", FULL_FRAME),
    ("FX3", FULL_FRAME),
    ("FX6", FULL_FRAME),
    ("ALPHA 99", FULL_FRAME),
    ("ALPHA 850", FULL_FRAME),
    ("ALPHA 900", FULL_FRAME),
    ("A99", FULL_FRAME),
    # APS-C, a6xxx series
    ("ILCE-6", APSC_NIKON),
    ("A6", APSC_NIKON),
    ("ZV-E10", APSC_NIKON),
]

OLYMPUS_MAPPINGS = [
    ("E-M1X", MICRO_FOUR_THIRDS),
    ("E-M1 MARK III", MICRO_FOUR_THIRDS),
    ("E-M1 MARK II", MICRO_FOUR_THIRDS),
    ("E-M1", MICRO_FOUR_THIRDS),
    ("E-M5 MARK III", MICRO_FOUR_THIRDS),
    ("E-M5 MARK II", MICRO_FOUR_THIRDS),
    ("E-M5", MICRO_FOUR_THIRDS),
    ("E-M10 MARK IV", MICRO_FOUR_THIRDS),
    ("E-M10 MARK III", MICRO_FOUR_THIRDS),
    ("E-M10 MARK II", MICRO_FOUR_THIRDS),
    ("E-M10", MICRO_FOUR_THIRDS),
    ("OM-1 MARK II", MICRO_FOUR_THIRDS),
    ("OM-1", MICRO_FOUR_THIRDS),
    ("OM-3", MICRO_FOUR_THIRDS),
    ("OM-5", MICRO_FOUR_THIRDS),
    ("E-1", MICRO_FOUR_THIRDS),
    ("E-3", MICRO_FOUR_THIRDS),
    ("E-5", MICRO_FOUR_THIRDS),
    ("E-30", MICRO_FOUR_THIRDS),
    ("E-300", MICRO_FOUR_THIRDS),
    ("E-330", MICRO_FOUR_THIRDS),
    ("E-400", MICRO_FOUR_THIRDS),
    ("E-410", MICRO_FOUR_THIRDS),
    ("E-420", MICRO_FOUR_THIRDS),
    ("E-450", MICRO_FOUR_THIRDS),
    ("E-500", MICRO_FOUR_THIRDS),
    ("E-510", MICRO_FOUR_THIRDS),
    ("E-520", MICRO_FOUR_THIRDS),
    ("E-620", MICRO_FOUR_THIRDS),
    ("PEN-F", MICRO_FOUR_THIRDS),
    ("E-P1", MICRO_FOUR_THIRDS),
    ("E-P2", MICRO_FOUR_THIRDS),
    ("E-P3", MICRO_FOUR_THIRDS),
    ("E-P5", MICRO_FOUR_THIRDS),
    ("E-P7", MICRO_FOUR_THIRDS),
    ("E-PL1", MICRO_FOUR_THIRDS),
    ("E-PL2", MICRO_FOUR_THIRDS),
    ("E-PL3", MICRO_FOUR_THIRDS),
    ("E-PL5", MICRO_FOUR_THIRDS),
    ("E-PL6", MICRO_FOUR_THIRDS),
    ("E-PL7", MICRO_FOUR_THIRDS),
    ("E-PL9", MICRO_FOUR_THIRDS),
    ("E-PM1", MICRO_FOUR_THIRDS),
    ("E-PM2", MICRO_FOUR_THIRDS),
]

PANASONIC_MAPPINGS = [
    ("DC-G9 II", MICRO_FOUR_THIRDS),
    ("DC-G9", MICRO_FOUR_THIRDS),
    ("DC-GH6", MICRO_FOUR_THIRDS),
    ("DC-GH5S", MICRO_FOUR_THIRDS),
    ("DC-GH5M2", MICRO_FOUR_THIRDS),
    ("DC-GH5", MICRO_FOUR_THIRDS),
    ("DC-GX850", MICRO_FOUR_THIRDS),
    ("DC-GX800", MICRO_FOUR_THIRDS),
    ("DMC-G85", MICRO_FOUR_THIRDS),
    ("DMC-G80", MICRO_FOUR_THIRDS),
    ("DMC-G10", MICRO_FOUR_THIRDS),
    ("DMC-G7", MICRO_FOUR_THIRDS),
    ("DMC-G6", MICRO_FOUR_THIRDS),
    ("DMC-G5", MICRO_FOUR_THIRDS),
    ("DMC-G3", MICRO_FOUR_THIRDS),
    ("DMC-G2", MICRO_FOUR_THIRDS),
    ("DMC-G1", MICRO_FOUR_THIRDS),
    ("DMC-GF7", MICRO_FOUR_THIRDS),
    ("DMC-GF6", MICRO_FOUR_THIRDS),
    ("DMC-GF5", MICRO_FOUR_THIRDS),
    ("DMC-GF3", MICRO_FOUR_THIRDS),
    ("DMC-GF2", MICRO_FOUR_THIRDS),
    ("DMC-GF1", MICRO_FOUR_THIRDS),
    ("DMC-GH4", MICRO_FOUR_THIRDS),
    ("DMC-GH3", MICRO_FOUR_THIRDS),
    ("DMC-GH2", MICRO_FOUR_THIRDS),
    ("DMC-GH1", MICRO_FOUR_THIRDS),
    ("DMC-GM5", MICRO_FOUR_THIRDS),
    ("DMC-GM1", MICRO_FOUR_THIRDS),
    ("DMC-GX8", MICRO_FOUR_THIRDS),
    ("DMC-GX7", MICRO_FOUR_THIRDS),
    ("DMC-GX1", MICRO_FOUR_THIRDS),
    ("DMC-L10", MICRO_FOUR_THIRDS),
    ("DMC-L1", MICRO_FOUR_THIRDS),
]

# (make substrings, mappings, fallback when no model pattern matches)
MANUFACTURERS = [
    (("CANON",), CANON_MAPPINGS, None),
    (("NIKON",), NIKON_MAPPINGS, None),
    (("SONY",), SONY_MAPPINGS, None),
    (("OLYMPUS", "OM SYSTEM"), OLYMPUS_MAPPINGS, MICRO_FOUR_THIRDS),
    (("PANASONIC",), PANASONIC_MAPPINGS, MICRO_FOUR_THIRDS),
]


def match_sensor(model: str, mappings) -> SensorSize | None:
    model_upper = model.upper()
    for pattern, sensor in mappings:
        if pattern in model_upper:
            return sensor
    return None


def detect_sensor(make: str, model: str) -> tuple[SensorSize, str]:
    """Return ``(sensor, source)``; source is ``"exif"`` or ``"default"``."""
    make_upper = (make or "").upper()
    for make_patterns, mappings, fallback in MANUFACTURERS:
        if not any(p in make_upper for p in make_patterns):
            continue
        sensor = match_sensor(model or "", mappings)
        if sensor is not None:
            return sensor, SOURCE_EXIF
        if fallback is not None:
            return fallback, SOURCE_EXIF
    return APSC_NIKON, SOURCE_DEFAULT
