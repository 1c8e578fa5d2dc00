import pytest

from astrometry_client.fov import APSC_CANON, APSC_NIKON, FULL_FRAME, MICRO_FOUR_THIRDS
from astrometry_client.fov.sensors import NIKON_MAPPINGS, detect_sensor, match_sensor


@pytest.mark.parametrize(
    "make, model, expected",
    [
        ("Canon", "Canon EOS R5", FULL_FRAME),
        ("Canon", "Canon EOS 5D Mark IV", FULL_FRAME),
        ("Canon", "Canon EOS 90D", APSC_CANON),
        ("Canon", "Canon EOS Rebel T7i", APSC_CANON),
        ("NIKON CORPORATION", "NIKON Z 50", APSC_NIKON),
        ("NIKON CORPORATION", "NIKON Z 5", FULL_FRAME),
        ("NIKON CORPORATION", "NIKON Z 6_2", FULL_FRAME),
        ("NIKON CORPORATION", "NIKON D850", FULL_FRAME),
        ("NIKON CORPORATION", "NIKON D3500", APSC_NIKON),
        ("SONY", "ILCE-7M3", FULL_FRAME),
        ("SONY", "ILCE-6400", APSC_NIKON),
        ("OLYMPUS CORPORATION", "E-M10 Mark IV", MICRO_FOUR_THIRDS),
        ("OM SYSTEM", "OM-5", MICRO_FOUR_THIRDS),
        ("Panasonic", "DC-GH5", MICRO_FOUR_THIRDS),
    ],
)
def test_detect_sensor(make, model, expected):
    sensor, _ = detect_sensor(make, model)
    assert sensor == expected


def test_detected_source_is_exif():
    assert detect_sensor("Canon", "Canon EOS R6")[1] == "exif"


def test_olympus_unknown_model_falls_back_to_m43():
    assert detect_sensor("OLYMPUS IMAGING CORP.", "E-999") == (MICRO_FOUR_THIRDS, "exif")


def test_unknown_camera_uses_default():
    assert detect_sensor("FUJIFILM", "X-T4") == (APSC_NIKON, "default")
    assert detect_sensor("Canon", "PowerShot G7 X") == (APSC_NIKON, "default")
    assert detect_sensor("", "") == (APSC_NIKON, "default")


def test_first_match_wins():
    assert match_sensor("nikon z 50", NIKON_MAPPINGS) is APSC_NIKON
    assert match_sensor("NIKON COOLPIX", NIKON_MAPPINGS) is None
