import pytest
from PIL import Image
from PIL.TiffImagePlugin import IFDRational

from astrometry_client.fov import APSC_CANON, FULL_FRAME, analyze_image, calculate_fov

MAKE = 0x010F
MODEL = 0x0110
FOCAL_LENGTH = 0x920A


def _jpeg_with_exif(path, make, model, focal_length=None):
    img = Image.new("RGB", (16, 16), color=(10, 10, 10))
    exif = Image.Exif()
    exif[MAKE] = make
    exif[MODEL] = model
    if focal_length is not None:
        exif[FOCAL_LENGTH] = IFDRational(focal_length, 1)
    img.save(path, format="JPEG", exif=exif)
    return path


def test_analyze_image_full_frame(tmp_path):
    path = _jpeg_with_exif(tmp_path / "r5.jpg", "Canon", "Canon EOS R5", 50)
    info = analyze_image(path)
    assert info.has_exif is True
    assert info.make == "Canon"
    assert info.model == "Canon EOS R5"
    assert info.focal_length_mm == pytest.approx(50.0)
    assert info.sensor == FULL_FRAME
    assert info.detected_from == "exif"
    assert info.fov == calculate_fov(50, FULL_FRAME)
    assert info.scale_low == pytest.approx(info.fov.width_arcmin / 1.2)
    assert info.scale_high == pytest.approx(info.fov.width_arcmin * 1.2)
    assert "Recommended scale" in str(info)


def test_analyze_image_without_focal_length(tmp_path):
    path = _jpeg_with_exif(tmp_path / "90d.jpg", "Canon", "Canon EOS 90D")
    info = analyze_image(path)
    assert info.has_exif is True
    assert info.sensor == APSC_CANON
    assert info.focal_length_mm == 0.0
    assert info.fov is None
    assert "Recommended scale" not in str(info)


def test_analyze_image_no_exif(tmp_path):
    path = tmp_path / "plain.png"
    Image.new("L", (8, 8)).save(path)
    info = analyze_image(path)
    assert info.has_exif is False
    assert str(info) == "No EXIF data found"


def test_analyze_image_not_an_image(tmp_path):
    path = tmp_path / "notes.txt"
    path.write_text("not an image")
    assert analyze_image(path).has_exif is False


def test_analyze_image_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        analyze_image(tmp_path / "missing.jpg")
