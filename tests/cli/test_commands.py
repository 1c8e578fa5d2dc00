import json
from unittest.mock import patch

import pytest

from astrometry_client import __version__
from astrometry_client.cli.main import main
from astrometry_client.errors import SolveTimeoutError
from astrometry_client.solver.types import Result


def _json_out(capsys):
    return json.loads(capsys.readouterr().out)


@pytest.fixture
def index_dir(tmp_path):
    path = tmp_path / "index"
    path.mkdir()
    (path / "index-4110.fits").write_bytes(b"")
    return path


@pytest.fixture
def image_file(tmp_path):
    path = tmp_path / "m42.jpg"
    path.write_bytes(b"jpeg")
    return path


def test_version(capsys):
    assert main(["--version"]) == 0
    assert __version__ in capsys.readouterr().out


def test_no_command_prints_help(capsys):
    assert main([]) == 0
    assert "usage" in capsys.readouterr().out


def test_wcs_text(write_wcs, orion_cards, capsys):
    path = write_wcs(orion_cards)
    assert main(["wcs", "--in", str(path)]) == 0
    out = capsys.readouterr().out
    assert "Solved: True" in out
    assert "83.42" in out


def test_wcs_json(write_wcs, orion_cards, capsys):
    path = write_wcs(orion_cards)
    assert main(["wcs", "--in", str(path), "--json"]) == 0
    payload = _json_out(capsys)
    assert payload["ok"] is True
    assert payload["command"] == "wcs"
    assert payload["data"]["solved"] is True
    assert payload["data"]["ra"] == pytest.approx(83.423, abs=0.001)
    assert payload["data"]["wcs_header"]["IMAGEW"] == "6000"


def test_wcs_missing_file(tmp_path, capsys):
    assert main(["wcs", "--in", str(tmp_path / "nope.wcs"), "--json"]) == 1
    payload = _json_out(capsys)
    assert payload["ok"] is False
    assert payload["error"]["code"] == "wcs_read_failed"


def test_wcs_empty_header(write_wcs, capsys):
    path = write_wcs([])
    assert main(["wcs", "--in", str(path)]) == 1
    assert "no valid WCS fields" in capsys.readouterr().err


def test_fov_json(capsys):
    assert main(["fov", "--focal-length", "50", "--sensor", "full-frame", "--json"]) == 0
    data = _json_out(capsys)["data"]
    assert data["sensor"] == "Full Frame (35mm)"
    assert data["widest"]["width_deg"] == pytest.approx(39.6, abs=0.1)


def test_fov_zoom_text(capsys):
    assert main(["fov", "--focal-length", "18", "--max-focal-length", "55"]) == 0
    out = capsys.readouterr().out
    assert "APS-C Nikon/Sony" in out
    assert "(wide, 18mm)" in out
    assert "(tele, 55mm)" in out


def test_fov_requires_focal_length(capsys):
    assert main(["fov"]) == 2


def test_fov_unknown_sensor(capsys):
    assert main(["fov", "--focal-length", "50", "--sensor", "nope"]) == 2
    assert "Unknown sensor" in capsys.readouterr().err


def test_indexes_script(capsys):
    assert main(["indexes", "--fov", "2", "--margin", "1.2", "--script"]) == 0
    out = capsys.readouterr().out
    assert out.startswith("#!/bin/bash")
    assert "index-4112.fits" in out


def test_indexes_for_lens_json(capsys):
    argv = ["indexes", "--focal-length", "200", "--max-focal-length", "300", "--margin", "1.2", "--json"]
    assert main(argv) == 0
    data = _json_out(capsys)["data"]
    assert [idx["name"] for idx in data["indexes"]][0] == "index-4110"


def test_indexes_needs_fov_or_focal_length(capsys):
    assert main(["indexes"]) == 2


def test_indexes_zero_margin(capsys):
    assert main(["indexes", "--fov", "2", "--margin", "0"]) == 2
    assert "--margin must be positive" in capsys.readouterr().err


def test_solve_bad_index_path(tmp_path, image_file, capsys):
    argv = ["solve", "--image", str(image_file), "--index-path", str(tmp_path / "missing")]
    assert main(argv) == 2
    assert "index_path does not exist" in capsys.readouterr().err


def test_solve_needs_ra_and_dec(image_file, index_dir, capsys):
    argv = ["solve", "--image", str(image_file), "--index-path", str(index_dir), "--ra", "10"]
    assert main(argv) == 2


def test_solve_success_json(image_file, index_dir, capsys):
    result = Result(solved=True, ra_deg=83.8, dec_deg=-5.4, pixel_scale_arcsec=4.3)
    with patch("astrometry_client.cli.commands.Client") as mock_client:
        mock_client.return_value.solve.return_value = result
        argv = [
            "solve",
            "--image",
            str(image_file),
            "--index-path",
            str(index_dir),
            "--scale-low",
            "10",
            "--scale-high",
            "30",
            "--depth",
            "5-15",
            "--json",
        ]
        assert main(argv) == 0

    options = mock_client.return_value.solve.call_args.args[1]
    assert (options.scale_low, options.scale_high) == (10.0, 30.0)
    assert (options.depth_low, options.depth_high) == (5, 15)
    client_config = mock_client.call_args.args[0]
    assert client_config.index_path == str(index_dir)

    payload = _json_out(capsys)
    assert payload["ok"] is True
    assert payload["data"]["ra"] == 83.8


def test_solve_unsolved(image_file, index_dir, capsys):
    with patch("astrometry_client.cli.commands.Client") as mock_client:
        mock_client.return_value.solve.return_value = Result(solved=False)
        argv = ["solve", "--image", str(image_file), "--index-path", str(index_dir), "--json"]
        assert main(argv) == 1
    payload = _json_out(capsys)
    assert payload["ok"] is False
    assert payload["error"]["code"] == "no_solution"


def test_solve_timeout(image_file, index_dir, capsys):
    with patch("astrometry_client.cli.commands.Client") as mock_client:
        mock_client.return_value.solve.side_effect = SolveTimeoutError("solve operation timed out")
        argv = ["solve", "--image", str(image_file), "--index-path", str(index_dir), "--json"]
        assert main(argv) == 1
    assert _json_out(capsys)["error"]["code"] == "timeout"


def test_solve_exec_mode_needs_container(image_file, index_dir, capsys):
    argv = ["solve", "--image", str(image_file), "--index-path", str(index_dir), "--docker-exec"]
    assert main(argv) == 2
    assert "container_name" in capsys.readouterr().err


def test_doctor_ready(tmp_path, index_dir, capsys):
    config_path = tmp_path / "config.toml"
    config_path.write_text(f'[solver]\nindex_path = "{index_dir}"\n')
    with patch(
        "astrometry_client.solver.docker.DockerSolverBackend.is_available",
        return_value={"ok": True, "detail": "server 27.1.1"},
    ):
        assert main(["doctor", "--config", str(config_path), "--json"]) == 0
    checks = _json_out(capsys)["data"]["checks"]
    assert checks["index_path"]["detail"].startswith("1 index files")


def test_doctor_missing_indexes(tmp_path, capsys):
    config_path = tmp_path / "config.toml"
    config_path.write_text(f'[solver]\nindex_path = "{tmp_path / "none"}"\n')
    with patch(
        "astrometry_client.solver.docker.DockerSolverBackend.is_available",
        return_value={"ok": False, "detail": "not found in PATH"},
    ):
        assert main(["doctor", "--config", str(config_path)]) == 1
    out = capsys.readouterr().out
    assert "Some components are missing" in out


def test_view_header(tmp_path, capsys):
    fits = pytest.importorskip("astropy.io.fits")
    path = tmp_path / "frame.fits"
    hdu = fits.PrimaryHDU()
    hdu.header["OBJECT"] = "M42"
    hdu.writeto(path)
    assert main(["view", "--in", str(path)]) == 0
    assert "M42" in capsys.readouterr().out


def test_view_missing_file(tmp_path, capsys):
    pytest.importorskip("astropy.io.fits")
    assert main(["view", "--in", str(tmp_path / "nope.fits")]) == 1
