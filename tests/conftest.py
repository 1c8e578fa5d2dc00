import pytest


def pytest_addoption(parser):
    parser.addoption(
        "--integration",
        action="store_true",
        default=False,
        help="run tests that need docker and astrometry index files",
    )


def pytest_collection_modifyitems(config, items):
    if config.getoption("--integration"):
        return

    for item in items:
        if "integration" in item.keywords:
            item.add_marker(
                pytest.mark.skip(
                    reason="need --integration option to run integration tests"
                )
            )


def header_records(cards, end=True) -> bytes:
    """Render (key, value) cards as 80-byte FITS records."""
    records = []
    for key, value in cards:
        records.append(f"{key:<8}= {value:>20}".ljust(80)[:80])
    if end:
        records.append("END".ljust(80))
    return "".join(records).encode("ascii")


@pytest.fixture
def write_wcs(tmp_path):
    def _write(cards, name="image.wcs", end=True):
        path = tmp_path / name
        path.write_bytes(header_records(cards, end=end))
        return path

    return _write


@pytest.fixture
def orion_cards():
    return [
        ("CRPIX1", "3000"),
        ("CRPIX2", "2000"),
        ("CRVAL1", "83.423"),
        ("CRVAL2", "-5.893"),
        ("CD1_1", "-0.0010995"),
        ("CD1_2", "0.00046"),
        ("CD2_1", "-0.00045"),
        ("CD2_2", "-0.0011"),
        ("IMAGEW", "6000"),
        ("IMAGEH", "4000"),
    ]


@pytest.fixture
def header_bytes():
    return header_records
