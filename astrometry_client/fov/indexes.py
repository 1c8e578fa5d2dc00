from dataclasses import dataclass
from typing import Sequence

from .fov import FieldOfView, SensorSize, calculate_fov_range

INDEX_BASE_URL = "http://data.astrometry.net/4100/"


@dataclass(frozen=True)
class IndexFile:
    name: str
    min_fov_deg: float
    max_fov_deg: float
    size_mb: float

    @property
    def download_url(self) -> str:
        return f"{INDEX_BASE_URL}{self.name}.fits"


# 4100 series (Tycho-2), widest first
ALL_INDEX_FILES = (
    IndexFile("index-4107", 8.0, 11.0, 165),
    IndexFile("index-4108", 5.6, 8.0, 95),
    IndexFile("index-4109", 4.2, 5.6, 50),
    IndexFile("index-4110", 3.0, 4.2, 25),
    IndexFile("index-4111", 2.2, 3.0, 10),
    IndexFile("index-4112", 1.6, 2.2, 5.3),
    IndexFile("index-4113", 1.1, 1.6, 2.7),
    IndexFile("index-4114", 0.8, 1.1, 1.4),
    IndexFile("index-4115", 0.56, 0.8, 0.74),
    IndexFile("index-4116", 0.4, 0.56, 0.409),
    IndexFile("index-4117", 0.28, 0.4, 0.248),
    IndexFile("index-4118", 0.2, 0.28, 0.187),
    IndexFile("index-4119", 0.1, 0.2, 0.144),
)


@dataclass
class IndexRecommendation:
    indexes: Sequence[IndexFile]
    total_size_mb: float
    download_script: str
    target_fov: FieldOfView | None = None

    def __str__(self) -> str:
        target = str(self.target_fov) if self.target_fov is not None else "unknown"
        lines = [
            f"Recommended indexes for FOV {target}:",
            f"Total download size: {self.total_size_mb:.1f} MB",
            "",
        ]
        for idx in self.indexes:
            lines.append(
                f"  {idx.name}: {idx.min_fov_deg:.2f}° - {idx.max_fov_deg:.2f}° ({idx.size_mb:.1f} MB)"
            )
        return "\n".join(lines) + "\n"


def _check_margin(margin: float) -> None:
    if not margin > 0:
        raise ValueError(f"margin must be positive, got {margin}")


def _select(min_fov_deg: float, max_fov_deg: float) -> list[IndexFile]:
    selected = [
        idx
        for idx in ALL_INDEX_FILES
        if idx.max_fov_deg >= min_fov_deg and idx.min_fov_deg <= max_fov_deg
    ]
    return sorted(selected, key=lambda idx: idx.min_fov_deg)


def _download_script(header_lines: list[str], indexes: Sequence[IndexFile], total_mb: float) -> str:
    lines = ["#!/bin/bash", "# Download recommended astrometry index files", ""]
    lines += header_lines
    lines += [f"# Total download size: {total_mb:.1f} MB", ""]
    lines += ["mkdir -p astrometry-data && cd astrometry-data", ""]
    for idx in indexes:
        lines.append(
            f"wget {idx.download_url}  # {idx.min_fov_deg:.2f}° - {idx.max_fov_deg:.2f}° ({idx.size_mb:.1f} MB)"
        )
    return "\n".join(lines) + "\n"


def recommend_indexes(fov_deg: float, margin: float) -> IndexRecommendation:
    """Indexes overlapping ``[fov / margin, fov * margin]``, narrowest first."""
    _check_margin(margin)
    indexes = _select(fov_deg / margin, fov_deg * margin)
    total = sum(idx.size_mb for idx in indexes)
    script = _download_script([f"# Target FOV: {fov_deg:.2f} degrees"], indexes, total)
    return IndexRecommendation(indexes=indexes, total_size_mb=total, download_script=script)


def recommend_indexes_for_fov(fov: FieldOfView, margin: float) -> IndexRecommendation:
    rec = recommend_indexes(fov.width_deg, margin)
    rec.target_fov = fov
    return rec


def recommend_indexes_for_lens(
    min_focal_length_mm: float,
    max_focal_length_mm: float,
    sensor: SensorSize,
    margin: float,
) -> IndexRecommendation:
    """Cover a zoom range from its tele end to its wide end.

    For a prime lens pass the same focal length twice.
    """
    _check_margin(margin)
    narrowest, widest = calculate_fov_range(min_focal_length_mm, max_focal_length_mm, sensor)
    indexes = _select(narrowest.width_deg / margin, widest.width_deg * margin)
    total = sum(idx.size_mb for idx in indexes)
    header = [
        f"# Lens: {min_focal_length_mm:.0f}-{max_focal_length_mm:.0f}mm on {sensor.name}",
        f"# FOV range: {widest} (wide) to {narrowest} (tele)",
    ]
    return IndexRecommendation(
        indexes=indexes,
        total_size_mb=total,
        download_script=_download_script(header, indexes, total),
        target_fov=widest,
    )
