from .fov import (
    APSC_CANON,
    APSC_FUJI,
    APSC_NIKON,
    FULL_FRAME,
    MICRO_FOUR_THIRDS,
    ONE_INCH,
    SENSOR_PRESETS,
    FieldOfView,
    SensorSize,
    calculate_fov,
    calculate_fov_range,
    sensor_from_name,
)
from .sensors import detect_sensor
from .image import ImageInfo, analyze_image
from .indexes import (
    ALL_INDEX_FILES,
    IndexFile,
    IndexRecommendation,
    recommend_indexes,
    recommend_indexes_for_fov,
    recommend_indexes_for_lens,
)

__all__ = [
    "ALL_INDEX_FILES",
    "APSC_CANON",
    "APSC_FUJI",
    "APSC_NIKON",
    "FULL_FRAME",
    "MICRO_FOUR_THIRDS",
    "ONE_INCH",
    "SENSOR_PRESETS",
    "FieldOfView",
    "IndexFile",
    "ImageInfo",
    "IndexRecommendation",
    "SensorSize",
    "analyze_image",
    "calculate_fov",
    "calculate_fov_range",
    "detect_sensor",
    "recommend_indexes",
    "recommend_indexes_for_fov",
    "recommend_indexes_for_lens",
    "sensor_from_name",
]
