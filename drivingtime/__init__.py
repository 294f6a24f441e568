"""Travel time and distance between coordinate pairs.

Rows of a table are resolved one at a time against the Google Maps
Distance Matrix API; each row gains driving_time_min, distance_km and
api_status columns.

    from drivingtime import calculate_driving_time, set_api_key

    set_api_key("YOUR_API_KEY")
    results = calculate_driving_time(data, departure_time="now")
"""

from .config import configure_logging, set_api_key
from .domain.errors import (
    ConfigurationError,
    DataFileError,
    DrivingTimeError,
    ParseError,
    RoutingError,
    ValidationError,
)
from .driving_time import calculate_driving_time
from .io.tables import read_coordinates, save_results

__all__ = [
    "calculate_driving_time",
    "set_api_key",
    "configure_logging",
    "read_coordinates",
    "save_results",
    "DrivingTimeError",
    "ValidationError",
    "ConfigurationError",
    "ParseError",
    "RoutingError",
    "DataFileError",
]
