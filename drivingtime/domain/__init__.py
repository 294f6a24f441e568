"""Domain layer - Core business models and errors.

This module contains immutable domain models and typed errors
used throughout the application. No external dependencies.
"""

from .errors import (
    ConfigurationError,
    DataFileError,
    DrivingTimeError,
    ParseError,
    RoutingError,
    ValidationError,
)
from .models import (
    OK_STATUS,
    BatchSummary,
    ColumnMap,
    GeoLocation,
    RouteOptions,
    RouteRequest,
    RouteResult,
    TrafficModel,
    TravelMode,
)

__all__ = [
    # Models
    "OK_STATUS",
    "TravelMode",
    "TrafficModel",
    "GeoLocation",
    "ColumnMap",
    "RouteOptions",
    "RouteRequest",
    "RouteResult",
    "BatchSummary",
    # Errors
    "DrivingTimeError",
    "ValidationError",
    "ConfigurationError",
    "ParseError",
    "RoutingError",
    "DataFileError",
]
