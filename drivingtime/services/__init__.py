"""Application services orchestrating ports and domain models."""

from .departure_time import DepartureTimeResolver, resolve_departure_time
from .route_batch import RESULT_COLUMNS, RouteBatchService

__all__ = [
    "DepartureTimeResolver",
    "resolve_departure_time",
    "RouteBatchService",
    "RESULT_COLUMNS",
]
