"""Immutable domain models for the driving time client.

All models are frozen dataclasses with slots. They have no external
dependencies and describe one batch of origin/destination routes:
the options that apply to the whole batch, the request built for each
row, and the normalized result appended back to the row.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, Optional, Tuple

from .errors import ValidationError

OK_STATUS = "OK"


class TravelMode(str, Enum):
    """Travel modes understood by the routing service."""

    DRIVING = "driving"
    WALKING = "walking"
    BICYCLING = "bicycling"
    TRANSIT = "transit"

    @property
    def supports_departure_time(self) -> bool:
        """Only driving and transit routes honour a departure time."""
        return self in (TravelMode.DRIVING, TravelMode.TRANSIT)


class TrafficModel(str, Enum):
    """Traffic assumption applied when a departure time is set."""

    BEST_GUESS = "best_guess"
    PESSIMISTIC = "pessimistic"
    OPTIMISTIC = "optimistic"


def _choices(enum_type: type[Enum]) -> Tuple[str, ...]:
    return tuple(member.value for member in enum_type)


def _parse_choice(enum_type: type[Enum], value: Any, setting_name: str) -> Any:
    if isinstance(value, enum_type):
        return value
    choices = _choices(enum_type)
    if value not in choices:
        raise ValidationError(
            f"Invalid {setting_name} {value!r}. Choose from: {', '.join(choices)}",
            setting_name=setting_name,
            valid_choices=choices,
        )
    return enum_type(value)


@dataclass(frozen=True, slots=True)
class GeoLocation:
    """GPS coordinates in decimal degrees."""

    latitude: float
    longitude: float

    def __post_init__(self) -> None:
        """Validate coordinate ranges."""
        # NaN fails both comparisons
        if not -90 <= self.latitude <= 90:
            raise ValueError(
                f"Latitude must be between -90 and 90, got {self.latitude}"
            )
        if not -180 <= self.longitude <= 180:
            raise ValueError(
                f"Longitude must be between -180 and 180, got {self.longitude}"
            )

    def as_query(self) -> str:
        """Render as the 'lat,lon' pair the routing service expects."""
        return f"{self.latitude},{self.longitude}"


@dataclass(frozen=True, slots=True)
class ColumnMap:
    """Names of the four coordinate columns in a route table."""

    origin_lat: str = "origin_lat"
    origin_lon: str = "origin_lon"
    dest_lat: str = "dest_lat"
    dest_lon: str = "dest_lon"

    @property
    def names(self) -> Tuple[str, str, str, str]:
        return (self.origin_lat, self.origin_lon, self.dest_lat, self.dest_lon)

    def missing_from(self, columns: Iterable[Any]) -> Tuple[str, ...]:
        """Return the configured names that are not in ``columns``."""
        present = set(columns)
        return tuple(name for name in self.names if name not in present)


@dataclass(frozen=True, slots=True)
class RouteOptions:
    """Batch-level options, validated once before any row is processed.

    Attributes:
        mode: Travel mode for every route in the batch
        departure_time: Raw departure specification (None, "now",
            datetime, number or "YYYY-MM-DD HH:MM:SS" string)
        traffic_model: Traffic assumption used with a departure time
        delay_seconds: Fixed pause between consecutive requests
    """

    mode: TravelMode = TravelMode.DRIVING
    departure_time: Any = None
    traffic_model: TrafficModel = TrafficModel.BEST_GUESS
    delay_seconds: float = 0.1

    @classmethod
    def parse(
        cls,
        mode: Any = TravelMode.DRIVING,
        departure_time: Any = None,
        traffic_model: Any = TrafficModel.BEST_GUESS,
        delay_seconds: Any = 0.1,
    ) -> RouteOptions:
        """Build options from raw user values.

        Raises:
            ValidationError: If mode, traffic model or delay is invalid.
        """
        parsed_mode = _parse_choice(TravelMode, mode, "mode")
        parsed_model = _parse_choice(TrafficModel, traffic_model, "traffic_model")

        if isinstance(delay_seconds, bool) or not isinstance(delay_seconds, (int, float)):
            raise ValidationError(
                f"delay_seconds must be a number, got {delay_seconds!r}",
                setting_name="delay_seconds",
            )
        if math.isnan(delay_seconds) or delay_seconds < 0:
            raise ValidationError(
                f"delay_seconds must be zero or positive, got {delay_seconds}",
                setting_name="delay_seconds",
            )

        return cls(
            mode=parsed_mode,
            departure_time=departure_time,
            traffic_model=parsed_model,
            delay_seconds=float(delay_seconds),
        )


@dataclass(frozen=True, slots=True)
class RouteRequest:
    """One origin/destination pair, built fresh for each row.

    Attributes:
        origin: Start coordinates
        destination: End coordinates
        mode: Travel mode
        departure_time: Resolved departure instant in epoch seconds
        traffic_model: Traffic assumption for the departure instant
    """

    origin: GeoLocation
    destination: GeoLocation
    mode: TravelMode = TravelMode.DRIVING
    departure_time: Optional[int] = None
    traffic_model: TrafficModel = TrafficModel.BEST_GUESS

    @property
    def sends_departure_time(self) -> bool:
        """Whether departure time and traffic model go on the wire."""
        return self.departure_time is not None and self.mode.supports_departure_time


@dataclass(frozen=True, slots=True)
class RouteResult:
    """Normalized outcome of one route request.

    Either the status is "OK" and both measures are set, or the status
    describes the failure and both measures are None.

    Attributes:
        status: "OK" or an error descriptor
        duration_minutes: Travel time in minutes
        distance_km: Travel distance in kilometers
    """

    status: str
    duration_minutes: Optional[float] = None
    distance_km: Optional[float] = None

    def __post_init__(self) -> None:
        if self.status != OK_STATUS and (
            self.duration_minutes is not None or self.distance_km is not None
        ):
            raise ValueError(
                f"A {self.status!r} result cannot carry duration or distance"
            )

    @classmethod
    def success(cls, duration_seconds: float, distance_meters: float) -> RouteResult:
        """Build an OK result from the service's seconds and meters."""
        return cls(
            status=OK_STATUS,
            duration_minutes=float(duration_seconds) / 60,
            distance_km=float(distance_meters) / 1000,
        )

    @classmethod
    def failure(cls, status: str) -> RouteResult:
        return cls(status=status)

    @property
    def is_ok(self) -> bool:
        return self.status == OK_STATUS


@dataclass(frozen=True, slots=True)
class BatchSummary:
    """Counts of successful and failed routes in a processed table."""

    total: int
    succeeded: int
    failed: int
