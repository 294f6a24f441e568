"""Batch driving time calculation between coordinate pairs."""

from __future__ import annotations

from typing import Any, Optional

import pandas as pd

from .config import get_config
from .container import Container, get_container
from .domain.models import ColumnMap, RouteOptions
from .services.route_batch import RouteBatchService


def calculate_driving_time(
    data: Any,
    origin_lat: str = "origin_lat",
    origin_lon: str = "origin_lon",
    dest_lat: str = "dest_lat",
    dest_lon: str = "dest_lon",
    api_key: Optional[str] = None,
    delay_seconds: Optional[float] = None,
    mode: str = "driving",
    departure_time: Any = None,
    traffic_model: str = "best_guess",
    container: Optional[Container] = None,
) -> pd.DataFrame:
    """Calculate driving times and distances for every row of ``data``.

    Each row gets one Google Maps Distance Matrix request. Rows that fail
    keep NaN measures and an ``"Error: ..."`` status; the batch always
    returns every row, in order.

    Args:
        data: DataFrame with origin and destination coordinates.
        origin_lat: Column name for origin latitude.
        origin_lon: Column name for origin longitude.
        dest_lat: Column name for destination latitude.
        dest_lon: Column name for destination longitude.
        api_key: Google Maps API key. Falls back to GOOGLE_MAPS_API_KEY.
        delay_seconds: Pause between requests (default from config, 0.1).
        mode: "driving", "walking", "bicycling" or "transit".
        departure_time: None, "now", a datetime, epoch seconds or a
            "YYYY-MM-DD HH:MM:SS" UTC string. Ignored with a warning
            unless mode is driving or transit.
        traffic_model: "best_guess", "pessimistic" or "optimistic".
        container: Container override, mainly for tests.

    Returns:
        Copy of ``data`` plus driving_time_min, distance_km and api_status.

    Raises:
        ValidationError: Missing columns or invalid options.
        ConfigurationError: No API key available.
        ParseError: Unparsable departure_time.

    Example:
        >>> set_api_key("YOUR_API_KEY")
        >>> results = calculate_driving_time(data, departure_time="now")
    """
    if delay_seconds is None:
        delay_seconds = get_config().batch.delay_seconds

    options = RouteOptions.parse(
        mode=mode,
        departure_time=departure_time,
        traffic_model=traffic_model,
        delay_seconds=delay_seconds,
    )
    columns = ColumnMap(
        origin_lat=origin_lat,
        origin_lon=origin_lon,
        dest_lat=dest_lat,
        dest_lon=dest_lon,
    )

    service: RouteBatchService = (container or get_container()).resolve(
        RouteBatchService
    )
    return service.process(data, columns=columns, options=options, api_key=api_key)
