"""Route batch service - Main orchestrator.

Validates a route table and its options, resolves the departure time
once, then requests every row's route in order, one call per row, with
a fixed pause between calls. A failing row is recorded in its
``api_status`` and never stops the batch.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Optional, Sequence

import pandas as pd

from ..config import AppConfig, get_config, resolve_api_key
from ..domain.errors import ValidationError
from ..domain.models import (
    OK_STATUS,
    BatchSummary,
    ColumnMap,
    GeoLocation,
    RouteOptions,
    RouteRequest,
    RouteResult,
)
from ..ports.routing import RoutingServicePort
from .departure_time import DepartureTimeResolver, is_now_token

DURATION_COLUMN = "driving_time_min"
DISTANCE_COLUMN = "distance_km"
STATUS_COLUMN = "api_status"
RESULT_COLUMNS = (DURATION_COLUMN, DISTANCE_COLUMN, STATUS_COLUMN)


@dataclass
class RouteBatchService:
    """Resolve travel time and distance for every row of a route table.

    Attributes:
        routing: External routing service
        config: Configuration override; the process-wide one when None
        departure_resolver: Turns the departure option into epoch seconds
        sleep: Blocking pause between consecutive requests
    """

    routing: RoutingServicePort
    config: Optional[AppConfig] = None
    departure_resolver: DepartureTimeResolver = field(
        default_factory=DepartureTimeResolver
    )
    sleep: Callable[[float], None] = time.sleep

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    @property
    def _config(self) -> AppConfig:
        # set_api_key() must reach services built before it was called
        return self.config or get_config()

    def process(
        self,
        table: Any,
        columns: Optional[ColumnMap] = None,
        options: Optional[RouteOptions] = None,
        api_key: Optional[str] = None,
    ) -> pd.DataFrame:
        """Append driving time, distance and status to every row.

        Args:
            table: DataFrame (or anything pandas.DataFrame accepts) with
                the four coordinate columns.
            columns: Coordinate column names; defaults to origin_lat,
                origin_lon, dest_lat, dest_lon.
            options: Validated batch options.
            api_key: Explicit credential; the configured one when None.

        Returns:
            A copy of the table with driving_time_min, distance_km and
            api_status columns, same rows in the same order.

        Raises:
            ValidationError: If coordinate columns are missing.
            ConfigurationError: If no API key can be resolved.
            ParseError: If the departure time cannot be interpreted.
        """
        config = self._config
        columns = columns or ColumnMap()
        options = options or RouteOptions(delay_seconds=config.batch.delay_seconds)

        frame = self._prepare_table(table, columns)
        key = resolve_api_key(api_key, config)
        departure = self._resolve_departure(options)

        total = len(frame)
        self._log_start(total, options, departure)

        frame[DURATION_COLUMN] = float("nan")
        frame[DISTANCE_COLUMN] = float("nan")
        frame[STATUS_COLUMN] = None

        coordinate_locs = [frame.columns.get_loc(name) for name in columns.names]
        result_locs = [frame.columns.get_loc(name) for name in RESULT_COLUMNS]
        progress_every = max(config.batch.progress_every, 1)

        for i in range(total):
            if (i + 1) % progress_every == 0:
                self._logger.info(f"Processing route {i + 1} of {total}")

            coordinates = [frame.iat[i, loc] for loc in coordinate_locs]
            result = self._resolve_row(coordinates, options, departure, key)

            if not result.is_ok:
                self._logger.warning(
                    "Route failed",
                    extra={"row": i, "status": result.status},
                )

            frame.iat[i, result_locs[0]] = result.duration_minutes
            frame.iat[i, result_locs[1]] = result.distance_km
            frame.iat[i, result_locs[2]] = result.status

            if i < total - 1:
                self.sleep(options.delay_seconds)

        summary = self.summarize(frame)
        self._logger.info(
            f"Complete! Processed {summary.total} routes",
            extra={"succeeded": summary.succeeded, "failed": summary.failed},
        )
        return frame

    def _prepare_table(self, table: Any, columns: ColumnMap) -> pd.DataFrame:
        if isinstance(table, pd.DataFrame):
            frame = table.copy()
        else:
            frame = pd.DataFrame(table)

        missing = columns.missing_from(frame.columns)
        if missing:
            raise ValidationError(
                f"Missing columns in data: {', '.join(missing)}",
                missing_columns=missing,
            )
        return frame

    def _resolve_departure(self, options: RouteOptions) -> Optional[int]:
        if options.departure_time is None:
            return None

        if not options.mode.supports_departure_time:
            self._logger.warning(
                "departure_time is only supported for 'driving' and 'transit' "
                "modes. Ignoring departure_time.",
                extra={"mode": options.mode.value},
            )
            return None

        return self.departure_resolver.resolve(options.departure_time)

    def _resolve_row(
        self,
        coordinates: Sequence[Any],
        options: RouteOptions,
        departure: Optional[int],
        api_key: str,
    ) -> RouteResult:
        origin_lat, origin_lon, dest_lat, dest_lon = coordinates
        try:
            request = RouteRequest(
                origin=GeoLocation(float(origin_lat), float(origin_lon)),
                destination=GeoLocation(float(dest_lat), float(dest_lon)),
                mode=options.mode,
                departure_time=departure,
                traffic_model=options.traffic_model,
            )
            return self.routing.route(request, api_key)
        except Exception as e:
            return RouteResult.failure(f"Error: {e}")

    def _log_start(
        self, total: int, options: RouteOptions, departure: Optional[int]
    ) -> None:
        if departure is None:
            self._logger.info(
                f"Calculating driving times for {total} routes...",
                extra={"mode": options.mode.value},
            )
            return

        self._logger.info(
            f"Calculating driving times for {total} routes with departure time settings...",
            extra={"mode": options.mode.value},
        )
        if is_now_token(options.departure_time):
            self._logger.info("Using current traffic conditions")
        else:
            when = datetime.fromtimestamp(departure, tz=timezone.utc)
            self._logger.info(
                f"Using traffic predictions for: {when:%Y-%m-%d %H:%M:%S} UTC"
            )
        self._logger.info(f"Traffic model: {options.traffic_model.value}")

    @staticmethod
    def summarize(frame: pd.DataFrame) -> BatchSummary:
        """Count OK and non-OK rows of a processed table."""
        succeeded = int((frame[STATUS_COLUMN] == OK_STATUS).sum())
        total = len(frame)
        return BatchSummary(total=total, succeeded=succeeded, failed=total - succeeded)
