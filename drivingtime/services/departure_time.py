"""Departure time resolution.

Turns the user's departure specification into a single epoch-seconds
instant, once per batch. Accepted shapes:

- None: no departure time
- "now" (any case): the current time
- datetime (naive values are taken as UTC)
- "YYYY-MM-DD HH:MM:SS" string in UTC, plus a few close variants
- int/float: epoch seconds

Explicit instants in the past are replaced by the current time with a
warning.
"""

from __future__ import annotations

import logging
import math
import numbers
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Optional

import dateparser

from ..domain.errors import ParseError

NOW_TOKEN = "now"

DATE_FORMATS = (
    "%Y-%m-%d %H:%M:%S",
    "%Y/%m/%d %H:%M:%S",
    "%Y-%m-%dT%H:%M:%S",
    "%Y-%m-%d %H:%M",
    "%Y/%m/%d %H:%M",
    "%Y-%m-%d",
    "%Y/%m/%d",
)

_DATEPARSER_SETTINGS = {
    "TIMEZONE": "UTC",
    "TO_TIMEZONE": "UTC",
    "RETURN_AS_TIMEZONE_AWARE": True,
    "PARSERS": ["custom-formats"],
}


def is_now_token(value: Any) -> bool:
    return isinstance(value, str) and value.strip().lower() == NOW_TOKEN


@dataclass
class DepartureTimeResolver:
    """Resolve departure specifications to epoch seconds.

    Attributes:
        clock: Returns the current time in epoch seconds
    """

    clock: Callable[[], float] = time.time
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def resolve(self, departure_time: Any) -> Optional[int]:
        """Resolve a departure specification.

        Args:
            departure_time: None, "now", a datetime, a number of epoch
                seconds, or a "YYYY-MM-DD HH:MM:SS" string.

        Returns:
            Epoch seconds, or None when no departure time was given.

        Raises:
            ParseError: If the specification cannot be interpreted.
        """
        if departure_time is None:
            return None

        now = int(self.clock())
        if is_now_token(departure_time):
            return now

        instant = self._to_epoch(departure_time)
        if instant < now:
            self._logger.warning(
                "Departure time is in the past. Using current time instead.",
                extra={"departure_time": instant, "now": now},
            )
            return now

        return instant

    def _to_epoch(self, value: Any) -> int:
        if isinstance(value, datetime):
            if value.tzinfo is None:
                value = value.replace(tzinfo=timezone.utc)
            try:
                return int(value.timestamp())
            except (ValueError, OverflowError, OSError) as e:
                raise ParseError(
                    "Could not convert departure_time to a timestamp",
                    value=repr(value),
                    cause=e,
                )

        if isinstance(value, str):
            return self._parse_string(value)

        if isinstance(value, numbers.Real) and not isinstance(value, bool):
            if not math.isfinite(value):
                raise ParseError(
                    "departure_time must be a finite timestamp", value=repr(value)
                )
            try:
                datetime.fromtimestamp(value, tz=timezone.utc)
            except (ValueError, OverflowError, OSError) as e:
                raise ParseError(
                    "departure_time is outside the representable date range "
                    "(expected epoch seconds, not milliseconds)",
                    value=repr(value),
                    cause=e,
                )
            return int(value)

        raise ParseError(
            "Invalid departure_time format. Use 'now', a datetime, "
            "epoch seconds or a 'YYYY-MM-DD HH:MM:SS' string",
            value=repr(value),
        )

    def _parse_string(self, value: str) -> int:
        parsed = None
        if value.strip():
            parsed = dateparser.parse(
                value.strip(),
                date_formats=list(DATE_FORMATS),
                languages=["en"],
                settings=_DATEPARSER_SETTINGS,
            )
        if parsed is None:
            raise ParseError(
                "Could not parse departure_time. Use format: "
                "'YYYY-MM-DD HH:MM:SS' or 'now'",
                value=repr(value),
            )
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        return int(parsed.timestamp())


def resolve_departure_time(
    departure_time: Any, clock: Callable[[], float] = time.time
) -> Optional[int]:
    """Resolve a departure specification with a one-off resolver."""
    return DepartureTimeResolver(clock=clock).resolve(departure_time)
