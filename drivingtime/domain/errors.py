"""Typed domain errors for the driving time client.

Batch-level problems (bad columns, bad options, missing credential,
unparsable departure time) are raised to the caller before any route is
requested. Row-level problems are raised inside the routing adapter as
RoutingError and converted into a per-row status by the batch service.

All errors inherit from DrivingTimeError and can optionally
wrap a root cause exception for debugging.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple


@dataclass
class DrivingTimeError(Exception):
    """Base error for the driving time domain.

    Attributes:
        message: Human-readable error description
        cause: Optional underlying exception that caused this error
    """

    message: str
    cause: Optional[Exception] = field(default=None, repr=False)

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message}: {self.cause}"
        return self.message

    def __post_init__(self) -> None:
        super().__init__(self.message)


@dataclass
class ValidationError(DrivingTimeError):
    """Invalid batch input.

    Attributes:
        missing_columns: Coordinate columns absent from the table
        setting_name: Name of the invalid option, if any
        valid_choices: Accepted values for that option
    """

    missing_columns: Tuple[str, ...] = ()
    setting_name: str = ""
    valid_choices: Tuple[str, ...] = ()


@dataclass
class ConfigurationError(DrivingTimeError):
    """Invalid or missing configuration.

    Attributes:
        setting_name: Name of the problematic setting
    """

    setting_name: str = ""


@dataclass
class ParseError(DrivingTimeError):
    """A departure time specification could not be interpreted.

    Attributes:
        value: repr of the rejected input
    """

    value: str = ""


@dataclass
class RoutingError(DrivingTimeError):
    """A single route request failed.

    Never escapes a batch: the batch service records it as the row status.

    Attributes:
        status: Status reported by the routing service, if any
    """

    status: str = ""


@dataclass
class DataFileError(DrivingTimeError):
    """Reading or writing a coordinates file failed.

    Attributes:
        path: The file involved
    """

    path: str = ""
