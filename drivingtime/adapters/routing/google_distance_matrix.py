"""Google Maps Distance Matrix adapter.

Implements RoutingServicePort with one HTTP request per route. The
response is normalized into a RouteResult: seconds become minutes,
meters become kilometers, and the element status is kept verbatim.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional
from urllib.parse import quote_plus

import requests

from ...config import GoogleMapsConfig, get_config
from ...domain.errors import RoutingError
from ...domain.models import OK_STATUS, RouteRequest, RouteResult

REDACTED = "***"


def parse_distance_matrix_response(payload: Any) -> RouteResult:
    """Extract the first element of a Distance Matrix response.

    Args:
        payload: Decoded JSON body.

    Returns:
        An OK result with converted units, or a failure carrying the
        element status (e.g. "ZERO_RESULTS", "NOT_FOUND").

    Raises:
        RoutingError: If the request itself was rejected or the body
            does not contain a usable element.
    """
    if not isinstance(payload, Mapping):
        raise RoutingError(f"Malformed response body of type {type(payload).__name__}")

    status = payload.get("status")
    if status != OK_STATUS:
        message = f"Distance Matrix request returned {status}"
        if payload.get("error_message"):
            message = f"{message} ({payload['error_message']})"
        raise RoutingError(message, status=str(status))

    try:
        element = payload["rows"][0]["elements"][0]
    except (KeyError, IndexError, TypeError) as e:
        raise RoutingError("Response contains no distance/duration element", cause=e)

    element_status = element.get("status") or "UNKNOWN_ERROR"
    if element_status != OK_STATUS:
        return RouteResult.failure(element_status)

    try:
        return RouteResult.success(
            duration_seconds=element["duration"]["value"],
            distance_meters=element["distance"]["value"],
        )
    except (KeyError, TypeError, ValueError) as e:
        raise RoutingError("Response element lacks duration or distance", cause=e)


def redact_api_key(text: str, api_key: str) -> str:
    """Mask the credential, raw or URL-encoded, wherever it appears in text."""
    if not api_key:
        return text
    for form in {api_key, quote_plus(api_key)}:
        text = text.replace(form, REDACTED)
    return text


@dataclass
class GoogleDistanceMatrixAdapter:
    """Distance Matrix client for one origin and one destination per call.

    Attributes:
        config: Google Maps configuration (endpoint, timeout, units)
        session: Optional pre-built HTTP session
    """

    config: GoogleMapsConfig = field(default_factory=lambda: get_config().google_maps)
    session: Optional[requests.Session] = field(default=None, repr=False)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def _get_session(self) -> requests.Session:
        if self.session is None:
            self.session = requests.Session()
        return self.session

    def build_params(self, request: RouteRequest, api_key: str) -> Dict[str, str]:
        """Query parameters for a single route request."""
        params = {
            "origins": request.origin.as_query(),
            "destinations": request.destination.as_query(),
            "mode": request.mode.value,
            "units": self.config.units,
            "key": api_key,
        }
        if request.sends_departure_time:
            params["departure_time"] = str(request.departure_time)
            params["traffic_model"] = request.traffic_model.value
        return params

    def route(self, request: RouteRequest, api_key: str) -> RouteResult:
        """Resolve travel time and distance for one route.

        Raises:
            RoutingError: On HTTP failures or malformed responses.
        """
        params = self.build_params(request, api_key)

        try:
            response = self._get_session().get(
                self.config.base_url,
                params=params,
                timeout=self.config.timeout_seconds,
            )
            response.raise_for_status()
        except requests.RequestException as e:
            # requests puts the full URL, key included, in its messages
            detail = redact_api_key(str(e), api_key)
            raise RoutingError(f"Distance Matrix request failed: {detail}") from e

        try:
            payload = response.json()
        except ValueError as e:
            raise RoutingError("Distance Matrix response is not valid JSON", cause=e)

        result = parse_distance_matrix_response(payload)
        self._logger.debug(
            "Distance Matrix response",
            extra={
                "origin": params["origins"],
                "destination": params["destinations"],
                "status": result.status,
            },
        )
        return result
