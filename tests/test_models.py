"""Tests for domain models."""

import pytest

from drivingtime.domain.errors import ValidationError
from drivingtime.domain.models import (
    ColumnMap,
    GeoLocation,
    RouteOptions,
    RouteRequest,
    RouteResult,
    TrafficModel,
    TravelMode,
)


def test_only_driving_and_transit_support_departure_time():
    supported = {mode for mode in TravelMode if mode.supports_departure_time}
    assert supported == {TravelMode.DRIVING, TravelMode.TRANSIT}


@pytest.mark.parametrize(
    "lat, lon",
    [(91, 0), (-90.5, 0), (0, 181), (0, -180.1), (float("nan"), 0), (0, float("nan"))],
)
def test_geolocation_rejects_out_of_range(lat, lon):
    with pytest.raises(ValueError):
        GeoLocation(lat, lon)


def test_geolocation_query_format():
    assert GeoLocation(40.7128, -74.006).as_query() == "40.7128,-74.006"


def test_route_result_success_converts_units():
    result = RouteResult.success(duration_seconds=90, distance_meters=2500)

    assert result.status == "OK"
    assert result.duration_minutes == 1.5
    assert result.distance_km == 2.5
    assert result.is_ok


def test_route_result_failure_has_no_measures():
    result = RouteResult.failure("Error: timeout")

    assert not result.is_ok
    assert result.duration_minutes is None
    assert result.distance_km is None


def test_route_result_never_partially_populated():
    with pytest.raises(ValueError):
        RouteResult(status="ZERO_RESULTS", duration_minutes=3.0)
    with pytest.raises(ValueError):
        RouteResult(status="Error: boom", distance_km=1.0)


def test_request_sends_departure_time_only_when_set_and_supported():
    nyc, boston = GeoLocation(40.7, -74.0), GeoLocation(42.4, -71.1)

    assert not RouteRequest(nyc, boston).sends_departure_time
    assert RouteRequest(nyc, boston, departure_time=1).sends_departure_time
    assert not RouteRequest(
        nyc, boston, mode=TravelMode.WALKING, departure_time=1
    ).sends_departure_time


def test_column_map_reports_missing_in_order():
    columns = ColumnMap()

    assert columns.missing_from(["origin_lat", "dest_lat"]) == ("origin_lon", "dest_lon")
    assert columns.missing_from(columns.names) == ()


def test_options_parse_accepts_strings_and_enums():
    options = RouteOptions.parse(
        mode="bicycling", traffic_model=TrafficModel.PESSIMISTIC, delay_seconds=1
    )

    assert options.mode is TravelMode.BICYCLING
    assert options.traffic_model is TrafficModel.PESSIMISTIC
    assert options.delay_seconds == 1.0


def test_options_parse_lists_valid_traffic_models():
    with pytest.raises(ValidationError) as exc_info:
        RouteOptions.parse(traffic_model="aggressive")

    assert exc_info.value.valid_choices == ("best_guess", "pessimistic", "optimistic")
    assert "best_guess, pessimistic, optimistic" in str(exc_info.value)


@pytest.mark.parametrize("mode", ["DRIVING", "car", None])
def test_options_parse_rejects_unknown_mode(mode):
    with pytest.raises(ValidationError) as exc_info:
        RouteOptions.parse(mode=mode)

    assert exc_info.value.setting_name == "mode"


@pytest.mark.parametrize("delay", [-0.1, "fast", True, float("nan")])
def test_options_parse_rejects_bad_delay(delay):
    with pytest.raises(ValidationError):
        RouteOptions.parse(delay_seconds=delay)
