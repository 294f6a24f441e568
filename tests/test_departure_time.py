"""Tests for departure time resolution."""

import logging
import time
from datetime import datetime, timedelta, timezone

import pytest

from drivingtime.domain.errors import ParseError
from drivingtime.services.departure_time import (
    DepartureTimeResolver,
    resolve_departure_time,
)

# 2030-03-17 17:46:40 UTC
NOW = 1_900_000_000


@pytest.fixture
def resolver():
    return DepartureTimeResolver(clock=lambda: NOW)


def _epoch(*args):
    return int(datetime(*args, tzinfo=timezone.utc).timestamp())


def test_none_means_no_departure_time(resolver):
    assert resolver.resolve(None) is None


def test_zero_is_an_instant_not_absence(resolver):
    # epoch 0 is in the past, so it is clamped but still an instant
    assert resolver.resolve(0) == NOW


@pytest.mark.parametrize("token", ["now", "NOW", "Now", " now "])
def test_now_token_is_case_insensitive(resolver, token):
    assert resolver.resolve(token) == NOW


def test_now_uses_wall_clock_by_default():
    before = time.time()
    resolved = resolve_departure_time("now")
    assert resolved is not None
    assert before - 1 <= resolved <= time.time() + 1


def test_canonical_string_is_parsed_as_utc(resolver):
    assert resolver.resolve("2031-01-01 08:00:00") == _epoch(2031, 1, 1, 8, 0, 0)


@pytest.mark.parametrize(
    "value, expected",
    [
        ("2031/06/15 07:30:00", (2031, 6, 15, 7, 30, 0)),
        ("2031-06-15 07:30", (2031, 6, 15, 7, 30, 0)),
        ("2031-06-15", (2031, 6, 15, 0, 0, 0)),
    ],
)
def test_close_variants_are_accepted(resolver, value, expected):
    assert resolver.resolve(value) == _epoch(*expected)


def test_past_string_is_clamped_to_now_with_warning(resolver, caplog):
    caplog.set_level(logging.WARNING)

    assert resolver.resolve("2020-01-01 00:00:00") == NOW
    assert "in the past" in caplog.text


def test_past_string_with_real_clock_is_close_to_now(caplog):
    caplog.set_level(logging.WARNING)

    resolved = resolve_departure_time("2020-01-01 00:00:00")

    assert abs(resolved - time.time()) < 5
    assert resolved != _epoch(2020, 1, 1, 0, 0, 0)
    assert "in the past" in caplog.text


def test_future_instant_is_not_clamped(resolver, caplog):
    caplog.set_level(logging.WARNING)

    assert resolver.resolve(NOW + 3600) == NOW + 3600
    assert caplog.text == ""


def test_instant_equal_to_now_is_not_clamped(resolver, caplog):
    caplog.set_level(logging.WARNING)

    assert resolver.resolve(NOW) == NOW
    assert "in the past" not in caplog.text


def test_float_timestamp_is_truncated(resolver):
    assert resolver.resolve(NOW + 10.9) == NOW + 10


def test_naive_datetime_is_taken_as_utc(resolver):
    value = datetime(2031, 1, 1, 8, 0, 0)
    assert resolver.resolve(value) == _epoch(2031, 1, 1, 8, 0, 0)


def test_aware_datetime_is_converted(resolver):
    value = datetime(2031, 1, 1, 10, 0, 0, tzinfo=timezone(timedelta(hours=2)))
    assert resolver.resolve(value) == _epoch(2031, 1, 1, 8, 0, 0)


def test_past_datetime_is_clamped(resolver):
    assert resolver.resolve(datetime(2001, 1, 1)) == NOW


@pytest.mark.parametrize("value", ["not a date", "", "08:00 tomorrow", "2031-13-45 99:00:00"])
def test_unparsable_string_raises(resolver, value):
    with pytest.raises(ParseError):
        resolver.resolve(value)


@pytest.mark.parametrize("value", [True, [2031, 1, 1], {"at": NOW}, float("nan"), float("inf")])
def test_unsupported_values_raise(resolver, value):
    with pytest.raises(ParseError):
        resolver.resolve(value)


@pytest.mark.parametrize("value", [1_700_000_000_000, 10**20, -(10**15)])
def test_unrepresentable_timestamps_raise(resolver, value):
    with pytest.raises(ParseError, match="representable date range"):
        resolver.resolve(value)


def test_iso_t_separator_is_accepted(resolver):
    assert resolver.resolve("2031-06-15T07:30:00") == _epoch(2031, 6, 15, 7, 30, 0)
