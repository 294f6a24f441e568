"""Tests for the CSV helpers."""

import logging

import pandas as pd
import pytest

from drivingtime import DataFileError, read_coordinates, save_results


def test_save_then_read_keeps_rows(tmp_path, routes_df, caplog):
    caplog.set_level(logging.INFO)
    path = tmp_path / "routes.csv"

    save_results(routes_df, path)
    loaded = read_coordinates(path)

    pd.testing.assert_frame_equal(loaded, routes_df)
    assert "Saved 3 rows with 5 columns" in caplog.text
    assert "Loaded 3 rows" in caplog.text


def test_read_passes_options_to_pandas(tmp_path):
    path = tmp_path / "semicolon.csv"
    path.write_text("origin_lat;origin_lon\n1.5;2.5\n", encoding="utf-8")

    loaded = read_coordinates(path, sep=";")

    assert list(loaded.columns) == ["origin_lat", "origin_lon"]
    assert loaded.loc[0, "origin_lon"] == 2.5


def test_read_missing_file_raises(tmp_path):
    with pytest.raises(DataFileError) as exc_info:
        read_coordinates(tmp_path / "missing.csv")

    assert exc_info.value.path.endswith("missing.csv")


def test_save_into_missing_directory_raises(tmp_path, routes_df):
    with pytest.raises(DataFileError):
        save_results(routes_df, tmp_path / "no" / "such" / "dir.csv")
