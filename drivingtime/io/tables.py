"""CSV helpers for route tables."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Union

import pandas as pd

from ..domain.errors import DataFileError

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def read_coordinates(path: PathLike, **kwargs: Any) -> pd.DataFrame:
    """Read a CSV of coordinates into a DataFrame.

    Extra keyword arguments are passed to pandas.read_csv.

    Raises:
        DataFileError: If the file cannot be read.
    """
    try:
        data = pd.read_csv(path, **kwargs)
    except (OSError, ValueError) as e:
        raise DataFileError(f"Could not read {path}", path=str(path), cause=e)

    logger.info(f"Loaded {len(data)} rows from {path}")
    logger.info(f"Columns: {', '.join(map(str, data.columns))}")
    return data


def save_results(data: pd.DataFrame, path: PathLike, **kwargs: Any) -> None:
    """Write a results table to CSV without the index.

    Raises:
        DataFileError: If the file cannot be written.
    """
    try:
        data.to_csv(path, index=False, **kwargs)
    except OSError as e:
        raise DataFileError(f"Could not write {path}", path=str(path), cause=e)

    logger.info(f"Results saved to {path}")
    logger.info(f"Saved {len(data)} rows with {len(data.columns)} columns")
