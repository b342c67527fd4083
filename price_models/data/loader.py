"""Load datasets from CSV files."""

from __future__ import annotations

import logging
from collections.abc import Collection
from pathlib import Path

import pandas as pd

from .errors import DataLoadError
from .models import DEFAULT_TARGET, Dataset

logger = logging.getLogger(__name__)


def load_csv(
    path: Path | str,
    target: str = DEFAULT_TARGET,
    categorical: Collection[str] = (),
) -> Dataset:
    """
    Read a CSV file with a header row into a Dataset.

    Column types are inferred by pandas: numeric columns become numbers,
    everything else strings. Columns listed in `categorical` are always
    read as strings (so e.g. zip codes keep their leading zeros).

    Args:
        path: CSV file path
        target: Name of the target column
        categorical: Columns to keep as strings

    Returns:
        Dataset with one record per row

    Raises:
        DataLoadError: If the file is missing, unparseable, empty, or lacks
            the target column
    """
    path = Path(path)
    try:
        df = pd.read_csv(path, dtype={name: str for name in categorical})
    except FileNotFoundError as e:
        raise DataLoadError(f"CSV file not found: {path}") from e
    except pd.errors.EmptyDataError as e:
        raise DataLoadError(f"CSV file has no header: {path}") from e
    except pd.errors.ParserError as e:
        raise DataLoadError(f"Failed to parse CSV file {path}: {e}") from e

    if target not in df.columns:
        raise DataLoadError(
            f"Target column '{target}' not in CSV header: {list(df.columns)}"
        )

    if df.empty:
        raise DataLoadError(f"CSV file has no rows: {path}")

    records = df.to_dict("records")
    logger.info(f"Loaded {len(records)} records from {path}")
    return Dataset.from_records(records, target=target)
