"""Loading and validation of observation tables.

Tables come from a CSV file when one is supplied, otherwise from the
built-in deterministic generators. Validation fails fast with a
:class:`~gridfigs.exceptions.DataValidationError` subclass.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

import numpy as np
import pandas as pd

from gridfigs.data import datasets
from gridfigs.data.schemas import (
    ATHLETE_SCHEMA,
    PROTEIN_SCHEMA,
    STOCK_SCHEMA,
    TableSchema,
)
from gridfigs.exceptions import DataLoadError, DataValidationError

if TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger(__name__)

# Dataset name -> (schema, built-in generator)
DATASETS: dict[str, tuple[TableSchema, Callable[[], pd.DataFrame]]] = {
    "stocks": (STOCK_SCHEMA, datasets.stock_prices),
    "athletes": (ATHLETE_SCHEMA, datasets.athletes),
    "proteins": (PROTEIN_SCHEMA, datasets.protein_pairs),
}


def validate_table(df: pd.DataFrame, schema: TableSchema) -> None:
    """Check a table against its schema.

    Parameters
    ----------
    df:
        Observation table.
    schema:
        Expected column layout and invariants.

    Raises
    ------
    DataValidationError
        If a required column is missing, the table is empty, a key or group
        is null, a measurement is non-numeric or non-finite, or a group label
        falls outside ``schema.allowed_groups``.
    """
    missing = [c for c in schema.required_columns if c not in df.columns]
    if missing:
        msg = f"{schema.name}: missing required columns {missing}"
        raise DataValidationError(msg)

    if df.empty:
        msg = f"{schema.name}: table has no rows"
        raise DataValidationError(msg)

    for col in (schema.key, schema.group):
        if df[col].isna().any():
            msg = f"{schema.name}: column {col!r} contains null values"
            raise DataValidationError(msg)

    for col in schema.numeric_columns:
        if not pd.api.types.is_numeric_dtype(df[col]):
            msg = f"{schema.name}: column {col!r} is not numeric ({df[col].dtype})"
            raise DataValidationError(msg)
        values = df[col].to_numpy(dtype=float)
        if not np.isfinite(values).all():
            n_bad = int((~np.isfinite(values)).sum())
            msg = f"{schema.name}: column {col!r} has {n_bad} non-finite values"
            raise DataValidationError(msg)

    if schema.allowed_groups is not None:
        unknown = sorted(set(df[schema.group].astype(str)) - set(schema.allowed_groups))
        if unknown:
            msg = (
                f"{schema.name}: unexpected {schema.group!r} labels {unknown}; "
                f"allowed: {list(schema.allowed_groups)}"
            )
            raise DataValidationError(msg)


def load_table(path: Path | str, schema: TableSchema) -> pd.DataFrame:
    """Read a CSV observation table and validate it.

    Parameters
    ----------
    path:
        CSV file with (at least) the schema's required columns.
    schema:
        Expected column layout.

    Returns
    -------
    Validated DataFrame sorted by group then key.

    Raises
    ------
    DataLoadError
        If the file does not exist or cannot be parsed.
    DataValidationError
        If the contents violate the schema.
    """
    csv_path = Path(path)
    if not csv_path.is_file():
        msg = f"{schema.name}: data file not found: {csv_path}"
        raise DataLoadError(msg)

    try:
        df = pd.read_csv(csv_path)
    except (OSError, UnicodeDecodeError, pd.errors.ParserError) as exc:
        msg = f"{schema.name}: cannot read {csv_path}: {exc}"
        raise DataLoadError(msg) from exc
    except pd.errors.EmptyDataError as exc:
        msg = f"{schema.name}: {csv_path} is empty"
        raise DataLoadError(msg) from exc

    if schema.parse_dates and schema.key in df.columns:
        df[schema.key] = _parse_dates(df[schema.key], schema)

    validate_table(df, schema)
    logger.info("Loaded %s: %d rows from %s", schema.name, len(df), csv_path)
    return _sorted(df, schema)


def load_dataset(name: str, data_dir: Path | str | None = None) -> pd.DataFrame:
    """Return a named dataset.

    Parameters
    ----------
    name:
        One of ``"stocks"``, ``"athletes"``, ``"proteins"``.
    data_dir:
        Optional directory; ``<data_dir>/<name>.csv`` replaces the built-in
        data when it exists.

    Returns
    -------
    Validated DataFrame sorted by group then key.

    Raises
    ------
    DataLoadError
        If ``name`` is not a known dataset.
    """
    if name not in DATASETS:
        msg = f"Unknown dataset {name!r}; known: {sorted(DATASETS)}"
        raise DataLoadError(msg)

    schema, generator = DATASETS[name]
    if data_dir is not None:
        csv_path = Path(data_dir) / f"{name}.csv"
        if csv_path.is_file():
            return load_table(csv_path, schema)
        logger.debug("No %s in %s, using built-in data", csv_path.name, data_dir)

    df = generator()
    validate_table(df, schema)
    logger.debug("Generated %s: %d rows", name, len(df))
    return _sorted(df, schema)


def _parse_dates(values: pd.Series, schema: TableSchema) -> pd.Series:
    """Parse a key column into tz-naive timestamps.

    Offsets such as ``-04:00`` are dropped and the local wall time is kept,
    so dated baselines compare against plain calendar dates.
    """
    try:
        parsed = pd.to_datetime(values)
    except (ValueError, TypeError) as exc:
        msg = f"{schema.name}: cannot parse {schema.key!r} as dates: {exc}"
        raise DataValidationError(msg) from exc

    if not pd.api.types.is_datetime64_any_dtype(parsed):
        msg = (
            f"{schema.name}: cannot parse {schema.key!r} as dates: "
            "mixed time zone offsets"
        )
        raise DataValidationError(msg)
    if parsed.dt.tz is not None:
        logger.debug(
            "%s: dropping time zone %s from %r", schema.name, parsed.dt.tz, schema.key
        )
        parsed = parsed.dt.tz_localize(None)
    return parsed


def _sorted(df: pd.DataFrame, schema: TableSchema) -> pd.DataFrame:
    return df.sort_values([schema.group, schema.key], kind="stable").reset_index(
        drop=True
    )
