"""Derived columns for observation tables.

All functions are pure: they return a new DataFrame and never modify
their input, so repeated application to identical input yields identical
output.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import pandas as pd

from gridfigs.exceptions import (
    DataValidationError,
    MissingBaselineError,
    UnknownCategoryError,
)

if TYPE_CHECKING:
    from collections.abc import Mapping

    from gridfigs.data.schemas import TableSchema

logger = logging.getLogger(__name__)

# A dated baseline may fall on a non-trading day; accept the first row this close.
DEFAULT_BASELINE_TOLERANCE = pd.Timedelta(days=7)

BASELINE_ZERO_COLUMN = "baseline_zero"


# ---------------------------------------------------------------------------
# Baseline normalisation
# ---------------------------------------------------------------------------


def baseline_values(
    df: pd.DataFrame,
    schema: TableSchema,
    baseline: Any,
    tolerance: pd.Timedelta | None = DEFAULT_BASELINE_TOLERANCE,
) -> pd.Series:
    """Look up the baseline measurement of every group.

    For datetime keys the baseline row is the first row on or after
    ``baseline`` (within ``tolerance``); for any other key it is the row
    whose key equals ``baseline``.

    Parameters
    ----------
    df:
        Observation table.
    schema:
        Column layout of ``df``.
    baseline:
        Baseline key (date-like for datetime keys).
    tolerance:
        Largest accepted gap between ``baseline`` and the matched date.
        ``None`` accepts any later date.

    Returns
    -------
    Series mapping group label to baseline value.

    Raises
    ------
    MissingBaselineError
        If any group has no baseline row.
    """
    keys = df[schema.key]
    is_dated = pd.api.types.is_datetime64_any_dtype(keys)
    target = _baseline_timestamp(baseline, keys) if is_dated else baseline

    values: dict[Any, float] = {}
    for group, sub in df.groupby(schema.group, sort=True, observed=True):
        if is_dated:
            candidates = sub[sub[schema.key] >= target].sort_values(
                schema.key, kind="stable"
            )
            if candidates.empty or (
                tolerance is not None
                and candidates[schema.key].iloc[0] - target > tolerance
            ):
                msg = (
                    f"{schema.name}: no baseline row for {schema.group}={group!r} "
                    f"on or within {tolerance} after {target.date()}"
                )
                raise MissingBaselineError(msg)
            values[group] = float(candidates[schema.value].iloc[0])
        else:
            matches = sub[sub[schema.key] == target]
            if matches.empty:
                msg = (
                    f"{schema.name}: no baseline row for {schema.group}={group!r} "
                    f"with {schema.key}={target!r}"
                )
                raise MissingBaselineError(msg)
            values[group] = float(matches[schema.value].iloc[0])

    return pd.Series(values, name=f"{schema.value}_baseline")


def _baseline_timestamp(baseline: Any, keys: pd.Series) -> pd.Timestamp:
    """Baseline as a timestamp in the same time zone as ``keys``."""
    target = pd.Timestamp(baseline)
    tz = keys.dt.tz
    if tz is not None and target.tzinfo is None:
        return target.tz_localize(tz)
    if tz is None and target.tzinfo is not None:
        return target.tz_localize(None)
    return target


def percent_change(
    df: pd.DataFrame,
    schema: TableSchema,
    baseline: Any,
    column: str = "pct_change",
    tolerance: pd.Timedelta | None = DEFAULT_BASELINE_TOLERANCE,
) -> pd.DataFrame:
    """Add ``100 * (value - baseline) / baseline`` per group.

    Rows whose group baseline is zero get ``NaN`` and are flagged in the
    ``baseline_zero`` column.

    Raises
    ------
    MissingBaselineError
        If any group has no baseline row.
    """
    base = _row_baselines(df, schema, baseline, tolerance)
    zero = base == 0
    out = df.copy()
    change = 100.0 * (out[schema.value] - base) / base.where(~zero)
    out[column] = change.astype(float)
    out[BASELINE_ZERO_COLUMN] = zero.to_numpy()
    _log_zero_baselines(out, schema)
    return out


def index_to_baseline(
    df: pd.DataFrame,
    schema: TableSchema,
    baseline: Any,
    column: str = "indexed",
    tolerance: pd.Timedelta | None = DEFAULT_BASELINE_TOLERANCE,
) -> pd.DataFrame:
    """Add ``100 * value / baseline`` per group (baseline row indexes to 100).

    Same baseline and zero-baseline rules as :func:`percent_change`.
    """
    base = _row_baselines(df, schema, baseline, tolerance)
    zero = base == 0
    out = df.copy()
    out[column] = (100.0 * (out[schema.value] / base.where(~zero))).astype(float)
    out[BASELINE_ZERO_COLUMN] = zero.to_numpy()
    _log_zero_baselines(out, schema)
    return out


def final_change(
    df: pd.DataFrame,
    schema: TableSchema,
    baseline: Any,
    column: str = "pct_change",
) -> pd.DataFrame:
    """Percent change at the last key of every group, sorted ascending.

    Groups with an undefined change (zero baseline) sort last.
    """
    changed = percent_change(df, schema, baseline, column=column)
    last = (
        changed.sort_values([schema.group, schema.key], kind="stable")
        .groupby(schema.group, observed=True)
        .tail(1)
    )
    return last.sort_values(column, kind="stable", na_position="last").reset_index(
        drop=True
    )


def _row_baselines(
    df: pd.DataFrame,
    schema: TableSchema,
    baseline: Any,
    tolerance: pd.Timedelta | None,
) -> pd.Series:
    base = baseline_values(df, schema, baseline, tolerance)
    return df[schema.group].map(base).astype(float)


def _log_zero_baselines(df: pd.DataFrame, schema: TableSchema) -> None:
    flagged = df.loc[df[BASELINE_ZERO_COLUMN], schema.group].unique()
    if len(flagged):
        logger.warning(
            "%s: zero baseline for %s; derived values left undefined",
            schema.name,
            ", ".join(map(str, flagged)),
        )


# ---------------------------------------------------------------------------
# Categories
# ---------------------------------------------------------------------------


def regroup(
    df: pd.DataFrame,
    column: str,
    lookup: Mapping[str, str],
    target: str | None = None,
) -> pd.DataFrame:
    """Map the labels of ``column`` through ``lookup``.

    Parameters
    ----------
    df:
        Observation table.
    column:
        Categorical column to regroup.
    lookup:
        Raw label -> regrouped label. Must cover every label in ``column``.
    target:
        Output column; defaults to overwriting ``column``.

    Raises
    ------
    UnknownCategoryError
        If a label in ``column`` has no entry in ``lookup``.
    """
    if column not in df.columns:
        msg = f"Cannot regroup: no column {column!r}"
        raise DataValidationError(msg)

    unknown = sorted(set(df[column].astype(str)) - set(lookup))
    if unknown:
        msg = f"No regrouping defined for {column!r} labels {unknown}"
        raise UnknownCategoryError(msg)

    out = df.copy()
    out[target or column] = out[column].astype(str).map(lookup)
    return out


def summarize(
    df: pd.DataFrame,
    by: str | list[str],
    value: str,
    agg: str = "mean",
) -> pd.DataFrame:
    """Aggregate ``value`` per group into a flat frame."""
    return (
        df.groupby(by, observed=True, sort=True)[value].agg(agg).reset_index()
    )


def order_by(
    df: pd.DataFrame,
    category: str,
    key: str,
    agg: str = "mean",
    descending: bool = False,
) -> pd.DataFrame:
    """Order ``category`` by an aggregate of ``key``.

    ``category`` becomes an ordered ``Categorical`` whose levels follow the
    aggregated key, and the rows are sorted into that order. Ties keep the
    alphabetical order of the labels.
    """
    for col in (category, key):
        if col not in df.columns:
            msg = f"Cannot order: no column {col!r}"
            raise DataValidationError(msg)

    ranking = (
        df.groupby(category, observed=True, sort=True)[key]
        .agg(agg)
        .sort_values(ascending=not descending, kind="stable")
    )
    levels = [str(level) for level in ranking.index]

    out = df.copy()
    out[category] = pd.Categorical(
        out[category].astype(str), categories=levels, ordered=True
    )
    out = out.sort_values(category, kind="stable").reset_index(drop=True)
    logger.debug("Ordered %s by %s(%s): %s", category, agg, key, levels)
    return out

