"""Tests for dataset generation, CSV loading and table validation."""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np
import pandas as pd
import pytest

from gridfigs.data import datasets
from gridfigs.data.loader import DATASETS, load_dataset, load_table, validate_table
from gridfigs.data.schemas import ATHLETE_SCHEMA, PROTEIN_SCHEMA, STOCK_SCHEMA
from gridfigs.data.transforms import index_to_baseline
from gridfigs.exceptions import DataLoadError, DataValidationError

if TYPE_CHECKING:
    from pathlib import Path


def _prices() -> pd.DataFrame:
    return pd.DataFrame(
        {
            "date": pd.to_datetime(["2012-06-01", "2012-06-08"] * 2),
            "ticker": ["AAPL", "AAPL", "MSFT", "MSFT"],
            "price": [100.0, 150.0, 30.0, 33.0],
        }
    )


# ---------------------------------------------------------------------------
# Built-in datasets
# ---------------------------------------------------------------------------


class TestBuiltinDatasets:
    """Tests for the deterministic dataset generators."""

    def test_stock_prices_schema(self) -> None:
        """Four tickers, weekly from the first Friday of June 2012."""
        df = datasets.stock_prices()
        validate_table(df, STOCK_SCHEMA)
        assert sorted(df["ticker"].unique()) == ["AAPL", "FB", "GOOG", "MSFT"]
        assert df["date"].min() == pd.Timestamp("2012-06-01")
        assert (df["price"] > 0).all()

    def test_athletes_include_both_track_labels(self) -> None:
        """Raw sport labels keep the two track disciplines apart."""
        df = datasets.athletes()
        validate_table(df, ATHLETE_SCHEMA)
        sports = set(df["sport"])
        assert {"track (400m)", "track (sprint)"} <= sports
        assert set(sports) <= set(datasets.SPORT_GROUPS)

    def test_protein_pairs_in_range(self) -> None:
        """Correlations stay inside [-1, 1]."""
        df = datasets.protein_pairs()
        validate_table(df, PROTEIN_SCHEMA)
        assert df["cor_a"].between(-1, 1).all()
        assert df["cor_b"].between(-1, 1).all()
        assert df["pair"].is_unique

    @pytest.mark.parametrize("name", sorted(DATASETS))
    def test_generators_are_deterministic(self, name: str) -> None:
        """Two calls return identical tables."""
        _, generator = DATASETS[name]
        pd.testing.assert_frame_equal(generator(), generator())


# ---------------------------------------------------------------------------
# validate_table
# ---------------------------------------------------------------------------


class TestValidateTable:
    """Tests for fail-fast schema validation."""

    def test_valid_table_passes(self) -> None:
        """A well-formed table raises nothing."""
        validate_table(_prices(), STOCK_SCHEMA)

    def test_missing_column(self) -> None:
        """A missing required column is reported by name."""
        with pytest.raises(DataValidationError, match="price"):
            validate_table(_prices().drop(columns="price"), STOCK_SCHEMA)

    def test_empty_table(self) -> None:
        """An empty table is rejected."""
        with pytest.raises(DataValidationError, match="no rows"):
            validate_table(_prices().iloc[0:0], STOCK_SCHEMA)

    def test_non_finite_value(self) -> None:
        """NaN and inf measurements are rejected."""
        df = _prices()
        df.loc[1, "price"] = np.inf
        with pytest.raises(DataValidationError, match="non-finite"):
            validate_table(df, STOCK_SCHEMA)

    def test_non_numeric_value(self) -> None:
        """Text measurements are rejected."""
        df = _prices()
        df["price"] = df["price"].astype(str)
        with pytest.raises(DataValidationError, match="not numeric"):
            validate_table(df, STOCK_SCHEMA)

    def test_unknown_group(self) -> None:
        """Group labels outside the allowed set are rejected."""
        df = _prices()
        df.loc[0, "ticker"] = "TSLA"
        with pytest.raises(DataValidationError, match="TSLA"):
            validate_table(df, STOCK_SCHEMA)

    def test_null_key(self) -> None:
        """Null keys are rejected."""
        df = _prices()
        df.loc[2, "date"] = pd.NaT
        with pytest.raises(DataValidationError, match="null"):
            validate_table(df, STOCK_SCHEMA)


# ---------------------------------------------------------------------------
# load_table / load_dataset
# ---------------------------------------------------------------------------


class TestLoadTable:
    """Tests for CSV loading."""

    def test_round_trip_csv(self, tmp_path: Path) -> None:
        """A written CSV loads back with parsed dates, sorted by group/key."""
        path = tmp_path / "stocks.csv"
        _prices().iloc[::-1].to_csv(path, index=False)
        df = load_table(path, STOCK_SCHEMA)
        assert pd.api.types.is_datetime64_any_dtype(df["date"])
        assert list(df["ticker"]) == ["AAPL", "AAPL", "MSFT", "MSFT"]
        assert list(df["price"]) == [100.0, 150.0, 30.0, 33.0]

    def test_missing_file(self, tmp_path: Path) -> None:
        """A missing file raises DataLoadError."""
        with pytest.raises(DataLoadError, match="not found"):
            load_table(tmp_path / "nope.csv", STOCK_SCHEMA)

    def test_empty_file(self, tmp_path: Path) -> None:
        """An empty file raises DataLoadError."""
        path = tmp_path / "stocks.csv"
        path.write_text("", encoding="utf-8")
        with pytest.raises(DataLoadError):
            load_table(path, STOCK_SCHEMA)

    def test_unparseable_dates(self, tmp_path: Path) -> None:
        """Dates that cannot be parsed fail validation."""
        path = tmp_path / "stocks.csv"
        path.write_text("date,ticker,price\nsoon,AAPL,1.0\n", encoding="utf-8")
        with pytest.raises(DataValidationError, match="dates"):
            load_table(path, STOCK_SCHEMA)

    def test_offset_dates_load_as_naive(self, tmp_path: Path) -> None:
        """UTC offsets are dropped, keeping the local calendar date."""
        path = tmp_path / "stocks.csv"
        path.write_text(
            "date,ticker,price\n"
            "2012-06-01 00:00:00-04:00,AAPL,100\n"
            "2012-06-08 00:00:00-04:00,AAPL,150\n",
            encoding="utf-8",
        )
        df = load_table(path, STOCK_SCHEMA)
        assert df["date"].dt.tz is None
        assert df["date"].iloc[0] == pd.Timestamp("2012-06-01")


class TestLoadedStocksBaseline:
    """A loaded stocks CSV feeds straight into the baseline transforms."""

    def test_offset_dates_index_to_baseline(self, tmp_path: Path) -> None:
        """Offset timestamps index against a plain baseline date."""
        (tmp_path / "stocks.csv").write_text(
            "date,ticker,price\n"
            "2012-06-01 00:00:00-04:00,AAPL,100\n"
            "2012-06-08 00:00:00-04:00,AAPL,150\n",
            encoding="utf-8",
        )
        df = load_dataset("stocks", data_dir=tmp_path)
        out = index_to_baseline(df, STOCK_SCHEMA, "2012-06-01")
        assert list(out["indexed"]) == [100.0, 150.0]


class TestLoadDataset:
    """Tests for named dataset lookup."""

    def test_builtin_when_no_data_dir(self) -> None:
        """Without data_dir the built-in generator is used."""
        df = load_dataset("athletes")
        assert len(df) == len(datasets.athletes())

    def test_csv_override(self, tmp_path: Path) -> None:
        """<data_dir>/<name>.csv replaces the built-in data."""
        _prices().to_csv(tmp_path / "stocks.csv", index=False)
        df = load_dataset("stocks", data_dir=tmp_path)
        assert len(df) == 4

    def test_falls_back_when_csv_absent(self, tmp_path: Path) -> None:
        """A data_dir without the file still yields the built-in data."""
        df = load_dataset("proteins", data_dir=tmp_path)
        assert len(df) == len(datasets.protein_pairs())

    def test_unknown_dataset(self) -> None:
        """Unknown names raise DataLoadError."""
        with pytest.raises(DataLoadError, match="Unknown dataset"):
            load_dataset("weather")
