"""Column layouts of the observation tables.

Every table has a key column (timestamp or category), a numeric
measurement and a group label drawn from a small fixed set.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class TableSchema:
    """Column names and invariants of one observation table.

    Parameters
    ----------
    name:
        Dataset name (also the CSV file stem, e.g. ``"stocks"``).
    key:
        Timestamp or category column.
    value:
        Numeric measurement column.
    group:
        Group label column.
    allowed_groups:
        Closed set of group labels, or ``None`` to accept any label.
    parse_dates:
        Parse the key column as datetimes when loading.
    extra_numeric:
        Further measurement columns that must be present and finite.
    """

    name: str
    key: str
    value: str
    group: str
    allowed_groups: tuple[str, ...] | None = None
    parse_dates: bool = False
    extra_numeric: tuple[str, ...] = ()

    @property
    def required_columns(self) -> list[str]:
        return [self.key, self.value, self.group, *self.extra_numeric]

    @property
    def numeric_columns(self) -> list[str]:
        return [self.value, *self.extra_numeric]


STOCK_SCHEMA = TableSchema(
    name="stocks",
    key="date",
    value="price",
    group="ticker",
    allowed_groups=("AAPL", "FB", "GOOG", "MSFT"),
    parse_dates=True,
)

ATHLETE_SCHEMA = TableSchema(
    name="athletes",
    key="sport",
    value="height",
    group="sex",
    allowed_groups=("female", "male"),
    extra_numeric=("pcBfat",),
)

PROTEIN_SCHEMA = TableSchema(
    name="proteins",
    key="pair",
    value="cor_a",
    group="class",
    allowed_groups=("same complex", "different complex"),
    extra_numeric=("cor_b",),
)
