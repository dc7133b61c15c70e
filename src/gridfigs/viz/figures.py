"""Chart specifications for every figure of the background-grid chapter.

Each builder loads a dataset, derives the plotted columns and returns a
:class:`~gridfigs.viz.chart_spec.ChartSpec`. Variants of one chart differ
only in their decoration preset.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from gridfigs.data.datasets import SPORT_GROUPS
from gridfigs.data.loader import load_dataset
from gridfigs.data.schemas import STOCK_SCHEMA
from gridfigs.data.transforms import (
    final_change,
    index_to_baseline,
    order_by,
    regroup,
    summarize,
)
from gridfigs.viz.chart_spec import (
    ChannelMapping,
    ChartSpec,
    Decoration,
    Geometry,
    GridWeight,
    ScaleConfig,
    TickFormat,
)

if TYPE_CHECKING:
    import pandas as pd

    from gridfigs.config.models import FigureSettings


# ---------------------------------------------------------------------------
# Stock prices
# ---------------------------------------------------------------------------


def _indexed_stocks(settings: FigureSettings) -> pd.DataFrame:
    prices = load_dataset("stocks", settings.data_dir)
    return index_to_baseline(prices, STOCK_SCHEMA, settings.baseline_date)


def _stock_index(
    settings: FigureSettings,
    decoration: Decoration,
    weight: GridWeight = GridWeight.LIGHT,
    axis_lines: bool = True,
) -> ChartSpec:
    return ChartSpec(
        data=_indexed_stocks(settings),
        mapping=ChannelMapping(x="date", y="indexed", color="ticker"),
        geometry=Geometry.LINE,
        scales=ScaleConfig(
            x_label="",
            y_label="stock price, indexed",
            x_format=TickFormat.DATE,
            y_format=TickFormat.PERCENT,
        ),
        decoration=decoration,
        grid_weight=weight,
        axis_lines=axis_lines,
        legend=False,
        direct_labels=True,
        figsize="wide",
    )


def stock_index_default_grid(settings: FigureSettings) -> ChartSpec:
    """Indexed stock prices with white grid lines on a gray panel."""
    return _stock_index(
        settings, Decoration.FULL_GRID, GridWeight.ON_GRAY, axis_lines=False
    )


def stock_index_no_grid(settings: FigureSettings) -> ChartSpec:
    """Indexed stock prices with neither grid nor axis lines."""
    return _stock_index(settings, Decoration.NONE, axis_lines=False)


def stock_index_heavy_grid(settings: FigureSettings) -> ChartSpec:
    """Indexed stock prices behind dark, dominant grid lines."""
    return _stock_index(settings, Decoration.FULL_GRID, GridWeight.HEAVY)


def stock_index_hgrid(settings: FigureSettings) -> ChartSpec:
    """Indexed stock prices with thin horizontal grid lines only."""
    return _stock_index(settings, Decoration.HORIZONTAL, axis_lines=False)


def stock_change_columns(settings: FigureSettings) -> ChartSpec:
    """Five-year percent increase per company, sorted."""
    prices = load_dataset("stocks", settings.data_dir)
    change = final_change(prices, STOCK_SCHEMA, settings.baseline_date)
    return ChartSpec(
        data=change,
        mapping=ChannelMapping(x="ticker", y="pct_change"),
        geometry=Geometry.COLUMN,
        scales=ScaleConfig(
            x_label="",
            y_label="percent increase",
            y_format=TickFormat.PERCENT,
        ),
        decoration=Decoration.HORIZONTAL,
        axis_lines=False,
        legend=False,
    )


# ---------------------------------------------------------------------------
# Athletes
# ---------------------------------------------------------------------------


def athlete_height_fat(settings: FigureSettings) -> ChartSpec:
    """Percent body fat versus height, by sex."""
    athletes = load_dataset("athletes", settings.data_dir)
    return ChartSpec(
        data=athletes,
        mapping=ChannelMapping(x="height", y="pcBfat", color="sex", shape="sex"),
        geometry=Geometry.POINT,
        scales=ScaleConfig(x_label="height (cm)", y_label="% body fat"),
        decoration=Decoration.FULL_GRID,
        axis_lines=False,
    )


def _sport_heights(settings: FigureSettings) -> pd.DataFrame:
    athletes = load_dataset("athletes", settings.data_dir)
    grouped = regroup(athletes, "sport", SPORT_GROUPS)
    heights = summarize(grouped, by="sport", value="height", agg="mean")
    return order_by(heights, category="sport", key="height")


def _sport_height_bars(settings: FigureSettings, decoration: Decoration) -> ChartSpec:
    return ChartSpec(
        data=_sport_heights(settings),
        mapping=ChannelMapping(x="height", y="sport"),
        geometry=Geometry.BAR,
        scales=ScaleConfig(x_label="mean height (cm)", y_label=""),
        decoration=decoration,
        axis_lines=False,
        legend=False,
        figsize="tall",
    )


def athlete_sport_height_vgrid(settings: FigureSettings) -> ChartSpec:
    """Mean height per sport as bars, grid lines along the value axis."""
    return _sport_height_bars(settings, Decoration.VERTICAL)


def athlete_sport_height_hgrid(settings: FigureSettings) -> ChartSpec:
    """Mean height per sport as bars, grid lines along the category axis."""
    return _sport_height_bars(settings, Decoration.HORIZONTAL)


# ---------------------------------------------------------------------------
# Protein pairs
# ---------------------------------------------------------------------------

_CORRELATION_LIMITS = (-0.4, 1.0)


def _protein_pairs(settings: FigureSettings, decoration: Decoration) -> ChartSpec:
    return ChartSpec(
        data=load_dataset("proteins", settings.data_dir),
        mapping=ChannelMapping(x="cor_a", y="cor_b", color="class"),
        geometry=Geometry.POINT,
        scales=ScaleConfig(
            x_label="correlation, condition A",
            y_label="correlation, condition B",
            x_limits=_CORRELATION_LIMITS,
            y_limits=_CORRELATION_LIMITS,
            equal_aspect=True,
        ),
        decoration=decoration,
        figsize="square",
    )


def protein_pairs_grid(settings: FigureSettings) -> ChartSpec:
    """Paired correlations over a full background grid."""
    return _protein_pairs(settings, Decoration.FULL_GRID)


def protein_pairs_diagonal(settings: FigureSettings) -> ChartSpec:
    """Paired correlations against the y = x reference line."""
    return _protein_pairs(settings, Decoration.DIAGONAL)
