"""Tests for rendering chart specifications and applying decorations."""

from __future__ import annotations

import matplotlib.colors as mcolors
import matplotlib.pyplot as plt
import pandas as pd
import pytest

from gridfigs.exceptions import RenderError
from gridfigs.viz.chart_spec import (
    ChannelMapping,
    ChartSpec,
    Decoration,
    Geometry,
    GridWeight,
    ScaleConfig,
    TickFormat,
)
from gridfigs.viz.decorations import (
    GRID_STYLES,
    PANEL_BACKGROUNDS,
    apply_axis_lines,
    apply_decoration,
)
from gridfigs.viz.renderer import render

# ---------------------------------------------------------------------------
# Test data helpers
# ---------------------------------------------------------------------------


def _series() -> pd.DataFrame:
    dates = pd.date_range("2012-06-01", periods=5, freq="W-FRI")
    return pd.DataFrame(
        {
            "date": list(dates) * 2,
            "ticker": ["AAPL"] * 5 + ["MSFT"] * 5,
            "indexed": [100, 105, 110, 108, 120, 100, 98, 101, 103, 104],
        }
    )


def _line_spec(**kwargs: object) -> ChartSpec:
    return ChartSpec(
        data=_series(),
        mapping=ChannelMapping(x="date", y="indexed", color="ticker"),
        geometry=Geometry.LINE,
        **kwargs,
    )


def _visible_gridlines(axis: object) -> list[object]:
    return [line for line in axis.get_gridlines() if line.get_visible()]


# ---------------------------------------------------------------------------
# Decorations
# ---------------------------------------------------------------------------


class TestApplyDecoration:
    """Tests for the grid / reference line presets."""

    @pytest.mark.parametrize(
        ("decoration", "x_grid", "y_grid"),
        [
            (Decoration.NONE, False, False),
            (Decoration.FULL_GRID, True, True),
            (Decoration.HORIZONTAL, False, True),
            (Decoration.VERTICAL, True, False),
            (Decoration.DIAGONAL, False, False),
        ],
    )
    def test_grid_axes(
        self, decoration: Decoration, x_grid: bool, y_grid: bool
    ) -> None:
        """Each preset draws grid lines along the expected axes only."""
        fig, ax = plt.subplots()
        ax.plot([0, 1], [0, 1])
        apply_decoration(ax, decoration)
        fig.canvas.draw()
        assert bool(_visible_gridlines(ax.xaxis)) is x_grid
        assert bool(_visible_gridlines(ax.yaxis)) is y_grid
        plt.close(fig)

    def test_diagonal_adds_reference_line(self) -> None:
        """The diagonal preset adds one extra line to the axes."""
        fig, ax = plt.subplots()
        ax.plot([0, 1], [0, 1])
        apply_decoration(ax, Decoration.DIAGONAL)
        assert len(ax.lines) == 2
        plt.close(fig)

    def test_heavy_grid_color(self) -> None:
        """Heavy grids use the dark grid color."""
        fig, ax = plt.subplots()
        ax.plot([0, 1], [0, 1])
        apply_decoration(ax, Decoration.HORIZONTAL, GridWeight.HEAVY)
        fig.canvas.draw()
        line = _visible_gridlines(ax.yaxis)[0]
        assert mcolors.same_color(
            line.get_color(), GRID_STYLES[GridWeight.HEAVY]["color"]
        )
        plt.close(fig)

    def test_on_gray_panel(self) -> None:
        """The on-gray weight shades the panel background."""
        fig, ax = plt.subplots()
        apply_decoration(ax, Decoration.FULL_GRID, GridWeight.ON_GRAY)
        assert mcolors.same_color(
            ax.get_facecolor(), PANEL_BACKGROUNDS[GridWeight.ON_GRAY]
        )
        plt.close(fig)

    def test_grid_behind_data(self) -> None:
        """Grid lines are drawn below the data."""
        fig, ax = plt.subplots()
        apply_decoration(ax, Decoration.FULL_GRID)
        assert ax.get_axisbelow() is True
        plt.close(fig)


class TestApplyAxisLines:
    """Tests for axis line toggling."""

    def test_hidden(self) -> None:
        """show=False hides all four spines."""
        fig, ax = plt.subplots()
        apply_axis_lines(ax, show=False)
        assert not any(spine.get_visible() for spine in ax.spines.values())
        plt.close(fig)

    def test_shown(self) -> None:
        """show=True keeps only the left and bottom spines."""
        fig, ax = plt.subplots()
        apply_axis_lines(ax, show=True)
        visible = {side for side, spine in ax.spines.items() if spine.get_visible()}
        assert visible == {"left", "bottom"}
        plt.close(fig)


# ---------------------------------------------------------------------------
# render
# ---------------------------------------------------------------------------


class TestRender:
    """Tests for render()."""

    def test_returns_figure(self) -> None:
        """render returns a matplotlib Figure with one axes."""
        fig = render(_line_spec())
        assert isinstance(fig, plt.Figure)
        assert len(fig.get_axes()) == 1
        plt.close(fig)

    def test_one_line_per_group(self) -> None:
        """Each color group gets its own line."""
        fig = render(_line_spec(decoration=Decoration.NONE))
        ax = fig.get_axes()[0]
        assert len(ax.lines) == 2
        plt.close(fig)

    def test_legend_uses_display_labels(self) -> None:
        """Legend entries use the company names."""
        fig = render(_line_spec())
        legend = fig.get_axes()[0].get_legend()
        assert legend is not None
        assert [t.get_text() for t in legend.get_texts()] == ["Apple", "Microsoft"]
        plt.close(fig)

    def test_direct_labels_replace_legend(self) -> None:
        """Direct labels annotate line ends and suppress the legend."""
        fig = render(_line_spec(direct_labels=True, legend=False))
        ax = fig.get_axes()[0]
        assert ax.get_legend() is None
        texts = sorted(t.get_text() for t in ax.texts)
        assert texts == ["Apple", "Microsoft"]
        plt.close(fig)

    def test_percent_ticks(self) -> None:
        """Percent-formatted axes show a percent sign."""
        spec = _line_spec(scales=ScaleConfig(y_format=TickFormat.PERCENT))
        fig = render(spec)
        ax = fig.get_axes()[0]
        assert ax.yaxis.get_major_formatter()(100, 0).endswith("%")
        plt.close(fig)

    def test_axis_labels(self) -> None:
        """Labels default to column names; empty strings hide them."""
        fig = render(_line_spec(scales=ScaleConfig(x_label="", y_label=None)))
        ax = fig.get_axes()[0]
        assert ax.get_xlabel() == ""
        assert ax.get_ylabel() == "indexed"
        plt.close(fig)

    def test_columns(self) -> None:
        """Column geometry draws one bar per category in table order."""
        data = pd.DataFrame(
            {"ticker": ["MSFT", "AAPL"], "pct_change": [150.0, 80.0]}
        )
        spec = ChartSpec(
            data=data,
            mapping=ChannelMapping(x="ticker", y="pct_change"),
            geometry=Geometry.COLUMN,
            decoration=Decoration.HORIZONTAL,
        )
        fig = render(spec)
        ax = fig.get_axes()[0]
        assert len(ax.patches) == 2
        labels = [t.get_text() for t in ax.get_xticklabels()]
        assert labels == ["Microsoft", "Apple"]
        plt.close(fig)

    def test_horizontal_bars_follow_category_order(self) -> None:
        """Bar geometry places ordered categories bottom to top."""
        data = pd.DataFrame(
            {
                "sport": pd.Categorical(
                    ["gymnastics", "rowing", "basketball"],
                    categories=["gymnastics", "rowing", "basketball"],
                    ordered=True,
                ),
                "height": [154.0, 183.0, 190.0],
            }
        )
        spec = ChartSpec(
            data=data,
            mapping=ChannelMapping(x="height", y="sport"),
            geometry=Geometry.BAR,
            decoration=Decoration.VERTICAL,
        )
        fig = render(spec)
        ax = fig.get_axes()[0]
        widths = [p.get_width() for p in ax.patches]
        assert widths == [154.0, 183.0, 190.0]
        labels = [t.get_text() for t in ax.get_yticklabels()]
        assert labels == ["gymnastics", "rowing", "basketball"]
        plt.close(fig)

    def test_points_with_shapes(self) -> None:
        """Point geometry draws one scatter collection per group."""
        data = pd.DataFrame(
            {
                "height": [170.0, 180.0, 190.0, 175.0],
                "pcBfat": [15.0, 10.0, 8.0, 20.0],
                "sex": ["female", "male", "male", "female"],
            }
        )
        spec = ChartSpec(
            data=data,
            mapping=ChannelMapping(x="height", y="pcBfat", color="sex", shape="sex"),
            geometry=Geometry.POINT,
            decoration=Decoration.FULL_GRID,
        )
        fig = render(spec)
        ax = fig.get_axes()[0]
        assert len(ax.collections) == 2
        plt.close(fig)

    def test_equal_aspect(self) -> None:
        """equal_aspect fixes a 1:1 data aspect ratio."""
        data = pd.DataFrame({"a": [0.1, 0.5], "b": [0.2, 0.6]})
        spec = ChartSpec(
            data=data,
            mapping=ChannelMapping(x="a", y="b"),
            geometry=Geometry.POINT,
            scales=ScaleConfig(
                x_limits=(-0.4, 1.0), y_limits=(-0.4, 1.0), equal_aspect=True
            ),
            decoration=Decoration.DIAGONAL,
        )
        fig = render(spec)
        ax = fig.get_axes()[0]
        assert ax.get_aspect() == 1.0
        assert ax.get_xlim() == pytest.approx((-0.4, 1.0))
        plt.close(fig)

    def test_invalid_spec_raises(self) -> None:
        """Validation errors propagate from render."""
        spec = ChartSpec(
            data=_series(),
            mapping=ChannelMapping(x="date", y="missing"),
            geometry=Geometry.LINE,
        )
        with pytest.raises(RenderError):
            render(spec)
