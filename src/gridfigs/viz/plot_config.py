"""Centralized plot styling with the Okabe-Ito colorblind-safe palette.

All visualization modules import colors and labels from here.
No hardcoded colors anywhere else.
"""

from __future__ import annotations

import matplotlib.pyplot as plt
import seaborn as sns

# ---------------------------------------------------------------------------
# Okabe-Ito colorblind-safe palette
# ---------------------------------------------------------------------------

OKABE_ITO: tuple[str, ...] = (
    "#E69F00",
    "#56B4E9",
    "#009E73",
    "#F0E442",
    "#0072B2",
    "#D55E00",
    "#CC79A7",
    "#000000",
)

COLORS: dict[str, str] = {
    # tickers
    "AAPL": "#E69F00",
    "FB": "#56B4E9",
    "GOOG": "#009E73",
    "MSFT": "#D55E00",
    # athletes
    "female": "#D55E00",
    "male": "#0072B2",
    # protein pairs
    "same complex": "#0072B2",
    "different complex": "#999999",
}

# Single-series fill (columns, bars, ungrouped points)
DEFAULT_COLOR = "#56B4E9"

SHAPES: dict[str, str] = {
    "female": "o",
    "male": "^",
    "same complex": "o",
    "different complex": "s",
}

MARKER_CYCLE: tuple[str, ...] = ("o", "^", "s", "D", "v")

# ---------------------------------------------------------------------------
# Display labels
# ---------------------------------------------------------------------------

GROUP_LABELS: dict[str, str] = {
    "AAPL": "Apple",
    "FB": "Facebook",
    "GOOG": "Alphabet",
    "MSFT": "Microsoft",
}


def color_for(label: str, index: int, palette: dict[str, str] | None = None) -> str:
    """Color of a group label, falling back to the palette cycle."""
    if palette and label in palette:
        return palette[label]
    return COLORS.get(label, OKABE_ITO[index % len(OKABE_ITO)])


def display_label(label: str) -> str:
    return GROUP_LABELS.get(label, label)


# ---------------------------------------------------------------------------
# Style setup
# ---------------------------------------------------------------------------


def setup_style(context: str = "paper") -> None:
    """Apply consistent styling across all figures.

    The base style draws no grid; grids and reference lines come only from
    the chart's decoration preset.

    Parameters
    ----------
    context:
        Seaborn context: ``"paper"``, ``"talk"``, ``"poster"``, ``"notebook"``.
    """
    sns.set_theme(
        context=context,
        style="ticks",
        font_scale=1.1,
        rc={
            "figure.dpi": 100,
            "savefig.dpi": 300,
            "font.family": "sans-serif",
            "axes.grid": False,
            "axes.spines.top": False,
            "axes.spines.right": False,
            "legend.frameon": False,
        },
    )
    plt.rcParams["figure.constrained_layout.use"] = True
