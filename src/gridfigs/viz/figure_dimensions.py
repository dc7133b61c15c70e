"""Preset-based figure dimension management.

No hardcoded figsizes anywhere in viz code; all presets come from here.
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Presets: (width_inches, height_inches)
# ---------------------------------------------------------------------------

FIGURE_DIMENSIONS: dict[str, tuple[float, float]] = {
    "single": (6.0, 4.2),
    "wide": (7.5, 4.2),
    "square": (5.5, 5.5),
    "tall": (6.0, 5.5),
}


def get_figsize(preset: str) -> tuple[float, float]:
    """Return figure dimensions for a named preset.

    Parameters
    ----------
    preset:
        Preset name (e.g. ``"single"``, ``"wide"``, ``"square"``).

    Returns
    -------
    ``(width, height)`` in inches.

    Raises
    ------
    KeyError:
        If the preset name is not found.
    """
    return FIGURE_DIMENSIONS[preset]
