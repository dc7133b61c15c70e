"""Chart specifications, rendering and export for the background-grid figures.

Centralized styling, preset figure dimensions, multi-format export.
Uses Seaborn with the Okabe-Ito colorblind-safe palette.
"""

from __future__ import annotations
