"""Centralized configuration defaults for gridfigs.

All magic constants used by the loaders, the exporter and the CLI are
collected here.
"""

from __future__ import annotations

# Figure output directory (viz/generate_all_figures.py)
DEFAULT_OUTPUT_DIR: str = "docs/figures"

# Export formats and resolution (viz/figure_export.py)
DEFAULT_FORMATS: tuple[str, ...] = ("png",)
DEFAULT_DPI: int = 300

# Stock prices are indexed to the first trading day on/after this date
DEFAULT_BASELINE_DATE: str = "2012-06-01"

# Seed shared by all built-in dataset generators (data/datasets.py)
DATASET_SEED: int = 42
