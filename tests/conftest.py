from __future__ import annotations

import warnings
from typing import TYPE_CHECKING

import matplotlib

if TYPE_CHECKING:
    import pytest

# Use non-interactive backend for every test
matplotlib.use("Agg")


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: renders every registered figure to disk"
    )

# EPS export warns that transparency is not supported.
warnings.filterwarnings(
    "ignore",
    message=".*PostScript backend does not support transparency.*",
)
