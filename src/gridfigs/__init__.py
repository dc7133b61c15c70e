"""gridfigs: example figures on the use of background grids in charts."""

from __future__ import annotations

__version__ = "0.1.0"
