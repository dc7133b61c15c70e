"""Pydantic figure settings loaded from YAML."""

from __future__ import annotations

from gridfigs.config.models import (
    ExportFormat,
    FigureSettings,
    PlotContext,
    load_settings,
)

__all__ = [
    "ExportFormat",
    "FigureSettings",
    "PlotContext",
    "load_settings",
]
