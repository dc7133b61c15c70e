from __future__ import annotations

import logging
from datetime import date
from enum import StrEnum
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError

from gridfigs.config.defaults import (
    DEFAULT_BASELINE_DATE,
    DEFAULT_DPI,
    DEFAULT_FORMATS,
    DEFAULT_OUTPUT_DIR,
)
from gridfigs.exceptions import ConfigError

logger = logging.getLogger(__name__)

# Settings file shipped with the repository checkout
_DEFAULT_SETTINGS_PATH = (
    Path(__file__).resolve().parent.parent.parent.parent / "configs" / "figures.yaml"
)


class ExportFormat(StrEnum):
    """File formats accepted by the figure exporter."""

    PNG = "png"
    SVG = "svg"
    PDF = "pdf"
    EPS = "eps"


class PlotContext(StrEnum):
    """Seaborn plotting contexts."""

    PAPER = "paper"
    NOTEBOOK = "notebook"
    TALK = "talk"
    POSTER = "poster"


class FigureSettings(BaseModel):
    """Settings shared by every rendered figure."""

    output_dir: Path = Field(
        default=Path(DEFAULT_OUTPUT_DIR), description="Directory for exported figures"
    )
    formats: list[ExportFormat] = Field(
        default_factory=lambda: [ExportFormat(f) for f in DEFAULT_FORMATS],
        min_length=1,
    )
    dpi: int = Field(default=DEFAULT_DPI, gt=0)
    context: PlotContext = PlotContext.PAPER
    data_dir: Path | None = Field(
        default=None,
        description="Directory with <dataset>.csv files overriding built-in data",
    )
    save_data: bool = Field(
        default=False, description="Write reproducibility JSON next to each figure"
    )
    baseline_date: date = Field(default=date.fromisoformat(DEFAULT_BASELINE_DATE))


def load_settings(path: Path | str | None = None) -> FigureSettings:
    """Load figure settings from a YAML file.

    Parameters
    ----------
    path:
        YAML file to read. When omitted, ``configs/figures.yaml`` from the
        repository checkout is used if it exists, otherwise the model
        defaults are returned.

    Returns
    -------
    FigureSettings
        Validated settings.

    Raises
    ------
    ConfigError
        If an explicit path does not exist, the YAML cannot be parsed, or a
        value fails validation.
    """
    if path is None:
        if not _DEFAULT_SETTINGS_PATH.exists():
            logger.debug("No settings file found; using defaults")
            return FigureSettings()
        yaml_path = _DEFAULT_SETTINGS_PATH
    else:
        yaml_path = Path(path)
        if not yaml_path.is_file():
            msg = f"Settings file not found: {yaml_path}"
            raise ConfigError(msg)

    logger.debug("Loading figure settings from %s", yaml_path)
    try:
        with open(yaml_path, encoding="utf-8") as f:
            data: Any = yaml.safe_load(f)
    except yaml.YAMLError as exc:
        msg = f"Cannot parse settings file {yaml_path}: {exc}"
        raise ConfigError(msg) from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        msg = f"Settings file {yaml_path} must contain a mapping"
        raise ConfigError(msg)

    try:
        return FigureSettings(**data)
    except ValidationError as exc:
        msg = f"Invalid settings in {yaml_path}: {exc}"
        raise ConfigError(msg) from exc
