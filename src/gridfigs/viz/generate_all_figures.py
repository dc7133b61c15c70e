"""Master figure generation orchestrator.

Registry-based system for generating every figure of the chapter.
Each registered figure has a name, a chart builder, a dataset category and
a verdict (``good``, ``bad`` or ``ugly``).

Usage::

    python -m gridfigs
    python -m gridfigs --list
    python -m gridfigs --figure stock_index_hgrid
    python -m gridfigs --verdict good --format png --format svg
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Any

import matplotlib.pyplot as plt

from gridfigs.config.models import ExportFormat, FigureSettings, load_settings
from gridfigs.exceptions import GridfigsError
from gridfigs.viz import figures
from gridfigs.viz.figure_export import save_figure
from gridfigs.viz.renderer import render

if TYPE_CHECKING:
    from collections.abc import Sequence

logger = logging.getLogger(__name__)

VERDICTS = ("good", "bad", "ugly")

# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------

FIGURE_REGISTRY: list[dict[str, Any]] = [
    {
        "name": "stock_index_default_grid",
        "builder": figures.stock_index_default_grid,
        "category": "stocks",
        "verdict": "good",
    },
    {
        "name": "stock_index_no_grid",
        "builder": figures.stock_index_no_grid,
        "category": "stocks",
        "verdict": "ugly",
    },
    {
        "name": "stock_index_heavy_grid",
        "builder": figures.stock_index_heavy_grid,
        "category": "stocks",
        "verdict": "bad",
    },
    {
        "name": "stock_index_hgrid",
        "builder": figures.stock_index_hgrid,
        "category": "stocks",
        "verdict": "good",
    },
    {
        "name": "stock_change_columns",
        "builder": figures.stock_change_columns,
        "category": "stocks",
        "verdict": "good",
    },
    {
        "name": "athlete_height_fat",
        "builder": figures.athlete_height_fat,
        "category": "athletes",
        "verdict": "good",
    },
    {
        "name": "athlete_sport_height_vgrid",
        "builder": figures.athlete_sport_height_vgrid,
        "category": "athletes",
        "verdict": "good",
    },
    {
        "name": "athlete_sport_height_hgrid",
        "builder": figures.athlete_sport_height_hgrid,
        "category": "athletes",
        "verdict": "bad",
    },
    {
        "name": "protein_pairs_grid",
        "builder": figures.protein_pairs_grid,
        "category": "proteins",
        "verdict": "bad",
    },
    {
        "name": "protein_pairs_diagonal",
        "builder": figures.protein_pairs_diagonal,
        "category": "proteins",
        "verdict": "good",
    },
]


def list_figures(verdict: str | None = None) -> list[str]:
    """Return registered figure names, optionally only those with ``verdict``."""
    return [
        entry["name"]
        for entry in FIGURE_REGISTRY
        if verdict is None or entry["verdict"] == verdict
    ]


def _render_and_save(
    entry: dict[str, Any],
    output_dir: Path | None,
    settings: FigureSettings,
) -> Path | None:
    spec = entry["builder"](settings)
    fig = render(spec, context=str(settings.context))
    try:
        return save_figure(
            fig,
            entry["name"],
            output_dir=output_dir if output_dir is not None else settings.output_dir,
            formats=[str(f) for f in settings.formats],
            data=spec.to_record() if settings.save_data else None,
            dpi=settings.dpi,
        )
    finally:
        plt.close(fig)


def generate_figure(
    name: str,
    output_dir: Path | None = None,
    settings: FigureSettings | None = None,
) -> Path | None:
    """Generate a single figure by name.

    Parameters
    ----------
    name:
        Registered figure name.
    output_dir:
        Output directory. Defaults to ``settings.output_dir``.
    settings:
        Figure settings. Defaults to :class:`FigureSettings` defaults.

    Returns
    -------
    Path to the saved figure, or None if not found or generation failed.
    """
    settings = settings or FigureSettings()
    for entry in FIGURE_REGISTRY:
        if entry["name"] == name:
            try:
                return _render_and_save(entry, output_dir, settings)
            except Exception:
                logger.exception("Failed to generate figure: %s", name)
                plt.close("all")
                return None
    logger.warning("Unknown figure name: %s", name)
    return None


def generate_all_figures(
    output_dir: Path | None = None,
    settings: FigureSettings | None = None,
    verdict: str | None = None,
) -> dict[str, list[str]]:
    """Generate all registered figures.

    Parameters
    ----------
    output_dir:
        Output directory for all figures. Defaults to ``settings.output_dir``.
    settings:
        Figure settings. Defaults to :class:`FigureSettings` defaults.
    verdict:
        Only generate figures with this verdict.

    Returns
    -------
    Summary dict with 'succeeded' and 'failed' lists of figure names.
    """
    settings = settings or FigureSettings()
    succeeded: list[str] = []
    failed: list[str] = []

    for entry in FIGURE_REGISTRY:
        name = entry["name"]
        if verdict is not None and entry["verdict"] != verdict:
            continue
        try:
            _render_and_save(entry, output_dir, settings)
            succeeded.append(name)
            logger.info("Generated: %s", name)
        except Exception:
            logger.exception("Failed: %s", name)
            plt.close("all")
            failed.append(name)

    logger.info(
        "Figure generation complete: %d succeeded, %d failed",
        len(succeeded),
        len(failed),
    )
    return {"succeeded": succeeded, "failed": failed}


# ---------------------------------------------------------------------------
# Command line
# ---------------------------------------------------------------------------


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gridfigs", description="Render the background-grid figures"
    )
    parser.add_argument("--figure", help="Generate a specific figure by name")
    parser.add_argument(
        "--list", action="store_true", help="List all registered figures"
    )
    parser.add_argument(
        "--verdict", choices=VERDICTS, help="Only figures with this verdict"
    )
    parser.add_argument("--output-dir", type=Path, help="Output directory")
    parser.add_argument("--config", type=Path, help="YAML settings file")
    parser.add_argument(
        "--format",
        dest="formats",
        action="append",
        choices=[f.value for f in ExportFormat],
        help="Export format (repeatable)",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging"
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Command line entry point; returns the process exit status."""
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
    )

    if args.list:
        for entry in FIGURE_REGISTRY:
            if args.verdict is None or entry["verdict"] == args.verdict:
                tags = f"{entry['category']}, {entry['verdict']}"
                print(f"  {entry['name']:30s}  [{tags}]")
        return 0

    try:
        settings = load_settings(args.config)
    except GridfigsError as exc:
        logger.error("%s", exc)
        return 1
    if args.formats:
        settings = settings.model_copy(
            update={"formats": [ExportFormat(f) for f in args.formats]}
        )

    if args.figure:
        result = generate_figure(
            args.figure, output_dir=args.output_dir, settings=settings
        )
        if result is None:
            print(f"Failed or unknown: {args.figure}")
            return 1
        print(f"Saved: {result}")
        return 0

    summary = generate_all_figures(
        output_dir=args.output_dir, settings=settings, verdict=args.verdict
    )
    print(f"Succeeded: {len(summary['succeeded'])}, Failed: {len(summary['failed'])}")
    if summary["failed"]:
        print(f"Failed figures: {summary['failed']}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
