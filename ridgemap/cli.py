"""Command line interface for RidgeMap.

Run: ridgemap --bbox -5.091141 56.756959 -4.914158 56.833387 --output ben-nevis.svg

Options may also come from a JSON config file (--config); keys mirror the
long option names with underscores, and flags given on the command line win.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Optional

from ridgemap.constants import OutputConfig, ProjectionConfig, RenderConfig, SamplingConfig
from ridgemap.core.dem_service import DEMService
from ridgemap.core.projection import UnsupportedProjectionError
from ridgemap.ridge_map import RidgeMap

logger = logging.getLogger(__name__)

DEFAULTS: dict[str, Any] = {
    "bbox": list(SamplingConfig.DEFAULT_BBOX),
    "projection": ProjectionConfig.GEOGRAPHIC,
    "viewpoint": SamplingConfig.DEFAULT_VIEWPOINT,
    "lines": SamplingConfig.DEFAULT_LINES,
    "points": SamplingConfig.DEFAULT_POINTS,
    "vertical_ratio": RenderConfig.DEFAULT_VERTICAL_RATIO,
    "water_ntile": RenderConfig.DEFAULT_WATER_NTILE,
    "lake_flatness": RenderConfig.DEFAULT_LAKE_FLATNESS,
    "line_color": RenderConfig.DEFAULT_LINE_COLOR,
    "line_width": RenderConfig.DEFAULT_LINE_WIDTH,
    "background_color": RenderConfig.DEFAULT_BACKGROUND_COLOR,
    "cache": None,
    "dem": None,
    "output": OutputConfig.DEFAULT_FILENAME,
    "optimize": OutputConfig.OPTIMIZE,
}


def build_parser() -> argparse.ArgumentParser:
    """Argument parser; every option defaults to None so config files can fill gaps."""
    parser = argparse.ArgumentParser(
        prog="ridgemap",
        description="Generate an SVG ridge-line map of a region from SRTM elevation data.",
    )
    parser.add_argument("--config", type=Path, help="JSON file with default option values")
    parser.add_argument(
        "--bbox",
        type=float,
        nargs=4,
        metavar=("LNG1", "LAT1", "LNG2", "LAT2"),
        help="Longitude/latitude bounding box (default: Ben Nevis)",
    )
    parser.add_argument(
        "--projection",
        help="lnglat, equirectangular, web-mercator, mercator or a PROJ string (default: lnglat)",
    )
    parser.add_argument("--viewpoint", choices=["south", "west", "north", "east"], help="Default: south")
    parser.add_argument("--lines", type=int, help=f"Number of ridge lines (default: {SamplingConfig.DEFAULT_LINES})")
    parser.add_argument("--points", type=int, help=f"Points per line (default: {SamplingConfig.DEFAULT_POINTS})")
    parser.add_argument("--vertical-ratio", type=float, help="Vertical exaggeration (default: 40)")
    parser.add_argument("--water-ntile", type=float, help="Remove the bottom N meters of each line (0 disables)")
    parser.add_argument("--lake-flatness", type=float, help="Remove flat stretches below N meters (0 disables)")
    parser.add_argument("--line-color", help="CSS color of lines (default: black)")
    parser.add_argument("--line-width", type=float, help="Line width on a canvas 100 wide (default: 0.1)")
    parser.add_argument("--background-color", help="CSS background color, 'none' for transparent (default: #fff)")
    parser.add_argument("--no-background", action="store_true", default=None, help="Transparent background")
    parser.add_argument("--cache", type=Path, help="SRTM tile cache directory (default: ~/.cache/srtm)")
    parser.add_argument("--dem", type=Path, help="Sample a local GeoTIFF instead of SRTM tiles")
    parser.add_argument("-o", "--output", type=Path, help=f"Output SVG file (default: {OutputConfig.DEFAULT_FILENAME})")
    parser.add_argument("--no-optimize", action="store_true", default=None, help="Write the SVG unoptimized")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def load_config(path: Optional[Path]) -> dict[str, Any]:
    """Read option values from a JSON config file.

    Raises:
        ValueError: If the file is not a JSON object or has unknown keys.
    """
    if path is None:
        return {}
    with open(path, "r", encoding="utf-8") as fh:
        config = json.load(fh)
    if not isinstance(config, dict):
        raise ValueError(f"Config file {path} must contain a JSON object")
    unknown = sorted(set(config) - set(DEFAULTS))
    if unknown:
        raise ValueError(f"Unknown config keys in {path}: {', '.join(unknown)}")
    return config


def resolve_options(args: argparse.Namespace) -> dict[str, Any]:
    """Merge defaults, config file and command line flags (in that order)."""
    options = dict(DEFAULTS)
    options.update(load_config(args.config))

    for key in DEFAULTS:
        value = getattr(args, key, None)
        if value is not None:
            options[key] = value

    if args.no_background:
        options["background_color"] = None
    if isinstance(options["background_color"], str) and options["background_color"].lower() == "none":
        options["background_color"] = None
    if args.no_optimize:
        options["optimize"] = False
    return options


def run(options: dict[str, Any]) -> Path:
    """Generate and save a ridge map from resolved options."""
    ridge_map = RidgeMap(
        bbox=options["bbox"],
        projection=options["projection"],
        viewpoint=options["viewpoint"],
    )
    source = DEMService(dem_path=Path(options["dem"])) if options["dem"] else None
    ridge_map.get_elevation_data(
        num=int(options["lines"]),
        points=int(options["points"]),
        source=source,
        cache=options["cache"],
    )
    ridge_map.generate(
        lake_flatness=float(options["lake_flatness"]),
        vertical_ratio=float(options["vertical_ratio"]),
        water_ntile=float(options["water_ntile"]),
        line_color=options["line_color"],
        line_width=float(options["line_width"]),
        background_color=options["background_color"],
    )
    return ridge_map.save(name=options["output"], optimize=bool(options["optimize"]))


def main(argv: Optional[list[str]] = None) -> int:
    """Console entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    try:
        options = resolve_options(args)
        output = run(options)
    except (UnsupportedProjectionError, ValueError, FileNotFoundError) as e:
        parser.exit(status=2, message=f"ridgemap: error: {e}\n")

    logger.info(f"Ridge map written to {output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
