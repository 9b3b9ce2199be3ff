"""CLI argument parsing and main entry point."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import TYPE_CHECKING, TypeVar

import numpy as np

import ndview.config as ndv_config
from ndview.display import display
from ndview.errors import InvalidArgumentError, UnsupportedTypeError
from ndview.imaging.sample_types import NDImage
from ndview.logging_utils import logger, set_verbosity
from ndview.mime import base64_png, html
from ndview.type_defs import OUTPUT_CHOICES, SCALING_CHOICES
from ndview.version import resolve_project_version

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Callable, Sequence

T = TypeVar("T")


def _wrap_validator(
    validator: Callable[[str], T],
    error_cls: type[argparse.ArgumentTypeError] = argparse.ArgumentTypeError,
) -> Callable[[str], T]:
    """Convert ``ValueError`` from a validator into ``ArgumentTypeError``."""

    def wrapper(text: str) -> T:
        try:
            return validator(text)
        except ValueError as exc:
            raise error_cls(str(exc)) from exc

    return wrapper


def build_arg_parser() -> argparse.ArgumentParser:
    """Construct the argument parser for the command-line interface."""
    p = argparse.ArgumentParser(
        prog="ndview",
        description="Render N-dimensional .npy arrays as an inline image",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "ndview image.npy\n"
            "ndview a.npy b.npy c.npy d.npy --grid 2,2\n"
            "ndview stack.npy --c-axis -1 --position 0,0,5 --scaling data\n"
        ),
    )
    p.add_argument(
        "images", nargs="*", type=Path,
        help="One or more .npy files; several files are tiled")
    p.add_argument(
        "--version", action="version",
        version=f"%(prog)s {resolve_project_version()}")

    mosaic = p.add_argument_group("mosaic")
    mosaic.add_argument(
        "--grid", dest="grid_layout",
        type=_wrap_validator(ndv_config.parse_int_list),
        help="Comma-separated cell counts per axis, e.g. 2,2")

    render = p.add_argument_group("render")
    render.add_argument(
        "--x-axis", type=int, help="Dimension used for columns (-1: none)")
    render.add_argument(
        "--y-axis", type=int, help="Dimension used for rows (-1: none)")
    render.add_argument(
        "--c-axis", type=int,
        help="Dimension composited as channels (-1: none, default: guess)")
    render.add_argument(
        "--scaling", choices=list(SCALING_CHOICES),
        help="Intensity scaling policy (default: auto)")
    render.add_argument(
        "--min", dest="channel_min",
        type=_wrap_validator(ndv_config.parse_float_list),
        help="Comma-separated per-channel display minimum")
    render.add_argument(
        "--max", dest="channel_max",
        type=_wrap_validator(ndv_config.parse_float_list),
        help="Comma-separated per-channel display maximum")
    render.add_argument(
        "--position", type=_wrap_validator(ndv_config.parse_int_list),
        help="Comma-separated coordinate for the remaining dimensions")
    render.add_argument(
        "--argb", action="store_true",
        help="Treat 32-bit integer samples as packed ARGB colors")

    output = p.add_argument_group("output")
    output.add_argument(
        "--format", choices=list(OUTPUT_CHOICES),
        help="Print an HTML <img> tag or bare base64 PNG (default: html)")
    output.add_argument("--title", type=str, help="Image alt/title text")

    cfg = p.add_argument_group("config")
    cfg.add_argument(
        "--config", type=str, help="Path to config.toml file")
    cfg.add_argument(
        "--verbose", action="store_true", help="Enable debug logging")
    return p


def load_images(paths: Sequence[Path], *, argb: bool) -> list[NDImage]:
    """Load .npy arrays as images."""
    images = []
    for path in paths:
        try:
            array = np.load(path, allow_pickle=False)
        except FileNotFoundError as e:
            msg = f"Image file not found: '{path}'"
            raise FileNotFoundError(msg) from e
        if not isinstance(array, np.ndarray):
            array.close()
            msg = f"Expected a single .npy array, got an archive: '{path}'"
            raise InvalidArgumentError(msg)
        logger.debug("Loaded %s: shape=%s dtype=%s",
                     path, array.shape, array.dtype)
        images.append(NDImage(array, kind="argb" if argb else "real"))
    return images


def run_from_args(args: argparse.Namespace) -> str:
    """Render the requested images and return the text to print."""
    base_cfg = None
    if args.config:
        base_cfg = ndv_config.ConfigLoader.load(args.config)
        logger.info("Loaded config from: %s", args.config)
    cfg = ndv_config.build_config_from_cli(vars(args), base_config=base_cfg)

    images = load_images(args.images, argb=args.argb)
    source = images if len(images) > 1 else images[0]
    raster = display(
        source,
        grid_layout=cfg.mosaic.grid_layout,
        **cfg.render.model_dump(),
    )
    logger.info("Rendered %d image(s) to %dx%d",
                len(images), raster.width, raster.height)

    if cfg.output.format == "base64":
        return base64_png(raster)
    return html(raster, cfg.output.title)


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command-line interface."""
    arg_parser = build_arg_parser()
    args = arg_parser.parse_args(argv)
    if not args.images:
        arg_parser.error("at least one image file is required")
    set_verbosity(args.verbose)

    try:
        text = run_from_args(args)
    except (ValueError, UnsupportedTypeError, OSError) as exc:
        arg_parser.error(str(exc))

    sys.stdout.write(text + "\n")
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
