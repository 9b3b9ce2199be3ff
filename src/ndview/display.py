"""
Display dispatcher: choose axes and scaling, then rasterize.

This is the single entry point used by the CLI and by notebook callers.
Without explicit axes, dimension 0 is X, dimension 1 is Y and a small
third dimension is treated as channels.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from ndview.config_defaults import (
    DEFAULT_SCALING,
    DEFAULT_X_AXIS,
    DEFAULT_Y_AXIS,
)
from ndview.constants import CHANNEL_AXIS_GUESS, MAX_GUESSED_CHANNELS, NO_AXIS
from ndview.imaging.grid import mosaic
from ndview.imaging.raster import rasterize, validate_axes
from ndview.imaging.sample_types import (
    NDImage,
    PackedColorSample,
    RealSample,
    as_image,
    classify_sample,
)
from ndview.imaging.scaling import channel_bounds
from ndview.logging_utils import logger

if TYPE_CHECKING:  # pragma: no cover
    import numpy.typing as npt
    from PIL import Image

    from ndview.config import RenderConfig
    from ndview.type_defs import ScalingPolicy


def guess_channel_axis(dims: Sequence[int]) -> int:
    """
    Guess which axis holds channels from raw dimension sizes.

    A third dimension with at most three samples is assumed to be
    channels; anything larger is probably Z or time. This is a best
    guess with no metadata behind it; pass ``c_axis`` explicitly when
    the layout is known.
    """
    if (len(dims) > CHANNEL_AXIS_GUESS
            and dims[CHANNEL_AXIS_GUESS] <= MAX_GUESSED_CHANNELS):
        return CHANNEL_AXIS_GUESS
    return NO_AXIS


def _default_axis(axis: int | None, preferred: int, ndim: int) -> int:
    if axis is not None:
        return axis
    return preferred if preferred < ndim else NO_AXIS


def render(  # noqa: PLR0913
    image: NDImage | npt.ArrayLike,
    *,
    x_axis: int | None = None,
    y_axis: int | None = None,
    c_axis: int | None = None,
    scaling: ScalingPolicy = DEFAULT_SCALING,
    channel_min: float | Sequence[float] | None = None,
    channel_max: float | Sequence[float] | None = None,
    position: Sequence[int] | None = None,
) -> Image.Image:
    """
    Render an image to an RGBA raster.

    Args:
        image: Array or NDImage to render.
        x_axis: Dimension for raster columns; defaults to 0.
        y_axis: Dimension for raster rows; defaults to 1.
        c_axis: Dimension composited as channels, -1 for none, or None
            to apply :func:`guess_channel_axis`.
        scaling: Policy used when explicit bounds are not given.
        channel_min: Lower display bound, scalar or one per channel.
        channel_max: Upper display bound, scalar or one per channel.
        position: Fixed coordinate for the remaining dimensions.

    Returns:
        The rendered RGBA PIL image.

    """
    image = as_image(image)
    ndim = image.num_dimensions
    x = _default_axis(x_axis, DEFAULT_X_AXIS, ndim)
    y = _default_axis(y_axis, DEFAULT_Y_AXIS, ndim)

    sample = classify_sample(image)
    match sample:
        case PackedColorSample():
            # Bytes are already display values; bounds are fixed at 0-255.
            c = NO_AXIS if c_axis is None else c_axis
            return rasterize(image, x, y, c, (), (), position)
        case RealSample():
            c = guess_channel_axis(image.shape) if c_axis is None else c_axis
            validate_axes(ndim, x, y, c)
            channels = image.dimension(c) if c != NO_AXIS else 1

    mins, maxs = channel_bounds(
        image, channels, scaling, channel_min, channel_max, sample,
    )
    logger.debug("Rendering axes x=%d y=%d c=%d bounds=%s..%s",
                 x, y, c, mins, maxs)
    return rasterize(image, x, y, c, mins, maxs, position)


def render_with_config(
    image: NDImage | npt.ArrayLike,
    config: RenderConfig,
) -> Image.Image:
    """Render ``image`` using the options of a :class:`RenderConfig`."""
    return render(
        image,
        x_axis=config.x_axis,
        y_axis=config.y_axis,
        c_axis=config.c_axis,
        scaling=config.scaling,
        channel_min=config.channel_min,
        channel_max=config.channel_max,
        position=config.position,
    )


def display(
    source: NDImage | npt.ArrayLike | list | tuple,
    *,
    grid_layout: Sequence[int] | None = None,
    **options: object,
) -> Image.Image:
    """
    Render a single image or a list of images.

    Lists and tuples are treated as separate images and tiled with
    ``grid_layout`` first; without a layout they form a single row.
    Remaining keyword options go to :func:`render`.
    """
    if isinstance(source, list | tuple):
        layout = grid_layout or (max(len(source), 1),)
        source = mosaic(layout, source)
    elif grid_layout is not None:
        logger.warning("grid_layout ignored for a single image")
    return render(source, **options)  # type: ignore[arg-type]
