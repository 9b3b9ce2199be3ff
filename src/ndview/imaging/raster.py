"""
Composite projection of N-dimensional samples onto an RGBA raster.

The rasterizer picks an X, a Y and an optional channel axis, fixes every
other axis at a caller-supplied position, rescales each channel into
0-255, looks it up in that channel's color table and sums the channel
colors per pixel (additive overlay, clamped at 255).
"""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np
import numpy.typing as npt
from PIL import Image

from ndview.constants import (
    ARGB_BYTE_MASK,
    ARGB_CHANNEL_SHIFTS,
    DISPLAY_MAX,
    NO_AXIS,
    OPAQUE_ALPHA,
)
from ndview.errors import DimensionMismatchError, InvalidArgumentError
from ndview.imaging.color_tables import tables_for
from ndview.imaging.sample_types import (
    NDImage,
    PackedColorSample,
    RealSample,
    as_image,
    classify_sample,
)
from ndview.logging_utils import logger

_FloatArray = npt.NDArray[np.float64]


def unpack_argb(data: npt.NDArray[np.integer]) -> npt.NDArray[np.uint8]:
    """Split packed ARGB samples into a trailing R, G, B channel axis."""
    packed = data.astype(np.uint32)
    channels = [(packed >> shift) & ARGB_BYTE_MASK
                for shift in ARGB_CHANNEL_SHIFTS]
    return np.stack(channels, axis=-1).astype(np.uint8)


def validate_axes(ndim: int, x_axis: int, y_axis: int, c_axis: int) -> None:
    """Ensure each axis is unused (-1) or a distinct valid dimension."""
    for name, axis in (("x", x_axis), ("y", y_axis), ("channel", c_axis)):
        if axis < NO_AXIS or axis >= ndim:
            msg = (f"{name} axis {axis} is out of range for an image with "
                   f"{ndim} dimensions")
            raise InvalidArgumentError(msg)
    active = [a for a in (x_axis, y_axis, c_axis) if a != NO_AXIS]
    if len(active) != len(set(active)):
        msg = f"Axes must be distinct, got x={x_axis} y={y_axis} c={c_axis}"
        raise InvalidArgumentError(msg)


def project(
    data: npt.NDArray[np.generic],
    x_axis: int,
    y_axis: int,
    c_axis: int,
    position: Sequence[int] | None = None,
) -> _FloatArray:
    """
    Slice ``data`` down to a (height, width, channels) float plane.

    Inactive axes are fixed at ``position`` (missing entries default to
    the first coordinate). Unused X, Y or channel axes become size 1.
    """
    coords = tuple(int(p) for p in position or ())
    if len(coords) > data.ndim:
        msg = (f"Position has {len(coords)} entries but the image has "
               f"{data.ndim} dimensions")
        raise DimensionMismatchError(msg)
    coords += (0,) * (data.ndim - len(coords))

    roles = (y_axis, x_axis, c_axis)
    index: list[int | slice] = []
    for d in range(data.ndim):
        if d in roles:
            index.append(slice(None))
            continue
        if not 0 <= coords[d] < data.shape[d]:
            msg = (f"Position {coords[d]} is outside dimension {d} "
                   f"of extent {data.shape[d]}")
            raise InvalidArgumentError(msg)
        index.append(coords[d])

    plane = data[tuple(index)]
    present = sorted(a for a in roles if a != NO_AXIS)
    plane = plane.transpose([present.index(a) for a in roles if a != NO_AXIS])
    for i, axis in enumerate(roles):
        if axis == NO_AXIS:
            plane = np.expand_dims(plane, i)
    return plane.astype(np.float64)


def lut_index(values: _FloatArray, low: float, high: float) -> npt.NDArray:
    """Map values linearly from [low, high] onto clamped 0-255 indices."""
    with np.errstate(over="ignore", invalid="ignore", divide="ignore"):
        if high == low:
            index = np.where(values > low, DISPLAY_MAX, 0)
        else:
            scaled = np.rint(DISPLAY_MAX * (values - low) / (high - low))
            index = np.clip(np.nan_to_num(scaled, nan=0.0), 0, DISPLAY_MAX)
    return index.astype(np.intp)


def composite(
    plane: _FloatArray,
    mins: Sequence[float],
    maxs: Sequence[float],
) -> npt.NDArray[np.uint8]:
    """Sum the per-channel lookups of a (h, w, c) plane into (h, w, 3)."""
    channels = plane.shape[2]
    if len(mins) != channels or len(maxs) != channels:
        msg = ("clamping arrays must be of the same length as the number "
               "of channels!")
        if min(len(mins), len(maxs)) < channels:
            raise DimensionMismatchError(msg)
        raise InvalidArgumentError(msg)

    rgb = np.zeros((*plane.shape[:2], 3), dtype=np.int32)
    for c, table in enumerate(tables_for(channels)):
        rgb += table[lut_index(plane[..., c], mins[c], maxs[c])]
    return np.clip(rgb, 0, DISPLAY_MAX).astype(np.uint8)


def rasterize(  # noqa: PLR0913
    image: NDImage | npt.ArrayLike,
    x_axis: int,
    y_axis: int,
    c_axis: int,
    mins: Sequence[float],
    maxs: Sequence[float],
    position: Sequence[int] | None = None,
) -> Image.Image:
    """
    Render ``image`` into an opaque RGBA raster.

    Args:
        image: Samples to render.
        x_axis: Image dimension used for raster columns, or -1.
        y_axis: Image dimension used for raster rows, or -1.
        c_axis: Image dimension composited as channels, or -1.
        mins: Per-channel lower display bound.
        maxs: Per-channel upper display bound.
        position: Fixed coordinate for every inactive dimension.

    Returns:
        A PIL image of size (width, height) in RGBA mode.

    Raises:
        InvalidArgumentError: On bad axes, positions or bound arrays.
        DimensionMismatchError: When bound arrays or the position are
            too short or too long for the image.
        UnsupportedTypeError: When the sample type cannot be rendered.

    """
    image = as_image(image)
    if position is not None and len(position) > image.num_dimensions:
        msg = (f"Position has {len(position)} entries but the image has "
               f"{image.num_dimensions} dimensions")
        raise DimensionMismatchError(msg)

    match classify_sample(image):
        case PackedColorSample():
            if c_axis != NO_AXIS:
                msg = "Packed color images carry their own channel axis"
                raise InvalidArgumentError(msg)
            data = unpack_argb(image.zero_min())
            c_axis = data.ndim - 1
            channels = len(ARGB_CHANNEL_SHIFTS)
            mins, maxs = (0.0,) * channels, (float(DISPLAY_MAX),) * channels
        case RealSample():
            data = image.zero_min()

    validate_axes(data.ndim, x_axis, y_axis, c_axis)
    plane = project(data, x_axis, y_axis, c_axis, position)
    if plane.size == 0:
        msg = f"Cannot rasterize an empty image of shape {image.shape}"
        raise InvalidArgumentError(msg)

    rgb = composite(plane, mins, maxs)
    alpha = np.full((*rgb.shape[:2], 1), OPAQUE_ALPHA, dtype=np.uint8)
    rgba = np.ascontiguousarray(np.concatenate([rgb, alpha], axis=2))
    logger.debug("Rasterized %s image to %dx%d with %d channel(s)",
                 image.dtype, rgba.shape[1], rgba.shape[0], plane.shape[2])
    return Image.fromarray(rgba)
