"""
Intensity scaling policies.

Resolves the ``(min, max)`` bound that maps sample values onto the
display range. ``full`` uses the representable range of the sample type,
``data`` uses the observed range, and ``auto`` picks ``full`` for narrow
types (8 bits or fewer) and ``data`` for everything wider. Wide types
rarely span their full range and would render nearly black under
``full``.
"""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np

from ndview.constants import DISPLAY_MAX, NARROW_TYPE_MAX_BITS
from ndview.errors import DimensionMismatchError, InvalidArgumentError
from ndview.imaging.sample_types import (
    NDImage,
    PackedColorSample,
    RealSample,
    SampleType,
    classify_sample,
)
from ndview.logging_utils import logger
from ndview.type_defs import SCALING_CHOICES, ChannelBounds, ScalingPolicy


def is_narrow_type(sample: RealSample) -> bool:
    """Return True for types with at most 256 representable values."""
    return sample.bits <= NARROW_TYPE_MAX_BITS


def data_range(image: NDImage) -> tuple[float, float]:
    """Scan the samples once and return the observed (min, max)."""
    data = image.zero_min()
    if data.size == 0:
        msg = "Cannot compute the data range of an empty image"
        raise InvalidArgumentError(msg)
    values = data.astype(np.float64, copy=False)
    if np.isnan(values).all():
        msg = "Cannot compute the data range of an all-NaN image"
        raise InvalidArgumentError(msg)
    return float(np.nanmin(values)), float(np.nanmax(values))


def resolve_scaling(
    image: NDImage,
    policy: ScalingPolicy,
    sample: SampleType | None = None,
) -> tuple[float, float]:
    """
    Resolve a single (min, max) bound for ``image`` under ``policy``.

    Packed color images always resolve to the full 0-255 byte range.
    """
    if policy not in SCALING_CHOICES:
        msg = (f"Unknown scaling policy {policy!r}; expected one of "
               f"{', '.join(SCALING_CHOICES)}")
        raise InvalidArgumentError(msg)

    sample = sample or classify_sample(image)
    match sample:
        case PackedColorSample():
            return 0.0, float(DISPLAY_MAX)
        case RealSample() if policy == "full" or (
                policy == "auto" and is_narrow_type(sample)):
            bounds = sample.min_value, sample.max_value
        case RealSample():
            bounds = data_range(image)

    logger.debug("Resolved %s scaling for %s: %s", policy, sample.dtype,
                 bounds)
    return bounds


def _as_channel_array(
    values: float | Sequence[float],
    channel_count: int,
    label: str,
) -> tuple[float, ...]:
    """Broadcast a scalar or validate an explicit per-channel array."""
    if np.ndim(values) == 0:
        return (float(values),) * channel_count  # type: ignore[arg-type]
    array = tuple(float(v) for v in values)
    if len(array) < channel_count:
        msg = (f"Channel {label} array has {len(array)} entries but the "
               f"image has {channel_count} channels")
        raise DimensionMismatchError(msg)
    if len(array) != channel_count:
        msg = ("clamping arrays must be of the same length as the number "
               f"of channels ({len(array)} != {channel_count})")
        raise InvalidArgumentError(msg)
    return array


def channel_bounds(  # noqa: PLR0913
    image: NDImage,
    channel_count: int,
    policy: ScalingPolicy = "auto",
    channel_min: float | Sequence[float] | None = None,
    channel_max: float | Sequence[float] | None = None,
    sample: SampleType | None = None,
) -> ChannelBounds:
    """
    Return per-channel (mins, maxs) tuples.

    Explicit bounds bypass the scaling policy entirely and are used
    verbatim; a scalar is applied to every channel. Otherwise the
    policy resolves one bound shared by all channels.
    """
    if (channel_min is None) != (channel_max is None):
        msg = "channel_min and channel_max must be given together"
        raise InvalidArgumentError(msg)

    if channel_min is not None and channel_max is not None:
        mins = _as_channel_array(channel_min, channel_count, "minimum")
        maxs = _as_channel_array(channel_max, channel_count, "maximum")
        return mins, maxs

    low, high = resolve_scaling(image, policy, sample)
    return (low,) * channel_count, (high,) * channel_count
