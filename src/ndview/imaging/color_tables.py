"""Per-channel color lookup tables for composite rendering."""

from __future__ import annotations

import numpy as np

from ndview.constants import (
    COLOR_BLUE,
    COLOR_GREEN,
    COLOR_RED,
    COLOR_WHITE,
    DISPLAY_MAX,
    LUT_LENGTH,
)
from ndview.type_defs import RGB, ColorTable

_RGB_CHANNELS = 3


def color_table(rgb: RGB) -> ColorTable:
    """Build a 256-entry ramp from black to ``rgb``."""
    ramp = np.arange(LUT_LENGTH, dtype=np.float64) / DISPLAY_MAX
    table = np.rint(np.outer(ramp, np.asarray(rgb, dtype=np.float64)))
    return np.clip(table, 0, DISPLAY_MAX).astype(np.uint8)


GRAYS = color_table(COLOR_WHITE)


def channel_color(index: int, count: int) -> RGB:
    """
    Return the hue used for channel ``index`` out of ``count``.

    Three channels map to red, green and blue. Any other count spreads
    the channels linearly from red to blue.
    """
    if count == _RGB_CHANNELS:
        return (COLOR_RED, COLOR_GREEN, COLOR_BLUE)[index]
    t = index / (count - 1) if count > 1 else 0.0
    red = np.asarray(COLOR_RED, dtype=np.float64)
    blue = np.asarray(COLOR_BLUE, dtype=np.float64)
    mixed = np.rint((1.0 - t) * red + t * blue).astype(int)
    return int(mixed[0]), int(mixed[1]), int(mixed[2])


def tables_for(count: int) -> list[ColorTable]:
    """Return one lookup table per channel; grays for a single channel."""
    if count == 1:
        return [GRAYS]
    return [color_table(channel_color(i, count)) for i in range(count)]
