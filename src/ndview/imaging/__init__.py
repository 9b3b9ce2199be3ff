"""
Imaging primitives split into sample types, scaling, color tables,
rasterization, compositing and grid placement.

The package exposes the most commonly used entry points directly.
"""

from __future__ import annotations

from . import color_tables, compositor, grid, raster, sample_types, scaling
from .color_tables import GRAYS, channel_color, color_table, tables_for
from .compositor import accumulate, new_buffer
from .grid import MosaicPlan, cell_index, mosaic, plan_mosaic
from .raster import rasterize
from .sample_types import (
    NDImage,
    PackedColorSample,
    RealSample,
    as_image,
    classify_sample,
)
from .scaling import channel_bounds, is_narrow_type, resolve_scaling

__all__ = [
    "GRAYS",
    "MosaicPlan",
    "NDImage",
    "PackedColorSample",
    "RealSample",
    "accumulate",
    "as_image",
    "cell_index",
    "channel_bounds",
    "channel_color",
    "classify_sample",
    "color_table",
    "color_tables",
    "compositor",
    "grid",
    "is_narrow_type",
    "mosaic",
    "new_buffer",
    "plan_mosaic",
    "raster",
    "rasterize",
    "resolve_scaling",
    "sample_types",
    "scaling",
    "tables_for",
]
