"""
N-dimensional mosaic placement.

Images are assigned to grid cells in input order, filling axis 0
fastest, so a layout of ``(2, 3, 2)`` fills 000, 100, 010, 110, 020,
120, 001, 101, 011, 111, 021, 121. Every grid line along an axis is as
wide as the largest image placed on it; smaller images are zero-padded.
Images beyond the last cell are dropped.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np
import numpy.typing as npt

from ndview.errors import InvalidArgumentError, UnsupportedTypeError
from ndview.imaging.compositor import accumulate, new_buffer
from ndview.imaging.sample_types import (
    NDImage,
    PackedColorSample,
    as_image,
    classify_sample,
)
from ndview.logging_utils import logger


def cell_index(index: int, grid: Sequence[int]) -> tuple[int, ...]:
    """
    Decompose a linear index into a per-axis cell, axis 0 fastest.

    The last axis is not wrapped, so indices past the final cell give
    a last component outside the grid.
    """
    cell: list[int] = []
    remainder = index
    for d, count in enumerate(grid):
        if d == len(grid) - 1:
            cell.append(remainder)
        else:
            cell.append(remainder % count)
            remainder //= count
    return tuple(cell)


@dataclass(frozen=True)
class MosaicPlan:
    """Placement of every input image and the resulting mosaic size."""

    grid: tuple[int, ...]
    cells: tuple[tuple[int, ...], ...]
    excess: tuple[bool, ...]
    extents: tuple[tuple[int, ...], ...]
    offsets: tuple[tuple[int, ...], ...]

    @property
    def num_dimensions(self) -> int:
        """Dimensionality of the mosaic."""
        return len(self.grid)

    @property
    def size(self) -> tuple[int, ...]:
        """Mosaic extent along every axis."""
        return tuple(o[-1] for o in self.offsets)

    def offset_of(self, image_index: int) -> tuple[int, ...]:
        """Return the mosaic coordinate of an image's origin."""
        cell = self.cells[image_index]
        return tuple(self.offsets[d][cell[d]] for d in range(len(cell)))


def effective_grid(
    grid_layout: Sequence[int],
    num_dims: int,
) -> tuple[int, ...]:
    """Pad ``grid_layout`` with 1s up to ``num_dims`` axes."""
    for count in grid_layout:
        if int(count) <= 0:
            msg = f"Grid dimensions must be positive, got {list(grid_layout)}"
            raise InvalidArgumentError(msg)
    return tuple(
        int(grid_layout[d]) if d < len(grid_layout) else 1
        for d in range(num_dims)
    )


def plan_mosaic(
    grid_layout: Sequence[int],
    shapes: Sequence[Sequence[int]],
) -> MosaicPlan:
    """Compute cells, extents and offsets for images of the given shapes."""
    if not shapes:
        msg = "At least one image is required to build a mosaic"
        raise InvalidArgumentError(msg)

    num_dims = max(len(grid_layout), *(len(s) for s in shapes))
    grid = effective_grid(grid_layout, num_dims)

    cells = tuple(cell_index(i, grid) for i in range(len(shapes)))
    excess = tuple(
        any(not 0 <= c < g for c, g in zip(cell, grid, strict=True))
        for cell in cells
    )

    extents = [[0] * g for g in grid]
    for shape, cell, dropped in zip(shapes, cells, excess, strict=True):
        if dropped:
            continue
        for d in range(num_dims):
            size = int(shape[d]) if d < len(shape) else 1
            extents[d][cell[d]] = max(extents[d][cell[d]], size)

    offsets = []
    for line_extents in extents:
        axis_offsets = [0]
        for extent in line_extents:
            axis_offsets.append(axis_offsets[-1] + extent)
        offsets.append(tuple(axis_offsets))

    return MosaicPlan(
        grid=grid,
        cells=cells,
        excess=excess,
        extents=tuple(tuple(e) for e in extents),
        offsets=tuple(offsets),
    )


def mosaic(
    grid_layout: Sequence[int],
    images: Sequence[NDImage | npt.ArrayLike],
) -> NDImage:
    """
    Arrange ``images`` into an N-dimensional mosaic.

    For example, a layout of ``(2, 2)`` with images A, B, C, D places A
    and B side by side along axis 0 and C, D below them along axis 1.
    Images need not share a size or dimensionality; each grid line is
    padded to its largest image. Empty cells stay zero and images that
    do not fit the grid are discarded. The output uses the sample type
    of the first image.

    Raises:
        InvalidArgumentError: If ``images`` is empty or the layout holds
            a non-positive entry.
        UnsupportedTypeError: If an image holds packed color samples or
            a non-numeric type.

    """
    wrapped = [as_image(im) for im in images]
    plan = plan_mosaic(grid_layout, [im.shape for im in wrapped])

    for im in wrapped:
        if isinstance(classify_sample(im), PackedColorSample):
            msg = "Packed color images cannot be combined into a mosaic"
            raise UnsupportedTypeError(msg)

    dropped = sum(plan.excess)
    if dropped:
        logger.warning(
            "Grid %s holds fewer cells than images; dropping %d image(s)",
            plan.grid, dropped,
        )
    logger.debug("Mosaic plan: grid=%s size=%s", plan.grid, plan.size)

    result = new_buffer(plan.size, np.dtype(wrapped[0].dtype))
    for i, im in enumerate(wrapped):
        if plan.excess[i]:
            continue
        accumulate(result, im, plan.offset_of(i))
    return NDImage(result)
