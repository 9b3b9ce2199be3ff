"""Zero-padded accumulation of placed images into a mosaic buffer."""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np
import numpy.typing as npt

from ndview.errors import DimensionMismatchError
from ndview.imaging.sample_types import NDImage


def new_buffer(
    size: Sequence[int],
    dtype: np.dtype,
) -> npt.NDArray[np.generic]:
    """Allocate a zero-filled output buffer."""
    return np.zeros(tuple(int(s) for s in size), dtype=dtype)


def _promote(data: npt.NDArray[np.generic], ndim: int) -> npt.NDArray:
    """Append size-1 axes so ``data`` has ``ndim`` dimensions."""
    if data.ndim > ndim:
        msg = (f"Image has {data.ndim} dimensions but the buffer only "
               f"has {ndim}")
        raise DimensionMismatchError(msg)
    return data.reshape(data.shape + (1,) * (ndim - data.ndim))


def accumulate(
    buffer: npt.NDArray[np.generic],
    image: NDImage,
    offset: Sequence[int],
) -> None:
    """
    Add ``image`` into ``buffer`` with its origin moved to ``offset``.

    Samples outside the image count as zero and anything falling outside
    the buffer is cropped, so the call is equivalent to adding a
    zero-extended, translated copy of the image cropped to the buffer.
    The buffer is modified in place; overlapping images sum.
    """
    data = _promote(image.zero_min(), buffer.ndim)
    if len(offset) != buffer.ndim:
        msg = (f"Offset has {len(offset)} entries but the buffer has "
               f"{buffer.ndim} dimensions")
        raise DimensionMismatchError(msg)

    target: list[slice] = []
    source: list[slice] = []
    for d, start in enumerate(offset):
        lo = max(int(start), 0)
        hi = min(int(start) + data.shape[d], buffer.shape[d])
        if hi <= lo:
            return
        target.append(slice(lo, hi))
        source.append(slice(lo - int(start), hi - int(start)))

    region = buffer[tuple(target)]
    np.add(region, data[tuple(source)], out=region, casting="unsafe")
