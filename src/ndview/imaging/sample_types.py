"""
Image wrapper and sample-type classification.

An :class:`NDImage` is a read-only view over a caller-owned numpy array.
Array axis ``d`` is image dimension ``d``; the optional ``origin`` gives
the minimum coordinate of every axis. Sample types are resolved once per
call into a closed variant, :class:`RealSample` or
:class:`PackedColorSample`, which callers dispatch on with ``match``.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
import numpy.typing as npt

from ndview.constants import PACKED_COLOR_BITS
from ndview.errors import InvalidArgumentError, UnsupportedTypeError
from ndview.type_defs import SampleKindName

_BITS_PER_BYTE = 8
_INTEGER_KINDS = frozenset("iu")


@dataclass(frozen=True, eq=False)
class NDImage:
    """N-dimensional numeric image with an optional non-zero origin."""

    array: npt.NDArray[np.generic]
    origin: tuple[int, ...] = ()
    kind: SampleKindName = "real"

    def __post_init__(self) -> None:
        """Coerce the samples to an array and normalize the origin."""
        object.__setattr__(self, "array", np.asarray(self.array))
        ndim = self.array.ndim
        origin = tuple(int(o) for o in self.origin) or (0,) * ndim
        if len(origin) != ndim:
            msg = (f"origin has {len(origin)} entries but image has "
                   f"{ndim} dimensions")
            raise InvalidArgumentError(msg)
        if self.kind not in ("real", "argb"):
            msg = f"Unknown sample kind: {self.kind!r}"
            raise InvalidArgumentError(msg)
        object.__setattr__(self, "origin", origin)

    @property
    def num_dimensions(self) -> int:
        """Number of image dimensions."""
        return self.array.ndim

    @property
    def shape(self) -> tuple[int, ...]:
        """Extent of every dimension."""
        return tuple(int(s) for s in self.array.shape)

    @property
    def dtype(self) -> np.dtype:
        """Numpy dtype of the samples."""
        return self.array.dtype

    def dimension(self, axis: int) -> int:
        """Return the extent along ``axis``."""
        return int(self.array.shape[axis])

    def min(self, axis: int) -> int:
        """Return the minimum coordinate along ``axis``."""
        return self.origin[axis]

    def max(self, axis: int) -> int:
        """Return the maximum coordinate along ``axis`` (inclusive)."""
        return self.origin[axis] + self.dimension(axis) - 1

    def zero_min(self) -> npt.NDArray[np.generic]:
        """Return the samples addressed from coordinate zero on every axis."""
        return self.array

    def sample_at(self, position: tuple[int, ...]) -> float:
        """Read the sample at an absolute coordinate as a float."""
        local = tuple(p - o for p, o in zip(position, self.origin,
                                            strict=True))
        return float(self.array[local])


def as_image(source: NDImage | npt.ArrayLike) -> NDImage:
    """Wrap arrays (or anything array-like) as a zero-origin real image."""
    if isinstance(source, NDImage):
        return source
    return NDImage(np.asarray(source))


@dataclass(frozen=True)
class RealSample:
    """Real-valued samples with a representable range."""

    dtype: np.dtype
    min_value: float
    max_value: float
    bits: int


@dataclass(frozen=True)
class PackedColorSample:
    """Packed 32-bit ARGB samples; alpha is ignored when rendering."""

    dtype: np.dtype


SampleType = RealSample | PackedColorSample


def classify_sample(image: NDImage) -> SampleType:
    """
    Resolve the sample variant of ``image``.

    Raises:
        UnsupportedTypeError: If the dtype is neither real-valued nor a
            32-bit integer holding packed ARGB.

    """
    dtype = image.dtype
    if image.kind == "argb":
        if (dtype.kind in _INTEGER_KINDS
                and dtype.itemsize * _BITS_PER_BYTE == PACKED_COLOR_BITS):
            return PackedColorSample(dtype)
        msg = f"Packed color images need 32-bit integers, got {dtype}"
        raise UnsupportedTypeError(msg)
    return real_sample(dtype)


def real_sample(dtype: np.dtype) -> RealSample:
    """Describe a real-valued dtype, or fail with UnsupportedTypeError."""
    dtype = np.dtype(dtype)
    bits = dtype.itemsize * _BITS_PER_BYTE
    if dtype.kind == "b":
        return RealSample(dtype, 0.0, 1.0, 1)
    # Kinds, not np.integer: datetime and timedelta subclass it.
    if dtype.kind in _INTEGER_KINDS:
        info = np.iinfo(dtype)
        return RealSample(dtype, float(info.min), float(info.max), bits)
    if dtype.kind == "f":
        finfo = np.finfo(dtype)
        return RealSample(dtype, float(-finfo.max), float(finfo.max), bits)
    msg = f"Unsupported image type: {dtype}"
    raise UnsupportedTypeError(msg)
