"""
Error kinds raised by the rendering and mosaic pipeline.

All errors derive from builtin exceptions so callers that only catch
``ValueError`` or ``TypeError`` keep working.
"""

from __future__ import annotations


class InvalidArgumentError(ValueError):
    """A caller-supplied argument is empty, out of range or inconsistent."""


class DimensionMismatchError(InvalidArgumentError):
    """A per-channel or per-dimension array is shorter than required."""


class UnsupportedTypeError(TypeError):
    """Sample type is neither real-valued nor packed ARGB color."""


__all__ = [
    "DimensionMismatchError",
    "InvalidArgumentError",
    "UnsupportedTypeError",
]
