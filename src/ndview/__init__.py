"""Public package exports for ndview."""

from __future__ import annotations

from .display import display, guess_channel_axis, render, render_with_config
from .errors import (
    DimensionMismatchError,
    InvalidArgumentError,
    UnsupportedTypeError,
)
from .imaging import NDImage, mosaic, plan_mosaic, rasterize, resolve_scaling
from .mime import base64_png, decode, encode, html

__all__ = [
    "DimensionMismatchError",
    "InvalidArgumentError",
    "NDImage",
    "UnsupportedTypeError",
    "base64_png",
    "decode",
    "display",
    "encode",
    "guess_channel_axis",
    "html",
    "mosaic",
    "plan_mosaic",
    "rasterize",
    "render",
    "render_with_config",
    "resolve_scaling",
]
