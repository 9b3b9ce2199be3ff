"""
Encoding of rendered rasters into notebook-friendly payloads.

Rasters become PNG (or any Pillow-supported format) bytes, base64 text
or an HTML ``<img>`` snippet with an inline data URI.
"""

from __future__ import annotations

import base64
import html as html_lib
import io

from PIL import Image

from ndview.constants import DATA_URI_PREFIX, DEFAULT_IMAGE_FORMAT
from ndview.errors import InvalidArgumentError


def encode(raster: Image.Image, fmt: str = DEFAULT_IMAGE_FORMAT) -> bytes:
    """
    Encode ``raster`` into bytes of the given format (e.g. "png", "jpeg").

    Raises:
        InvalidArgumentError: If Pillow has no writer for ``fmt``.

    """
    buffer = io.BytesIO()
    image = raster
    if fmt.lower() in ("jpg", "jpeg") and raster.mode == "RGBA":
        image = raster.convert("RGB")
    try:
        image.save(buffer, format=fmt.upper().replace("JPG", "JPEG"))
    except KeyError as exc:
        msg = f"Unsupported image format: {fmt!r}"
        raise InvalidArgumentError(msg) from exc
    return buffer.getvalue()


def decode(data: bytes) -> Image.Image:
    """Decode image bytes into a fully loaded PIL image."""
    image = Image.open(io.BytesIO(data))
    image.load()
    return image


def base64_png(raster: Image.Image) -> str:
    """Return the PNG encoding of ``raster`` as base64 text."""
    return base64.b64encode(encode(raster)).decode("ascii")


def html(raster: Image.Image, title: str | None = None) -> str:
    """Return an ``<img>`` tag embedding ``raster`` as a PNG data URI."""
    attributes = ""
    if title is not None:
        escaped = html_lib.escape(title, quote=True)
        attributes = f'alt="{escaped}" title="{escaped}" '
    return f'<img src="{DATA_URI_PREFIX}{base64_png(raster)}" {attributes}/>'
