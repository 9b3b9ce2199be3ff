"""
Defines shared type aliases for ndview.

Centralizes reusable type hints to improve consistency and readability.
"""
from __future__ import annotations

from typing import Literal

import numpy as np
import numpy.typing as npt

ScalingPolicy = Literal["auto", "full", "data"]
SampleKindName = Literal["real", "argb"]
OutputFormat = Literal["html", "base64"]

SCALING_CHOICES: tuple[ScalingPolicy, ...] = ("auto", "full", "data")
OUTPUT_CHOICES: tuple[OutputFormat, ...] = ("html", "base64")

ChannelBounds = tuple[tuple[float, ...], tuple[float, ...]]
ColorTable = npt.NDArray[np.uint8]
RGB = tuple[int, int, int]
