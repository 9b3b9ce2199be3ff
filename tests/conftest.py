"""
Test configuration and shared fixtures for ndview.

This module defines reusable pytest fixtures for building sample arrays,
writing them to disk and making the shared logger visible to caplog.

Note:
    This file is automatically loaded by pytest and should not be
    renamed.

"""
from collections.abc import Callable
from pathlib import Path

import numpy as np
import numpy.typing as npt
import pytest

from ndview.logging_utils import logger

RAMP_SIZE = 20
RAMP_OFFSET = 23


@pytest.fixture
def ramp_image() -> npt.NDArray[np.uint8]:
    """
    Create a 20x20 uint8 ramp indexed as [x, y].

    Sample (x, y) holds ``23 + y * 20 + x`` wrapped to a byte.
    """
    data = (np.arange(RAMP_SIZE * RAMP_SIZE) + RAMP_OFFSET) % 256
    return data.astype(np.uint8).reshape(RAMP_SIZE, RAMP_SIZE).T


@pytest.fixture
def rgb_stack() -> npt.NDArray[np.uint8]:
    """Create a 4x3 image with three channels: red, green and blue ramps."""
    stack = np.zeros((4, 3, 3), dtype=np.uint8)
    stack[..., 0] = 255
    stack[1:, :, 1] = 255
    stack[3, :, 2] = 255
    return stack


@pytest.fixture
def write_npy(tmp_path: Path) -> Callable[[str, npt.ArrayLike], Path]:
    """Save arrays as .npy files under tmp_path and return their paths."""

    def _write(name: str, array: npt.ArrayLike) -> Path:
        path = tmp_path / name
        np.save(path, np.asarray(array))
        return path

    return _write


@pytest.fixture(autouse=True)
def enable_logger_propagation(monkeypatch: pytest.MonkeyPatch) -> None:
    """Enable propagation for the ndview logger to allow caplog to work."""
    monkeypatch.setattr(logger, "propagate", True)
