"""
Tests for the CLI parser and execution logic.

These tests verify argument parsing, config fallback behavior and the
main entry point, using small .npy files written to a temp directory.

Modules tested:
- build_arg_parser()
- run_from_args()
- main()
"""

from __future__ import annotations

import base64
import io
import logging
from typing import TYPE_CHECKING

import numpy as np
import pytest
import tomlkit
from PIL import Image

import ndview.cli as ndv_cli
from ndview.logging_utils import logger

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path

    import numpy.typing as npt
    from pytest_mock import MockerFixture

    WriteNpy = Callable[[str, npt.ArrayLike], Path]


def _decode_output(text: str) -> Image.Image:
    """Decode the base64 PNG printed by ``--format base64``."""
    return Image.open(io.BytesIO(base64.b64decode(text.strip())))


class TestArgParser:
    """Parsing of list-valued and grouped options."""

    def test_defaults_are_none(self) -> None:
        """Unset options stay None so config values can fill them."""
        args = ndv_cli.build_arg_parser().parse_args(["a.npy"])
        assert args.grid_layout is None
        assert args.scaling is None
        assert args.c_axis is None
        assert args.format is None
        assert args.argb is False

    def test_list_options(self) -> None:
        """Comma-separated options are parsed into lists."""
        args = ndv_cli.build_arg_parser().parse_args([
            "a.npy", "--grid", "2,2", "--min", "0,10", "--max", "1,20.5",
            "--position", "0,0,3", "--c-axis", "-1",
        ])
        assert args.grid_layout == [2, 2]
        assert args.channel_min == [0.0, 10.0]
        assert args.channel_max == [1.0, 20.5]
        assert args.position == [0, 0, 3]
        assert args.c_axis == -1

    def test_bad_list_value(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Malformed lists are reported as argument errors."""
        with pytest.raises(SystemExit) as excinfo:
            ndv_cli.build_arg_parser().parse_args(["a.npy", "--grid", "2,x"])
        assert excinfo.value.code == 2  # noqa: PLR2004
        assert "comma-separated integers" in capsys.readouterr().err

    def test_version(self, capsys: pytest.CaptureFixture[str]) -> None:
        """--version prints the program name and exits."""
        with pytest.raises(SystemExit):
            ndv_cli.build_arg_parser().parse_args(["--version"])
        assert capsys.readouterr().out.startswith("ndview ")


class TestMain:
    """End-to-end runs of the entry point."""

    def test_html_output(
        self,
        write_npy: WriteNpy,
        ramp_image: npt.NDArray[np.uint8],
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        """The default output is a single img tag."""
        path = write_npy("ramp.npy", ramp_image)
        assert ndv_cli.main([str(path), "--title", "ramp"]) == 0
        out = capsys.readouterr().out
        assert out.startswith('<img src="data:image/png;charset=utf-8;base64,')
        assert 'title="ramp"' in out

    def test_base64_output(
        self,
        write_npy: WriteNpy,
        ramp_image: npt.NDArray[np.uint8],
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        """Base64 output decodes to the rendered ramp."""
        path = write_npy("ramp.npy", ramp_image)
        assert ndv_cli.main([str(path), "--format", "base64"]) == 0
        raster = _decode_output(capsys.readouterr().out)
        assert raster.size == ramp_image.shape
        pixels = np.asarray(raster.convert("RGB"))
        np.testing.assert_array_equal(pixels[..., 0], ramp_image.T)

    def test_grid_tiles_files(
        self,
        write_npy: WriteNpy,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        """Several files are tiled side by side by default."""
        a = write_npy("a.npy", np.zeros((3, 2), dtype=np.uint8))
        b = write_npy("b.npy", np.full((5, 4), 255, dtype=np.uint8))
        assert ndv_cli.main([str(a), str(b), "--format", "base64"]) == 0
        raster = _decode_output(capsys.readouterr().out)
        assert raster.size == (8, 4)

    def test_grid_option(
        self,
        write_npy: WriteNpy,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        """--grid stacks files along the second axis."""
        paths = [str(write_npy(f"{i}.npy", np.zeros((2, 2), dtype=np.uint8)))
                 for i in range(2)]
        assert ndv_cli.main([*paths, "--grid", "1,2", "--format",
                             "base64"]) == 0
        raster = _decode_output(capsys.readouterr().out)
        assert raster.size == (2, 4)

    def test_argb(
        self,
        write_npy: WriteNpy,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        """--argb unpacks 32-bit samples into colors."""
        path = write_npy("c.npy", np.array([[0x00FF8040]], dtype=np.int32))
        assert ndv_cli.main([str(path), "--argb", "--format", "base64"]) == 0
        raster = _decode_output(capsys.readouterr().out)
        assert raster.convert("RGBA").getpixel((0, 0)) == (255, 128, 64, 255)

    def test_config_file(
        self,
        write_npy: WriteNpy,
        tmp_path: Path,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        """Values from --config apply unless overridden on the CLI."""
        path = write_npy("w.npy", np.array([[0], [100]], dtype=np.uint16))
        config_path = tmp_path / "config.toml"
        doc = tomlkit.document()
        doc.update({
            "render": {"channel_min": [0.0], "channel_max": [200.0]},
            "output": {"format": "base64"},
        })
        config_path.write_text(tomlkit.dumps(doc), encoding="utf-8")

        assert ndv_cli.main([str(path), "--config", str(config_path)]) == 0
        pixels = np.asarray(_decode_output(capsys.readouterr().out))
        assert pixels[0, :, 0].tolist() == [0, 128]

        assert ndv_cli.main([str(path), "--config", str(config_path),
                             "--max", "100"]) == 0
        pixels = np.asarray(_decode_output(capsys.readouterr().out))
        assert pixels[0, :, 0].tolist() == [0, 255]

    def test_forwards_render_options(
        self,
        write_npy: WriteNpy,
        mocker: MockerFixture,
    ) -> None:
        """Render options reach the display dispatcher unchanged."""
        path = write_npy("r.npy", np.zeros((2, 2, 5), dtype=np.uint8))
        spy = mocker.spy(ndv_cli, "display")
        assert ndv_cli.main([str(path), "--c-axis", "-1", "--position",
                             "0,0,4", "--scaling", "data"]) == 0
        kwargs = spy.call_args.kwargs
        assert kwargs["c_axis"] == -1
        assert kwargs["position"] == [0, 0, 4]
        assert kwargs["scaling"] == "data"
        assert kwargs["grid_layout"] is None

    def test_verbose_enables_debug(
        self,
        write_npy: WriteNpy,
        ramp_image: npt.NDArray[np.uint8],
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """--verbose lowers the logger level to DEBUG."""
        monkeypatch.setattr(logger, "level", logger.level)
        path = write_npy("ramp.npy", ramp_image)
        assert ndv_cli.main([str(path), "--verbose"]) == 0
        assert logger.level == logging.DEBUG

    def test_archive_rejected(
        self,
        tmp_path: Path,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        """.npz archives are a usage error, not a traceback."""
        path = tmp_path / "stack.npz"
        np.savez(path, a=np.zeros((2, 2), dtype=np.uint8))
        with pytest.raises(SystemExit) as excinfo:
            ndv_cli.main([str(path)])
        assert excinfo.value.code == 2  # noqa: PLR2004
        assert "Expected a single .npy array" in capsys.readouterr().err

    def test_requires_images(self) -> None:
        """Running without image files is a usage error."""
        with pytest.raises(SystemExit) as excinfo:
            ndv_cli.main([])
        assert excinfo.value.code == 2  # noqa: PLR2004

    @pytest.mark.parametrize(
        ("make_args", "message"),
        [
            (lambda p: [str(p.parent / "missing.npy")], "Image file not found"),
            (lambda p: [str(p), "--x-axis", "7"], "x axis 7 is out of range"),
            (lambda p: [str(p), "--config", "none.toml"],
             "Config file not found"),
            (lambda p: [str(p), "--min", "0,0", "--max", "1,1"],
             "clamping arrays"),
        ],
    )
    def test_errors_exit_with_usage(
        self,
        write_npy: WriteNpy,
        ramp_image: npt.NDArray[np.uint8],
        capsys: pytest.CaptureFixture[str],
        make_args: Callable[[Path], list[str]],
        message: str,
    ) -> None:
        """Rendering errors are reported through the parser."""
        path = write_npy("ramp.npy", ramp_image)
        with pytest.raises(SystemExit) as excinfo:
            ndv_cli.main(make_args(path))
        assert excinfo.value.code == 2  # noqa: PLR2004
        assert message in capsys.readouterr().err
