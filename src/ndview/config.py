"""
Configuration schema and loader for ndview.

Defines Pydantic models representing structured configuration sections
and a TOML-based config loader with validation support.
"""

from pathlib import Path

import tomlkit
from pydantic import BaseModel, Field, PositiveInt

from ndview.config_defaults import DEFAULT_OUTPUT_FORMAT, DEFAULT_SCALING
from ndview.constants import NO_AXIS
from ndview.type_defs import OutputFormat, ScalingPolicy


class RenderConfig(BaseModel):
    """Control axis selection and intensity scaling."""

    x_axis: int | None = Field(None, ge=NO_AXIS)
    y_axis: int | None = Field(None, ge=NO_AXIS)
    c_axis: int | None = Field(None, ge=NO_AXIS)
    scaling: ScalingPolicy = Field(DEFAULT_SCALING)
    channel_min: list[float] | None = None
    channel_max: list[float] | None = None
    position: list[int] | None = None


class MosaicConfig(BaseModel):
    """Grid layout used when several images are given."""

    grid_layout: list[PositiveInt] | None = None


class OutputConfig(BaseModel):
    """Configure how the rendered raster is printed."""

    format: OutputFormat = Field(DEFAULT_OUTPUT_FORMAT)
    title: str | None = None


class NdviewConfig(BaseModel):
    """
    Root configuration object combining all supported sections.

    Mirrors the structure of config.toml, grouping related parameters
    under logical categories.
    """

    render: RenderConfig = Field(
        default_factory=lambda: RenderConfig.model_validate({}),
    )
    mosaic: MosaicConfig = Field(
        default_factory=lambda: MosaicConfig.model_validate({}),
    )
    output: OutputConfig = Field(
        default_factory=lambda: OutputConfig.model_validate({}),
    )


class ConfigLoader:
    """
    Loads and parses a TOML configuration file into a typed config object.

    Falls back to defaults for any missing subsections or fields.
    """

    @staticmethod
    def load(path: str) -> NdviewConfig:
        """
        Load an ndview configuration from a TOML file.

        Returns a validated NdviewConfig instance based on the file
        contents.
        """
        config_path = Path(path)
        if not config_path.is_file():
            msg = f"Config file not found: {path}"
            raise FileNotFoundError(msg)

        with config_path.open("r", encoding="utf-8") as f:
            doc = tomlkit.load(f)

        return NdviewConfig.model_validate(doc.unwrap())


def parse_int_list(text: str | list[int]) -> list[int]:
    """Convert a comma-separated string such as "2,2" into integers."""
    if isinstance(text, list):
        return [int(v) for v in text]
    try:
        return [int(part) for part in text.split(",") if part.strip()]
    except ValueError as exc:
        msg = f"expected comma-separated integers, got {text!r}"
        raise ValueError(msg) from exc


def parse_float_list(text: str | list[float]) -> list[float]:
    """Convert a comma-separated string such as "0,255" into floats."""
    if isinstance(text, list):
        return [float(v) for v in text]
    try:
        return [float(part) for part in text.split(",") if part.strip()]
    except ValueError as exc:
        msg = f"expected comma-separated numbers, got {text!r}"
        raise ValueError(msg) from exc


_CLI_SECTIONS = {
    "render": ("x_axis", "y_axis", "c_axis", "scaling", "channel_min",
               "channel_max", "position"),
    "mosaic": ("grid_layout",),
    "output": ("format", "title"),
}


def build_config_from_cli(
    cli_args: dict[str, object],
    base_config: NdviewConfig | None = None,
) -> NdviewConfig:
    """
    Overlay command-line values onto a base configuration.

    Keys missing from ``cli_args`` or set to None keep the base value.
    """
    data = (base_config or NdviewConfig()).model_dump()
    for section, keys in _CLI_SECTIONS.items():
        for key in keys:
            value = cli_args.get(key)
            if value is not None:
                data[section][key] = value
    return NdviewConfig.model_validate(data)
