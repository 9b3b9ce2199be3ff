"""Shared default values for user-facing configuration settings."""
from ndview.type_defs import OutputFormat, ScalingPolicy

# Rendering
DEFAULT_X_AXIS = 0
DEFAULT_Y_AXIS = 1
DEFAULT_SCALING: ScalingPolicy = "auto"

# Output
DEFAULT_OUTPUT_FORMAT: OutputFormat = "html"
