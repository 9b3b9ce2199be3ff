"""
Constants used internally by ndview.

These are implementation-level values that should not be overridden
via config files or CLI arguments.
"""

# Display range of one 8-bit output channel
DISPLAY_MAX = 255
LUT_LENGTH = DISPLAY_MAX + 1

# Types at or below this many bits are rendered across their full range
NARROW_TYPE_MAX_BITS = 8

# Best-effort channel detection: a third axis this small holds channels
CHANNEL_AXIS_GUESS = 2
MAX_GUESSED_CHANNELS = 3

# Sentinel for "axis not used"
NO_AXIS = -1

# Internal color constants
COLOR_RED = (255, 0, 0)
COLOR_GREEN = (0, 255, 0)
COLOR_BLUE = (0, 0, 255)
COLOR_WHITE = (255, 255, 255)
OPAQUE_ALPHA = 255

# Packed ARGB layout: byte shifts for red, green and blue
ARGB_CHANNEL_SHIFTS = (16, 8, 0)
ARGB_BYTE_MASK = 0xFF
PACKED_COLOR_BITS = 32

# MIME output
DEFAULT_IMAGE_FORMAT = "png"
DATA_URI_PREFIX = "data:image/png;charset=utf-8;base64,"
