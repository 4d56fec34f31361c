"""Public API for Julia set rendering utilities.

The TensorFlow engine lives in :mod:`julia.renderer` and is imported on demand.
"""

from .arithmetic import Complex, add, magnitude, mul, negate, sub
from .generator import (
    BAND_WIDTH,
    ESCAPE_RADIUS,
    JULIA_CONSTANT,
    MAX_ITERATIONS,
    Viewport,
    band_color,
    escape_count,
    generate,
    map_range,
)
from .image import Color, PixelBuffer, png_filename, save_png

__all__ = [
    "BAND_WIDTH",
    "Color",
    "Complex",
    "ESCAPE_RADIUS",
    "JULIA_CONSTANT",
    "MAX_ITERATIONS",
    "PixelBuffer",
    "Viewport",
    "add",
    "band_color",
    "escape_count",
    "generate",
    "magnitude",
    "map_range",
    "mul",
    "negate",
    "png_filename",
    "save_png",
    "sub",
]
