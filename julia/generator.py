"""Escape-time generation of Julia set frames."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

import numpy as np

from .arithmetic import Complex
from .image import Color, PixelBuffer

BAND_WIDTH = 255
MAX_ITERATIONS = 3 * BAND_WIDTH
ESCAPE_RADIUS = 2.0
JULIA_CONSTANT = Complex(-0.4, 0.5868)


@dataclass(frozen=True)
class Viewport:
    """Rectangle of the complex plane sampled by the pixel grid."""

    from_x: float
    to_x: float
    from_y: float
    to_y: float

    @classmethod
    def default(cls) -> Viewport:
        return cls(-2.0, 2.0, -2.0, 2.0)


def map_range(v, from_a, from_b, to_a, to_b):
    """Rescale ``v`` from ``[from_a, from_b]`` onto ``[to_a, to_b]``.

    A zero-length source interval yields inf/NaN rather than an error. Arrays
    are mapped element-wise.
    """

    with np.errstate(divide="ignore", invalid="ignore"):
        scale = (np.float64(to_b) - np.float64(to_a)) / (np.float64(from_b) - np.float64(from_a))
        result = np.float64(to_a) + scale * (np.asarray(v, dtype=np.float64) - np.float64(from_a))
    if np.ndim(result) == 0:
        return float(result)
    return result


def escape_count(z: Complex, c: Complex, max_iterations: int = MAX_ITERATIONS) -> int:
    """Number of ``z = z*z + c`` steps taken before ``|z|`` leaves the escape radius."""

    iterations = 0
    while z.magnitude() <= ESCAPE_RADIUS and iterations < max_iterations:
        z = z.mul(z).add(c)
        iterations += 1
    return iterations


def band_color(count: int) -> Color:
    """Map an escape count onto the red, then green, then blue ramp."""

    if count <= BAND_WIDTH:
        return Color(count, 0, 0)
    if count <= 2 * BAND_WIDTH:
        return Color(255, count - BAND_WIDTH, 0)
    return Color(255, 255, min(count - 2 * BAND_WIDTH, 255))


def generate(
    viewport: Viewport,
    width: int,
    height: int,
    *,
    max_iterations: int = MAX_ITERATIONS,
    constant: Complex = JULIA_CONSTANT,
    progress: Optional[Callable[[int, int], None]] = None,
) -> PixelBuffer:
    """Render a Julia set frame for ``viewport`` at ``width x height``.

    Each pixel seeds the orbit with its own plane coordinate while ``constant``
    stays fixed. ``progress`` is called with ``(columns_done, width)`` after
    every column.
    """

    image = PixelBuffer(width, height)

    for x in range(width):
        a = map_range(x, 0.0, width, viewport.from_x, viewport.to_x)
        for y in range(height):
            b = map_range(y, 0.0, height, viewport.from_y, viewport.to_y)
            iterations = escape_count(Complex(a, b), constant, max_iterations)
            image.set_color(x, y, *band_color(iterations))
        if progress is not None:
            progress(x + 1, width)

    return image
