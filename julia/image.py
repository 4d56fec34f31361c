"""Pixel storage and the PNG sink for rendered frames."""

from __future__ import annotations

import struct
from pathlib import Path
from typing import NamedTuple

import numpy as np
import PIL.Image
import PIL.PngImagePlugin

# 1 / 2.2 scaled by 100000, as stored in the gAMA chunk.
SOURCE_GAMMA = 45455

# sRGB white point and primaries as (x, y) pairs.
SOURCE_CHROMATICITIES = (
    (0.31270, 0.32900),
    (0.64000, 0.33000),
    (0.30000, 0.60000),
    (0.15000, 0.06000),
)


class Color(NamedTuple):
    r: int
    g: int
    b: int


class PixelBuffer:
    """Fixed-size RGB grid owned by a single render until it is saved.

    Cells are stored as ``height x width x 3`` unsigned bytes in R-G-B order
    and start out black.
    """

    def __init__(self, width: int, height: int) -> None:
        if width < 0 or height < 0:
            raise ValueError("Image dimensions must be non-negative.")
        self._width = int(width)
        self._height = int(height)
        self._data = np.zeros((self._height, self._width, 3), dtype=np.uint8)

    @classmethod
    def from_array(cls, array: np.ndarray) -> PixelBuffer:
        if array.ndim != 3 or array.shape[2] != 3:
            raise ValueError("Expected an array of shape (height, width, 3).")
        buffer = cls(array.shape[1], array.shape[0])
        buffer._data[...] = array.astype(np.uint8, copy=False)
        return buffer

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def pixels(self) -> np.ndarray:
        """Read-only view of the channel data."""

        view = self._data.view()
        view.flags.writeable = False
        return view

    def __len__(self) -> int:
        return self._width * self._height

    def _check(self, x: int, y: int) -> None:
        if not (0 <= x < self._width and 0 <= y < self._height):
            raise IndexError("Tried setting a color in an invalid pixel.")

    def set_color(self, x: int, y: int, r: int, g: int, b: int) -> None:
        self._check(x, y)
        self._data[y, x] = (r, g, b)

    def get_color(self, x: int, y: int) -> Color:
        self._check(x, y)
        r, g, b = (int(channel) for channel in self._data[y, x])
        return Color(r, g, b)

    def packed(self, x: int, y: int) -> int:
        r, g, b = self.get_color(x, y)
        return r << 16 | g << 8 | b

    def to_packed(self) -> np.ndarray:
        """Row-major ``r << 16 | g << 8 | b`` values, offset ``y * width + x``."""

        data = self._data.astype(np.int32)
        packed = data[..., 0] << 16 | data[..., 1] << 8 | data[..., 2]
        return packed.reshape(-1)

    def to_image(self) -> PIL.Image.Image:
        return PIL.Image.fromarray(self._data)


def png_filename(filename: str | Path) -> Path:
    name = str(filename)
    if not name.endswith(".png"):
        name = f"{name}.png"
    return Path(name)


def _color_chunks() -> PIL.PngImagePlugin.PngInfo:
    info = PIL.PngImagePlugin.PngInfo()
    info.add(b"gAMA", struct.pack(">I", SOURCE_GAMMA))
    scaled = [int(round(v * 100000)) for point in SOURCE_CHROMATICITIES for v in point]
    info.add(b"cHRM", struct.pack(">8I", *scaled))
    return info


def save_png(buffer: PixelBuffer, filename: str | Path) -> Path:
    """Write ``buffer`` as an 8-bit RGB PNG tagged with gamma and chromaticities.

    ``.png`` is appended when missing. Errors opening or writing the file are
    not handled here.
    """

    output_path = png_filename(filename)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    buffer.to_image().save(str(output_path), format="PNG", pnginfo=_color_chunks())
    return output_path
