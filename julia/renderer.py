"""Vectorised TensorFlow engine for Julia set frames."""

from __future__ import annotations

from typing import Optional

import numpy as np
import tensorflow as tf

from .arithmetic import Complex
from .generator import BAND_WIDTH, ESCAPE_RADIUS, JULIA_CONSTANT, MAX_ITERATIONS, Viewport, map_range
from .image import PixelBuffer


def _magnitude(re: tf.Tensor, im: tf.Tensor) -> tf.Tensor:
    return tf.sqrt(re * re + im * im)


@tf.function
def _julia_step(
    re: tf.Tensor,
    im: tf.Tensor,
    ns: tf.Tensor,
    active: tf.Tensor,
    c_re: tf.Tensor,
    c_im: tf.Tensor,
) -> tuple[tf.Tensor, tf.Tensor, tf.Tensor, tf.Tensor]:
    """Advance every orbit that is still inside the escape radius by one step."""

    new_re = (re * re - im * im) + c_re
    new_im = (re * im + im * re) + c_im
    re = tf.where(active, new_re, re)
    im = tf.where(active, new_im, im)
    ns = ns + tf.cast(active, tf.int32)
    radius = tf.constant(ESCAPE_RADIUS, dtype=re.dtype)
    active = tf.logical_and(active, _magnitude(re, im) <= radius)
    return re, im, ns, active


@tf.function
def _julia_run(
    re: tf.Tensor,
    im: tf.Tensor,
    c_re: tf.Tensor,
    c_im: tf.Tensor,
    max_iterations: tf.Tensor,
) -> tf.Tensor:
    """Iterate until every orbit escaped or ``max_iterations`` steps were taken."""

    max_iterations = tf.cast(max_iterations, tf.int32)
    i = tf.constant(0, dtype=tf.int32)
    ns = tf.zeros_like(re, tf.int32)
    radius = tf.constant(ESCAPE_RADIUS, dtype=re.dtype)
    active = _magnitude(re, im) <= radius

    def cond(i, re, im, ns, active):
        return tf.logical_and(tf.less(i, max_iterations), tf.reduce_any(active))

    def body(i, re, im, ns, active):
        re, im, ns, active = _julia_step(re, im, ns, active, c_re, c_im)
        return i + 1, re, im, ns, active

    _, _, _, ns, _ = tf.while_loop(cond, body, (i, re, im, ns, active))
    return ns


def escape_counts(
    viewport: Viewport,
    width: int,
    height: int,
    *,
    max_iterations: int = MAX_ITERATIONS,
    constant: Complex = JULIA_CONSTANT,
    device: Optional[str] = None,
) -> np.ndarray:
    """Escape counts for the whole grid, shaped ``(height, width)``."""

    if width <= 0 or height <= 0:
        return np.zeros((max(height, 0), max(width, 0)), dtype=np.int32)

    x = map_range(np.arange(width, dtype=np.float64), 0.0, width, viewport.from_x, viewport.to_x)
    y = map_range(np.arange(height, dtype=np.float64), 0.0, height, viewport.from_y, viewport.to_y)

    with tf.device(device if device is not None else "/CPU:0"):
        x_tf = tf.convert_to_tensor(x, dtype=tf.float64)
        y_tf = tf.convert_to_tensor(y, dtype=tf.float64)
        re, im = tf.meshgrid(x_tf, y_tf)
        c_re = tf.constant(constant.re, dtype=tf.float64)
        c_im = tf.constant(constant.im, dtype=tf.float64)
        ns = _julia_run(re, im, c_re, c_im, tf.constant(max_iterations, dtype=tf.int32))

    return ns.numpy()


def band_colors(counts: np.ndarray) -> np.ndarray:
    """Tri-band colouring of a whole count grid, as ``uint8`` RGB."""

    counts = np.asarray(counts, dtype=np.int64)
    channels = [np.clip(counts - band * BAND_WIDTH, 0, 255) for band in range(3)]
    return np.stack(channels, axis=-1).astype(np.uint8)


def generate_tensor(
    viewport: Viewport,
    width: int,
    height: int,
    *,
    max_iterations: int = MAX_ITERATIONS,
    constant: Complex = JULIA_CONSTANT,
    device: Optional[str] = None,
) -> PixelBuffer:
    counts = escape_counts(
        viewport,
        width,
        height,
        max_iterations=max_iterations,
        constant=constant,
        device=device,
    )
    return PixelBuffer.from_array(band_colors(counts))
