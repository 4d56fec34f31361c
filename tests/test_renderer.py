"""
test_renderer.py
"""
import numpy as np
import pytest

pytest.importorskip('tensorflow')

from julia.arithmetic import Complex
from julia.generator import MAX_ITERATIONS, Viewport, band_color, generate
from julia.renderer import band_colors, escape_counts, generate_tensor


def test_band_colors_match_scalar_bands():
    counts = np.arange(MAX_ITERATIONS + 1).reshape(1, -1)
    colors = band_colors(counts)
    assert colors.dtype == np.uint8
    assert colors.shape == (1, MAX_ITERATIONS + 1, 3)
    for count in range(MAX_ITERATIONS + 1):
        assert tuple(int(c) for c in colors[0, count]) == band_color(count)


def test_counts_agree_with_scalar_engine():
    viewport = Viewport.default()
    width, height = 24, 16
    scalar = generate(viewport, width, height)
    vectorised = generate_tensor(viewport, width, height, device='/CPU:0')

    assert (vectorised.width, vectorised.height) == (width, height)
    assert np.array_equal(scalar.pixels, vectorised.pixels)


def test_counts_with_trivial_constant():
    counts = escape_counts(
        Viewport(-0.5, 0.5, -0.5, 0.5), 4, 4, max_iterations=20, constant=Complex(0.0, 0.0)
    )
    assert counts.shape == (4, 4)
    assert np.all(counts == 20)


@pytest.mark.parametrize('width, height', [(0, 0), (0, 5), (5, 0)])
def test_zero_dimensions(width, height):
    image = generate_tensor(Viewport.default(), width, height)
    assert len(image) == 0
    assert (image.width, image.height) == (width, height)


def test_default_frame_terminates():
    counts = escape_counts(Viewport.default(), 1 << 10, 1 << 10)
    assert counts.shape == (1 << 10, 1 << 10)
    assert counts.min() >= 0
    assert counts.max() <= MAX_ITERATIONS
