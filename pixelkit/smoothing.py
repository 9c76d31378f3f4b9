"""Smoothing filters: a 3x3 mean filter and a normalised Gaussian blur."""

from __future__ import annotations

import math
from enum import Enum

from pixelkit.image import RgbImage, clamp

DEFAULT_SIGMA = 0.85


class EdgeMode(Enum):
    """How neighbours outside the image are chosen."""

    REFLECT = "reflect"
    CLAMP = "clamp"


def mean_smooth(image: RgbImage) -> RgbImage:
    """Return ``image`` blurred with a 3x3 mean filter.

    Only neighbours inside the image take part; each channel is the
    truncated average of the pixels that do.
    """
    width, height = image.width, image.height
    out = bytearray()
    for y in range(height):
        for x in range(width):
            sums = [0, 0, 0]
            count = 0
            for yy in range(max(y - 1, 0), min(y + 2, height)):
                for xx in range(max(x - 1, 0), min(x + 2, width)):
                    for channel, value in enumerate(image.pixel(xx, yy)):
                        sums[channel] += value
                    count += 1
            out.extend(clamp(total // count) for total in sums)
    return RgbImage(width, height, bytes(out))


def gaussian_weight(x: float, y: float, sigma: float) -> float:
    """Return the 2D Gaussian density at offset ``(x, y)`` for ``sigma``."""
    two_sigma_sq = 2.0 * sigma * sigma
    return math.exp(-(x * x + y * y) / two_sigma_sq) / (math.pi * two_sigma_sq)


def _check_sigma(sigma: float) -> None:
    if not sigma > 0 or math.isinf(sigma):
        raise ValueError(f"sigma must be a positive finite number, got {sigma}")


def gaussian_kernel(sigma: float = DEFAULT_SIGMA) -> list[list[float]]:
    """Return a square Gaussian kernel of radius ``ceil(3 * sigma)``, summing to 1."""
    _check_sigma(sigma)
    radius = math.ceil(3 * sigma)
    offsets = range(-radius, radius + 1)
    kernel = [[gaussian_weight(kx, ky, sigma) for kx in offsets] for ky in offsets]
    total = sum(sum(row) for row in kernel)
    return [[weight / total for weight in row] for row in kernel]


def _reflect(index: int, size: int) -> int:
    if size == 1:
        return 0
    period = 2 * (size - 1)
    index %= period
    return period - index if index >= size else index


def _edge_index(index: int, size: int, mode: EdgeMode) -> int:
    if mode is EdgeMode.CLAMP:
        return clamp(index, 0, size - 1)
    return _reflect(index, size)


def gaussian_smooth(
    image: RgbImage,
    sigma: float = DEFAULT_SIGMA,
    edge_mode: EdgeMode = EdgeMode.REFLECT,
) -> RgbImage:
    """Return ``image`` blurred with a normalised Gaussian kernel.

    ``edge_mode`` decides whether out-of-image neighbours are mirrored
    about the border pixel or taken from the nearest border pixel.
    Channel sums are rounded half up and clamped to 0..255.
    """
    kernel = gaussian_kernel(sigma)
    mode = EdgeMode(edge_mode)
    radius = len(kernel) // 2
    width, height = image.width, image.height
    out = bytearray()
    for y in range(height):
        for x in range(width):
            sums = [0.0, 0.0, 0.0]
            for ky, kernel_row in enumerate(kernel, -radius):
                yy = _edge_index(y + ky, height, mode)
                for kx, weight in enumerate(kernel_row, -radius):
                    xx = _edge_index(x + kx, width, mode)
                    for channel, value in enumerate(image.pixel(xx, yy)):
                        sums[channel] += value * weight
            out.extend(clamp(math.floor(total + 0.5)) for total in sums)
    return RgbImage(width, height, bytes(out))