"""Sobel edge detection applied to each colour channel."""

from __future__ import annotations

import math

from pixelkit.image import RgbImage, clamp

_SOBEL_X = (
    (-1, 0, 1),
    (-2, 0, 2),
    (-1, 0, 1),
)
_SOBEL_Y = (
    (-1, -2, -1),
    (0, 0, 0),
    (1, 2, 1),
)


def sobel_edges(image: RgbImage) -> RgbImage:
    """Return the per-channel Sobel gradient magnitude of ``image``.

    Neighbours outside the image are taken from the nearest edge pixel;
    magnitudes are truncated to integers and clamped to 0..255.
    """
    width, height = image.width, image.height
    out = bytearray()
    for y in range(height):
        for x in range(width):
            grad_x = [0, 0, 0]
            grad_y = [0, 0, 0]
            for ky in (-1, 0, 1):
                yy = clamp(y + ky, 0, height - 1)
                for kx in (-1, 0, 1):
                    xx = clamp(x + kx, 0, width - 1)
                    weight_x = _SOBEL_X[ky + 1][kx + 1]
                    weight_y = _SOBEL_Y[ky + 1][kx + 1]
                    for channel, value in enumerate(image.pixel(xx, yy)):
                        grad_x[channel] += weight_x * value
                        grad_y[channel] += weight_y * value
            out.extend(
                clamp(math.isqrt(gx * gx + gy * gy)) for gx, gy in zip(grad_x, grad_y)
            )
    return RgbImage(width, height, bytes(out))