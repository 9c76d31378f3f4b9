"""Sharpening filter with a 3x3 Laplacian-style kernel."""

from __future__ import annotations

from pixelkit.image import RgbImage, clamp

_KERNEL = (
    (0, -1, 0),
    (-1, 5, -1),
    (0, -1, 0),
)


def sharpen(image: RgbImage) -> RgbImage:
    """Return a sharpened copy of ``image``.

    Neighbours outside the image are taken from the nearest edge pixel and
    each channel of the result is clamped to 0..255.
    """
    width, height = image.width, image.height
    out = bytearray()
    for y in range(height):
        for x in range(width):
            sums = [0, 0, 0]
            for ky, kernel_row in enumerate(_KERNEL, -1):
                yy = clamp(y + ky, 0, height - 1)
                for kx, weight in enumerate(kernel_row, -1):
                    if not weight:
                        continue
                    xx = clamp(x + kx, 0, width - 1)
                    for channel, value in enumerate(image.pixel(xx, yy)):
                        sums[channel] += weight * value
            out.extend(clamp(total) for total in sums)
    return RgbImage(width, height, bytes(out))