"""Emboss filter driven by the difference to the upper-left neighbour."""

from __future__ import annotations

from pixelkit.image import RgbImage, clamp

_NEUTRAL_GREY = 128


def _strongest_difference(current, upper_left) -> int:
    diffs = [a - b for a, b in zip(current, upper_left)]
    strongest = diffs[0]
    for diff in diffs[1:]:
        if abs(diff) > abs(strongest):
            strongest = diff
    return strongest


def emboss(image: RgbImage) -> RgbImage:
    """Return a grey embossed copy of ``image``.

    The first row and column are neutral grey; every other pixel is grey
    shifted by the channel difference of largest magnitude to its
    upper-left neighbour, the red channel winning ties.
    """
    out = bytearray()
    for y in range(image.height):
        for x in range(image.width):
            if x == 0 or y == 0:
                value = _NEUTRAL_GREY
            else:
                diff = _strongest_difference(image.pixel(x, y), image.pixel(x - 1, y - 1))
                value = clamp(_NEUTRAL_GREY + diff)
            out.extend((value, value, value))
    return RgbImage(image.width, image.height, bytes(out))