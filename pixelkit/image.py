"""In-memory 8-bit RGB images and pixel value helpers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar


def clamp(value: int, low: int = 0, high: int = 255) -> int:
    """Limit ``value`` to the closed range ``[low, high]``."""
    if value < low:
        return low
    if value > high:
        return high
    return value


@dataclass(frozen=True)
class RgbImage:
    """A rectangle of interleaved 8-bit RGB pixels, stored top row first."""

    width: int
    height: int
    data: bytes

    CHANNELS: ClassVar[int] = 3

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValueError(
                f"image size must not be negative, got {self.width}x{self.height}"
            )
        data = bytes(self.data)
        expected = self.width * self.height * self.CHANNELS
        if len(data) != expected:
            raise ValueError(
                f"expected {expected} bytes of RGB data, got {len(data)}"
            )
        object.__setattr__(self, "data", data)

    def pixel(self, x: int, y: int) -> tuple[int, int, int]:
        """Return the ``(red, green, blue)`` values of the pixel at ``(x, y)``."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(
                f"pixel ({x}, {y}) lies outside a {self.width}x{self.height} image"
            )
        offset = (y * self.width + x) * self.CHANNELS
        red, green, blue = self.data[offset:offset + self.CHANNELS]
        return red, green, blue