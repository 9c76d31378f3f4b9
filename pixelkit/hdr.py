"""Radiance RGBE (.hdr) encoder for linear floating-point images."""

from __future__ import annotations

import math
import os
import struct
from collections.abc import Sequence

from pixelkit.bmptga import WriteOptions

_HEADER = b"#?RADIANCE\n# Written by pixelkit\nFORMAT=32-bit_rle_rgbe\n"
_MAX_DUMP = 128
_MAX_RUN = 127


def _f32(value: float) -> float:
    """Round ``value`` to single precision."""
    return struct.unpack("<f", struct.pack("<f", value))[0]


_TINY = _f32(1e-32)


def linear_to_rgbe(red: float, green: float, blue: float) -> tuple[int, int, int, int]:
    """Convert one linear RGB triple to its shared-exponent RGBE bytes."""
    linear = [_f32(red), _f32(green), _f32(blue)]
    maxcomp = max(linear[0], max(linear[1], linear[2]))
    if maxcomp < _TINY:
        return (0, 0, 0, 0)
    mantissa, exponent = math.frexp(maxcomp)
    normalize = _f32(_f32(mantissa) * 256.0 / maxcomp)
    red_b, green_b, blue_b = (int(_f32(value * normalize)) & 0xFF for value in linear)
    return (red_b, green_b, blue_b, (exponent + 128) & 0xFF)


def _pixel_rgbe(scanline: Sequence[float], x: int, comp: int) -> tuple[int, int, int, int]:
    base = x * comp
    if comp >= 3:
        return linear_to_rgbe(scanline[base], scanline[base + 1], scanline[base + 2])
    grey = scanline[base]
    return linear_to_rgbe(grey, grey, grey)


def _rle_component(values: bytes) -> bytes:
    out = bytearray()
    width = len(values)
    x = 0
    while x < width:
        r = x
        while r + 2 < width:
            if values[r] == values[r + 1] == values[r + 2]:
                break
            r += 1
        if r + 2 >= width:
            r = width
        while x < r:
            length = min(r - x, _MAX_DUMP)
            out.append(length)
            out += values[x:x + length]
            x += length
        if r + 2 < width:
            while r < width and values[r] == values[x]:
                r += 1
            while x < r:
                length = min(r - x, _MAX_RUN)
                out.append(length + 128)
                out.append(values[x])
                x += length
    return bytes(out)


def _encode_scanline(scanline: Sequence[float], width: int, comp: int) -> bytes:
    pixels = [_pixel_rgbe(scanline, x, comp) for x in range(width)]
    if width < 8 or width >= 32768:
        return b"".join(bytes(px) for px in pixels)
    out = bytearray((2, 2, (width & 0xFF00) >> 8, width & 0xFF))
    for channel in range(4):
        out += _rle_component(bytes(px[channel] for px in pixels))
    return bytes(out)


def encode_hdr(
    width: int,
    height: int,
    comp: int,
    data: Sequence[float],
    options: WriteOptions | None = None,
) -> bytes:
    """Encode linear float pixels as a Radiance HDR file.

    Alpha is discarded and greyscale is replicated into all three channels.
    """
    opts = options or WriteOptions()
    if width <= 0 or height <= 0:
        raise ValueError(f"image size must be positive, got {width}x{height}")
    if data is None:
        raise ValueError("pixel data is required")
    if comp not in (1, 2, 3, 4):
        raise ValueError(f"component count must be 1 to 4, got {comp}")
    values = [float(v) for v in data]
    row_len = width * comp
    needed = row_len * height
    if len(values) < needed:
        raise ValueError(f"expected at least {needed} values of pixel data, got {len(values)}")
    out = bytearray(_HEADER)
    out += f"EXPOSURE=          1.0000000000000\n\n-Y {height} +X {width}\n".encode("ascii")
    for i in range(height):
        row = height - 1 - i if opts.flip_vertically else i
        out += _encode_scanline(values[row * row_len:(row + 1) * row_len], width, comp)
    return bytes(out)


def write_hdr(
    path,
    width: int,
    height: int,
    comp: int,
    data: Sequence[float],
    options: WriteOptions | None = None,
) -> None:
    """Write linear float pixels to ``path`` as a Radiance HDR file."""
    encoded = encode_hdr(width, height, comp, data, options)
    with open(os.fspath(path), "wb") as handle:
        handle.write(encoded)