"""PNG encoder with per-row filter selection."""

from __future__ import annotations

import os
import struct

from pixelkit.bmptga import WriteOptions
from pixelkit.deflate import crc32, zlib_compress

_SIGNATURE = bytes((137, 80, 78, 71, 13, 10, 26, 10))
_COLOR_TYPES = {1: 0, 2: 4, 3: 2, 4: 6}
_FILTER_COUNT = 5


def paeth(a: int, b: int, c: int) -> int:
    """Return the Paeth predictor of left ``a``, up ``b`` and upper-left ``c``."""
    p = a + b - c
    pa, pb, pc = abs(p - a), abs(p - b), abs(p - c)
    if pa <= pb and pa <= pc:
        return a & 0xFF
    if pb <= pc:
        return b & 0xFF
    return c & 0xFF


_PREDICTORS = (
    lambda left, up, upper_left: 0,
    lambda left, up, upper_left: left,
    lambda left, up, upper_left: up,
    lambda left, up, upper_left: (left + up) >> 1,
    paeth,
)


def _filter_row(row: bytes, prev: bytes, bpp: int, filter_type: int) -> bytes:
    if filter_type == 0:
        return bytes(row)
    predict = _PREDICTORS[filter_type]
    out = bytearray(len(row))
    for i, value in enumerate(row):
        left = row[i - bpp] if i >= bpp else 0
        upper_left = prev[i - bpp] if i >= bpp else 0
        out[i] = (value - predict(left, prev[i], upper_left)) & 0xFF
    return bytes(out)


def _estimate(line: bytes) -> int:
    """Sum of absolute values of the filtered bytes read as signed."""
    return sum(b if b < 128 else 256 - b for b in line)


def _chunk(tag: bytes, payload: bytes) -> bytes:
    body = tag + payload
    return struct.pack(">I", len(payload)) + body + struct.pack(">I", crc32(body))


def encode_png(
    width: int,
    height: int,
    comp: int,
    data,
    stride: int = 0,
    options: WriteOptions | None = None,
) -> bytes:
    """Encode 8-bit pixels as a PNG file.

    ``stride`` is the distance in bytes between the starts of adjacent rows;
    zero means rows are packed tightly.
    """
    opts = options or WriteOptions()
    if width < 0 or height < 0:
        raise ValueError(f"image size must not be negative, got {width}x{height}")
    if comp not in _COLOR_TYPES:
        raise ValueError(f"component count must be 1 to 4, got {comp}")
    if stride < 0:
        raise ValueError(f"row stride must not be negative, got {stride}")
    row_len = width * comp
    stride = stride or row_len
    buf = bytes(data)
    if height and len(buf) < (height - 1) * stride + row_len:
        needed = (height - 1) * stride + row_len
        raise ValueError(f"expected at least {needed} bytes of pixel data, got {len(buf)}")

    rows = [buf[r * stride:r * stride + row_len] for r in range(height)]
    if opts.flip_vertically:
        rows.reverse()

    force = opts.force_png_filter
    if force >= _FILTER_COUNT:
        force = -1

    filtered = bytearray()
    prev = bytes(row_len)
    for row in rows:
        if force > -1:
            filter_type = force
            line = _filter_row(row, prev, comp, force)
        else:
            candidates = [_filter_row(row, prev, comp, t) for t in range(_FILTER_COUNT)]
            filter_type = min(range(_FILTER_COUNT), key=lambda t: _estimate(candidates[t]))
            line = candidates[filter_type]
        filtered.append(filter_type)
        filtered += line
        prev = row

    compressed = zlib_compress(bytes(filtered), opts.png_compression_level)
    header = struct.pack(">IIBBBBB", width, height, 8, _COLOR_TYPES[comp], 0, 0, 0)
    return (
        _SIGNATURE
        + _chunk(b"IHDR", header)
        + _chunk(b"IDAT", compressed)
        + _chunk(b"IEND", b"")
    )


def write_png(
    path,
    width: int,
    height: int,
    comp: int,
    data,
    stride: int = 0,
    options: WriteOptions | None = None,
) -> None:
    """Write 8-bit pixels to ``path`` as a PNG file."""
    encoded = encode_png(width, height, comp, data, stride, options)
    with open(os.fspath(path), "wb") as handle:
        handle.write(encoded)