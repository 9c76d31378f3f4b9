"""BMP and TGA encoders."""

from __future__ import annotations

import os
import struct
from collections.abc import Iterator
from dataclasses import dataclass

_PINK_BACKGROUND = (255, 0, 255)
_BMP_FILE_HEADER = 14
_BMP_INFO_HEADER = 40
_BMP_V4_HEADER = 108


@dataclass(frozen=True)
class WriteOptions:
    """Settings shared by the image writers."""

    tga_with_rle: bool = True
    png_compression_level: int = 8
    force_png_filter: int = -1
    flip_vertically: bool = False


def _validate(width: int, height: int, comp: int, data) -> bytes:
    if width < 0 or height < 0:
        raise ValueError(f"image size must not be negative, got {width}x{height}")
    if comp not in (1, 2, 3, 4):
        raise ValueError(f"component count must be 1 to 4, got {comp}")
    buf = bytes(data)
    needed = width * height * comp
    if len(buf) < needed:
        raise ValueError(f"expected at least {needed} bytes of pixel data, got {len(buf)}")
    return buf


def _trunc_div(numerator: int, denominator: int) -> int:
    quotient = abs(numerator) // denominator
    return quotient if numerator >= 0 else -quotient


def _pixel_bytes(
    px: bytes, comp: int, rgb_dir: int, write_alpha: int, expand_mono: bool
) -> bytes:
    out = bytearray()
    if write_alpha < 0:
        out.append(px[comp - 1])
    if comp in (1, 2):
        out.extend((px[0],) * 3 if expand_mono else (px[0],))
    elif comp == 4 and not write_alpha:
        alpha = px[3]
        mixed = [
            (bg + _trunc_div((value - bg) * alpha, 255)) & 0xFF
            for value, bg in zip(px[:3], _PINK_BACKGROUND)
        ]
        out.extend((mixed[1 - rgb_dir], mixed[1], mixed[1 + rgb_dir]))
    else:
        out.extend((px[1 - rgb_dir], px[1], px[1 + rgb_dir]))
    if write_alpha > 0:
        out.append(px[comp - 1])
    return bytes(out)


def _rows_bottom_up(height: int, flip: bool) -> Iterator[int]:
    return iter(range(height)) if flip else reversed(range(height))


def _row_pixels(buf: bytes, width: int, comp: int, row: int) -> list[bytes]:
    start = row * width * comp
    return [buf[start + col * comp:start + (col + 1) * comp] for col in range(width)]


def _pixel_rows(
    buf: bytes,
    width: int,
    height: int,
    comp: int,
    write_alpha: int,
    pad: int,
    expand_mono: bool,
    flip: bool,
) -> bytes:
    out = bytearray()
    padding = bytes(pad)
    for row in _rows_bottom_up(height, flip):
        for px in _row_pixels(buf, width, comp, row):
            out += _pixel_bytes(px, comp, -1, write_alpha, expand_mono)
        out += padding
    return bytes(out)


def encode_bmp(width: int, height: int, comp: int, data, options: WriteOptions | None = None) -> bytes:
    """Encode pixels as a BMP file; greyscale expands to RGB, alpha is kept only for 4 channels."""
    opts = options or WriteOptions()
    buf = _validate(width, height, comp, data)
    if comp != 4:
        pad = (-width * 3) & 3
        offset = _BMP_FILE_HEADER + _BMP_INFO_HEADER
        file_size = (offset + (width * 3 + pad) * height) & 0xFFFFFFFF
        header = struct.pack("<2sIHHI", b"BM", file_size, 0, 0, offset)
        header += struct.pack(
            "<IIIHHIIIIII", _BMP_INFO_HEADER, width, height, 1, 24, 0, 0, 0, 0, 0, 0
        )
        pixels = _pixel_rows(buf, width, height, comp, 0, pad, True, opts.flip_vertically)
    else:
        offset = _BMP_FILE_HEADER + _BMP_V4_HEADER
        file_size = (offset + width * height * 4) & 0xFFFFFFFF
        header = struct.pack("<2sIHHI", b"BM", file_size, 0, 0, offset)
        header += struct.pack(
            "<IIIHHIIIIII", _BMP_V4_HEADER, width, height, 1, 32, 3, 0, 0, 0, 0, 0
        )
        header += struct.pack("<4I", 0x00FF0000, 0x0000FF00, 0x000000FF, 0xFF000000)
        header += bytes(13 * 4)
        pixels = _pixel_rows(buf, width, height, comp, 1, 0, True, opts.flip_vertically)
    return header + pixels


def write_bmp(path, width: int, height: int, comp: int, data, options: WriteOptions | None = None) -> None:
    """Write pixels to ``path`` as a BMP file."""
    encoded = encode_bmp(width, height, comp, data, options)
    with open(os.fspath(path), "wb") as handle:
        handle.write(encoded)


def _rle_row(row: list[bytes], comp: int, has_alpha: int) -> bytes:
    out = bytearray()
    count = len(row)
    i = 0
    while i < count:
        length = 1
        differs = True
        if i < count - 1:
            length = 2
            differs = row[i] != row[i + 1]
            k = i + 2
            if differs:
                prev = i
                while k < count and length < 128:
                    if row[prev] != row[k]:
                        prev += 1
                        length += 1
                    else:
                        length -= 1
                        break
                    k += 1
            else:
                while k < count and length < 128 and row[i] == row[k]:
                    length += 1
                    k += 1
        if differs:
            out.append((length - 1) & 0xFF)
            for px in row[i:i + length]:
                out += _pixel_bytes(px, comp, -1, has_alpha, False)
        else:
            out.append((length - 129) & 0xFF)
            out += _pixel_bytes(row[i], comp, -1, has_alpha, False)
        i += length
    return bytes(out)


def encode_tga(width: int, height: int, comp: int, data, options: WriteOptions | None = None) -> bytes:
    """Encode pixels as a TGA file, run-length encoded unless the options turn it off."""
    opts = options or WriteOptions()
    buf = _validate(width, height, comp, data)
    has_alpha = 1 if comp in (2, 4) else 0
    color_bytes = comp - 1 if has_alpha else comp
    image_type = 3 if color_bytes < 2 else 2
    if opts.tga_with_rle:
        image_type += 8
    header = struct.pack(
        "<BBBHHBHHHHBB",
        0, 0, image_type,
        0, 0, 0,
        0, 0, width & 0xFFFF, height & 0xFFFF,
        ((color_bytes + has_alpha) * 8) & 0xFF, has_alpha * 8,
    )
    if not opts.tga_with_rle:
        return header + _pixel_rows(
            buf, width, height, comp, has_alpha, 0, False, opts.flip_vertically
        )
    body = bytearray(header)
    for row in _rows_bottom_up(height, opts.flip_vertically):
        body += _rle_row(_row_pixels(buf, width, comp, row), comp, has_alpha)
    return bytes(body)


def write_tga(path, width: int, height: int, comp: int, data, options: WriteOptions | None = None) -> None:
    """Write pixels to ``path`` as a TGA file."""
    encoded = encode_tga(width, height, comp, data, options)
    with open(os.fspath(path), "wb") as handle:
        handle.write(encoded)