import struct

import pytest

from pixelkit.bmptga import WriteOptions, encode_bmp, encode_tga, write_bmp, write_tga


def _pattern(width, height, comp, seed=0):
    return bytes((i * 37 + seed) % 256 for i in range(width * height * comp))


def _decode_tga_rle(payload, pixel_size, total_pixels):
    out = bytearray()
    counts = []
    pos = 0
    while len(out) < total_pixels * pixel_size:
        head = payload[pos]
        pos += 1
        count = (head & 0x7F) + 1
        counts.append(count)
        if head & 0x80:
            out += payload[pos:pos + pixel_size] * count
            pos += pixel_size
        else:
            out += payload[pos:pos + count * pixel_size]
            pos += count * pixel_size
    return bytes(out), pos, counts


def test_bmp_rgb_header_fields():
    out = encode_bmp(3, 2, 3, _pattern(3, 2, 3))
    assert out[:2] == b"BM"
    file_size, _, _, offset = struct.unpack("<IHHI", out[2:14])
    assert file_size == len(out)
    assert offset == 14 + 40
    size, width, height, planes, bpp = struct.unpack("<IIIHH", out[14:30])
    assert (size, width, height, planes, bpp) == (40, 3, 2, 1, 24)


def test_bmp_rows_bottom_up_bgr_with_padding():
    data = bytes([1, 2, 3, 4, 5, 6])
    out = encode_bmp(1, 2, 3, data)
    assert out[54:] == bytes([6, 5, 4, 0, 3, 2, 1, 0])


def test_bmp_flip_vertically():
    data = bytes([1, 2, 3, 4, 5, 6])
    out = encode_bmp(1, 2, 3, data, WriteOptions(flip_vertically=True))
    assert out[54:] == bytes([3, 2, 1, 0, 6, 5, 4, 0])


def test_bmp_mono_is_expanded():
    out = encode_bmp(1, 1, 1, bytes([7]))
    assert out[54:57] == bytes([7, 7, 7])


def test_bmp_grey_alpha_drops_alpha():
    out = encode_bmp(1, 1, 2, bytes([9, 200]))
    assert out[54:57] == bytes([9, 9, 9])
    assert struct.unpack("<H", out[28:30])[0] == 24


def test_bmp_rgba_uses_v4_header():
    out = encode_bmp(1, 1, 4, bytes([10, 20, 30, 40]))
    file_size, _, _, offset = struct.unpack("<IHHI", out[2:14])
    assert offset == 14 + 108
    assert file_size == len(out)
    size, _, _, _, bpp, compression = struct.unpack("<IIIHHI", out[14:34])
    assert (size, bpp, compression) == (108, 32, 3)
    masks = struct.unpack("<4I", out[54:70])
    assert masks == (0xFF0000, 0xFF00, 0xFF, 0xFF000000)
    assert out[offset:] == bytes([30, 20, 10, 40])


@pytest.mark.parametrize(
    ("width", "height", "comp", "data"),
    [(-1, 1, 3, b""), (1, -1, 3, b""), (1, 1, 5, bytes(5)), (2, 2, 3, bytes(3))],
)
def test_invalid_arguments_rejected(width, height, comp, data):
    with pytest.raises(ValueError):
        encode_bmp(width, height, comp, data)
    with pytest.raises(ValueError):
        encode_tga(width, height, comp, data)


def test_write_bmp_matches_encoding(tmp_path):
    data = _pattern(5, 3, 3)
    target = tmp_path / "out.bmp"
    write_bmp(target, 5, 3, 3, data)
    assert target.read_bytes() == encode_bmp(5, 3, 3, data)


def test_tga_uncompressed_header_and_size():
    options = WriteOptions(tga_with_rle=False)
    out = encode_tga(3, 2, 3, _pattern(3, 2, 3), options)
    assert out[2] == 2
    assert struct.unpack("<HH", out[12:16]) == (3, 2)
    assert (out[16], out[17]) == (24, 0)
    assert len(out) == 18 + 3 * 2 * 3


def test_tga_uncompressed_pixels_bottom_up_bgr():
    out = encode_tga(1, 2, 3, bytes([1, 2, 3, 4, 5, 6]), WriteOptions(tga_with_rle=False))
    assert out[18:] == bytes([6, 5, 4, 3, 2, 1])


def test_tga_grey_alpha_header():
    out = encode_tga(1, 1, 2, bytes([50, 60]), WriteOptions(tga_with_rle=False))
    assert out[2] == 3
    assert (out[16], out[17]) == (16, 8)
    assert out[18:] == bytes([50, 60])


def test_tga_rle_is_default():
    out = encode_tga(2, 2, 3, _pattern(2, 2, 3))
    assert out[2] == 10


def test_tga_run_packet():
    out = encode_tga(4, 1, 3, bytes([9, 8, 7]) * 4)
    assert out[18:] == bytes([0x83, 7, 8, 9])


def test_tga_raw_packet():
    out = encode_tga(2, 1, 3, bytes([1, 2, 3, 4, 5, 6]))
    assert out[18:] == bytes([0x01, 3, 2, 1, 6, 5, 4])


@pytest.mark.parametrize(
    ("width", "height", "comp", "data"),
    [
        (5, 4, 3, _pattern(5, 4, 3)),
        (300, 2, 3, bytes([1, 2, 3]) * 600),
        (7, 3, 4, bytes([5, 5, 5, 5, 9, 9, 9, 9, 5, 5, 5, 5]) * 7),
        (9, 2, 1, bytes([0, 0, 0, 1, 2, 2, 2, 3, 4]) * 2),
        (200, 1, 2, bytes([3, 4]) * 100 + _pattern(100, 1, 2)),
    ],
)
@pytest.mark.parametrize("flip", [False, True])
def test_tga_rle_decodes_to_uncompressed_payload(width, height, comp, data, flip):
    rle = encode_tga(width, height, comp, data, WriteOptions(flip_vertically=flip))
    raw = encode_tga(
        width, height, comp, data, WriteOptions(tga_with_rle=False, flip_vertically=flip)
    )
    assert rle[:2] == raw[:2] and rle[3:18] == raw[3:18]
    assert rle[2] == raw[2] + 8
    decoded, consumed, counts = _decode_tga_rle(rle[18:], comp, width * height)
    assert consumed == len(rle) - 18
    assert decoded == raw[18:]
    assert max(counts) <= 128


def test_write_tga_matches_encoding(tmp_path):
    data = _pattern(4, 4, 4)
    target = tmp_path / "out.tga"
    write_tga(target, 4, 4, 4, data)
    assert target.read_bytes() == encode_tga(4, 4, 4, data)