import random
import zlib

import pytest

from pixelkit.deflate import adler32, crc32, zlib_compress


def _random_bytes(count, seed=1234):
    rng = random.Random(seed)
    return bytes(rng.randrange(256) for _ in range(count))


@pytest.mark.parametrize(
    "payload",
    [
        b"a",
        b"abc",
        b"abcd",
        b"hello hello hello hello world",
        b"\x00" * 1000,
        bytes(range(256)) * 20,
        b"The quick brown fox jumps over the lazy dog. " * 50,
    ],
)
def test_round_trip_through_zlib(payload):
    assert zlib.decompress(zlib_compress(payload)) == payload


def test_stream_header_bytes():
    out = zlib_compress(b"some data to compress, some data to compress")
    assert out[:2] == b"\x78\x5e"


def test_trailer_is_adler32_of_input():
    payload = b"trailer check " * 30
    out = zlib_compress(payload)
    assert int.from_bytes(out[-4:], "big") == zlib.adler32(payload)


def test_long_run_compresses_well_and_round_trips():
    payload = b"a" * 100000
    out = zlib_compress(payload)
    assert len(out) < len(payload) // 50
    assert zlib.decompress(out) == payload


def test_matches_across_large_distances():
    chunk = _random_bytes(5000, seed=7)
    payload = chunk + _random_bytes(20000, seed=8) + chunk
    assert zlib.decompress(zlib_compress(payload)) == payload


def test_incompressible_data_uses_stored_block():
    payload = _random_bytes(2000)
    out = zlib_compress(payload)
    assert out[2] == 1  # final stored block
    assert int.from_bytes(out[3:5], "little") == len(payload)
    assert zlib.decompress(out) == payload


def test_incompressible_data_spans_several_stored_blocks():
    payload = _random_bytes(70000, seed=99)
    out = zlib_compress(payload)
    assert len(out) <= len(payload) + 2 + 3 * 5 + 4
    assert zlib.decompress(out) == payload


def test_low_quality_is_raised_to_five():
    payload = b"abcabcabdabcabcabd" * 40
    assert zlib_compress(payload, 1) == zlib_compress(payload, 5)


def test_higher_quality_still_round_trips():
    payload = (b"pattern-" + bytes(range(40))) * 100
    assert zlib.decompress(zlib_compress(payload, 12)) == payload


def test_empty_input_holds_only_header_and_checksum():
    assert zlib_compress(b"") == b"\x78\x5e\x00\x00\x00\x01"


@pytest.mark.parametrize(
    "payload", [b"", b"a", b"123456789", bytes(range(256)) * 3, _random_bytes(10000)]
)
def test_crc32_matches_standard(payload):
    assert crc32(payload) == zlib.crc32(payload)


def test_crc32_of_png_iend_tag():
    assert crc32(b"IEND") == 0xAE426082


@pytest.mark.parametrize(
    "payload", [b"", b"x", b"Wikipedia", b"\xff" * 6000, _random_bytes(12000, seed=3)]
)
def test_adler32_matches_standard(payload):
    assert adler32(payload) == zlib.adler32(payload)


def test_adler32_of_empty_is_one():
    assert adler32(b"") == 1