"""Small zlib stream encoder using fixed Huffman codes, plus CRC-32 and Adler-32."""

from __future__ import annotations

_HASH_SIZE = 16384
_WINDOW = 32768
_MAX_MATCH = 258
_MAX_STORED_BLOCK = 32767
_ADLER_MOD = 65521
_ADLER_BLOCK = 5552

_LENGTH_BASE = (
    3, 4, 5, 6, 7, 8, 9, 10, 11, 13, 15, 17, 19, 23, 27, 31, 35, 43, 51, 59,
    67, 83, 99, 115, 131, 163, 195, 227, 258, 259,
)
_LENGTH_EXTRA = (
    0, 0, 0, 0, 0, 0, 0, 0, 1, 1, 1, 1, 2, 2, 2, 2, 3, 3, 3, 3,
    4, 4, 4, 4, 5, 5, 5, 5, 0,
)
_DIST_BASE = (
    1, 2, 3, 4, 5, 7, 9, 13, 17, 25, 33, 49, 65, 97, 129, 193, 257, 385, 513,
    769, 1025, 1537, 2049, 3073, 4097, 6145, 8193, 12289, 16385, 24577, 32768,
)
_DIST_EXTRA = (
    0, 0, 0, 0, 1, 1, 2, 2, 3, 3, 4, 4, 5, 5, 6, 6, 7, 7, 8, 8,
    9, 9, 10, 10, 11, 11, 12, 12, 13, 13,
)


def _make_crc_table() -> tuple[int, ...]:
    table = []
    for n in range(256):
        c = n
        for _ in range(8):
            c = (c >> 1) ^ 0xEDB88320 if c & 1 else c >> 1
        table.append(c)
    return tuple(table)


_CRC_TABLE = _make_crc_table()


def crc32(data) -> int:
    """Return the CRC-32 of ``data`` as used in PNG chunks."""
    crc = 0xFFFFFFFF
    for byte in bytes(data):
        crc = (crc >> 8) ^ _CRC_TABLE[(byte ^ crc) & 0xFF]
    return crc ^ 0xFFFFFFFF


def adler32(data) -> int:
    """Return the Adler-32 checksum of ``data``."""
    buf = bytes(data)
    s1, s2 = 1, 0
    start = 0
    block = len(buf) % _ADLER_BLOCK
    while start < len(buf):
        for byte in buf[start:start + block]:
            s1 += byte
            s2 += s1
        s1 %= _ADLER_MOD
        s2 %= _ADLER_MOD
        start += block
        block = _ADLER_BLOCK
    return (s2 << 16) | s1


def _bit_reverse(code: int, bits: int) -> int:
    result = 0
    for _ in range(bits):
        result = (result << 1) | (code & 1)
        code >>= 1
    return result


def _zhash(buf: bytes, pos: int) -> int:
    mask = 0xFFFFFFFF
    h = buf[pos] + (buf[pos + 1] << 8) + (buf[pos + 2] << 16)
    h ^= (h << 3) & mask
    h = (h + (h >> 5)) & mask
    h ^= (h << 4) & mask
    h = (h + (h >> 17)) & mask
    h ^= (h << 25) & mask
    h = (h + (h >> 6)) & mask
    return h & (_HASH_SIZE - 1)


def _match_length(buf: bytes, a: int, b: int, limit: int) -> int:
    limit = min(limit, _MAX_MATCH)
    count = 0
    while count < limit and buf[a + count] == buf[b + count]:
        count += 1
    return count


class _BitWriter:
    """Collects least-significant-bit-first codes into bytes."""

    def __init__(self, out: bytearray) -> None:
        self.out = out
        self._buffer = 0
        self._count = 0

    def add(self, code: int, bits: int) -> None:
        self._buffer |= code << self._count
        self._count += bits
        while self._count >= 8:
            self.out.append(self._buffer & 0xFF)
            self._buffer >>= 8
            self._count -= 8

    def huffman(self, code: int, bits: int) -> None:
        self.add(_bit_reverse(code, bits), bits)

    def symbol(self, n: int) -> None:
        """Emit ``n`` with the fixed literal/length Huffman code."""
        if n <= 143:
            self.huffman(0x30 + n, 8)
        elif n <= 255:
            self.huffman(0x190 + n - 144, 9)
        elif n <= 279:
            self.huffman(n - 256, 7)
        else:
            self.huffman(0xC0 + n - 280, 8)

    def pad_to_byte(self) -> None:
        while self._count:
            self.add(0, 1)


def _first_bucket(bases, value: int) -> int:
    j = 0
    while value > bases[j + 1] - 1:
        j += 1
    return j


def _stored_blocks(buf: bytes) -> bytes:
    out = bytearray()
    pos = 0
    while pos < len(buf):
        block = min(len(buf) - pos, _MAX_STORED_BLOCK)
        final = 1 if len(buf) - pos == block else 0
        inverted = ~block
        out += bytes((
            final,
            block & 0xFF, (block >> 8) & 0xFF,
            inverted & 0xFF, (inverted >> 8) & 0xFF,
        ))
        out += buf[pos:pos + block]
        pos += block
    return bytes(out)


def zlib_compress(data, quality: int = 8) -> bytes:
    """Compress ``data`` into a zlib stream.

    ``quality`` bounds how many candidate positions each hash bucket keeps;
    values below 5 are raised to 5.  If fixed-Huffman compression would
    expand the data, stored blocks are written instead.
    """
    buf = bytes(data)
    size = len(buf)
    quality = max(quality, 5)

    out = bytearray((0x78, 0x5E))
    bits = _BitWriter(out)
    bits.add(1, 1)  # final block
    bits.add(1, 2)  # fixed Huffman codes

    table: dict[int, list[int]] = {}
    i = 0
    while i < size - 3:
        h = _zhash(buf, i)
        best = 3
        best_pos: int | None = None
        for pos in table.get(h, ()):
            if pos > i - _WINDOW:
                length = _match_length(buf, pos, i, size - i)
                if length >= best:
                    best, best_pos = length, pos
        bucket = table.setdefault(h, [])
        if len(bucket) == 2 * quality:
            del bucket[:quality]
        bucket.append(i)

        if best_pos is not None:
            # lazy matching: prefer a literal if the next byte starts a longer match
            for pos in table.get(_zhash(buf, i + 1), ()):
                if pos > i - (_WINDOW - 1):
                    if _match_length(buf, pos, i + 1, size - i - 1) > best:
                        best_pos = None
                        break

        if best_pos is not None:
            distance = i - best_pos
            j = _first_bucket(_LENGTH_BASE, best)
            bits.symbol(j + 257)
            if _LENGTH_EXTRA[j]:
                bits.add(best - _LENGTH_BASE[j], _LENGTH_EXTRA[j])
            j = _first_bucket(_DIST_BASE, distance)
            bits.add(_bit_reverse(j, 5), 5)
            if _DIST_EXTRA[j]:
                bits.add(distance - _DIST_BASE[j], _DIST_EXTRA[j])
            i += best
        else:
            bits.symbol(buf[i])
            i += 1

    for byte in buf[i:]:
        bits.symbol(byte)
    bits.symbol(256)
    bits.pad_to_byte()

    if len(out) > size + 2 + ((size + 32766) // 32767) * 5:
        del out[2:]
        out += _stored_blocks(buf)

    out += adler32(buf).to_bytes(4, "big")
    return bytes(out)