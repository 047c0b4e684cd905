from __future__ import annotations
from .bitcursor import Cursor
from ..errors import MalformedSize, TruncatedHeader

# Expandable size field: each byte is 1 continuation bit + 7 value bits,
# big-endian, at most 4 bytes (sizes up to 2**28 - 1).
MAX_SIZE_BYTES = 4
MAX_SIZE = (1 << (7 * MAX_SIZE_BYTES)) - 1


def size_field_length(size: int) -> int:
    """Minimal number of size bytes needed to encode `size`."""
    if size < (1 << 7):
        return 1
    if size < (1 << 14):
        return 2
    if size < (1 << 21):
        return 3
    return 4


def encode_size(size: int, width: int | None = None) -> bytes:
    """
    Encode `size` as a size field. `width` forces a longer, zero-padded
    encoding (encoders commonly emit the 4-byte form 0x80 0x80 0x80 nn).
    """
    if not (0 <= size <= MAX_SIZE):
        raise ValueError(f"size {size} out of range 0..{MAX_SIZE}")
    n = size_field_length(size) if width is None else width
    if not (size_field_length(size) <= n <= MAX_SIZE_BYTES):
        raise ValueError(f"size {size} does not fit in {n} size bytes")
    out = bytearray()
    for i in range(n - 1, -1, -1):
        b = (size >> (7 * i)) & 0x7F
        out.append(b | 0x80 if i else b)
    return bytes(out)


def decode_size(cur: Cursor, limit: int | None = None) -> tuple[int, int]:
    """
    Decode a size field at the cursor. `limit` is a byte position the field
    must not cross (defaults to the buffer end).
    Returns (size, bytes_consumed).
    """
    end = len(cur) if limit is None else min(limit, len(cur))
    size = 0
    for n in range(1, MAX_SIZE_BYTES + 1):
        if end - cur.tell() < 1 or cur.remaining_bits() < 8:
            raise TruncatedHeader(f"size byte {n} missing at {cur.tell()}", offset=cur.tell())
        more = cur.flag()
        size = (size << 7) | cur.bits(7)
        if not more:
            return size, n
    raise MalformedSize(
        f"size field needs more than {MAX_SIZE_BYTES} bytes at {cur.tell() - MAX_SIZE_BYTES}",
        offset=cur.tell() - MAX_SIZE_BYTES,
    )
