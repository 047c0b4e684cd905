from __future__ import annotations
import struct


class CursorError(ValueError):
    pass


class Cursor:
    """Bit-addressed reader over an in-memory buffer (MSB-first)."""

    __slots__ = ("buf", "bitpos")

    def __init__(self, data: bytes | bytearray | memoryview, bitpos: int = 0):
        self.buf = memoryview(data)
        self.bitpos = 0
        self.seek_bits(bitpos)

    def __len__(self) -> int: return len(self.buf)

    def tell(self) -> int: return self.bitpos >> 3
    def tell_bits(self) -> int: return self.bitpos
    def remaining_bits(self) -> int: return len(self.buf) * 8 - self.bitpos
    def remaining(self) -> int: return self.remaining_bits() >> 3
    def aligned(self) -> bool: return self.bitpos & 7 == 0

    def seek_bits(self, bitpos: int) -> None:
        if not (0 <= bitpos <= len(self.buf) * 8): raise CursorError("seek out of bounds")
        self.bitpos = bitpos

    def seek(self, pos: int) -> None: self.seek_bits(pos * 8)
    def skip(self, n: int) -> None: self.seek_bits(self.bitpos + n * 8)
    def skip_bits(self, n: int) -> None: self.seek_bits(self.bitpos + n)

    def byte_align(self) -> None:
        self.bitpos = (self.bitpos + 7) & ~7

    def take(self, n: int) -> bytes:
        if not self.aligned(): raise CursorError(f"unaligned byte read at bit {self.bitpos}")
        start = self.bitpos >> 3
        end = start + n
        if n < 0 or end > len(self.buf): raise CursorError(f"underrun: need {n} at {start}")
        out = self.buf[start:end].tobytes()
        self.bitpos = end * 8
        return out

    def peek(self, n: int) -> bytes:
        if not self.aligned(): raise CursorError(f"unaligned byte peek at bit {self.bitpos}")
        start = self.bitpos >> 3
        end = start + n
        if n < 0 or end > len(self.buf): raise CursorError(f"peek underrun: need {n} at {start}")
        return self.buf[start:end].tobytes()

    # byte-aligned big-endian reads
    def _unpack(self, fmt: str, n: int):
        return struct.unpack(fmt, self.take(n))[0]
    def u8(self) -> int:  return self._unpack(">B", 1)
    def u16(self) -> int: return self._unpack(">H", 2)
    def u24(self) -> int: return int.from_bytes(self.take(3), "big")
    def u32(self) -> int: return self._unpack(">I", 4)

    # bits (MSB-first), any alignment
    def bits(self, n: int) -> int:
        if not (0 < n <= 32): raise CursorError("bits 1..32")
        if n > self.remaining_bits(): raise CursorError(f"bit underrun: need {n} at bit {self.bitpos}")
        first = self.bitpos >> 3
        last = (self.bitpos + n + 7) >> 3
        chunk = int.from_bytes(self.buf[first:last], "big")
        shift = last * 8 - (self.bitpos + n)
        self.bitpos += n
        return (chunk >> shift) & ((1 << n) - 1)

    def flag(self) -> bool: return self.bits(1) == 1
