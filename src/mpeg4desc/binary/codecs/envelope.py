from __future__ import annotations
import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, Optional

from .bitcursor import Cursor
from .size_field import decode_size
from ..errors import CallerContractViolation, InsufficientBytes, TruncatedHeader

log = logging.getLogger(__name__)

# remaining_bytes() result for a body declared with size 0 in unbounded mode
UNBOUNDED = None


@dataclass(frozen=True)
class Envelope:
    """Tag + size header of one descriptor, plus body bookkeeping."""

    tag: int
    header_size: int   # tag byte + size bytes, 2..5
    body_size: int
    start_bitpos: int
    limit: int         # caller-imposed byte end (parent body end or buffer end)
    unbounded: bool = False

    @property
    def start(self) -> int:
        return self.start_bitpos >> 3

    @property
    def body_start(self) -> int:
        return self.start + self.header_size

    @property
    def end(self) -> Optional[int]:
        """Declared end of the body; None when unbounded."""
        if self.unbounded:
            return None
        return self.body_start + self.body_size

    @property
    def stop(self) -> int:
        """Last readable byte boundary: declared end clamped to the caller limit."""
        if self.unbounded:
            return self.limit
        return min(self.body_start + self.body_size, self.limit)

    def remaining_bytes(self, cur: Cursor) -> Optional[int]:
        if self.unbounded:
            return UNBOUNDED
        return max(0, self.end - cur.tell())

    def available(self, cur: Cursor) -> int:
        return max(0, self.stop - cur.tell())

    def need(self, cur: Cursor, n: int, what: str) -> None:
        have = self.available(cur)
        if have < n:
            raise InsufficientBytes(
                f"tag 0x{self.tag:02X} at {self.start}: {what} needs {n} bytes, {have} left",
                tag=self.tag,
                offset=self.start,
            )

    def skip_remaining(self, cur: Cursor) -> None:
        left = self.remaining_bytes(cur)
        if not left:
            return
        cur.byte_align()
        target = min(self.end, self.limit, len(cur))
        if target > cur.tell():
            log.debug("tag 0x%02X: skipping %d leftover bytes at %d", self.tag, target - cur.tell(), cur.tell())
            cur.seek(target)

    def has_more(self, cur: Cursor) -> bool:
        """True while a child descriptor may still start inside this body."""
        if self.unbounded:
            return cur.tell() < self.limit
        return self.remaining_bytes(cur) > 0

    @contextmanager
    def body(self, cur: Cursor) -> Iterator["Envelope"]:
        """Scope for decoding the body; the leftover skip runs on every exit path."""
        try:
            yield self
        finally:
            self.skip_remaining(cur)


def read_envelope(cur: Cursor, *, limit: int | None = None, zero_size_unbounded: bool = True) -> Envelope:
    """
    Read the tag byte and size field at the cursor.
    The cursor must sit on a byte boundary; it is left at the first body byte.
    """
    start_bitpos = cur.tell_bits()
    if start_bitpos % 8:
        raise CallerContractViolation(f"descriptor start not byte-aligned (bit {start_bitpos})")
    end = len(cur) if limit is None else min(limit, len(cur))
    if end - cur.tell() < 1:
        raise TruncatedHeader(f"tag byte missing at {cur.tell()}", offset=cur.tell())
    tag = cur.u8()
    try:
        body_size, nsize = decode_size(cur, limit=end)
    except TruncatedHeader as exc:
        exc.tag = tag
        raise
    return Envelope(
        tag=tag,
        header_size=1 + nsize,
        body_size=body_size,
        start_bitpos=start_bitpos,
        limit=end,
        unbounded=zero_size_unbounded and body_size == 0,
    )
