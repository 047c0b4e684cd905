from __future__ import annotations

import logging
from collections import Counter
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Union

from .codecs.bitcursor import Cursor
from .codecs.factory import load_descriptor
from .errors import DescriptorError
from mpeg4desc.config import DecodeOptions
from mpeg4desc.models.descriptor import Descriptor
from mpeg4desc.models.stream import DecodeIssue, DescriptorStream

log = logging.getLogger(__name__)

BytesLike = Union[str, Path, bytes, bytearray, memoryview]


# -----------------------------
# Helpers
# -----------------------------

def _load_bytes(inp: BytesLike) -> bytes:
    if isinstance(inp, (bytes, bytearray, memoryview)):
        return bytes(inp)
    p = Path(str(inp))
    return p.read_bytes()


def _issue(exc: DescriptorError) -> DecodeIssue:
    return DecodeIssue(
        kind=exc.kind,
        message=str(exc),
        tag=exc.tag,
        offset=exc.offset,
        resume_at=exc.resume_at,
    )


# -----------------------------
# Streaming iterator
# -----------------------------

def iter_descriptors(
    data: BytesLike,
    *,
    offset: int = 0,
    options: Optional[DecodeOptions] = None,
    issues: Optional[List[DecodeIssue]] = None,
) -> Iterator[Descriptor]:
    """
    Yield the top-level descriptors laid end to end from `offset` to the end
    of the buffer.
      - on_error="raise": the first DescriptorError propagates.
      - on_error="skip": the failing descriptor is logged, recorded in
        `issues` (when given) and decoding resumes at its declared end.
        Header errors leave no resume point and end the stream.
    """
    options = options or DecodeOptions()
    cur = Cursor(_load_bytes(data))
    cur.seek(offset)

    while cur.remaining() > 0:
        start = cur.tell()
        try:
            yield load_descriptor(cur, options=options)
        except DescriptorError as e:
            if options.on_error == "raise":
                raise
            log.warning("skipping descriptor at %d: %s", start, e)
            if issues is not None:
                issues.append(_issue(e))
            if e.resume_at is None or e.resume_at <= start:
                return
            cur.seek(e.resume_at)


# -----------------------------
# Full parse
# -----------------------------

def parse_stream(
    data: BytesLike,
    *,
    offset: int = 0,
    options: Optional[DecodeOptions] = None,
) -> DescriptorStream:
    issues: List[DecodeIssue] = []
    descriptors = list(iter_descriptors(data, offset=offset, options=options, issues=issues))
    return DescriptorStream(descriptors=descriptors, issues=issues)


def summarize_stream(
    data: BytesLike,
    *,
    offset: int = 0,
    options: Optional[DecodeOptions] = None,
) -> Dict[str, int]:
    """Count decoded descriptors by kind, nested ones included."""
    counts: Counter = Counter()
    for top in iter_descriptors(data, offset=offset, options=options):
        for d in top.walk():
            counts[d.kind] += 1
    return dict(counts)
