from __future__ import annotations
import logging
from typing import List, Optional

from .bitcursor import Cursor, CursorError
from .envelope import Envelope, read_envelope
from .registry import DECODERS, DecodeContext
from ..errors import DescriptorError, InsufficientBytes, NestingTooDeep
from mpeg4desc.config import DecodeOptions
from mpeg4desc.models.descriptor import Descriptor, OpaqueDescriptor

# concrete decoders register themselves on import
from . import es_codec, ident_codec, object_codec, oci_codec  # noqa: F401

log = logging.getLogger(__name__)


def decode_opaque(cur: Cursor, env: Envelope, ctx: DecodeContext) -> dict:
    """Fallback for unrecognised tags: keep the body bytes, interpret nothing."""
    if env.unbounded:
        # consume up to the caller-imposed end
        return {"data": cur.take(env.available(cur))}
    env.need(cur, env.body_size, "opaque body")
    return {"data": cur.take(env.body_size)}


def lookup(tag: int):
    return DECODERS.get(tag, (OpaqueDescriptor, decode_opaque))


def load_descriptor(
    cur: Cursor,
    *,
    limit: Optional[int] = None,
    options: Optional[DecodeOptions] = None,
    depth: int = 0,
) -> Descriptor:
    """
    Decode one descriptor at the cursor.

    On return the cursor sits at the declared end of the descriptor, whatever
    the decoder consumed. On error the cursor also sits at the declared end
    (clamped to `limit`) unless the header itself could not be read, and the
    raised DescriptorError carries that position in `resume_at`.
    """
    options = options or DecodeOptions()
    env = read_envelope(cur, limit=limit, zero_size_unbounded=options.zero_size_unbounded)
    model, decode = lookup(env.tag)
    log.debug(
        "load descriptor: tag=0x%02X type=%s pos=%d size=%d",
        env.tag, model.__name__, env.start, env.header_size + env.body_size,
    )
    try:
        with env.body(cur):
            if depth > options.max_depth:
                raise NestingTooDeep(
                    f"tag 0x{env.tag:02X} at {env.start} nested deeper than {options.max_depth}",
                    tag=env.tag,
                    offset=env.start,
                )
            fields = decode(cur, env, DecodeContext(options=options, depth=depth))
    except DescriptorError as exc:
        # outer descriptors overwrite this as the error unwinds
        exc.resume_at = cur.tell()
        raise
    except CursorError as exc:
        raise InsufficientBytes(
            f"tag 0x{env.tag:02X} at {env.start}: {exc}",
            tag=env.tag,
            offset=env.start,
            resume_at=cur.tell(),
        ) from exc

    return model(
        tag=env.tag,
        header_size=env.header_size,
        body_size=env.body_size,
        start_bitpos=env.start_bitpos,
        unbounded=env.unbounded,
        **fields,
    )


def load_descriptors(
    cur: Cursor,
    *,
    limit: Optional[int] = None,
    options: Optional[DecodeOptions] = None,
) -> List[Descriptor]:
    """Decode consecutive sibling descriptors up to `limit` (default: buffer end)."""
    end = len(cur) if limit is None else min(limit, len(cur))
    out = []
    while cur.tell() < end:
        out.append(load_descriptor(cur, limit=end, options=options))
    return out
