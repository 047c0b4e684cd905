from __future__ import annotations
from .bitcursor import Cursor
from .envelope import Envelope
from .registry import DecodeContext, decodes, read_prefixed
from mpeg4desc.models.descriptor import InitialObjectDescriptor, ObjectDescriptor
from mpeg4desc.models.tags import DescriptorTag

PROFILE_LEVEL_FIELDS = (
    "od_profile_level",
    "scene_profile_level",
    "audio_profile_level",
    "visual_profile_level",
    "graphics_profile_level",
)


def _read_url(cur: Cursor, env: Envelope) -> str:
    return read_prefixed(cur, env, "URLstring").decode("utf-8", errors="replace")


@decodes(DescriptorTag.OBJECT_DESCR, DescriptorTag.MP4_OD, model=ObjectDescriptor)
def decode_object_descriptor(cur: Cursor, env: Envelope, ctx: DecodeContext) -> dict:
    # ObjectDescriptorID(10) URL_Flag(1) reserved(5)
    env.need(cur, 2, "ObjectDescriptorID")
    out = {"od_id": cur.bits(10)}
    url_flag = cur.flag()
    cur.skip_bits(5)
    if url_flag:
        out["url"] = _read_url(cur, env)
    out["descriptors"] = ctx.load_children(cur, env)
    return out


@decodes(DescriptorTag.INITIAL_OBJECT_DESCR, DescriptorTag.MP4_IOD, model=InitialObjectDescriptor)
def decode_initial_object_descriptor(cur: Cursor, env: Envelope, ctx: DecodeContext) -> dict:
    """
    ObjectDescriptorID(10) URL_Flag(1) includeInlineProfileLevelFlag(1) reserved(4),
    then either a URL or the five profile-level indications, then the
    ES / OCI / IPMP descriptors (ES_ID_Inc in the MP4 flavour).
    """
    env.need(cur, 2, "ObjectDescriptorID")
    out = {"od_id": cur.bits(10)}
    url_flag = cur.flag()
    out["include_inline_profile_level"] = cur.flag()
    cur.skip_bits(4)
    if url_flag:
        out["url"] = _read_url(cur, env)
    else:
        env.need(cur, len(PROFILE_LEVEL_FIELDS), "profileLevelIndication")
        for name in PROFILE_LEVEL_FIELDS:
            out[name] = cur.u8()
    out["descriptors"] = ctx.load_children(cur, env)
    return out
