from __future__ import annotations
from .bitcursor import Cursor
from .envelope import Envelope
from .registry import DecodeContext, decodes, read_prefixed
from mpeg4desc.models.descriptor import (
    DecoderConfigDescriptor,
    DecoderSpecificInfo,
    ESDescriptor,
    SLConfigDescriptor,
)
from mpeg4desc.models.tags import DescriptorTag

SL_FLAGS = (
    "use_access_unit_start_flag",
    "use_access_unit_end_flag",
    "use_random_access_point_flag",
    "has_random_access_units_only_flag",
    "use_padding_flag",
    "use_time_stamps_flag",
    "use_idle_flag",
    "duration_flag",
)


@decodes(DescriptorTag.ES_DESCR, model=ESDescriptor)
def decode_es_descriptor(cur: Cursor, env: Envelope, ctx: DecodeContext) -> dict:
    # ES_ID(16) streamDependenceFlag(1) URL_Flag(1) OCRstreamFlag(1) streamPriority(5)
    env.need(cur, 3, "ES_ID + flags")
    out = {"es_id": cur.u16()}
    depends = cur.flag()
    url_flag = cur.flag()
    ocr_flag = cur.flag()
    out["stream_priority"] = cur.bits(5)
    if depends:
        env.need(cur, 2, "dependsOn_ES_ID")
        out["depends_on_es_id"] = cur.u16()
    if url_flag:
        out["url"] = read_prefixed(cur, env, "URLstring").decode("utf-8", errors="replace")
    if ocr_flag:
        env.need(cur, 2, "OCR_ES_Id")
        out["ocr_es_id"] = cur.u16()
    # DecoderConfigDescriptor, SLConfigDescriptor, then optional extras
    out["descriptors"] = ctx.load_children(cur, env)
    return out


@decodes(DescriptorTag.DECODER_CONFIG_DESCR, model=DecoderConfigDescriptor)
def decode_decoder_config(cur: Cursor, env: Envelope, ctx: DecodeContext) -> dict:
    # objectTypeIndication(8) streamType(6) upStream(1) reserved(1)
    # bufferSizeDB(24) maxBitrate(32) avgBitrate(32)
    env.need(cur, 13, "DecoderConfigDescriptor fields")
    out = {"object_type_indication": cur.u8()}
    out["stream_type"] = cur.bits(6)
    out["up_stream"] = cur.flag()
    cur.skip_bits(1)
    out["buffer_size_db"] = cur.u24()
    out["max_bitrate"] = cur.u32()
    out["avg_bitrate"] = cur.u32()
    out["descriptors"] = ctx.load_children(cur, env)
    return out


@decodes(DescriptorTag.DEC_SPECIFIC_INFO, model=DecoderSpecificInfo)
def decode_decoder_specific_info(cur: Cursor, env: Envelope, ctx: DecodeContext) -> dict:
    # layout depends on objectTypeIndication of the parent; kept raw
    return {"data": cur.take(env.available(cur))}


@decodes(DescriptorTag.SL_CONFIG_DESCR, model=SLConfigDescriptor)
def decode_sl_config(cur: Cursor, env: Envelope, ctx: DecodeContext) -> dict:
    env.need(cur, 1, "predefined")
    out = {"predefined": cur.u8()}
    if out["predefined"] != 0:
        return out

    # 8 flags, two 32-bit resolutions, four 8-bit lengths, 4+5+5+2 bits
    env.need(cur, 15, "custom SL configuration")
    for name in SL_FLAGS:
        out[name] = cur.flag()
    out["timestamp_resolution"] = cur.u32()
    out["ocr_resolution"] = cur.u32()
    out["timestamp_length"] = cur.u8()
    out["ocr_length"] = cur.u8()
    out["au_length"] = cur.u8()
    out["instant_bitrate_length"] = cur.u8()
    out["degradation_priority_length"] = cur.bits(4)
    out["au_seq_num_length"] = cur.bits(5)
    out["packet_seq_num_length"] = cur.bits(5)
    cur.skip_bits(2)
    if out["duration_flag"]:
        env.need(cur, 8, "SL duration block")
        out["time_scale"] = cur.u32()
        out["access_unit_duration"] = cur.u16()
        out["composition_unit_duration"] = cur.u16()
    return out
