from __future__ import annotations
from .bitcursor import Cursor
from .envelope import Envelope
from .registry import DecodeContext, decodes
from mpeg4desc.models.descriptor import ESIDInc, ESIDRef, IPIDescriptorPointer, RegistrationDescriptor
from mpeg4desc.models.tags import DescriptorTag


@decodes(DescriptorTag.IPI_DESCR_POINTER, model=IPIDescriptorPointer)
def decode_ipi_pointer(cur: Cursor, env: Envelope, ctx: DecodeContext) -> dict:
    env.need(cur, 2, "IPI_ES_Id")
    return {"ipi_es_id": cur.u16()}


@decodes(DescriptorTag.ES_ID_INC, model=ESIDInc)
def decode_es_id_inc(cur: Cursor, env: Envelope, ctx: DecodeContext) -> dict:
    env.need(cur, 4, "Track_ID")
    return {"track_id": cur.u32()}


@decodes(DescriptorTag.ES_ID_REF, model=ESIDRef)
def decode_es_id_ref(cur: Cursor, env: Envelope, ctx: DecodeContext) -> dict:
    env.need(cur, 2, "ref_index")
    return {"ref_index": cur.u16()}


@decodes(DescriptorTag.REGISTRATION_DESCR, model=RegistrationDescriptor)
def decode_registration(cur: Cursor, env: Envelope, ctx: DecodeContext) -> dict:
    env.need(cur, 4, "formatIdentifier")
    fmt = cur.u32()
    # additionalIdentificationInfo runs to the end of the body
    return {"format_identifier": fmt, "additional_info": cur.take(env.available(cur))}
