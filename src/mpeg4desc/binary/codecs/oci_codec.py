from __future__ import annotations
from .bitcursor import Cursor
from .envelope import Envelope
from .registry import DecodeContext, decodes, read_prefixed, read_text
from mpeg4desc.models.descriptor import LanguageDescriptor, SupplementaryContentIdentification
from mpeg4desc.models.tags import DescriptorTag

# ISO 639-2/T code, three 8-bit characters
LANGUAGE_CODE_BYTES = 3


@decodes(DescriptorTag.SUPPL_CONTENT_IDENT_DESCR, model=SupplementaryContentIdentification)
def decode_suppl_content_ident(cur: Cursor, env: Envelope, ctx: DecodeContext) -> dict:
    """
    languageCode(24), titleLength(8), title, valueLength(8), value.
    Each length-prefixed field is checked against what is left of the
    declared body before it is read.
    """
    env.need(cur, LANGUAGE_CODE_BYTES + 1, "languageCode + title length")
    language = read_text(cur, env, LANGUAGE_CODE_BYTES, "languageCode")
    title = read_prefixed(cur, env, "supplContentIdentifierTitle")
    value = read_prefixed(cur, env, "supplContentIdentifierValue")
    return {"language_code": language, "title": title, "value": value}


@decodes(DescriptorTag.LANGUAGE_DESCR, model=LanguageDescriptor)
def decode_language(cur: Cursor, env: Envelope, ctx: DecodeContext) -> dict:
    return {"language_code": read_text(cur, env, LANGUAGE_CODE_BYTES, "languageCode")}
