from __future__ import annotations
from enum import IntEnum


class DescriptorTag(IntEnum):
    FORBIDDEN = 0x00
    OBJECT_DESCR = 0x01
    INITIAL_OBJECT_DESCR = 0x02
    ES_DESCR = 0x03
    DECODER_CONFIG_DESCR = 0x04
    DEC_SPECIFIC_INFO = 0x05
    SL_CONFIG_DESCR = 0x06
    CONTENT_IDENT_DESCR = 0x07
    SUPPL_CONTENT_IDENT_DESCR = 0x08
    IPI_DESCR_POINTER = 0x09
    IPMP_DESCR_POINTER = 0x0A
    IPMP_DESCR = 0x0B
    QOS_DESCR = 0x0C
    REGISTRATION_DESCR = 0x0D
    ES_ID_INC = 0x0E
    ES_ID_REF = 0x0F
    MP4_IOD = 0x10
    MP4_OD = 0x11
    IPL_DESCR_POINTER_REF = 0x12
    EXTENSION_PROFILE_LEVEL_DESCR = 0x13
    PROFILE_LEVEL_INDICATION_INDEX_DESCR = 0x14
    # 0x15-0x3F reserved for ISO use
    CONTENT_CLASSIFICATION_DESCR = 0x40
    KEYWORD_DESCR = 0x41
    RATING_DESCR = 0x42
    LANGUAGE_DESCR = 0x43
    SHORT_TEXTUAL_DESCR = 0x44
    EXPANDED_TEXTUAL_DESCR = 0x45
    CONTENT_CREATOR_NAME_DESCR = 0x46
    CONTENT_CREATION_DATE_DESCR = 0x47
    OCI_CREATOR_NAME_DESCR = 0x48
    OCI_CREATION_DATE_DESCR = 0x49
    SMPTE_CAMERA_POSITION_DESCR = 0x4A
    SEGMENT_DESCR = 0x4B
    MEDIA_TIME_DESCR = 0x4C
    # 0x4D-0x5F reserved for ISO use (OCI extensions)
    IPMP_TOOLS_LIST_DESCR = 0x60
    IPMP_TOOL = 0x61
    M4MUX_TIMING_DESCR = 0x62
    M4MUX_CODE_TABLE_DESCR = 0x63
    EXT_SL_CONFIG_DESCR = 0x64
    M4MUX_BUFFER_SIZE_DESCR = 0x65
    M4MUX_IDENT_DESCR = 0x66
    DEPENDENCY_POINTER = 0x67
    DEPENDENCY_MARKER = 0x68
    M4MUX_CHANNEL_DESCR = 0x69
    # 0x6A-0xBF reserved for ISO use, 0xC0-0xFE user private
    FORBIDDEN_FF = 0xFF


# (first, last, label) for tags without an enum member
TAG_RANGES = (
    (0x15, 0x3F, "ISO_RESERVED"),
    (0x4D, 0x5F, "OCI_RESERVED"),
    (0x6A, 0xBF, "ISO_RESERVED"),
    (0xC0, 0xFE, "USER_PRIVATE"),
)


def tag_name(tag: int) -> str:
    try:
        return DescriptorTag(tag).name
    except ValueError:
        pass
    for first, last, label in TAG_RANGES:
        if first <= tag <= last:
            return label
    raise ValueError(f"tag {tag} is not a byte value")


def is_reserved(tag: int) -> bool:
    return tag_name(tag) in ("ISO_RESERVED", "OCI_RESERVED")
