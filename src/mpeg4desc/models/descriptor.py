from __future__ import annotations
from typing import Annotated, Iterator, List, Literal, Optional, Type, TypeVar, Union
from pydantic import BaseModel, ConfigDict, Field, field_validator

from .tags import tag_name

D = TypeVar("D", bound="Descriptor")


class Descriptor(BaseModel):
    """Fields shared by every decoded descriptor. Instances are immutable."""

    model_config = ConfigDict(frozen=True, ser_json_bytes="hex")

    tag: int = Field(..., ge=0, le=255)
    header_size: int = Field(..., ge=2, le=5)
    body_size: int = Field(..., ge=0)
    start_bitpos: int = Field(..., ge=0)
    unbounded: bool = False

    @field_validator("start_bitpos")
    @classmethod
    def _byte_aligned(cls, v: int) -> int:
        if v % 8:
            raise ValueError(f"start_bitpos {v} is not byte-aligned")
        return v

    @property
    def start(self) -> int:
        return self.start_bitpos // 8

    @property
    def end(self) -> int:
        return self.start + self.header_size + self.body_size

    @property
    def tag_name(self) -> str:
        return tag_name(self.tag)

    @property
    def children(self) -> List["Descriptor"]:
        return list(getattr(self, "descriptors", ()))

    def walk(self) -> Iterator["Descriptor"]:
        """Depth-first, this descriptor first."""
        yield self
        for child in self.children:
            yield from child.walk()

    def find(self, cls: Type[D]) -> List[D]:
        return [d for d in self.walk() if isinstance(d, cls)]


class OpaqueDescriptor(Descriptor):
    """Present, size known, contents not interpreted."""
    kind: Literal["opaque"] = "opaque"
    data: bytes = b""


class IPIDescriptorPointer(Descriptor):
    kind: Literal["ipi_pointer"] = "ipi_pointer"
    ipi_es_id: int = Field(..., ge=0, le=0xFFFF)


class ESIDInc(Descriptor):
    kind: Literal["es_id_inc"] = "es_id_inc"
    track_id: int = Field(..., ge=0)


class ESIDRef(Descriptor):
    kind: Literal["es_id_ref"] = "es_id_ref"
    ref_index: int = Field(..., ge=0, le=0xFFFF)


class RegistrationDescriptor(Descriptor):
    kind: Literal["registration"] = "registration"
    format_identifier: int = Field(..., ge=0)
    additional_info: bytes = b""

    @property
    def fourcc(self) -> str:
        return self.format_identifier.to_bytes(4, "big").decode("latin-1")


class SupplementaryContentIdentification(Descriptor):
    kind: Literal["suppl_content_ident"] = "suppl_content_ident"
    language_code: str
    title: bytes = b""
    value: bytes = b""


class LanguageDescriptor(Descriptor):
    kind: Literal["language"] = "language"
    language_code: str


class ObjectDescriptor(Descriptor):
    kind: Literal["object"] = "object"
    od_id: int = Field(..., ge=0, le=0x3FF)
    url: Optional[str] = None
    descriptors: List[AnyDescriptor] = Field(default_factory=list)


class InitialObjectDescriptor(Descriptor):
    kind: Literal["initial_object"] = "initial_object"
    od_id: int = Field(..., ge=0, le=0x3FF)
    include_inline_profile_level: bool = False
    url: Optional[str] = None
    od_profile_level: Optional[int] = None
    scene_profile_level: Optional[int] = None
    audio_profile_level: Optional[int] = None
    visual_profile_level: Optional[int] = None
    graphics_profile_level: Optional[int] = None
    descriptors: List[AnyDescriptor] = Field(default_factory=list)


class ESDescriptor(Descriptor):
    kind: Literal["es"] = "es"
    es_id: int = Field(..., ge=0, le=0xFFFF)
    stream_priority: int = Field(0, ge=0, le=31)
    depends_on_es_id: Optional[int] = None
    url: Optional[str] = None
    ocr_es_id: Optional[int] = None
    descriptors: List[AnyDescriptor] = Field(default_factory=list)


class DecoderConfigDescriptor(Descriptor):
    kind: Literal["decoder_config"] = "decoder_config"
    object_type_indication: int = Field(..., ge=0, le=0xFF)
    stream_type: int = Field(..., ge=0, le=0x3F)
    up_stream: bool = False
    buffer_size_db: int = Field(0, ge=0)
    max_bitrate: int = Field(0, ge=0)
    avg_bitrate: int = Field(0, ge=0)
    descriptors: List[AnyDescriptor] = Field(default_factory=list)

    @property
    def decoder_specific_info(self) -> Optional["DecoderSpecificInfo"]:
        for d in self.descriptors:
            if isinstance(d, DecoderSpecificInfo):
                return d
        return None


class DecoderSpecificInfo(Descriptor):
    kind: Literal["decoder_specific_info"] = "decoder_specific_info"
    data: bytes = b""


class SLConfigDescriptor(Descriptor):
    """
    predefined: 0 = custom (fields below present), 1 = null SL packet header,
    2 = reserved for MP4 files. The trailing start time stamps of a custom
    configuration are left to the leftover skip.
    """
    kind: Literal["sl_config"] = "sl_config"
    predefined: int = Field(..., ge=0, le=0xFF)
    use_access_unit_start_flag: Optional[bool] = None
    use_access_unit_end_flag: Optional[bool] = None
    use_random_access_point_flag: Optional[bool] = None
    has_random_access_units_only_flag: Optional[bool] = None
    use_padding_flag: Optional[bool] = None
    use_time_stamps_flag: Optional[bool] = None
    use_idle_flag: Optional[bool] = None
    duration_flag: Optional[bool] = None
    timestamp_resolution: Optional[int] = None
    ocr_resolution: Optional[int] = None
    timestamp_length: Optional[int] = None
    ocr_length: Optional[int] = None
    au_length: Optional[int] = None
    instant_bitrate_length: Optional[int] = None
    degradation_priority_length: Optional[int] = None
    au_seq_num_length: Optional[int] = None
    packet_seq_num_length: Optional[int] = None
    time_scale: Optional[int] = None
    access_unit_duration: Optional[int] = None
    composition_unit_duration: Optional[int] = None


AnyDescriptor = Annotated[
    Union[
        OpaqueDescriptor,
        IPIDescriptorPointer,
        ESIDInc,
        ESIDRef,
        RegistrationDescriptor,
        SupplementaryContentIdentification,
        LanguageDescriptor,
        ObjectDescriptor,
        InitialObjectDescriptor,
        ESDescriptor,
        DecoderConfigDescriptor,
        DecoderSpecificInfo,
        SLConfigDescriptor,
    ],
    Field(discriminator="kind"),
]

for _model in (ObjectDescriptor, InitialObjectDescriptor, ESDescriptor, DecoderConfigDescriptor):
    _model.model_rebuild()
