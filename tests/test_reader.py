import json

import pytest

from mpeg4desc.binary.codecs.size_field import encode_size
from mpeg4desc.binary.errors import InsufficientBytes
from mpeg4desc.binary.reader import iter_descriptors, parse_stream, summarize_stream
from mpeg4desc.config import DecodeOptions
from mpeg4desc.models.descriptor import IPIDescriptorPointer
from mpeg4desc.models.stream import DescriptorStream


def frame(tag: int, body: bytes) -> bytes:
    return bytes([tag]) + encode_size(len(body)) + body


GOOD = frame(0x09, b"\x00\x01")
BAD = frame(0x43, b"e")           # language code needs 3 bytes
OTHER = frame(0x50, b"\xde\xad")


def test_parse_stream_in_order():
    stream = parse_stream(GOOD + OTHER + frame(0x43, b"eng"))
    assert [d.kind for d in stream.descriptors] == ["ipi_pointer", "opaque", "language"]
    assert stream.issues == []


def test_strict_mode_raises_first_error():
    with pytest.raises(InsufficientBytes):
        parse_stream(GOOD + BAD + OTHER)


def test_skip_mode_continues_with_siblings():
    stream = parse_stream(GOOD + BAD + OTHER, options=DecodeOptions(on_error="skip"))
    assert [d.kind for d in stream.descriptors] == ["ipi_pointer", "opaque"]
    assert len(stream.issues) == 1
    issue = stream.issues[0]
    assert issue.kind == "insufficient_bytes"
    assert issue.tag == 0x43
    assert issue.offset == len(GOOD)
    assert issue.resume_at == len(GOOD + BAD)


def test_skip_mode_stops_at_broken_header():
    stream = parse_stream(GOOD + b"\x09", options=DecodeOptions(on_error="skip"))
    assert len(stream.descriptors) == 1
    assert stream.issues[0].kind == "truncated_header"
    assert stream.issues[0].resume_at is None


def test_offset_and_file_input(tmp_path):
    path = tmp_path / "descr.bin"
    path.write_bytes(b"\xff\xff\xff" + GOOD)
    out = list(iter_descriptors(path, offset=3))
    assert len(out) == 1 and out[0].start == 3


def test_summary_counts_nested():
    od_header = (1 << 6).to_bytes(2, "big")
    od = frame(0x01, od_header + GOOD + GOOD)
    assert summarize_stream(od + OTHER) == {"object": 1, "ipi_pointer": 2, "opaque": 1}


def test_json_and_model_roundtrip():
    stream = DescriptorStream.from_binary(GOOD + OTHER)
    dumped = json.loads(stream.model_dump_json())
    assert dumped["descriptors"][1]["data"] == "dead"
    assert dumped["descriptors"][0]["kind"] == "ipi_pointer"
    again = DescriptorStream.model_validate(stream.model_dump())
    assert isinstance(again.descriptors[0], IPIDescriptorPointer)
    assert again.find(IPIDescriptorPointer)[0].ipi_es_id == 1
    assert again == stream
