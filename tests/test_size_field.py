import pytest

from mpeg4desc.binary.codecs.bitcursor import Cursor
from mpeg4desc.binary.codecs.size_field import (
    MAX_SIZE,
    decode_size,
    encode_size,
    size_field_length,
)
from mpeg4desc.binary.errors import MalformedSize, TruncatedHeader


@pytest.mark.parametrize(
    "size,nbytes",
    [(0, 1), (127, 1), (128, 2), (16383, 2), (16384, 3), (2097151, 3), (2097152, 4), (MAX_SIZE, 4)],
)
def test_size_boundaries(size, nbytes):
    raw = encode_size(size)
    assert len(raw) == nbytes == size_field_length(size)
    cur = Cursor(raw + b"\xEE")
    assert decode_size(cur) == (size, nbytes)
    assert cur.tell() == nbytes


def test_known_encodings():
    assert encode_size(0x80) == b"\x81\x00"
    assert encode_size(5, width=4) == b"\x80\x80\x80\x05"


def test_padded_encoding_decodes_to_same_value():
    cur = Cursor(b"\x80\x80\x80\x22")
    assert decode_size(cur) == (0x22, 4)


def test_fifth_size_byte_is_malformed():
    cur = Cursor(b"\x80\x80\x80\x80\x01")
    with pytest.raises(MalformedSize):
        decode_size(cur)


def test_missing_size_byte_is_truncated():
    with pytest.raises(TruncatedHeader):
        decode_size(Cursor(b""))
    # continuation bit set on the last available byte
    with pytest.raises(TruncatedHeader):
        decode_size(Cursor(b"\x81"))


def test_limit_bounds_the_size_field():
    cur = Cursor(b"\x81\x01")
    with pytest.raises(TruncatedHeader):
        decode_size(cur, limit=1)


def test_encode_rejects_out_of_range():
    with pytest.raises(ValueError):
        encode_size(MAX_SIZE + 1)
    with pytest.raises(ValueError):
        encode_size(-1)
    with pytest.raises(ValueError):
        encode_size(200, width=1)
