import pytest

from mpeg4desc.binary.codecs.bitcursor import Cursor
from mpeg4desc.binary.codecs.envelope import UNBOUNDED, read_envelope
from mpeg4desc.binary.codecs.size_field import encode_size
from mpeg4desc.binary.errors import CallerContractViolation, InsufficientBytes, TruncatedHeader


def test_header_fields():
    data = b"\x00\x00" + b"\x09" + encode_size(300) + bytes(300)
    cur = Cursor(data)
    cur.seek(2)
    env = read_envelope(cur)
    assert env.tag == 0x09
    assert env.header_size == 3
    assert env.body_size == 300
    assert env.start_bitpos == 16
    assert env.start == 2
    assert env.end == 2 + 3 + 300
    assert cur.tell() == env.body_start == 5


def test_remaining_and_skip_from_any_point():
    cur = Cursor(b"\x20\x06" + b"ABCDEF" + b"\x21\x00")
    env = read_envelope(cur)
    assert env.remaining_bytes(cur) == 6
    cur.take(2)
    assert env.remaining_bytes(cur) == 4
    env.skip_remaining(cur)
    assert cur.tell() == 8
    assert env.remaining_bytes(cur) == 0
    # no-op at the end
    env.skip_remaining(cur)
    assert cur.tell() == 8


def test_skip_lands_on_byte_boundary_after_bit_reads():
    cur = Cursor(b"\x20\x03\xff\xff\xff\x01")
    env = read_envelope(cur)
    cur.bits(3)
    env.skip_remaining(cur)
    assert cur.tell_bits() == 5 * 8


def test_body_scope_skips_on_error():
    cur = Cursor(b"\x20\x04" + b"\x00" * 4 + b"\x20\x00")
    env = read_envelope(cur)
    with pytest.raises(InsufficientBytes):
        with env.body(cur):
            cur.u8()
            env.need(cur, 10, "field")
    assert cur.tell() == 6


def test_zero_size_is_unbounded_by_default():
    cur = Cursor(b"\x20\x00\x01\x02")
    env = read_envelope(cur)
    assert env.unbounded
    assert env.end is None
    assert env.remaining_bytes(cur) is UNBOUNDED
    assert env.available(cur) == 2
    env.skip_remaining(cur)
    assert cur.tell() == 2


def test_zero_size_as_empty_body():
    cur = Cursor(b"\x20\x00\x01\x02")
    env = read_envelope(cur, zero_size_unbounded=False)
    assert not env.unbounded
    assert env.remaining_bytes(cur) == 0
    assert env.available(cur) == 0


def test_declared_end_clamped_to_limit():
    # body claims 10 bytes, caller allows only 4 after the header
    cur = Cursor(b"\x20\x0a" + bytes(10))
    env = read_envelope(cur, limit=6)
    assert env.remaining_bytes(cur) == 10
    assert env.available(cur) == 4
    env.skip_remaining(cur)
    assert cur.tell() == 6


def test_truncated_after_tag():
    cur = Cursor(b"\x09")
    with pytest.raises(TruncatedHeader) as info:
        read_envelope(cur)
    assert info.value.tag == 0x09


def test_empty_buffer_is_truncated():
    with pytest.raises(TruncatedHeader):
        read_envelope(Cursor(b""))


def test_unaligned_start_is_a_caller_bug():
    cur = Cursor(b"\x09\x02\x00\x01")
    cur.skip_bits(4)
    with pytest.raises(CallerContractViolation):
        read_envelope(cur)
