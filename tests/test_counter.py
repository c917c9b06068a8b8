import pytest

from otpcore.counter import MAX_COUNTER, decode_counter, encode_counter
from otpcore.errors import InvalidConfigurationError


def test_encode_is_big_endian_8_bytes():
    assert encode_counter(0) == b"\x00" * 8
    assert encode_counter(1) == b"\x00\x00\x00\x00\x00\x00\x00\x01"
    assert encode_counter(0x0102030405060708) == bytes([1, 2, 3, 4, 5, 6, 7, 8])
    assert encode_counter(MAX_COUNTER) == b"\xff" * 8


def test_decode_is_inverse():
    for value in (0, 1, 255, 256, 1234567890, MAX_COUNTER):
        assert decode_counter(encode_counter(value)) == value


@pytest.mark.parametrize("bad", [-1, MAX_COUNTER + 1, 1.5, "1", None])
def test_encode_rejects_out_of_range(bad):
    with pytest.raises(InvalidConfigurationError):
        encode_counter(bad)


def test_decode_rejects_wrong_length():
    with pytest.raises(InvalidConfigurationError):
        decode_counter(b"\x00" * 7)
