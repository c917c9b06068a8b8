"""
counter.py — Moving-factor codec (RFC 4226 §5.2).

The counter is an unsigned 64-bit integer sent to HMAC as 8 bytes, big-endian.
"""

import struct

from .errors import InvalidConfigurationError

COUNTER_BYTES = 8
MAX_COUNTER = 2 ** 64 - 1


def check_counter(counter) -> int:
    if isinstance(counter, bool) or not isinstance(counter, int):
        raise InvalidConfigurationError(f"counter must be an integer, got {counter!r}")
    if not 0 <= counter <= MAX_COUNTER:
        raise InvalidConfigurationError(f"counter out of unsigned 64-bit range: {counter}")
    return counter


def encode_counter(counter: int) -> bytes:
    """
    Convert counter to 8-byte big-endian, as RFC 4226 requires.

    Example: encode_counter(1) -> b'\\x00\\x00\\x00\\x00\\x00\\x00\\x00\\x01'
    """
    return struct.pack(">Q", check_counter(counter))


def decode_counter(data: bytes) -> int:
    """Inverse of encode_counter."""
    if len(data) != COUNTER_BYTES:
        raise InvalidConfigurationError(f"counter must be {COUNTER_BYTES} bytes, got {len(data)}")
    return struct.unpack(">Q", data)[0]
