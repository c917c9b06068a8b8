"""
truncation.py — Dynamic truncation (RFC 4226 §5.3-5.4) and code comparison.

This is the algorithm shared by HOTP and TOTP:

    digest = HMAC-<hash>(secret, counter as 8 bytes big-endian)
    dbc    = 31-bit integer taken from digest at offset (last byte & 0x0F)
    code   = dbc % 10^digits, zero-padded to exactly `digits` characters

Security note:
- codes are always compared with hmac.compare_digest (constant-time), never `==`.
"""

import hmac
import logging

from .counter import encode_counter
from .errors import InvalidCodeError
from .hashes import HashAlgorithm

logger = logging.getLogger(__name__)


def dynamic_truncate(hmac_digest: bytes) -> int:
    """
    Apply RFC 4226 dynamic truncation.

    - offset = last_byte & 0x0F  (0..15, always in range: shortest digest is 20 bytes)
    - take 4 bytes from offset, clear the MSB of the first (0x7F)
    - return the 31-bit unsigned integer

    Arguments:
        hmac_digest: HMAC digest (SHA1 -> 20 bytes, SHA256 -> 32, SHA512 -> 64)
    """
    offset = hmac_digest[-1] & 0x0F
    return (
        ((hmac_digest[offset] & 0x7F) << 24)
        | ((hmac_digest[offset + 1] & 0xFF) << 16)
        | ((hmac_digest[offset + 2] & 0xFF) << 8)
        | (hmac_digest[offset + 3] & 0xFF)
    )


def render_code(value: int, digits: int) -> str:
    """Reduce value modulo 10^digits and zero-pad it to `digits` characters."""
    return str(value % (10 ** digits)).zfill(digits)


def compute_code(secret: bytes, counter: int, hash: HashAlgorithm, digits: int) -> str:
    """
    Compute the OTP for one moving factor.

    Steps:
    1. message = 8-byte big-endian counter
    2. digest = HMAC-<hash>(secret, message)
    3. dbc = dynamic_truncate(digest)
    4. render dbc as a `digits`-wide decimal string

    Arguments:
        secret: raw key bytes (not base32)
        counter: moving factor, 0 <= counter < 2**64
        hash: HashAlgorithm
        digits: code length

    Returns:
        str: zero-padded code, e.g. "000042"
    """
    digest = hash.hmac(secret, encode_counter(counter))
    logger.debug("HMAC-%s over counter=%d (%d-byte digest)", hash, counter, len(digest))
    return render_code(dynamic_truncate(digest), digits)


def codes_match(candidate, expected: str) -> bool:
    """
    Constant-time comparison of a candidate code with the expected one.

    Non-string candidates never match. Both sides are compared as UTF-8 bytes
    so non-ASCII input does not make compare_digest raise.
    """
    if not isinstance(candidate, str):
        return False
    return hmac.compare_digest(candidate.encode("utf-8"), expected.encode("utf-8"))


def validate_code(candidate, digits: int, generate) -> None:
    """
    Check a candidate code against generate().

    Raises InvalidCodeError when the length differs from `digits` or the
    constant-time comparison fails; both causes raise the same error.
    Errors from generate() propagate unchanged.
    """
    if not isinstance(candidate, str) or len(candidate) != digits:
        raise InvalidCodeError()
    if not codes_match(candidate, generate()):
        raise InvalidCodeError()
