"""
encoding.py — Base32 text form of raw secrets.

Authenticator apps (Google Authenticator, Authy, ...) exchange secrets as
RFC 4648 base32. The OTP algorithm itself only ever sees raw bytes.

- encode_secret: upper case, padding stripped unless asked for
- decode_secret: case-insensitive, tolerates missing padding, spaces, dashes
"""

import base64
import binascii
import os

from .errors import InvalidConfigurationError
from .random_source import RandomSource, draw_secret

SECRET_BYTES = 20           # 160-bit secret (RFC 4226 recommendation)


def encode_secret(secret: bytes, padding: bool = False) -> str:
    """
    Base32-encode raw secret bytes.

    Arguments:
        secret: raw key bytes
        padding: keep trailing '=' (HOTP provisioning sometimes does)
    """
    b32 = base64.b32encode(secret).decode("ascii")
    return b32 if padding else b32.rstrip("=")


def decode_secret(secret_b32: str) -> bytes:
    """
    Base32-decode a secret as typed or scanned by a user.

    Raises:
        InvalidConfigurationError: not valid base32, or empty
    """
    if not isinstance(secret_b32, str):
        raise InvalidConfigurationError("Base32 secret must be a string")
    cleaned = "".join(secret_b32.split()).replace("-", "").rstrip("=")
    if not cleaned:
        raise InvalidConfigurationError("Empty Base32 secret")
    cleaned += "=" * (-len(cleaned) % 8)
    try:
        return base64.b32decode(cleaned, casefold=True)
    except (binascii.Error, ValueError) as e:
        # non-ASCII text raises a plain ValueError
        raise InvalidConfigurationError("Invalid Base32 secret") from e


def generate_base32_secret(nbytes: int = SECRET_BYTES, random_source: RandomSource = os.urandom) -> str:
    """
    Random secret, returned Base32 without padding (e.g. "JBSWY3DPEHPK3PXP...").

    Raises:
        RandomSourceError: random source failed
    """
    return encode_secret(draw_secret(nbytes, random_source))
