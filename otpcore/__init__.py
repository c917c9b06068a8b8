"""
otpcore package
===============

HOTP / TOTP one-time passwords per RFC 4226 & RFC 6238.

──────────────────────────────────────────────
Core algorithm
──────────────────────────────────────────────
- HOTP (HMAC-based One-Time Password):
  code = Truncate(HMAC-<hash>(key=secret, msg=counter)) mod 10^digits
  → counter is managed by the caller (event-based tokens).

- TOTP (Time-based One-Time Password):
  HOTP with counter = floor((timestamp - T0) / period)
  → period defaults to 30 seconds, 6 digits, SHA256.

- Dynamic truncation:
  4 bytes taken from the HMAC at offset (last byte & 0x0F), top bit cleared,
  reduced mod 10^digits and zero-padded.

──────────────────────────────────────────────
For other teams
──────────────────────────────────────────────
1. Backend: build one immutable HOTP/TOTP per check and call validate().
   Window / look-ahead search is the caller's job: try each counter with
   otp.at(counter) or each time step with otp.at(time).
2. Frontend: render otpauth URIs with provisioning_uri() + otpcore.qr.
3. API: otpweb.create_app() exposes the same operations over HTTP; it is
   stateless and stores nothing.

──────────────────────────────────────────────
Quick example
──────────────────────────────────────────────
>>> from otpcore import HOTP
>>> HOTP(b"12345678901234567890", counter=1).generate()
'287082'
>>> from otpcore import TOTP
>>> TOTP(b"12345678901234567890123456789012", time=59, digits=8).generate()
'46119246'
"""

from .counter import decode_counter, encode_counter
from .digits import Digits
from .encoding import decode_secret, encode_secret, generate_base32_secret
from .errors import InvalidCodeError, InvalidConfigurationError, OTPError, RandomSourceError
from .hashes import HashAlgorithm
from .hotp import HOTP
from .totp import TOTP
from .truncation import compute_code, dynamic_truncate
from .uri import Provisioning, build_uri, parse_uri

__all__ = [
    "HOTP",
    "TOTP",
    "Digits",
    "HashAlgorithm",
    "OTPError",
    "InvalidCodeError",
    "InvalidConfigurationError",
    "RandomSourceError",
    "Provisioning",
    "build_uri",
    "parse_uri",
    "compute_code",
    "dynamic_truncate",
    "encode_counter",
    "decode_counter",
    "encode_secret",
    "decode_secret",
    "generate_base32_secret",
]

__version__ = "1.0.0"
