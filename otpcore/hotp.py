"""
hotp.py — HOTP engine (RFC 4226).

A HOTP value is immutable: secret, counter, algorithm and digits are fixed at
construction. Use at(counter) / next() to get the instance for another
counter instead of mutating a shared one.

The counter is caller-managed. validate() checks exactly one counter; callers
wanting look-ahead try each counter themselves.
"""

import dataclasses
import logging
import os
from dataclasses import dataclass, field

from .counter import check_counter, encode_counter
from .digits import check_digits
from .errors import InvalidCodeError, InvalidConfigurationError
from .hashes import HashAlgorithm
from .random_source import RandomSource, draw_secret
from .truncation import compute_code, validate_code
from .uri import build_uri

logger = logging.getLogger(__name__)

DEFAULT_DIGITS = 6
DEFAULT_HOTP_ALGORITHM = HashAlgorithm.SHA1


def check_secret(secret) -> bytes:
    """Secrets are opaque, non-empty bytes; they are never case-folded here."""
    if not isinstance(secret, (bytes, bytearray)):
        raise InvalidConfigurationError(
            f"secret must be bytes, got {type(secret).__name__} (decode base32 first)"
        )
    if not secret:
        raise InvalidConfigurationError("secret must not be empty")
    return bytes(secret)


@dataclass(frozen=True)
class HOTP:
    secret: bytes = field(repr=False)
    counter: int = 0
    algorithm: HashAlgorithm = DEFAULT_HOTP_ALGORITHM
    digits: int = DEFAULT_DIGITS

    def __post_init__(self):
        object.__setattr__(self, "secret", check_secret(self.secret))
        object.__setattr__(self, "counter", check_counter(self.counter))
        object.__setattr__(self, "algorithm", HashAlgorithm.parse(self.algorithm))
        object.__setattr__(self, "digits", check_digits(self.digits))

    @classmethod
    def create(
        cls,
        counter: int = 0,
        *,
        algorithm: HashAlgorithm = DEFAULT_HOTP_ALGORITHM,
        digits: int = DEFAULT_DIGITS,
        random_source: RandomSource = os.urandom,
    ) -> "HOTP":
        """
        Build a HOTP with a fresh random secret sized to the digest.

        Raises:
            RandomSourceError: random source failed (no fallback secret)
        """
        algorithm = HashAlgorithm.parse(algorithm)
        secret = draw_secret(algorithm.digest_size, random_source)
        otp = cls(secret, counter, algorithm, digits)
        logger.debug("New HOTP secret (%s, counter=%d)", otp.algorithm, otp.counter)
        return otp

    @property
    def counter_bytes(self) -> bytes:
        """The moving factor as sent to HMAC."""
        return encode_counter(self.counter)

    def generate(self) -> str:
        """HOTP(secret, counter): zero-padded code of length `digits`."""
        return compute_code(self.secret, self.counter, self.algorithm, self.digits)

    def validate(self, candidate: str) -> None:
        """
        Raises InvalidCodeError unless candidate equals generate().

        Length mismatch and wrong code are indistinguishable to the caller.
        """
        validate_code(candidate, self.digits, self.generate)

    def verify(self, candidate: str) -> bool:
        try:
            self.validate(candidate)
        except InvalidCodeError:
            return False
        return True

    def at(self, counter: int) -> "HOTP":
        return dataclasses.replace(self, counter=counter)

    def next(self) -> "HOTP":
        return self.at(self.counter + 1)

    def replace(self, **changes) -> "HOTP":
        return dataclasses.replace(self, **changes)

    def provisioning_uri(self, account: str, issuer: str = "") -> str:
        return build_uri(
            "hotp",
            self.secret,
            account,
            issuer,
            algorithm=self.algorithm,
            digits=self.digits,
            counter=self.counter,
        )
