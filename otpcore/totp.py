"""
totp.py — TOTP engine (RFC 6238).

TOTP is HOTP with counter = floor((time - T0) / period). The current time is
supplied by the caller (or read once from an injected clock in create()), so
generation is deterministic and testable.

A time earlier than T0 is rejected with InvalidConfigurationError instead of
wrapping to a huge unsigned counter.
"""

import dataclasses
import logging
import math
import os
from dataclasses import dataclass, field
from datetime import datetime, timezone
from time import time as wall_clock
from typing import Callable, Union

from .counter import MAX_COUNTER
from .digits import check_digits
from .errors import InvalidCodeError, InvalidConfigurationError
from .hashes import HashAlgorithm
from .hotp import DEFAULT_DIGITS, check_secret
from .random_source import RandomSource, draw_secret
from .truncation import compute_code, validate_code
from .uri import build_uri

logger = logging.getLogger(__name__)

DEFAULT_PERIOD = 30
DEFAULT_TOTP_ALGORITHM = HashAlgorithm.SHA256

Instant = Union[int, float, datetime]


def to_unix_seconds(value: Instant) -> int:
    """
    Convert an instant to whole Unix seconds (floor).

    - datetime: naive values are taken as UTC
    - int / float: already Unix seconds
    """
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return math.floor(value.timestamp())
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidConfigurationError(f"time must be a datetime or Unix seconds, got {value!r}")
    if isinstance(value, float) and not math.isfinite(value):
        raise InvalidConfigurationError(f"time must be finite, got {value!r}")
    return math.floor(value)


def time_step(timestamp: int, time_start: int, period: int) -> int:
    """
    counter = floor((timestamp - time_start) / period)

    Raises:
        InvalidConfigurationError: timestamp before time_start, or a counter
            beyond the unsigned 64-bit range
    """
    elapsed = timestamp - time_start
    if elapsed < 0:
        raise InvalidConfigurationError(
            f"time {timestamp} is before time_start {time_start}"
        )
    counter = elapsed // period
    if counter > MAX_COUNTER:
        raise InvalidConfigurationError(f"time step {counter} exceeds 64-bit counter range")
    return counter


@dataclass(frozen=True)
class TOTP:
    secret: bytes = field(repr=False)
    time: Instant
    time_start: Instant = 0
    period: int = DEFAULT_PERIOD
    algorithm: HashAlgorithm = DEFAULT_TOTP_ALGORITHM
    digits: int = DEFAULT_DIGITS

    def __post_init__(self):
        object.__setattr__(self, "secret", check_secret(self.secret))
        object.__setattr__(self, "algorithm", HashAlgorithm.parse(self.algorithm))
        object.__setattr__(self, "digits", check_digits(self.digits))
        if isinstance(self.period, bool) or not isinstance(self.period, int) or self.period <= 0:
            raise InvalidConfigurationError(f"period must be a positive integer, got {self.period!r}")
        # rejects time before T0 up front
        time_step(self.timestamp, to_unix_seconds(self.time_start), self.period)

    @classmethod
    def create(
        cls,
        *,
        time: Instant = None,
        clock: Callable[[], float] = wall_clock,
        time_start: Instant = 0,
        period: int = DEFAULT_PERIOD,
        algorithm: HashAlgorithm = DEFAULT_TOTP_ALGORITHM,
        digits: int = DEFAULT_DIGITS,
        random_source: RandomSource = os.urandom,
    ) -> "TOTP":
        """
        Build a TOTP with a fresh random secret sized to the digest.

        Arguments:
            time: instant to generate for; if None, clock() is read once
            clock: callable returning Unix seconds (time.time by default)
            time_start: T0, Unix epoch by default
            period: time step X in seconds

        Raises:
            RandomSourceError: random source failed (no fallback secret)
        """
        algorithm = HashAlgorithm.parse(algorithm)
        secret = draw_secret(algorithm.digest_size, random_source)
        if time is None:
            time = clock()
        return cls(secret, time, time_start, period, algorithm, digits)

    @property
    def timestamp(self) -> int:
        return to_unix_seconds(self.time)

    @property
    def counter(self) -> int:
        return time_step(self.timestamp, to_unix_seconds(self.time_start), self.period)

    def remaining(self) -> int:
        """Seconds left before the code for this time rolls over."""
        elapsed = self.timestamp - to_unix_seconds(self.time_start)
        return self.period - (elapsed % self.period)

    def generate(self) -> str:
        """Same algorithm as HOTP, fed with the derived time-step counter."""
        counter = self.counter
        logger.debug("TOTP: time=%d, counter=%d, period=%d", self.timestamp, counter, self.period)
        return compute_code(self.secret, counter, self.algorithm, self.digits)

    def validate(self, candidate: str) -> None:
        """Raises InvalidCodeError unless candidate equals generate()."""
        validate_code(candidate, self.digits, self.generate)

    def verify(self, candidate: str) -> bool:
        try:
            self.validate(candidate)
        except InvalidCodeError:
            return False
        return True

    def at(self, time: Instant) -> "TOTP":
        return dataclasses.replace(self, time=time)

    def replace(self, **changes) -> "TOTP":
        return dataclasses.replace(self, **changes)

    def provisioning_uri(self, account: str, issuer: str = "") -> str:
        return build_uri(
            "totp",
            self.secret,
            account,
            issuer,
            algorithm=self.algorithm,
            digits=self.digits,
            period=self.period,
        )
