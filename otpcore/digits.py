"""Digit counts for generated codes."""

import enum

from .errors import InvalidConfigurationError

# 31-bit truncated value (max 2147483647) fills at most 10 decimal digits
MIN_DIGITS = 1
MAX_DIGITS = 10


class Digits(enum.IntEnum):
    SIX = 6
    EIGHT = 8

    def __str__(self) -> str:
        return str(self.value)


def check_digits(digits) -> int:
    """
    Return digits as a plain int, or raise InvalidConfigurationError.

    Accepts Digits members and any int in MIN_DIGITS..MAX_DIGITS.
    """
    if isinstance(digits, bool) or not isinstance(digits, int):
        raise InvalidConfigurationError(f"digits must be an integer, got {digits!r}")
    if not MIN_DIGITS <= digits <= MAX_DIGITS:
        raise InvalidConfigurationError(
            f"digits must be between {MIN_DIGITS} and {MAX_DIGITS}, got {digits}"
        )
    return int(digits)
