"""
errors.py — Exception hierarchy for otpcore.

- InvalidCodeError: candidate code rejected (wrong length or mismatch).
  Both causes share one message so callers learn nothing beyond "invalid".
- RandomSourceError: the secure random source could not supply a secret.
- InvalidConfigurationError: bad secret / counter / period / digits / hash,
  time before T0, malformed base32 or otpauth URI. Subclasses ValueError so
  callers that already catch ValueError keep working.
"""


class OTPError(Exception):
    """Base class for every error raised by otpcore."""


class InvalidCodeError(OTPError):
    def __init__(self, message: str = "Invalid code"):
        super().__init__(message)


class RandomSourceError(OTPError):
    pass


class InvalidConfigurationError(OTPError, ValueError):
    pass
