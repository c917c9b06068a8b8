"""
hashes.py — Hash provider for HOTP / TOTP.

Maps each HashAlgorithm to its hashlib constructor once, in a fixed table.
RFC 4226 uses SHA1; RFC 6238 also allows SHA256 and SHA512.
"""

import enum
import hashlib
import hmac

from .errors import InvalidConfigurationError


class HashAlgorithm(enum.Enum):
    SHA1 = "SHA1"
    SHA256 = "SHA256"
    SHA512 = "SHA512"

    def __str__(self) -> str:
        return self.value

    @property
    def digestmod(self):
        """hashlib constructor, usable as hmac.new(..., digestmod)."""
        return _DIGESTMODS[self]

    @property
    def digest_size(self) -> int:
        """Digest length in bytes: 20 / 32 / 64."""
        return _DIGEST_SIZES[self]

    def hmac(self, key: bytes, message: bytes) -> bytes:
        """
        Compute HMAC(key, message) with this hash.

        Arguments:
            key: raw secret bytes
            message: message bytes (the 8-byte moving factor for OTP)
        """
        return hmac.new(key, message, self.digestmod).digest()

    @classmethod
    def parse(cls, name) -> "HashAlgorithm":
        """
        Resolve a name such as "sha1", "SHA-256" or "Sha512".

        Raises:
            InvalidConfigurationError: unknown algorithm
        """
        if isinstance(name, cls):
            return name
        key = str(name).strip().upper().replace("-", "").replace("_", "")
        try:
            return cls(key)
        except ValueError:
            raise InvalidConfigurationError(f"Unsupported hash algorithm: {name!r}") from None


_DIGESTMODS = {
    HashAlgorithm.SHA1: hashlib.sha1,
    HashAlgorithm.SHA256: hashlib.sha256,
    HashAlgorithm.SHA512: hashlib.sha512,
}

_DIGEST_SIZES = {alg: mod().digest_size for alg, mod in _DIGESTMODS.items()}
