"""Published RFC test vectors."""

from otpcore.hashes import HashAlgorithm

SECRET_SHA1 = b"12345678901234567890"
SECRET_SHA256 = b"12345678901234567890123456789012"
SECRET_SHA512 = b"1234567890123456789012345678901234567890123456789012345678901234"

SECRETS = {
    HashAlgorithm.SHA1: SECRET_SHA1,
    HashAlgorithm.SHA256: SECRET_SHA256,
    HashAlgorithm.SHA512: SECRET_SHA512,
}

# https://www.rfc-editor.org/rfc/rfc4226#appendix-D
HOTP_VECTORS = [
    (0, "755224"),
    (1, "287082"),
    (2, "359152"),
    (3, "969429"),
    (4, "338314"),
    (5, "254676"),
    (6, "287922"),
    (7, "162583"),
    (8, "399871"),
    (9, "520489"),
]

# https://www.rfc-editor.org/rfc/rfc6238#appendix-B (T0 = 0, X = 30, 8 digits)
TOTP_VECTORS = [
    (59, HashAlgorithm.SHA1, "94287082"),
    (59, HashAlgorithm.SHA256, "46119246"),
    (59, HashAlgorithm.SHA512, "90693936"),
    (1111111109, HashAlgorithm.SHA1, "07081804"),
    (1111111109, HashAlgorithm.SHA256, "68084774"),
    (1111111109, HashAlgorithm.SHA512, "25091201"),
    (1111111111, HashAlgorithm.SHA1, "14050471"),
    (1111111111, HashAlgorithm.SHA256, "67062674"),
    (1111111111, HashAlgorithm.SHA512, "99943326"),
    (1234567890, HashAlgorithm.SHA1, "89005924"),
    (1234567890, HashAlgorithm.SHA256, "91819424"),
    (1234567890, HashAlgorithm.SHA512, "93441116"),
    (2000000000, HashAlgorithm.SHA1, "69279037"),
    (2000000000, HashAlgorithm.SHA256, "90698825"),
    (2000000000, HashAlgorithm.SHA512, "38618901"),
    (20000000000, HashAlgorithm.SHA1, "65353130"),
    (20000000000, HashAlgorithm.SHA256, "77737706"),
    (20000000000, HashAlgorithm.SHA512, "47863826"),
]
