import hashlib
import hmac

import pytest

from otpcore.digits import Digits, check_digits
from otpcore.errors import InvalidConfigurationError
from otpcore.hashes import HashAlgorithm


@pytest.mark.parametrize(
    "algorithm, size",
    [(HashAlgorithm.SHA1, 20), (HashAlgorithm.SHA256, 32), (HashAlgorithm.SHA512, 64)],
)
def test_digest_sizes(algorithm, size):
    assert algorithm.digest_size == size
    assert len(algorithm.hmac(b"key", b"message")) == size


def test_hmac_matches_stdlib():
    expected = hmac.new(b"key", b"message", hashlib.sha256).digest()
    assert HashAlgorithm.SHA256.hmac(b"key", b"message") == expected


@pytest.mark.parametrize("name", ["sha1", "SHA1", "Sha-1", " sha_1 "])
def test_parse_accepts_common_spellings(name):
    assert HashAlgorithm.parse(name) is HashAlgorithm.SHA1


def test_parse_passes_members_through():
    assert HashAlgorithm.parse(HashAlgorithm.SHA512) is HashAlgorithm.SHA512


def test_parse_rejects_unknown():
    with pytest.raises(InvalidConfigurationError):
        HashAlgorithm.parse("md5")


def test_str_is_uri_name():
    assert str(HashAlgorithm.SHA256) == "SHA256"


def test_digits_enum():
    assert Digits.SIX == 6
    assert str(Digits.EIGHT) == "8"
    assert check_digits(Digits.EIGHT) == 8


@pytest.mark.parametrize("bad", [0, 11, -6, "6", 6.0, True])
def test_check_digits_rejects(bad):
    with pytest.raises(InvalidConfigurationError):
        check_digits(bad)
