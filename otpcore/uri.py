"""
uri.py — otpauth:// provisioning URIs (Key Uri Format).

    otpauth://totp/{issuer}:{account}?secret=...&issuer=...&algorithm=...&digits=...[&period=...]
    otpauth://hotp/{issuer}:{account}?secret=...&issuer=...&algorithm=...&digits=...&counter=...

Label and query values are percent-encoded; ':' between issuer and account
stays literal.
"""

import logging
from time import time as wall_clock
from typing import Callable, NamedTuple, Optional
from urllib.parse import parse_qs, quote, unquote, urlencode, urlparse

from .encoding import decode_secret, encode_secret
from .errors import InvalidConfigurationError
from .hashes import HashAlgorithm

logger = logging.getLogger(__name__)

OTP_TYPES = ("hotp", "totp")
URI_DEFAULT_PERIOD = 30


class Provisioning(NamedTuple):
    otp: object
    account: str
    issuer: str


def build_uri(
    kind: str,
    secret: bytes,
    account: str,
    issuer: str = "",
    algorithm: HashAlgorithm = HashAlgorithm.SHA1,
    digits: int = 6,
    counter: Optional[int] = None,
    period: Optional[int] = None,
) -> str:
    """
    Build an otpauth URI for importing into authenticator apps.

    Arguments:
        kind: "totp" or "hotp"
        secret: raw secret bytes (Base32-encoded here, no padding)
        account: account label (e.g. 'alice@example.com')
        issuer: issuer label (e.g. 'MyService'); omitted when empty
        algorithm: HashAlgorithm
        digits: code length
        counter: HOTP only, defaults to 0
        period: TOTP only, written when not 30
    """
    kind = kind.lower()
    if kind not in OTP_TYPES:
        raise InvalidConfigurationError(f"Unknown OTP type: {kind!r}")
    if not isinstance(account, str) or not isinstance(issuer, str):
        raise InvalidConfigurationError("account and issuer must be strings")

    label = quote(account, safe="@")
    if issuer:
        label = f"{quote(issuer, safe='@')}:{label}"

    params = [("secret", encode_secret(secret))]
    if issuer:
        params.append(("issuer", issuer))
    params.append(("algorithm", HashAlgorithm.parse(algorithm).value))
    params.append(("digits", str(digits)))
    if kind == "hotp":
        params.append(("counter", str(counter or 0)))
    elif period is not None and period != URI_DEFAULT_PERIOD:
        params.append(("period", str(period)))

    return f"otpauth://{kind}/{label}?{urlencode(params, quote_via=quote, safe='@')}"


def _int_param(query: dict, name: str, default: int) -> int:
    raw = query.get(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        raise InvalidConfigurationError(f"Invalid {name} in otpauth URI: {raw!r}") from None


def parse_uri(uri: str, clock: Callable[[], float] = wall_clock) -> Provisioning:
    """
    Parse an otpauth URI back into a HOTP / TOTP instance plus its labels.

    - algorithm defaults to SHA1 and digits to 6 when absent (Key Uri Format)
    - TOTP instances get their time from clock()

    Raises:
        InvalidConfigurationError: wrong scheme / type, missing or bad secret
    """
    from .hotp import HOTP
    from .totp import TOTP

    parsed = urlparse(uri)
    if parsed.scheme != "otpauth":
        raise InvalidConfigurationError(f"Invalid scheme: {parsed.scheme!r}")
    kind = parsed.netloc.lower()
    if kind not in OTP_TYPES:
        raise InvalidConfigurationError(f"Unknown OTP type: {parsed.netloc!r}")

    query = {k: v[0] for k, v in parse_qs(parsed.query).items()}
    if "secret" not in query:
        raise InvalidConfigurationError("otpauth URI has no secret")
    secret = decode_secret(query["secret"])

    label = unquote(parsed.path.lstrip("/"))
    if ":" in label:
        label_issuer, account = label.split(":", 1)
    else:
        label_issuer, account = "", label
    issuer = query.get("issuer", label_issuer)

    algorithm = HashAlgorithm.parse(query.get("algorithm", "SHA1"))
    digits = _int_param(query, "digits", 6)

    if kind == "hotp":
        otp = HOTP(secret, _int_param(query, "counter", 0), algorithm, digits)
    else:
        period = _int_param(query, "period", URI_DEFAULT_PERIOD)
        otp = TOTP(secret, clock(), 0, period, algorithm, digits)

    logger.debug("Parsed otpauth %s URI for account %r", kind, account)
    return Provisioning(otp, account.strip(), issuer)
