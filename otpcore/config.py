"""
config.py — Defaults for the CLI and the HTTP adapter.

Sources, later ones win:
1. built-in defaults (6 digits, 30s, SHA1 for HOTP, SHA256 for TOTP)
2. optional JSON file (path argument or $OTP_CONFIG), same keys as OTPSettings
3. environment: OTP_DIGITS, OTP_PERIOD, OTP_HOTP_ALGORITHM,
   OTP_TOTP_ALGORITHM, OTP_ISSUER, OTP_LOG_LEVEL

Secrets are never read from the config file; this module holds parameters only.
"""

import dataclasses
import json
import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .digits import check_digits
from .errors import InvalidConfigurationError
from .hashes import HashAlgorithm
from .hotp import DEFAULT_DIGITS, DEFAULT_HOTP_ALGORITHM
from .totp import DEFAULT_PERIOD, DEFAULT_TOTP_ALGORITHM

logger = logging.getLogger(__name__)

CONFIG_ENV = "OTP_CONFIG"

_ENV_KEYS = {
    "digits": "OTP_DIGITS",
    "period": "OTP_PERIOD",
    "hotp_algorithm": "OTP_HOTP_ALGORITHM",
    "totp_algorithm": "OTP_TOTP_ALGORITHM",
    "issuer": "OTP_ISSUER",
    "log_level": "OTP_LOG_LEVEL",
}

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class OTPSettings:
    digits: int = DEFAULT_DIGITS
    period: int = DEFAULT_PERIOD
    hotp_algorithm: HashAlgorithm = DEFAULT_HOTP_ALGORITHM
    totp_algorithm: HashAlgorithm = DEFAULT_TOTP_ALGORITHM
    issuer: str = "otp-tool"
    log_level: str = "INFO"

    def __post_init__(self):
        object.__setattr__(self, "digits", check_digits(_as_int("digits", self.digits)))
        period = _as_int("period", self.period)
        if period <= 0:
            raise InvalidConfigurationError(f"period must be positive, got {period}")
        object.__setattr__(self, "period", period)
        object.__setattr__(self, "hotp_algorithm", HashAlgorithm.parse(self.hotp_algorithm))
        object.__setattr__(self, "totp_algorithm", HashAlgorithm.parse(self.totp_algorithm))
        level = str(self.log_level).upper()
        if level not in _LOG_LEVELS:
            raise InvalidConfigurationError(f"Unknown log level: {self.log_level!r}")
        object.__setattr__(self, "log_level", level)

    def as_dict(self) -> dict:
        data = dataclasses.asdict(self)
        data["hotp_algorithm"] = self.hotp_algorithm.value
        data["totp_algorithm"] = self.totp_algorithm.value
        return data


def _as_int(name: str, value) -> int:
    if isinstance(value, bool):
        raise InvalidConfigurationError(f"{name} must be an integer, got {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise InvalidConfigurationError(f"{name} must be an integer, got {value!r}") from None


def _load_json(path: str) -> dict:
    """Read the JSON config file; unknown keys are ignored with a warning."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise InvalidConfigurationError(f"Invalid JSON in config file {path}: {e}") from e
    if not isinstance(data, dict):
        raise InvalidConfigurationError(f"Config file {path} must contain a JSON object")

    known = {f.name for f in dataclasses.fields(OTPSettings)}
    unknown = sorted(set(data) - known)
    if unknown:
        logger.warning("Ignoring unknown config keys in %s: %s", path, ", ".join(unknown))
    return {k: v for k, v in data.items() if k in known}


def load_settings(path: Optional[str] = None, environ: Optional[Mapping[str, str]] = None) -> OTPSettings:
    """
    Build OTPSettings from defaults, JSON file and environment.

    Raises:
        FileNotFoundError: explicit config file does not exist
        InvalidConfigurationError: malformed file or value
    """
    if environ is None:
        environ = os.environ

    values = {}
    path = path or environ.get(CONFIG_ENV)
    if path:
        values.update(_load_json(path))
        logger.debug("Loaded OTP settings from %s", path)

    for key, env_name in _ENV_KEYS.items():
        raw = environ.get(env_name)
        if raw is not None and raw.strip():
            values[key] = raw.strip()

    return OTPSettings(**values)
