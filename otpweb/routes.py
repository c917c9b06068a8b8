"""
OTP API ROUTES - FLASK BLUEPRINT

Stateless endpoints over otpcore. The caller sends the Base32 secret with
every request; the server keeps no secrets, counters or used codes.
Window / look-ahead search stays on the caller's side: one request checks
exactly one counter or one time step.

Examples:
curl -X POST http://localhost:5000/api/secret -H "Content-Type: application/json" -d "{}"
curl -X POST http://localhost:5000/api/hotp -H "Content-Type: application/json" \
     -d '{"secret": "GEZDGNBVGY3TQOJQGEZDGNBVGY3TQOJQ", "counter": 1}'
"""

import logging

from flask import Blueprint, current_app, jsonify, request

from otpcore.encoding import decode_secret, generate_base32_secret
from otpcore.errors import InvalidConfigurationError, OTPError, RandomSourceError
from otpcore.hashes import HashAlgorithm
from otpcore.hotp import HOTP
from otpcore.qr import qr_code_data_uri
from otpcore.totp import TOTP

logger = logging.getLogger(__name__)

otp_bp = Blueprint("otp", __name__, url_prefix="/api")


# --- helpers ---------------------------------------------------------------
def _settings():
    return current_app.config["OTP_SETTINGS"]


def _json_object():
    """The request JSON body, or None unless it is an object."""
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else None


def _int(data: dict, key: str, default=None):
    value = data.get(key, default)
    if value is None:
        return None
    if isinstance(value, bool):
        raise InvalidConfigurationError(f"'{key}' must be an integer")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise InvalidConfigurationError(f"'{key}' must be an integer") from None


def _hotp_from(data: dict) -> HOTP:
    return HOTP(
        decode_secret(data["secret"]),
        _int(data, "counter", 0),
        HashAlgorithm.parse(data.get("algorithm", _settings().hotp_algorithm)),
        _int(data, "digits", _settings().digits),
    )


def _totp_from(data: dict) -> TOTP:
    timestamp = data.get("timestamp")
    if timestamp is None:
        timestamp = current_app.config["OTP_CLOCK"]()
    elif isinstance(timestamp, bool) or not isinstance(timestamp, (int, float)):
        raise InvalidConfigurationError("'timestamp' must be Unix seconds")
    return TOTP(
        decode_secret(data["secret"]),
        timestamp,
        _int(data, "t0", 0),
        _int(data, "period", _settings().period),
        HashAlgorithm.parse(data.get("algorithm", _settings().totp_algorithm)),
        _int(data, "digits", _settings().digits),
    )


def _provisioning_uri(data: dict) -> str:
    account = data.get("account", "user@example")
    issuer = data.get("issuer", _settings().issuer)
    if data.get("type", "totp") == "hotp":
        return _hotp_from(data).provisioning_uri(account, issuer)
    # the URI does not depend on the current time
    return _totp_from(dict(data, timestamp=0, t0=0)).provisioning_uri(account, issuer)


# --- error handlers --------------------------------------------------------
@otp_bp.errorhandler(RandomSourceError)
def _random_source_failed(e):
    logger.error("Random source failure: %s", e)
    return jsonify({"error": "Secure random source unavailable"}), 500


@otp_bp.errorhandler(OTPError)
def _otp_error(e):
    return jsonify({"error": str(e)}), 400


# --- endpoints -------------------------------------------------------------
@otp_bp.route("/health", methods=["GET"])
def health():
    return jsonify({"status": "ok"})


@otp_bp.route("/secret", methods=["POST"])
def generate_secret():
    """
    Random Base32 secret sized for the algorithm.

    Body: {"algorithm": "SHA256", "bytes": 32}   (both optional)
    """
    data = _json_object() or {}
    algorithm = HashAlgorithm.parse(data.get("algorithm", _settings().totp_algorithm))
    nbytes = _int(data, "bytes", algorithm.digest_size)
    if nbytes <= 0:
        raise InvalidConfigurationError("'bytes' must be positive")

    secret = generate_base32_secret(nbytes)
    logger.info("Generated %d-bit secret for %s", nbytes * 8, algorithm)
    return jsonify({"secret": secret, "algorithm": algorithm.value})


@otp_bp.route("/hotp", methods=["POST"])
def get_hotp():
    """
    HOTP code for one counter.

    Body: {"secret": "...", "counter": 1, "digits": 6, "algorithm": "SHA1"}
    """
    data = _json_object()
    if not data or "secret" not in data or "counter" not in data:
        return jsonify({"error": "Secret and counter are required"}), 400

    otp = _hotp_from(data)
    return jsonify({"code": otp.generate(), "counter": otp.counter})


@otp_bp.route("/totp", methods=["POST"])
def get_totp():
    """
    TOTP code for `timestamp` (default: now).

    Body: {"secret": "...", "timestamp": 59, "period": 30, "t0": 0, "digits": 8, "algorithm": "SHA256"}
    """
    data = _json_object()
    if not data or "secret" not in data:
        return jsonify({"error": "Secret is required"}), 400

    otp = _totp_from(data)
    return jsonify({
        "code": otp.generate(),
        "counter": otp.counter,
        "remaining": otp.remaining(),
        "period": otp.period,
        "timestamp": otp.timestamp,
    })


@otp_bp.route("/verify/hotp", methods=["POST"])
def verify_hotp_route():
    """
    Body: {"secret": "...", "code": "287082", "counter": 1}

    Output: {"valid": true} or {"valid": false}
    """
    data = _json_object()
    if not data or "secret" not in data or "code" not in data or "counter" not in data:
        return jsonify({"error": "Secret, code and counter are required"}), 400

    return jsonify({"valid": _hotp_from(data).verify(data["code"])})


@otp_bp.route("/verify/totp", methods=["POST"])
def verify_totp_route():
    """
    Body: {"secret": "...", "code": "123456", "timestamp": 1111111109}

    Output: {"valid": true} or {"valid": false}
    """
    data = _json_object()
    if not data or "secret" not in data or "code" not in data:
        return jsonify({"error": "Secret and code are required"}), 400

    return jsonify({"valid": _totp_from(data).verify(data["code"])})


@otp_bp.route("/otpauth_uri", methods=["POST"])
def get_otpauth_uri():
    """
    Body: {"secret": "...", "account": "alice@example.com", "issuer": "MyApp", "type": "totp"}
    """
    data = _json_object()
    if not data or "secret" not in data:
        return jsonify({"error": "Secret is required"}), 400

    return jsonify({"uri": _provisioning_uri(data)})


@otp_bp.route("/qr_code", methods=["POST"])
def get_qr_code():
    """Same body as /otpauth_uri; returns the URI and a PNG data URI."""
    data = _json_object()
    if not data or "secret" not in data:
        return jsonify({"error": "Secret is required"}), 400

    uri = _provisioning_uri(data)
    return jsonify({"uri": uri, "qr_code": qr_code_data_uri(uri)})
