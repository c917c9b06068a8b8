import pytest

from otpcore.config import OTPSettings
from otpweb import create_app

FIXED_NOW = 1111111109


@pytest.fixture(autouse=True)
def _clean_otp_env(monkeypatch):
    for key in (
        "OTP_CONFIG",
        "OTP_SECRET",
        "OTP_DIGITS",
        "OTP_PERIOD",
        "OTP_HOTP_ALGORITHM",
        "OTP_TOTP_ALGORITHM",
        "OTP_ISSUER",
        "OTP_LOG_LEVEL",
    ):
        monkeypatch.delenv(key, raising=False)


@pytest.fixture()
def app():
    app = create_app(settings=OTPSettings(), clock=lambda: FIXED_NOW)
    app.config.update(TESTING=True)
    return app


@pytest.fixture()
def client(app):
    return app.test_client()
