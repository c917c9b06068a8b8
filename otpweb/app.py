"""
app.py — Flask application factory for the OTP HTTP API.

- CORS enabled so a separate frontend can call the API
- all routes live in the `otp` blueprint under /api (routes.py)
- settings come from otpcore.config; the clock is injectable for tests

Run locally:
    python -m otpweb.app          # http://localhost:5000
"""

import logging
import os
from time import time as wall_clock

from flask import Flask
from flask_cors import CORS

from otpcore.config import load_settings
from otpcore.log import setup_logging

from .routes import otp_bp

logger = logging.getLogger(__name__)


def create_app(settings=None, clock=wall_clock) -> Flask:
    """
    Build the Flask app.

    Arguments:
        settings: OTPSettings; load_settings() when None
        clock: callable returning Unix seconds, used when a request has no timestamp
    """
    app = Flask(__name__)
    app.config["OTP_SETTINGS"] = settings or load_settings()
    app.config["OTP_CLOCK"] = clock

    CORS(app, origins="*", send_wildcard=True)
    app.register_blueprint(otp_bp)

    logger.debug("OTP API ready with settings %s", app.config["OTP_SETTINGS"].as_dict())
    return app


def main() -> None:
    app = create_app()
    setup_logging(app.config["OTP_SETTINGS"].log_level)
    app.run(host=os.environ.get("HOST", "0.0.0.0"), port=int(os.environ.get("PORT", 5000)))


if __name__ == "__main__":
    main()
