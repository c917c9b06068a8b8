#!/usr/bin/env python3
"""
cli.py — Command line wrapper around otpcore.

Subcommands:
- secret : print a fresh random Base32 secret
- hotp   : HOTP code for a counter
- totp   : TOTP code for now (or --time), optionally refreshed with --watch
- verify : check a HOTP / TOTP code (exit status 0 = valid, 1 = invalid)
- uri    : print an otpauth:// URI (and optionally write a QR PNG)

The secret comes from --secret or $OTP_SECRET. Defaults for digits, period,
algorithms and issuer come from otpcore.config.load_settings().

eg..:
    python -m otpcore secret --algorithm sha256
    python -m otpcore hotp --secret GEZDGNBVGY3TQOJQGEZDGNBVGY3TQOJQ --counter 1
    python -m otpcore totp --secret JBSWY3DPEHPK3PXP --watch
    python -m otpcore verify totp --secret JBSWY3DPEHPK3PXP --code 123456
    python -m otpcore uri totp --secret JBSWY3DPEHPK3PXP --account alice@example --issuer MyService
"""

import argparse
import logging
import os
import sys
import time

from .config import load_settings
from .encoding import decode_secret, generate_base32_secret
from .errors import OTPError
from .hashes import HashAlgorithm
from .hotp import HOTP
from .log import setup_logging
from .qr import qr_code_png
from .totp import TOTP

logger = logging.getLogger(__name__)

SECRET_ENV = "OTP_SECRET"


def _secret(args) -> bytes:
    secret_b32 = args.secret or os.environ.get(SECRET_ENV)
    if not secret_b32:
        raise OTPError(f"No secret given. Use --secret or set ${SECRET_ENV}.")
    return decode_secret(secret_b32)


def _or_default(value, default):
    return value if value is not None else default


def _hotp(args) -> HOTP:
    return HOTP(
        _secret(args),
        args.counter,
        args.algorithm or args.settings.hotp_algorithm,
        _or_default(args.digits, args.settings.digits),
    )


def _totp(args, now: float = None) -> TOTP:
    if now is None:
        now = args.time if args.time is not None else time.time()
    return TOTP(
        _secret(args),
        now,
        args.t0,
        _or_default(args.period, args.settings.period),
        args.algorithm or args.settings.totp_algorithm,
        _or_default(args.digits, args.settings.digits),
    )


# --- CLI command handlers ---
def cmd_secret(args) -> int:
    algorithm = args.algorithm or args.settings.totp_algorithm
    nbytes = _or_default(args.bytes, algorithm.digest_size)
    if nbytes <= 0:
        raise OTPError("--bytes must be positive")
    print(generate_base32_secret(nbytes))
    logger.debug("Generated %d-bit secret sized for %s", nbytes * 8, algorithm)
    return 0


def cmd_hotp(args) -> int:
    otp = _hotp(args)
    print(f"HOTP({otp.digits}d, counter={otp.counter}): {otp.generate()}")
    return 0


def cmd_totp(args) -> int:
    otp = _totp(args)
    if not args.watch:
        print(f"TOTP ({otp.digits}d): {otp.generate()}  (valid ~{otp.remaining():2d}s)")
        return 0

    print("Press Ctrl+C to quit. Generating TOTP in real time...\n")
    last_code = None
    try:
        while True:
            otp = otp.at(time.time())
            code = otp.generate()
            if code != last_code:
                print(f"TOTP ({otp.digits}d): {code}  (valid ~{otp.remaining():2d}s)")
                last_code = code
            else:
                print(f".. {otp.remaining():2d}s left", end="\r", flush=True)
            time.sleep(1)
    except KeyboardInterrupt:
        print("\nBye.")
    return 0


def cmd_verify_hotp(args) -> int:
    if _hotp(args).verify(args.code):
        print(f"[+] HOTP code is VALID (counter = {args.counter})")
        return 0
    print("[-] HOTP code is INVALID")
    return 1


def cmd_verify_totp(args) -> int:
    if _totp(args).verify(args.code):
        print("[+] TOTP code is VALID")
        return 0
    print("[-] TOTP code is INVALID")
    return 1


def cmd_uri(args) -> int:
    issuer = args.issuer if args.issuer is not None else args.settings.issuer
    if args.kind == "hotp":
        uri = _hotp(args).provisioning_uri(args.account, issuer)
    else:
        # provisioning does not depend on the current time
        uri = _totp(args, now=args.t0).provisioning_uri(args.account, issuer)
    print(uri)
    if args.qr:
        with open(args.qr, "wb") as f:
            f.write(qr_code_png(uri))
        print(f"[*] QR code written to {args.qr}")
    return 0


def cmd_help(args) -> int:
    print("'python -m otpcore -h' for help.")
    return 0


# --- Argparse builder ---
def _add_otp_options(p: argparse.ArgumentParser) -> None:
    p.add_argument("--secret", help=f"Base32 secret (default: ${SECRET_ENV})")
    p.add_argument("--digits", type=int, help="Number of OTP digits")
    p.add_argument("--algorithm", type=HashAlgorithm.parse, help="SHA1, SHA256 or SHA512")


def _add_totp_options(p: argparse.ArgumentParser) -> None:
    p.add_argument("--period", type=int, help="TOTP time step (seconds)")
    p.add_argument("--time", type=int, help="Unix time to generate for (default: now)")
    p.add_argument("--t0", type=int, default=0, help="T0, start of time steps (Unix seconds)")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="otpcore", description="TOTP/HOTP (RFC 6238 / RFC 4226) generator and verifier")
    p.add_argument("--config", help="JSON config file (default: $OTP_CONFIG)")
    p.add_argument("--verbose", action="store_true", help="Verbose output")
    sub = p.add_subparsers(dest="cmd")
    p.set_defaults(func=cmd_help)

    # secret
    ps = sub.add_parser("secret", help="Generate a random Base32 secret")
    ps.add_argument("--algorithm", type=HashAlgorithm.parse, help="Size the secret for this hash")
    ps.add_argument("--bytes", type=int, help="Secret length in bytes (overrides --algorithm)")
    ps.set_defaults(func=cmd_secret)

    # hotp
    ph = sub.add_parser("hotp", help="Generate HOTP code for a specific counter")
    _add_otp_options(ph)
    ph.add_argument("--counter", type=int, required=True)
    ph.set_defaults(func=cmd_hotp)

    # totp
    pt = sub.add_parser("totp", help="Show TOTP code")
    _add_otp_options(pt)
    _add_totp_options(pt)
    pt.add_argument("--watch", action="store_true", help="Refresh every second until Ctrl+C")
    pt.set_defaults(func=cmd_totp)

    # verify
    pv = sub.add_parser("verify", help="Verify an OTP code (TOTP or HOTP)")
    sub_v = pv.add_subparsers(dest="verify_type", required=True)

    pvh = sub_v.add_parser("hotp", help="Verify a HOTP code")
    _add_otp_options(pvh)
    pvh.add_argument("--code", required=True, help="OTP code to verify")
    pvh.add_argument("--counter", type=int, required=True, help="Current HOTP counter")
    pvh.set_defaults(func=cmd_verify_hotp)

    pvt = sub_v.add_parser("totp", help="Verify a TOTP code")
    _add_otp_options(pvt)
    _add_totp_options(pvt)
    pvt.add_argument("--code", required=True, help="OTP code to verify")
    pvt.set_defaults(func=cmd_verify_totp)

    # uri
    pu = sub.add_parser("uri", help="Print otpauth URI for TOTP/HOTP")
    pu.add_argument("kind", choices=("totp", "hotp"))
    _add_otp_options(pu)
    pu.add_argument("--period", type=int, help="TOTP time step (seconds)")
    pu.add_argument("--counter", type=int, default=0, help="HOTP counter")
    pu.add_argument("--account", default="user@example", help="Account label for otpauth URI")
    pu.add_argument("--issuer", help="Issuer label for otpauth URI")
    pu.add_argument("--qr", metavar="PNG", help="Also write a QR code image to this file")
    pu.set_defaults(func=cmd_uri, time=None, t0=0)

    return p


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        args.settings = load_settings(args.config)
        setup_logging("DEBUG" if args.verbose else args.settings.log_level)
        return args.func(args)
    except (OTPError, OSError) as e:
        print(f"[!] {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
