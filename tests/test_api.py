import base64

import pytest

from otpcore.encoding import decode_secret, encode_secret
from otpcore.errors import RandomSourceError

from .vectors import SECRET_SHA1, SECRET_SHA256, SECRET_SHA512

SECRET_B32 = encode_secret(SECRET_SHA1)
SECRET_SHA256_B32 = encode_secret(SECRET_SHA256)


def test_health(client):
    res = client.get("/api/health")
    assert res.status_code == 200
    assert res.get_json() == {"status": "ok"}


def test_cors_header(client):
    res = client.get("/api/health", headers={"Origin": "http://example.com"})
    assert res.headers.get("Access-Control-Allow-Origin") == "*"


def test_generate_secret(client):
    res = client.post("/api/secret", json={})
    assert res.status_code == 200
    body = res.get_json()
    assert body["algorithm"] == "SHA256"
    assert len(decode_secret(body["secret"])) == 32

    res = client.post("/api/secret", json={"algorithm": "sha512"})
    assert len(decode_secret(res.get_json()["secret"])) == 64


def test_generate_secret_random_failure(client, monkeypatch):
    def broken(*args, **kwargs):
        raise RandomSourceError("no entropy")

    monkeypatch.setattr("otpweb.routes.generate_base32_secret", broken)
    res = client.post("/api/secret", json={})
    assert res.status_code == 500
    assert "error" in res.get_json()


def test_hotp(client):
    res = client.post("/api/hotp", json={"secret": SECRET_B32, "counter": 5})
    assert res.status_code == 200
    assert res.get_json() == {"code": "254676", "counter": 5}


def test_hotp_requires_counter(client):
    res = client.post("/api/hotp", json={"secret": SECRET_B32})
    assert res.status_code == 400


def test_totp_with_timestamp(client):
    res = client.post(
        "/api/totp",
        json={"secret": encode_secret(SECRET_SHA512), "timestamp": 59, "digits": 8, "algorithm": "SHA512"},
    )
    body = res.get_json()
    assert res.status_code == 200
    assert body["code"] == "90693936"
    assert body["counter"] == 1
    assert body["remaining"] == 1
    assert body["period"] == 30
    assert body["timestamp"] == 59


def test_totp_uses_app_clock(client):
    # the test app's clock is fixed at 1111111109
    res = client.post("/api/totp", json={"secret": SECRET_SHA256_B32, "digits": 8})
    assert res.get_json()["code"] == "68084774"


def test_totp_before_t0(client):
    res = client.post("/api/totp", json={"secret": SECRET_SHA256_B32, "timestamp": 10, "t0": 100})
    assert res.status_code == 400
    assert "before" in res.get_json()["error"]


def test_verify_hotp(client):
    ok = client.post("/api/verify/hotp", json={"secret": SECRET_B32, "counter": 2, "code": "359152"})
    assert ok.get_json() == {"valid": True}
    bad = client.post("/api/verify/hotp", json={"secret": SECRET_B32, "counter": 2, "code": "359153"})
    assert bad.get_json() == {"valid": False}
    short = client.post("/api/verify/hotp", json={"secret": SECRET_B32, "counter": 2, "code": "35915"})
    assert short.get_json() == {"valid": False}


def test_verify_totp(client):
    payload = {"secret": SECRET_SHA256_B32, "timestamp": 2000000000, "digits": 8}
    assert client.post("/api/verify/totp", json=dict(payload, code="90698825")).get_json() == {"valid": True}
    assert client.post("/api/verify/totp", json=dict(payload, code=90698825)).get_json() == {"valid": False}


@pytest.mark.parametrize(
    "payload",
    [
        {"secret": "not base32!", "counter": 1},
        {"secret": "GEZDGNBV\u00e9", "counter": 1},
        {"secret": 12345, "counter": 1},
        {"secret": SECRET_B32, "counter": -1},
        {"secret": SECRET_B32, "counter": "one"},
        {"secret": SECRET_B32, "counter": 1, "digits": 12},
        {"secret": SECRET_B32, "counter": 1, "algorithm": "md5"},
    ],
)
def test_bad_parameters_are_400(client, payload):
    res = client.post("/api/hotp", json=payload)
    assert res.status_code == 400
    assert "error" in res.get_json()


def test_missing_json_body(client):
    res = client.post("/api/totp", data="nope", content_type="text/plain")
    assert res.status_code == 400


def test_otpauth_uri(client):
    res = client.post(
        "/api/otpauth_uri",
        json={"secret": SECRET_B32, "account": "alice@example.com", "issuer": "ACME", "type": "hotp", "counter": 1},
    )
    assert res.get_json()["uri"] == (
        f"otpauth://hotp/ACME:alice@example.com?secret={SECRET_B32}"
        "&issuer=ACME&algorithm=SHA1&digits=6&counter=1"
    )


def test_otpauth_uri_defaults_to_totp(client):
    res = client.post("/api/otpauth_uri", json={"secret": SECRET_B32, "account": "alice"})
    assert res.get_json()["uri"] == (
        f"otpauth://totp/otp-tool:alice?secret={SECRET_B32}"
        "&issuer=otp-tool&algorithm=SHA256&digits=6"
    )


def test_qr_code(client):
    res = client.post("/api/qr_code", json={"secret": SECRET_B32, "account": "alice", "issuer": "ACME"})
    body = res.get_json()
    assert res.status_code == 200
    assert body["uri"].startswith("otpauth://totp/ACME:alice?")
    prefix = "data:image/png;base64,"
    assert body["qr_code"].startswith(prefix)
    assert base64.b64decode(body["qr_code"][len(prefix):]).startswith(b"\x89PNG")


@pytest.mark.parametrize("url", ["/api/hotp", "/api/totp", "/api/verify/hotp", "/api/otpauth_uri", "/api/qr_code"])
@pytest.mark.parametrize("body", ["secret counter", ["secret", "counter"], 42])
def test_non_object_json_body(client, url, body):
    res = client.post(url, json=body)
    assert res.status_code == 400
    assert "error" in res.get_json()


def test_secret_ignores_non_object_body(client):
    res = client.post("/api/secret", json=["SHA512"])
    assert res.status_code == 200
    assert res.get_json()["algorithm"] == "SHA256"


@pytest.mark.parametrize("labels", [{"account": 5}, {"issuer": ["ACME"]}, {"account": "alice", "issuer": None}])
def test_otpauth_uri_rejects_non_string_labels(client, labels):
    res = client.post("/api/otpauth_uri", json=dict(labels, secret=SECRET_B32))
    assert res.status_code == 400
    assert "must be strings" in res.get_json()["error"]
