import base64

from otpcore.qr import qr_code_data_uri, qr_code_png

PNG_MAGIC = b"\x89PNG\r\n\x1a\n"
URI = "otpauth://totp/ACME:alice@example.com?secret=JBSWY3DPEHPK3PXP&issuer=ACME&algorithm=SHA1&digits=6"


def test_qr_code_png():
    assert qr_code_png(URI).startswith(PNG_MAGIC)


def test_qr_code_data_uri():
    data_uri = qr_code_data_uri(URI)
    prefix = "data:image/png;base64,"
    assert data_uri.startswith(prefix)
    assert base64.b64decode(data_uri[len(prefix):]).startswith(PNG_MAGIC)
