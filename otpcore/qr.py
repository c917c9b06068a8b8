"""QR code rendering for otpauth URIs, for display in a browser."""

import base64
import io

import qrcode


def qr_code_png(uri: str, box_size: int = 10, border: int = 5) -> bytes:
    qr = qrcode.QRCode(version=1, box_size=box_size, border=border)
    qr.add_data(uri)
    qr.make(fit=True)

    img = qr.make_image(fill_color="black", back_color="white")

    buffer = io.BytesIO()
    img.save(buffer, format="PNG")
    return buffer.getvalue()


def qr_code_data_uri(uri: str) -> str:
    """otpauth URI -> "data:image/png;base64,..." ready for an <img src>."""
    img_str = base64.b64encode(qr_code_png(uri)).decode()
    return f"data:image/png;base64,{img_str}"
