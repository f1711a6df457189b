from __future__ import annotations

import io

import qrcode


def render_token_png(scan_token: str, *, box_size: int = 10, border: int = 2) -> bytes:
    """PNG image of the QR code an employee scans at the time clock."""

    qr = qrcode.QRCode(
        version=1,
        error_correction=qrcode.constants.ERROR_CORRECT_L,
        box_size=box_size,
        border=border,
    )
    qr.add_data(scan_token)
    qr.make(fit=True)

    img = qr.make_image(fill_color="black", back_color="white")

    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()
