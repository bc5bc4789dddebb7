"""QR codes linking a printed invoice to its online viewer page.

The code is rendered as a PNG and returned as a data URL so templates can
embed it directly:

    generate_qr_code("6835a26534c7b65c11d73f35")
    # 'data:image/png;base64,iVBORw0KGgo...'

Manual check from the backend directory:

    python -m app.services.qr <invoice-id> [base-url]
"""
import base64
import io
import logging
import sys

import qrcode
from PIL import Image

from app.core.config import settings

logger = logging.getLogger(__name__)

DATA_URL_PREFIX = "data:image/png;base64,"
FALLBACK_SCALE = 4


def build_invoice_url(invoice_id, base_url: str | None = None) -> str:
    """Viewer link for an invoice: ``<base-url>/invoice/<id>``."""
    base = (base_url if base_url is not None else settings.FRONTEND_URL).rstrip("/")
    return f"{base}/invoice/{invoice_id}"


def generate_qr_code(invoice_id, base_url: str | None = None, width: int | None = None) -> str:
    """Return a PNG data URL of a QR code encoding the invoice viewer link.

    The image is exactly ``width`` x ``width`` pixels (QR_CODE_WIDTH by default)
    unless the code has more modules than that; a link that long is drawn at
    FALLBACK_SCALE pixels per module instead so it stays readable.
    Encoding errors from qrcode / Pillow propagate to the caller.
    """
    size = width or settings.QR_CODE_WIDTH
    url = build_invoice_url(invoice_id, base_url)

    qr = qrcode.QRCode(
        error_correction=qrcode.constants.ERROR_CORRECT_M,
        box_size=1,
        border=4,
    )
    qr.add_data(url)
    qr.make(fit=True)

    img = qr.make_image(fill_color="black", back_color="white").get_image()
    if size < img.width:
        logger.warning(
            "QR code for %s needs %d modules, more than %dpx; using scale %d",
            url, img.width, size, FALLBACK_SCALE,
        )
        size = img.width * FALLBACK_SCALE
    img = img.resize((size, size), Image.Resampling.NEAREST)

    buffer = io.BytesIO()
    img.save(buffer, format="PNG")
    logger.debug("QR code generated for %s (%dpx)", url, size)
    return DATA_URL_PREFIX + base64.b64encode(buffer.getvalue()).decode("ascii")


if __name__ == "__main__":
    if len(sys.argv) not in (2, 3):
        print("usage: python -m app.services.qr <invoice-id> [base-url]", file=sys.stderr)
        sys.exit(2)
    print(generate_qr_code(sys.argv[1], sys.argv[2] if len(sys.argv) == 3 else None))
