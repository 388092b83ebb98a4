"""qr.py — QR payloads and PNG rendering for visiting cards.

A card's QR code carries one of two payloads:
  - ``link``   the URL of the hosted card page (small, scans easily, needs the site)
  - ``vcard``  the vCard text itself (works offline, denser code)
"""
from __future__ import annotations

import io
import logging
import re
from pathlib import Path
from urllib.parse import quote

import qrcode
import qrcode.constants
from PIL import Image, ImageDraw

from .config import QR_MODES
from .exporter import disk_name, encode_vcard
from .model import Contact

logger = logging.getLogger(__name__)

CANVAS_SIZE = 220
PADDING = 22
QR_SIZE = 176
LOGO_SIZE = 56
LOGO_MARGIN = 2

_WHITESPACE_RUN = re.compile(r"\s+")


def card_path(contact: Contact) -> str:
    return f"/card/{quote(contact.section, safe='')}/{quote(contact.sn, safe='')}"


def card_url(base_url: str, contact: Contact) -> str:
    return base_url.rstrip("/") + card_path(contact)


def qr_payload(contact: Contact, mode: str, base_url: str = "") -> str:
    if mode not in QR_MODES:
        raise ValueError(f"unknown QR mode {mode!r} (expected one of {', '.join(QR_MODES)})")
    if mode == "vcard":
        return encode_vcard(contact)
    if not base_url:
        raise ValueError("QR mode 'link' needs a base URL (set app_url or pass --base-url)")
    return card_url(base_url, contact)


def qr_filename(contact: Contact) -> str:
    name = _WHITESPACE_RUN.sub("_", contact.name)
    section = _WHITESPACE_RUN.sub("_", contact.section)
    return f"QR_{name}_{section}.png"


def _paste_logo(canvas: Image.Image, logo: Path) -> None:
    try:
        with Image.open(logo) as src:
            mark = src.convert("RGBA").resize((LOGO_SIZE, LOGO_SIZE), Image.Resampling.LANCZOS)
    except OSError as exc:
        logger.warning("QR logo %s could not be read (%s); rendering without it", logo, exc)
        return
    x = y = (CANVAS_SIZE - LOGO_SIZE) // 2
    ImageDraw.Draw(canvas).rectangle(
        (x - LOGO_MARGIN, y - LOGO_MARGIN, x + LOGO_SIZE + LOGO_MARGIN - 1, y + LOGO_SIZE + LOGO_MARGIN - 1),
        fill="white",
    )
    canvas.paste(mark, (x, y), mark)


def render_qr_png(payload: str, logo: Path | None = None) -> bytes:
    """Render ``payload`` as a 220×220 PNG, optionally with a centred logo.

    Error correction is H; the logo covers the centre modules.
    """
    qr = qrcode.QRCode(
        version=None,
        error_correction=qrcode.constants.ERROR_CORRECT_H,
        box_size=10,
        border=0,
    )
    qr.add_data(payload)
    qr.make(fit=True)
    code = qr.make_image(fill_color="black", back_color="white").convert("RGB")

    canvas = Image.new("RGB", (CANVAS_SIZE, CANVAS_SIZE), "white")
    canvas.paste(code.resize((QR_SIZE, QR_SIZE), Image.Resampling.NEAREST), (PADDING, PADDING))
    if logo is not None:
        _paste_logo(canvas, logo)

    buf = io.BytesIO()
    canvas.save(buf, format="PNG")
    return buf.getvalue()


def write_qr(contact: Contact, payload: str, out_dir: Path, logo: Path | None = None) -> Path:
    out_dir.mkdir(parents=True, exist_ok=True)
    path = out_dir / disk_name(qr_filename(contact))
    path.write_bytes(render_qr_png(payload, logo))
    return path
