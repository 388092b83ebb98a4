"""server.py — local HTTP server for the visiting-card site.

Uses only Python stdlib (http.server) for serving; pages come from pages.py.

Routes (GET and HEAD):
  /                              index of all sections and contacts
  /card                          redirect to /
  /card/<section>/<sn>           the contact's card page
  /card/<section>/<sn>/vcard     vCard download
  /card/<section>/<sn>/qr.png    QR code download
  /static/<file>                 logo, company profile PDF, …
"""
from __future__ import annotations

import logging
import mimetypes
import sys
from http.server import BaseHTTPRequestHandler, HTTPServer
from pathlib import Path
from urllib.parse import quote, unquote, urlparse

from .config import Settings, load_settings
from .exporter import VCARD_MIME, encode_vcard, vcard_filename
from .io import find_contact, load_contacts
from .model import Contact
from .pages import render_card, render_index, render_not_found
from .qr import qr_filename, qr_payload, render_qr_png

logger = logging.getLogger(__name__)

PORT = 8422
DEFAULT_CONF = Path("local") / "visiting-card.conf"


class CardServer(HTTPServer):
    allow_reuse_address = True

    def __init__(self, address, settings: Settings, contacts: list[Contact]):
        super().__init__(address, CardHandler)
        self.settings = settings
        self.contacts = contacts


# ── Request handler ────────────────────────────────────────────────────────────

class CardHandler(BaseHTTPRequestHandler):
    server: CardServer

    def log_message(self, fmt, *args):
        logger.debug("%s - %s", self.address_string(), fmt % args)

    # ── responses ──────────────────────────────────────────────────────────────

    def _send_bytes(self, body: bytes, content_type: str, status: int = 200,
                    filename: str | None = None):
        self.send_response(status)
        self.send_header("Content-Type", content_type)
        self.send_header("Content-Length", str(len(body)))
        if filename:
            # headers are latin-1; the UTF-8 name rides in filename*
            plain = filename.encode("ascii", "replace").decode("ascii").replace("?", "_").replace('"', "_")
            self.send_header(
                "Content-Disposition",
                f"attachment; filename=\"{plain}\"; filename*=UTF-8''{quote(filename)}",
            )
        self.end_headers()
        if not self.head_only:
            self.wfile.write(body)

    def _send_html(self, html: str, status: int = 200):
        self._send_bytes(html.encode("utf-8"), "text/html; charset=utf-8", status)

    def _send_text(self, text: str, status: int):
        self._send_bytes(text.encode("utf-8"), "text/plain; charset=utf-8", status)

    def _redirect(self, location: str, status: int):
        self.send_response(status)
        self.send_header("Location", location)
        self.send_header("Content-Length", "0")
        self.end_headers()

    def _send_static(self, name: str):
        settings = self.server.settings
        base = settings.resolve(settings.static_dir).resolve()
        target = (base / name).resolve()
        if not target.is_relative_to(base) or not target.is_file():
            self._send_text("Not found", 404)
            return
        mime, _ = mimetypes.guess_type(str(target))
        self._send_bytes(target.read_bytes(), mime or "application/octet-stream")

    # ── routing ────────────────────────────────────────────────────────────────

    def _origin(self) -> str:
        host = self.headers.get("Host") or "%s:%s" % self.server.server_address[:2]
        return f"http://{host}"

    def _wrong_host(self) -> bool:
        prod = self.server.settings.production_host
        host = self.headers.get("Host") or ""
        return bool(prod) and bool(host) and host != prod

    def do_GET(self):
        self.head_only = False
        self._route()

    def do_HEAD(self):
        self.head_only = True
        self._route()

    def _route(self):
        settings = self.server.settings
        if self._wrong_host():
            self._redirect(f"https://{settings.production_host}{self.path}", 308)
            return

        path = urlparse(self.path).path
        if path in ("/", "/index.html"):
            self._send_html(render_index(self.server.contacts, settings))
        elif path in ("/card", "/card/"):
            self._redirect("/", 307)
        elif path.startswith("/static/"):
            self._send_static(unquote(path[len("/static/"):]))
        elif path.startswith("/card/"):
            self._card_route(path.split("/")[2:])
        else:
            self._send_text("Not found", 404)

    def _card_route(self, parts: list[str]):
        settings = self.server.settings
        if len(parts) not in (2, 3) or (len(parts) == 3 and parts[2] not in ("vcard", "qr.png")):
            self._send_text("Not found", 404)
            return

        contact = find_contact(self.server.contacts, parts[0], parts[1])
        if contact is None:
            self._send_html(render_not_found(settings), 404)
            return

        if len(parts) == 2:
            self._send_html(render_card(contact, settings))
        elif parts[2] == "vcard":
            self._send_bytes(encode_vcard(contact).encode("utf-8"), VCARD_MIME,
                             filename=vcard_filename(contact))
        else:
            try:
                payload = qr_payload(contact, settings.qr_mode, settings.app_url or self._origin())
            except ValueError as exc:
                self._send_text(str(exc), 500)
                return
            png = render_qr_png(payload, settings.resolve(settings.logo))
            self._send_bytes(png, "image/png", filename=qr_filename(contact))


# ── Entry point ────────────────────────────────────────────────────────────────

def make_server(settings: Settings, contacts: list[Contact],
                host: str = "127.0.0.1", port: int = PORT) -> CardServer:
    return CardServer((host, port), settings, contacts)


def serve(settings: Settings, contacts: list[Contact],
          host: str = "127.0.0.1", port: int = PORT) -> None:
    server = make_server(settings, contacts, host, port)
    print(f"\n  http://{host}:{server.server_address[1]}\n")
    print("  Press Ctrl-C to stop\n")
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        print("\n  Bye.\n")
    finally:
        server.server_close()


def main(conf_path: Path = DEFAULT_CONF, host: str = "127.0.0.1", port: int = PORT) -> None:
    settings = load_settings(conf_path)
    contacts_file = settings.resolve(settings.contacts_file)

    # ── Startup diagnostics ────────────────────────────────────────────────────
    print("\n  Digital Visiting Card")
    print(f"  Workspace : {settings.root}")
    print(f"  Contacts  : {contacts_file}")
    print(f"  QR mode   : {settings.qr_mode}")

    try:
        contacts = load_contacts(contacts_file)
    except (OSError, ValueError) as exc:
        # json.JSONDecodeError is a ValueError
        print(f"\n  Could not load contacts: {exc}\n", file=sys.stderr)
        sys.exit(2)
    print(f"  Loaded    : {len(contacts)} contact(s)")

    serve(settings, contacts, host, port)


if __name__ == "__main__":
    main()
