"""pages.py — HTML for the visiting-card site.

Pages are small enough to build as strings; every value taken from the
dataset or config goes through ``_e`` before it reaches the markup.
"""
from __future__ import annotations

from html import escape
from urllib.parse import quote

from .config import Settings
from .exporter import looks_like_email
from .io import contacts_in_section, list_sections
from .model import Contact
from .qr import card_path

_STYLE = """
body{margin:0;font-family:system-ui,sans-serif;background:#0f172a;color:#e2e8f0}
main{max-width:42rem;margin:0 auto;padding:2rem 1rem}
a{color:#6ee7b7}
.card{border:1px solid #ffffff1a;border-radius:1rem;background:#ffffff0d;padding:1.5rem;margin-top:1.5rem}
.section{font-size:.75rem;text-transform:uppercase;letter-spacing:.08em;color:#34d399}
.muted{color:#94a3b8}
.row{display:block;margin:.5rem 0;padding:.75rem 1rem;border-radius:.75rem;background:#0000004d}
.button{display:block;text-align:center;padding:.75rem;border-radius:.75rem;background:#10b981;color:#020617;font-weight:600;text-decoration:none}
footer{margin-top:2rem;text-align:center;font-size:.75rem;color:#64748b}
"""


def _e(value: str) -> str:
    return escape(value or "", quote=True)


def _layout(title: str, body: str, settings: Settings, description: str = "") -> str:
    meta = f'<meta name="description" content="{_e(description)}">' if description else ""
    return (
        "<!DOCTYPE html>\n"
        '<html lang="en"><head><meta charset="utf-8">'
        '<meta name="viewport" content="width=device-width, initial-scale=1">'
        f"{meta}"
        f"<title>{_e(title)}</title><style>{_STYLE}</style></head>"
        f"<body><main>{body}"
        f"<footer>&copy; {_e(settings.company_name)} &middot; Digital Visiting Card</footer>"
        "</main></body></html>"
    )


def _header(settings: Settings) -> str:
    return (
        f'<a href="{_e(settings.company_website)}" target="_blank" rel="noopener noreferrer">'
        f"<strong>{_e(settings.company_name)}</strong></a>"
        '<div class="muted">Visit company website &rarr;</div>'
    )


def page_title(contact: Contact | None, settings: Settings) -> str:
    if contact is None:
        return "Digital Visiting Card"
    return f"{contact.name} | {contact.title} | {settings.company_name}"


def page_description(contact: Contact, settings: Settings) -> str:
    return (
        f"Digital visiting card for {contact.name}, {contact.title} at {contact.company}. "
        f"{settings.company_name} - {settings.company_tagline}"
    )


# ── Index ──────────────────────────────────────────────────────────────────────

def render_index(contacts: list[Contact], settings: Settings) -> str:
    parts = [_header(settings), "<h1>Digital Visiting Cards</h1>"]
    if not contacts:
        parts.append('<p class="muted">No contacts in the dataset yet.</p>')
    for section in list_sections(contacts):
        parts.append(f'<div class="card"><div class="section">{_e(section)}</div><ul>')
        for c in contacts_in_section(contacts, section):
            path = card_path(c)
            parts.append(
                f'<li><a href="{_e(path)}">{_e(c.name)}</a> '
                f'<span class="muted">{_e(c.title)}</span> &middot; '
                f'<a href="{_e(path)}/qr.png">QR</a> &middot; '
                f'<a href="{_e(path)}/vcard">vCard</a></li>'
            )
        parts.append("</ul></div>")
    return _layout("Digital Visiting Card", "".join(parts), settings)


# ── Card page ──────────────────────────────────────────────────────────────────

def _contact_rows(c: Contact) -> str:
    rows: list[str] = []
    if c.phone_primary:
        rows.append(
            f'<a class="row" href="tel:{_e(quote(c.phone_primary, safe="+"))}">'
            f"<strong>Mobile</strong> {_e(c.phone_primary)}</a>"
        )
    if c.phone_secondary:
        rows.append(
            f'<a class="row" href="tel:{_e(quote(c.phone_secondary, safe="+"))}">'
            f"<strong>Office</strong> {_e(c.phone_secondary)}</a>"
        )
    if looks_like_email(c.email):
        rows.append(
            f'<a class="row" href="mailto:{_e(c.email)}"><strong>Email</strong> {_e(c.email)}</a>'
        )
    elif c.email:
        # not an address, but still worth showing as text
        rows.append(f'<div class="row muted"><strong>Email</strong> {_e(c.email)}</div>')
    if c.location:
        rows.append(
            f'<div class="row"><strong class="muted">Address</strong><p>{_e(c.location)}</p></div>'
        )
    return "".join(rows)


def render_card(contact: Contact, settings: Settings) -> str:
    c = contact
    arabic = ""
    if c.name_arabic:
        extra = f" &middot; {_e(c.title_arabic)}" if c.title_arabic else ""
        arabic = f'<p class="muted" dir="rtl">{_e(c.name_arabic)}{extra}</p>'

    body = (
        _header(settings)
        + '<div class="card">'
        + f'<div class="section">{_e(c.section)}</div>'
        + f"<h1>{_e(c.name)}</h1>"
        + f"<p>{_e(c.title)}</p>"
        + f'<p class="section">{_e(c.company)}</p>'
        + arabic
        + '<h2 class="muted">Contact</h2>'
        + _contact_rows(c)
        + f'<a class="button" href="{_e(card_path(c))}/vcard">Save contact to phone (vCard)</a>'
        + "</div>"
        + '<div class="card">'
        + f'<h2 class="muted">About {_e(settings.company_name)}</h2>'
        + f"<p>{_e(settings.company_info)}</p>"
        + f'<a href="{_e(settings.company_website)}" target="_blank" rel="noopener noreferrer">Company website &rarr;</a> '
        + f'<a href="{_e(settings.company_profile_pdf)}" target="_blank" rel="noopener noreferrer">Download company profile (PDF)</a>'
        + "</div>"
    )
    return _layout(page_title(c, settings), body, settings, page_description(c, settings))


def render_not_found(settings: Settings) -> str:
    return _layout(page_title(None, settings), "<p>Contact not found.</p>", settings)
