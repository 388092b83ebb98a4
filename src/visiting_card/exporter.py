from __future__ import annotations

import re
from pathlib import Path

from .model import Contact

CRLF = "\r\n"
FOLD_WIDTH = 75
VCARD_MIME = "text/vcard;charset=utf-8"

_LINE_BREAK = re.compile(r"\r?\n")
_WHITESPACE = re.compile(r"\s")
_WHITESPACE_RUN = re.compile(r"\s+")
_PATH_SEPARATOR = re.compile(r"[/\\]")


def escape_text(value: str | None) -> str:
    """Escape a vCard 3.0 text value.

    Backslashes go first so the ones inserted for ``;`` and ``,`` are not
    escaped a second time.
    """
    s = value or ""
    s = s.replace("\\", "\\\\")
    s = s.replace(";", "\\;")
    s = s.replace(",", "\\,")
    return _LINE_BREAK.sub(r"\\n", s)


def unescape_text(value: str) -> str:
    """Inverse of :func:`escape_text`."""
    out: list[str] = []
    i = 0
    while i < len(value):
        ch = value[i]
        if ch == "\\" and i + 1 < len(value):
            nxt = value[i + 1]
            out.append("\n" if nxt == "n" else nxt)
            i += 2
            continue
        out.append(ch)
        i += 1
    return "".join(out)


def strip_phone(raw: str | None) -> str:
    # whitespace only; + and - survive
    return _WHITESPACE.sub("", raw or "")


def looks_like_email(value: str | None) -> bool:
    """Lenient check: anything containing ``@`` is treated as an address.

    No further validation is done, so ``"@"`` or ``"a@b"`` pass.
    """
    return bool(value) and "@" in value


def fold_line(line: str, width: int = FOLD_WIDTH) -> str:
    if len(line) <= width:
        return line
    chunks = [line[i:i + width] for i in range(0, len(line), width)]
    return CRLF.join([chunks[0]] + [" " + c for c in chunks[1:]])


def encode_vcard(contact: Contact) -> str:
    """Serialise a contact as vCard 3.0 text with CRLF line endings."""
    name = escape_text(contact.name)
    org = escape_text(contact.company)
    title = escape_text(contact.title)
    loc = escape_text(contact.location) if contact.location else ""
    tel1 = strip_phone(contact.phone_primary)
    tel2 = strip_phone(contact.phone_secondary)
    email = contact.email if looks_like_email(contact.email) else ""

    lines = [
        "BEGIN:VCARD",
        "VERSION:3.0",
        fold_line(f"N:{name};;;"),
        fold_line(f"FN:{name}"),
        fold_line(f"ORG:{org}"),
        fold_line(f"TITLE:{title}"),
        fold_line(f"TEL;TYPE=CELL,VOICE:{tel1}") if tel1 else "",
        fold_line(f"TEL;TYPE=WORK,VOICE:{tel2}") if tel2 else "",
        fold_line(f"EMAIL;TYPE=INTERNET:{email}") if email else "",
        fold_line(f"ADR;TYPE=WORK:;;{loc};;;;;") if loc else "",
        "END:VCARD",
    ]
    return CRLF.join(line for line in lines if line)


def vcard_filename(contact: Contact) -> str:
    return _WHITESPACE_RUN.sub("_", contact.name) + ".vcf"


def disk_name(filename: str) -> str:
    """``filename`` with path separators replaced, safe to join onto a folder."""
    return _PATH_SEPARATOR.sub("_", filename)


def write_vcard(contact: Contact, out_dir: Path) -> Path:
    out_dir.mkdir(parents=True, exist_ok=True)
    path = out_dir / disk_name(vcard_filename(contact))
    # newline="" keeps the CRLFs as-is on every platform
    with path.open("w", encoding="utf-8", newline="") as fh:
        fh.write(encode_vcard(contact))
    return path
