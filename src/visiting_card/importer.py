"""importer.py — build the contact dataset from the HR spreadsheet.

Every worksheet is one section of the site. Row 0 is a banner, row 1 the
column headers, and contacts start at row 2. Columns are found by header
text so their order in the sheet does not matter.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import openpyxl

from .config import Settings
from .formatters import first_phone, normalize_phone
from .model import Contact

logger = logging.getLogger(__name__)

HEADER_ROW = 1
FIRST_DATA_ROW = 2
NO_NAME = "—"

_DATA_COLUMNS = (
    "SN", "NAME", "NAME ARABIC", "POSITION", "EMAIL",
    "MOBILE", "TELEPHONE (H.O)", "ADDRESS (H.O)",
)


def _cell_text(value: Any) -> str:
    if value is None:
        return ""
    # whole numbers come back from Excel as floats: 12.0 → "12"
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value).strip()


class _Row:
    """Header-addressed view over one sheet row."""

    def __init__(self, headers: list[str], values: tuple[Any, ...]):
        self._headers = headers
        self._values = values

    def get(self, key: str) -> str:
        idx = self._index(key)
        if idx is None or idx >= len(self._values):
            return ""
        return _cell_text(self._values[idx])

    def _index(self, key: str) -> int | None:
        if key in self._headers:
            return self._headers.index(key)
        # the sheets spell the head-office suffix both "(H.O)" and "(H.O.)"
        if "(H.O)" in key:
            alt = key.replace("(H.O)", "(H.O.)")
            if alt in self._headers:
                return self._headers.index(alt)
        return None


def _row_to_contact(row: _Row, section: str, fallback_sn: int, settings: Settings) -> Contact | None:
    if not any(row.get(col) for col in _DATA_COLUMNS):
        return None

    region = settings.default_region
    mobile_raw = row.get("MOBILE")
    telephone_raw = row.get("TELEPHONE (H.O)")
    mobile = normalize_phone(first_phone(mobile_raw), region) if mobile_raw else ""
    telephone = normalize_phone(first_phone(telephone_raw), region) if telephone_raw else ""

    email = row.get("EMAIL")
    if email.endswith(">"):
        email = email[:-1].strip()

    return Contact(
        sn=row.get("SN") or str(fallback_sn),
        section=section,
        name=row.get("NAME") or row.get("NAME ARABIC") or NO_NAME,
        title=row.get("POSITION"),
        name_arabic=row.get("NAME ARABIC"),
        title_arabic=row.get("POSITION ARABIC"),
        phone_primary=mobile or telephone,
        phone_secondary=telephone if mobile and telephone else "",
        location=row.get("ADDRESS (H.O)"),
        email=email,
        company=settings.company_for(section),
    )


def import_workbook(path: Path, settings: Settings) -> list[Contact]:
    """Read every worksheet of ``path`` and return the contacts in sheet order."""
    wb = openpyxl.load_workbook(path, read_only=True, data_only=True)
    contacts: list[Contact] = []
    try:
        for ws in wb.worksheets:
            rows = list(ws.iter_rows(values_only=True))
            if len(rows) <= HEADER_ROW:
                logger.warning("%s: sheet %r has no header row; skipped", path.name, ws.title)
                continue
            headers = [_cell_text(h) for h in rows[HEADER_ROW]]
            before = len(contacts)
            for values in rows[FIRST_DATA_ROW:]:
                contact = _row_to_contact(
                    _Row(headers, values or ()), ws.title, len(contacts) + 1, settings
                )
                if contact is not None:
                    contacts.append(contact)
            logger.debug("%s: sheet %r → %d contact(s)", path.name, ws.title, len(contacts) - before)
    finally:
        wb.close()
    return contacts
