"""Tests for the spreadsheet import and phone normalisation."""
from __future__ import annotations

from pathlib import Path

import openpyxl
import pytest

from visiting_card.config import Settings
from visiting_card.formatters import first_phone, normalize_phone
from visiting_card.importer import import_workbook

HEADERS = [
    "SN", "NAME", "NAME ARABIC", "POSITION", "POSITION ARABIC",
    "EMAIL", "MOBILE", "TELEPHONE (H.O.)", "ADDRESS (H.O.)",
]


def _workbook(tmp_path: Path) -> Path:
    wb = openpyxl.Workbook()
    green = wb.active
    green.title = "GREEN CITY"
    green.append(["DIGITAL VISITING CARD"])
    green.append(HEADERS)
    green.append([1, "Ali Hassan", "علي حسن", "Manager", "مدير",
                  "ali@gc.com>", "0501234567 / 0559999999", "", "Riyadh, KSA"])
    green.append([None] * len(HEADERS))
    green.append([None, "", "سارة", "Accountant", "", "", "", "not a phone", ""])

    dsa = wb.create_sheet("DSA Group")
    dsa.append(["DIGITAL VISITING CARD"])
    dsa.append([h.replace("(H.O.)", "(H.O)") for h in HEADERS])
    dsa.append([7, "Omar Said", "", "Director", "", "omar@dsa.com", 501234567, "+44 7980 220220", ""])

    path = tmp_path / "cards.xlsx"
    wb.save(path)
    return path


# ── Phone normalisation ────────────────────────────────────────────────────────

def test_normalize_saudi_mobile():
    assert normalize_phone("050 123 4567", "SA") == "+966501234567"


def test_normalize_uses_region():
    assert normalize_phone("07980 220220", "GB") == "+447980220220"


def test_normalize_invalid_passes_through():
    assert normalize_phone("not a phone", "SA") == "notaphone"
    assert normalize_phone("12", "SA") == "12"


def test_normalize_empty():
    assert normalize_phone("", "SA") == ""
    assert normalize_phone(None, "SA") == ""


def test_first_phone():
    assert first_phone("0501234567 / 0559999999") == "0501234567"
    assert first_phone("0501234567") == "0501234567"


# ── Workbook import ────────────────────────────────────────────────────────────

@pytest.fixture
def contacts(tmp_path: Path):
    return import_workbook(_workbook(tmp_path), Settings(root=tmp_path))


def test_import_sections_in_sheet_order(contacts):
    assert [(c.section, c.sn) for c in contacts] == [
        ("GREEN CITY", "1"), ("GREEN CITY", "2"), ("DSA Group", "7"),
    ]


def test_import_row_fields(contacts):
    ali = contacts[0]
    assert ali.name == "Ali Hassan"
    assert ali.name_arabic == "علي حسن"
    assert ali.title == "Manager"
    assert ali.title_arabic == "مدير"
    assert ali.email == "ali@gc.com"
    assert ali.phone_primary == "+966501234567"
    assert ali.phone_secondary == ""
    assert ali.location == "Riyadh, KSA"
    assert ali.company == "Green City Trading"


def test_import_name_falls_back_to_arabic(contacts):
    sara = contacts[1]
    assert sara.name == "سارة"
    # telephone only: becomes the primary number, kept as-is when invalid
    assert sara.phone_primary == "notaphone"
    assert sara.phone_secondary == ""


def test_import_both_phones_and_company_mapping(contacts):
    omar = contacts[2]
    assert omar.phone_primary == "+966501234567"
    assert omar.phone_secondary == "+447980220220"
    assert omar.company == "Diamond Star Arabia Industrial Company"


def test_import_missing_file(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        import_workbook(tmp_path / "missing.xlsx", Settings(root=tmp_path))
