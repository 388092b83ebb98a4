from __future__ import annotations

import json
from pathlib import Path

import pytest

from visiting_card.io import (
    contacts_in_section,
    find_contact,
    list_sections,
    load_contacts,
    save_contacts,
)
from visiting_card.model import Contact


def _contacts() -> list[Contact]:
    return [
        Contact(sn="1", section="GREEN CITY", name="Ali Hassan", name_arabic="علي حسن"),
        Contact(sn="2", section="GREEN CITY", name="Sara Khan"),
        Contact(sn="1", section="DSA Group", name="Omar Said"),
    ]


def test_save_and_load(tmp_path: Path):
    path = tmp_path / "data" / "contacts.json"
    save_contacts(_contacts(), path)
    assert load_contacts(path) == _contacts()
    # Arabic stays readable in the file
    assert "علي حسن" in path.read_text(encoding="utf-8")


def test_load_uses_camel_case_keys(tmp_path: Path):
    path = tmp_path / "contacts.json"
    path.write_text(json.dumps([{
        "sn": "5", "section": "GREEN CITY", "name": "Ali", "title": "Manager",
        "company": "Green City Trading", "email": "ali@gc.com",
        "phonePrimary": "+966501234567", "phoneSecondary": None, "location": "Riyadh",
    }]), encoding="utf-8")
    [c] = load_contacts(path)
    assert c.phone_primary == "+966501234567"
    assert c.phone_secondary == ""
    assert c.name_arabic == ""


def test_load_rejects_non_list(tmp_path: Path):
    path = tmp_path / "contacts.json"
    path.write_text('{"name": "Ali"}', encoding="utf-8")
    with pytest.raises(ValueError):
        load_contacts(path)


def test_load_missing_file(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        load_contacts(tmp_path / "nope.json")


def test_find_contact_by_section_and_sn():
    contacts = _contacts()
    assert find_contact(contacts, "DSA Group", "1").name == "Omar Said"
    assert find_contact(contacts, "GREEN CITY", "1").name == "Ali Hassan"


def test_find_contact_decodes_url_segments():
    assert find_contact(_contacts(), "DSA%20Group", "1").name == "Omar Said"


def test_find_contact_missing():
    assert find_contact(_contacts(), "GREEN CITY", "99") is None
    assert find_contact([], "GREEN CITY", "1") is None


def test_sections_in_dataset_order():
    contacts = _contacts()
    assert list_sections(contacts) == ["GREEN CITY", "DSA Group"]
    assert [c.name for c in contacts_in_section(contacts, "GREEN CITY")] == ["Ali Hassan", "Sara Khan"]
