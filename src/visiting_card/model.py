from __future__ import annotations

from dataclasses import dataclass
from typing import Any

# JSON key → dataclass field
_JSON_KEYS = {
    "sn": "sn",
    "section": "section",
    "name": "name",
    "title": "title",
    "nameArabic": "name_arabic",
    "titleArabic": "title_arabic",
    "company": "company",
    "email": "email",
    "phonePrimary": "phone_primary",
    "phoneSecondary": "phone_secondary",
    "location": "location",
}


@dataclass(frozen=True)
class Contact:
    name: str
    title: str = ""
    company: str = ""
    email: str = ""
    phone_primary: str = ""
    phone_secondary: str = ""
    location: str = ""   # single-line postal address
    sn: str = ""         # serial within the section
    section: str = ""
    name_arabic: str = ""
    title_arabic: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Contact:
        kwargs = {}
        for key, attr in _JSON_KEYS.items():
            value = data.get(key)
            kwargs[attr] = "" if value is None else str(value)
        return cls(**kwargs)

    def to_dict(self) -> dict[str, str]:
        return {key: getattr(self, attr) for key, attr in _JSON_KEYS.items()}
