from __future__ import annotations

import json
import logging
from pathlib import Path
from urllib.parse import unquote

from .model import Contact

logger = logging.getLogger(__name__)


# ── Dataset files ──────────────────────────────────────────────────────────────

def load_contacts(path: Path) -> list[Contact]:
    """Read the contact dataset (a JSON array of objects)."""
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, list):
        raise ValueError(f"{path}: expected a JSON array of contacts, got {type(data).__name__}")
    contacts = [Contact.from_dict(item) for item in data]
    logger.debug("%s: loaded %d contact(s)", path, len(contacts))
    return contacts


def save_contacts(contacts: list[Contact], path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = [c.to_dict() for c in contacts]
    # ensure_ascii=False keeps Arabic names readable in the file
    path.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")
    logger.debug("%s: wrote %d contact(s)", path, len(contacts))


# ── Lookup ─────────────────────────────────────────────────────────────────────

def find_contact(contacts: list[Contact], section: str, sn: str) -> Contact | None:
    """Return the contact keyed by (section, sn), or None.

    Both keys may arrive percent-encoded straight from a URL path.
    """
    s = unquote(section)
    n = unquote(sn)
    return next((c for c in contacts if c.section == s and c.sn == n), None)


def contacts_in_section(contacts: list[Contact], section: str) -> list[Contact]:
    return [c for c in contacts if c.section == section]


def list_sections(contacts: list[Contact]) -> list[str]:
    """Distinct sections in the order they first appear."""
    return list(dict.fromkeys(c.section for c in contacts))
