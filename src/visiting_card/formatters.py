from __future__ import annotations

import logging
import re

import phonenumbers
from phonenumbers import NumberParseException

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s+")


def normalize_phone(raw: str | None, region: str = "SA") -> str:
    """Normalise a phone number to E.164, e.g. ``+966501234567``.

    Numbers that cannot be parsed or validated are passed through with
    whitespace removed, never rejected.
    """
    s = _WHITESPACE.sub("", raw or "")
    if not s:
        return ""
    try:
        parsed = phonenumbers.parse(s, region)
    except NumberParseException:
        logger.debug("phone %r not parseable for region %s; kept as-is", s, region)
        return s
    if phonenumbers.is_possible_number(parsed) and phonenumbers.is_valid_number(parsed):
        return phonenumbers.format_number(parsed, phonenumbers.PhoneNumberFormat.E164)
    logger.debug("phone %r not valid for region %s; kept as-is", s, region)
    return s


def first_phone(cell: str) -> str:
    """Cells sometimes hold ``"0501234567 / 0559876543"``; keep the first."""
    return cell.split("/")[0].strip()
