from __future__ import annotations

import logging
import tomllib
from dataclasses import dataclass, field
from pathlib import Path

logger = logging.getLogger(__name__)

QR_MODES = ("link", "vcard")

COMPANY_INFO = (
    "The Diamond Star Group is a coalition of companies committed to revolutionizing "
    "the recycling industry through sustainable practices and innovative technology. "
    "Operating across the Kingdom of Saudi Arabia, the United Arab Emirates, Singapore, "
    "Japan, China and India."
)


@dataclass
class Settings:
    root: Path = field(default_factory=Path.cwd)
    contacts_file: Path = Path("data/contacts.json")
    app_url: str = ""
    production_host: str = ""
    company_name: str = "Diamond Star Group"
    company_website: str = "https://diamondstargrp.com/ar/"
    company_profile_pdf: str = "/static/ds-company-profile-eng.pdf"
    company_info: str = COMPANY_INFO
    company_tagline: str = "Leading the way in recycling and sustainability."
    qr_mode: str = "link"
    default_region: str = "SA"
    default_company: str = "Green City Trading"
    static_dir: Path = Path("static")
    logo: Path = Path("static/logo-profile.png")
    section_companies: dict[str, str] = field(
        default_factory=lambda: {"DSA Group": "Diamond Star Arabia Industrial Company"}
    )

    def resolve(self, p: Path) -> Path:
        """Relative paths in the config are taken from the workspace root."""
        return p if p.is_absolute() else self.root / p

    def company_for(self, section: str) -> str:
        return self.section_companies.get(section, self.default_company)


DEFAULT_CONF = """# visiting-card local config (TOML)
contacts_file = "data/contacts.json"
# Public base URL used in QR links, e.g. "https://cards.example.com"
app_url = ""
# When set, requests for any other host are redirected here (308)
production_host = ""
# "link" encodes the card page URL, "vcard" encodes the contact itself
qr_mode = "link"
default_region = "SA"
default_company = "Green City Trading"

[section_companies]
"DSA Group" = "Diamond Star Arabia Industrial Company"
"""

_STR_KEYS = (
    "app_url", "production_host", "company_name", "company_website",
    "company_profile_pdf", "company_info", "company_tagline", "qr_mode", "default_region",
    "default_company",
)
_PATH_KEYS = ("contacts_file", "static_dir", "logo")


def load_settings(conf_path: Path, root: Path | None = None) -> Settings:
    """Read settings from ``conf_path``, writing the default file if missing.

    The workspace root defaults to the parent of the config's directory
    (``<root>/local/visiting-card.conf``).
    """
    conf_path = Path(conf_path)
    settings = Settings(root=Path(root) if root else conf_path.resolve().parent.parent)

    if not conf_path.exists():
        conf_path.parent.mkdir(parents=True, exist_ok=True)
        conf_path.write_text(DEFAULT_CONF, encoding="utf-8")

    try:
        data = tomllib.loads(conf_path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        logger.warning("%s is not valid TOML (%s); using defaults", conf_path, exc)
        return settings

    for key in _STR_KEYS:
        if key in data:
            setattr(settings, key, str(data[key]))
    for key in _PATH_KEYS:
        if key in data:
            setattr(settings, key, Path(str(data[key])))
    companies = data.get("section_companies")
    if isinstance(companies, dict):
        settings.section_companies = {str(k): str(v) for k, v in companies.items()}

    if settings.qr_mode not in QR_MODES:
        logger.warning("unknown qr_mode %r; falling back to 'link'", settings.qr_mode)
        settings.qr_mode = "link"

    return settings
