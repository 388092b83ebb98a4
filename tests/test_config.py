from pathlib import Path

from visiting_card.config import DEFAULT_CONF, load_settings


def test_first_run_creates_conf(tmp_path: Path):
    conf = tmp_path / "local" / "visiting-card.conf"

    settings = load_settings(conf)

    assert conf.exists()
    assert conf.read_text(encoding="utf-8") == DEFAULT_CONF
    assert settings.root == tmp_path.resolve()
    assert settings.qr_mode == "link"
    assert settings.default_region == "SA"
    assert settings.resolve(settings.contacts_file) == tmp_path.resolve() / "data" / "contacts.json"


def test_overrides(tmp_path: Path):
    conf = tmp_path / "local" / "visiting-card.conf"
    conf.parent.mkdir()
    conf.write_text(
        'app_url = "https://cards.example.com"\n'
        'qr_mode = "vcard"\n'
        'contacts_file = "/srv/contacts.json"\n'
        'default_company = "Acme"\n'
        "[section_companies]\n"
        '"North" = "Acme North"\n',
        encoding="utf-8",
    )
    settings = load_settings(conf)
    assert settings.app_url == "https://cards.example.com"
    assert settings.qr_mode == "vcard"
    assert settings.resolve(settings.contacts_file) == Path("/srv/contacts.json")
    assert settings.company_for("North") == "Acme North"
    assert settings.company_for("DSA Group") == "Acme"


def test_unknown_qr_mode_falls_back(tmp_path: Path, caplog):
    conf = tmp_path / "visiting-card.conf"
    conf.write_text('qr_mode = "sms"\n', encoding="utf-8")
    settings = load_settings(conf, root=tmp_path)
    assert settings.qr_mode == "link"
    assert "qr_mode" in caplog.text


def test_malformed_conf_uses_defaults(tmp_path: Path, caplog):
    conf = tmp_path / "visiting-card.conf"
    conf.write_text("this is = = not toml", encoding="utf-8")
    settings = load_settings(conf, root=tmp_path)
    assert settings.root == tmp_path
    assert settings.company_name == "Diamond Star Group"
    assert "not valid TOML" in caplog.text
