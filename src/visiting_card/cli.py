from __future__ import annotations

import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel

from .config import QR_MODES, Settings, load_settings
from .exporter import disk_name, encode_vcard, write_vcard
from .importer import import_workbook
from .io import contacts_in_section, find_contact, load_contacts, save_contacts
from .model import Contact
from .qr import qr_payload, write_qr
from .report import print_contacts, print_import_summary

app = typer.Typer(
    no_args_is_help=True,
    add_completion=False,
    help="visiting-card: digital visiting cards, vCard export and QR codes for employees.",
)
console = Console()


# ── Shared helpers ─────────────────────────────────────────────────────────────

@app.callback()
def main(
    ctx: typer.Context,
    config: Path = typer.Option(
        Path("local") / "visiting-card.conf",
        "--config", "-c",
        help="Settings file (TOML). Created with defaults if missing.",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )
    ctx.obj = load_settings(config)


def _contacts(settings: Settings) -> list[Contact]:
    path = settings.resolve(settings.contacts_file)
    try:
        return load_contacts(path)
    except (OSError, ValueError) as exc:
        console.print(Panel(
            f"[bold red]Could not load contacts from [white]{escape(str(path))}[/white][/bold red]\n\n{escape(str(exc))}\n\n"
            "[dim]Run  visiting-card import-sheet <workbook.xlsx>  to build it.[/dim]",
            title="No dataset",
            border_style="red",
        ))
        raise typer.Exit(code=2)


def _lookup(settings: Settings, section: str, sn: str) -> Contact:
    contact = find_contact(_contacts(settings), section, sn)
    if contact is None:
        console.print(f"[bold red]Contact not found:[/bold red] {escape(section)} / {escape(sn)}")
        raise typer.Exit(code=2)
    return contact


# ── Commands ───────────────────────────────────────────────────────────────────

@app.command("list")
def list_contacts(
    ctx: typer.Context,
    section: str | None = typer.Option(None, "--section", "-s", help="Only this section"),
) -> None:
    """List the contacts in the dataset."""
    contacts = _contacts(ctx.obj)
    if section:
        contacts = contacts_in_section(contacts, section)
    print_contacts(contacts)


@app.command()
def show(ctx: typer.Context, section: str, sn: str) -> None:
    """Print a contact's vCard."""
    contact = _lookup(ctx.obj, section, sn)
    # plain print: rich markup would eat the backslash escapes
    typer.echo(encode_vcard(contact))


@app.command()
def export(
    ctx: typer.Context,
    section: str,
    sn: str,
    out: Path = typer.Option(Path("cards-out"), "--out", "-o", help="Output folder"),
) -> None:
    """Write a contact's .vcf file."""
    contact = _lookup(ctx.obj, section, sn)
    path = write_vcard(contact, out)
    console.print(f"[bold green]✓ Wrote {escape(contact.name)} → {escape(str(path))}[/bold green]")


@app.command("export-all")
def export_all(
    ctx: typer.Context,
    out: Path = typer.Option(Path("cards-out"), "--out", "-o", help="Output folder"),
) -> None:
    """Write one .vcf per contact, in a folder per section."""
    contacts = _contacts(ctx.obj)
    for c in contacts:
        write_vcard(c, out / disk_name(c.section))
    console.print(f"[bold green]✓ Wrote {len(contacts)} contact(s) → {escape(str(out))}[/bold green]")


@app.command()
def qr(
    ctx: typer.Context,
    section: str,
    sn: str,
    out: Path = typer.Option(Path("cards-out"), "--out", "-o", help="Output folder"),
    mode: str | None = typer.Option(
        None, "--mode", "-m",
        help=f"QR payload ({' or '.join(QR_MODES)}). Falls back to the config.",
    ),
    base_url: str | None = typer.Option(
        None, "--base-url", "-u",
        help="Site URL for link mode. Falls back to app_url in the config.",
    ),
) -> None:
    """Write a contact's QR code as PNG."""
    settings: Settings = ctx.obj
    contact = _lookup(settings, section, sn)
    try:
        payload = qr_payload(contact, mode or settings.qr_mode, base_url or settings.app_url)
    except ValueError as exc:
        console.print(f"[bold red]{escape(str(exc))}[/bold red]")
        raise typer.Exit(code=2)
    path = write_qr(contact, payload, out, settings.resolve(settings.logo))
    console.print(f"[bold green]✓ Wrote QR for {escape(contact.name)} → {escape(str(path))}[/bold green]")


@app.command("import-sheet")
def import_sheet(
    ctx: typer.Context,
    workbook: Path = typer.Argument(..., help="Spreadsheet (.xlsx), one sheet per section"),
    output: Path | None = typer.Option(
        None, "--output", "-o",
        help="Dataset to write. Defaults to contacts_file from the config.",
    ),
) -> None:
    """Build the contact dataset from the HR spreadsheet."""
    settings: Settings = ctx.obj
    try:
        contacts = import_workbook(workbook, settings)
    except Exception as exc:
        # openpyxl raises a mix of OSError, KeyError and zipfile errors for bad input
        console.print(f"[bold red]Error:[/bold red] {escape(str(exc))}")
        raise typer.Exit(code=1)
    out_path = output or settings.resolve(settings.contacts_file)
    save_contacts(contacts, out_path)
    print_import_summary(contacts, workbook, out_path)


@app.command()
def serve(
    ctx: typer.Context,
    host: str = typer.Option("127.0.0.1", "--host"),
    port: int = typer.Option(8422, "--port", "-p"),
) -> None:
    """Run the card site locally."""
    from .server import serve as run_server

    settings: Settings = ctx.obj
    run_server(settings, _contacts(settings), host, port)


if __name__ == "__main__":
    app()
