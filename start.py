#!/usr/bin/env python3
"""visiting-card — Digital Visiting Cards.  Run with:  python3 start.py <command>"""
import sys
import os
from pathlib import Path

script_dir = os.path.dirname(os.path.abspath(__file__))
src_dir    = os.path.join(script_dir, "src")

sys.path.insert(0, src_dir)
os.environ["PYTHONPATH"] = src_dir + os.pathsep + os.environ.get("PYTHONPATH", "")
os.chdir(script_dir)

# ── First-run detection ───────────────────────────────────────────────────────
# Show a welcome message until data/contacts.json has been built
def _first_run() -> bool:
    return not (Path(script_dir) / "data" / "contacts.json").is_file()

def _welcome() -> None:
    from rich.console import Console
    from rich.panel import Panel
    from rich.text import Text

    console = Console()
    console.print()
    console.print(Panel(
        Text.from_markup(
            "[bold #4d9fff]Welcome to visiting-card[/] — Digital Visiting Cards\n\n"
            "There is no contact dataset yet. Build it from the HR spreadsheet:\n\n"
            "  [bold #3ecf8e]python3 start.py import-sheet \"DIGITAL VISITING CARD.xlsx\"[/]\n\n"
            "  [dim]One sheet per section; headers on the second row (SN, NAME, POSITION, …)[/]\n\n"
            "Then run [bold]python3 start-webui.py[/] to browse the cards, or\n"
            "[bold]python3 start.py --help[/] for vCard and QR export."
        ),
        title=Text("  Getting Started  ", style="dim #546075"),
        title_align="left",
        border_style="#2a3347",
        padding=(1, 2),
    ))
    console.print()

if _first_run() and "import-sheet" not in sys.argv:
    _welcome()

from visiting_card.cli import app
app()
