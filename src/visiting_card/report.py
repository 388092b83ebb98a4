from __future__ import annotations

from collections import Counter
from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .model import Contact

console = Console()

# ── Palette ────────────────────────────────────────────────────────────────────
_ACCENT  = "#4d9fff"
_GREEN   = "#3ecf8e"
_TEXT    = "#c9d1e0"
_MID     = "#8896af"
_DIM     = "#546075"
_BORDER  = "#2a3347"


def section_counts(contacts: list[Contact]) -> dict[str, int]:
    return dict(Counter(c.section for c in contacts))


def print_contacts(contacts: list[Contact]) -> None:
    if not contacts:
        console.print(Text("  No contacts to show.", style=f"dim {_DIM}"))
        return
    table = Table(show_header=True, header_style="bold", box=None, padding=(0, 2))
    table.add_column("Section", style=_MID)
    table.add_column("SN", justify="right", style=_ACCENT)
    table.add_column("Name", style=f"bold {_TEXT}")
    table.add_column("Title", style=_TEXT)
    table.add_column("Mobile", style=_MID)
    for c in contacts:
        table.add_row(*(escape(v) for v in (c.section, c.sn, c.name, c.title, c.phone_primary)))
    console.print(table)


def print_import_summary(contacts: list[Contact], source: Path, out_path: Path) -> None:
    console.print()
    console.print(Text("  IMPORT SUMMARY", style=f"dim {_DIM}"))
    console.print()

    body = Text()
    for i, (section, count) in enumerate(section_counts(contacts).items()):
        if i:
            body.append("   ")
        body.append(section, style=_MID)
        body.append(f"  {count}", style=f"bold {_TEXT}")
    console.print(Panel(
        body,
        title=Text(f"SECTIONS READ FROM {source.name}", style=f"dim {_DIM}"),
        title_align="left",
        border_style=_BORDER,
        padding=(0, 1),
    ))

    done = Text()
    done.append(f"✓  Wrote {len(contacts)} contact(s)\n", style=f"bold {_GREEN}")
    done.append(str(out_path), style=f"dim {_MID}")
    console.print(Panel(done, border_style=_GREEN, padding=(0, 2)))
