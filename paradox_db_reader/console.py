from __future__ import annotations
from typing import Any, Dict, Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table as RichTable

from .table import Table

_console = Console(stderr=True, color_system="standard")


def make_progress_printer(console: Optional[Console] = None):
    """
    Build an on_progress callback that prints phase events through rich.
    Only the start and end of each phase is printed.
    """
    out = console or _console
    last: Dict[str, int] = {}

    def printer(evt: Dict[str, Any]) -> None:
        phase = evt.get("phase", "")
        pct = int(evt.get("pct", 0))
        msg = evt.get("msg", "")
        prev = last.get(phase, -1)
        last[phase] = pct
        if pct not in (0, 100) or prev == pct:
            return
        parts = [p for p in (phase, f"{pct}%", (f"- {msg}" if msg else "")) if p]
        out.print("[progress] " + " ".join(parts), highlight=False, markup=False)

    return printer


progress_printer = make_progress_printer()


def print_dataset(table: Table, *, limit: Optional[int] = None, console: Optional[Console] = None) -> None:
    """Render the table's records as a rich table (NULL cells shown dimmed)."""
    out = console or Console()
    view = RichTable(title=escape(table.table_name) if table.table_name else None, show_lines=False)
    columns = table.describe()
    for col in columns:
        view.add_column(f"{escape(col['name'])}\n{col['type']}({col['size']})", overflow="fold")

    for idx, rec in enumerate(table):
        if limit is not None and idx >= limit:
            break
        if rec is None:
            view.add_row(*(["[dim]NULL[/dim]"] * len(columns)))
            continue
        cells = []
        for col in columns:
            v = rec.get(col["name"])
            cells.append("[dim]NULL[/dim]" if v is None else escape(str(v)))
        view.add_row(*cells)

    out.print(view)
    out.print(f"{len(table)} records, {len(table.blocks)} blocks", highlight=False)
