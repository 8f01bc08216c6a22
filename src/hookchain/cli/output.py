"""Terminal output for hook chain results."""

from __future__ import annotations

import json
from typing import Any

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from hookchain.types.hooks import HookChainResult

STYLE_OK = "bold #34d399"  # green
STYLE_FAIL = "bold #f87171"  # red
STYLE_DIM = "dim #7c7c8a"
STYLE_LABEL = "bold #94a3b8"  # slate
STYLE_VALUE = "#e2e8f0"

_MAX_OUTPUT = 300


def print_json(data: Any) -> None:
    """Write *data* as indented JSON to stdout."""
    print(json.dumps(data, indent=2, default=str))


def print_chain_result(result: HookChainResult, console: Console | None = None) -> None:
    """Print a chain result as a per-hook table plus a summary panel."""
    console = console or Console()

    if result.results:
        tbl = Table(show_edge=False, padding=(0, 1), expand=False)
        tbl.add_column("#", justify="right", style=STYLE_DIM)
        tbl.add_column("Status", no_wrap=True)
        tbl.add_column("Command", overflow="fold")
        tbl.add_column("Time", justify="right", no_wrap=True)
        tbl.add_column("Output", overflow="fold")
        for idx, r in enumerate(result.results, start=1):
            status = Text("ok", style=STYLE_OK) if r.success else Text("failed", style=STYLE_FAIL)
            detail = r.output if r.success else (r.error or "")
            detail = detail.strip()
            if len(detail) > _MAX_OUTPUT:
                detail = detail[:_MAX_OUTPUT] + "…"
            tbl.add_row(str(idx), status, r.hook_command, f"{r.execution_time_ms} ms", detail)
        console.print(tbl)

    summary = Table(show_header=False, show_edge=False, padding=(0, 1), expand=False)
    summary.add_column(style=STYLE_LABEL, justify="right", no_wrap=True)
    summary.add_column(style=STYLE_VALUE, no_wrap=True)
    summary.add_row("Event", result.event)
    summary.add_row("Hooks", str(result.total_hooks))
    summary.add_row("Successful", str(result.successful))
    summary.add_row("Failed", str(result.failed))
    summary.add_row(
        "Continue",
        Text("yes", style=STYLE_OK) if result.should_continue else Text("no", style=STYLE_FAIL),
    )
    console.print(Panel(summary, border_style="#3f3f50", expand=False, padding=(0, 1)))
