"""
Stored continuation commands: list, show, drop
"""

import json
import typer
from rich.console import Console
from rich.syntax import Syntax
from rich.table import Table

from replayflow.config import DEFAULT_STATE_DIR
from replayflow.core import FlowState, FlowStateError, StateStoreError
from replayflow.debug import render_state, status_of
from replayflow.storage import FileStateStore

app = typer.Typer()
console = Console()

STATE_DIR_OPTION = typer.Option(
    DEFAULT_STATE_DIR,
    "--dir",
    "-d",
    envvar="REPLAYFLOW_STATE_DIR",
    help="Directory of the file state store",
)


def _fail(message: str, json_output: bool, code: int = 2) -> None:
    if json_output:
        print(json.dumps({"error": message}))
    else:
        console.print(f"[red]Error:[/red] {message}")
    raise typer.Exit(code)


@app.command("list")
def list_states(
    state_dir: str = STATE_DIR_OPTION,
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    List subjects with a suspended flow.

    Examples:
        replayflow state list
        replayflow state list --dir ./states --json
    """
    store = FileStateStore(state_dir)
    rows = []
    try:
        for subject in store.subjects():
            blob = store.load(subject)
            if blob is None:
                continue
            state = FlowState.from_json(blob)
            rows.append({
                "subject": subject,
                "root_id": state.id,
                "status": status_of(state),
                "flow": state.subflows[0].id if state.subflows else None,
                "updated": state.kvs.get("updated"),
            })
    except (StateStoreError, FlowStateError) as e:
        _fail(str(e), json_output)

    if json_output:
        print(json.dumps({"states": rows, "count": len(rows)}, indent=2))
        return

    if not rows:
        console.print("[yellow]No stored flows[/yellow]")
        return

    table = Table(title=f"Stored flows: {state_dir}")
    table.add_column("Subject", style="cyan")
    table.add_column("Flow", style="green")
    table.add_column("Status", style="yellow")
    table.add_column("Updated", style="dim")
    for row in rows:
        table.add_row(row["subject"], row["flow"] or "-", row["status"], row["updated"] or "-")
    console.print(table)


@app.command()
def show(
    subject: str = typer.Argument(..., help="Subject (chat id) to show"),
    state_dir: str = STATE_DIR_OPTION,
    raw: bool = typer.Option(False, "--raw", help="Print the stored JSON"),
    hide_kvs: bool = typer.Option(False, "--hide-kvs", help="Do not show node scratch values"),
):
    """
    Show the continuation tree of a subject.

    Examples:
        replayflow state show 42
        replayflow state show 42 --raw
    """
    store = FileStateStore(state_dir)
    try:
        blob = store.load(subject)
        if blob is None:
            _fail(f"No stored flow for subject: {subject}", False, code=1)
        state = FlowState.from_json(blob)
    except (StateStoreError, FlowStateError) as e:
        _fail(str(e), False)

    if raw:
        console.print(Syntax(json.dumps(state.to_dict(), indent=2, ensure_ascii=False), "json", theme="monokai"))
    else:
        console.print(render_state(state, show_kvs=not hide_kvs))


@app.command()
def drop(
    subject: str = typer.Argument(..., help="Subject (chat id) whose flow to discard"),
    state_dir: str = STATE_DIR_OPTION,
):
    """
    Discard the stored flow of a subject; its next event starts fresh.
    """
    store = FileStateStore(state_dir)
    try:
        existed = store.load(subject) is not None
        store.delete(subject)
    except StateStoreError as e:
        _fail(str(e), False)

    if existed:
        console.print(f"[green]✓ Dropped flow for {subject}[/green]")
    else:
        console.print(f"[yellow]No stored flow for {subject}[/yellow]")
