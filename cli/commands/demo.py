"""
Demo commands: counter, todo, blackjack

Each line typed is one inbound event:
  text          plain message
  !data         button press with callback data
  ~ID text      edit of your earlier message ID
  :q            quit

Continuations are kept in a file store (one subdirectory per demo), so
quitting and restarting resumes the conversation where it stopped.
"""

import asyncio
import itertools
import os
from typing import Any, Dict, List, Optional, Tuple

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from replayflow.chat import ChatTransport, Command, FlowDispatcher, OutboundMessage
from replayflow.config import DEFAULT_STATE_DIR
from replayflow.core import FlowEvent
from replayflow.debug import render_state
from replayflow.examples import Scoreboard, TodoLists, blackjack, counter, stats, todo
from replayflow.logging_config import setup_logging
from replayflow.storage import FileStateStore

app = typer.Typer()
console = Console()

SUBJECT = "console"


class ConsoleTransport(ChatTransport):
    """Prints outbound messages as panels; message ids come from a shared counter."""

    def __init__(self, ids: "itertools.count") -> None:
        self.ids = ids

    def _show(self, message_id: int, message: OutboundMessage, edited: bool = False) -> Dict[str, Any]:
        body = message.text
        if message.buttons:
            rows = ["  ".join(f"[{b.text}] !{b.data}" for b in row) for row in message.buttons]
            body += "\n\n" + "\n".join(rows)
        title = f"#{message_id}" + (" (edited)" if edited else "")
        console.print(Panel(escape(body), title=title, title_align="left", border_style="blue"))
        return {"message_id": message_id, "text": message.text}

    async def send_message(self, chat: str, message: OutboundMessage) -> Dict[str, Any]:
        return self._show(next(self.ids), message)

    async def edit_message(self, chat: str, message_id: int, message: OutboundMessage) -> Dict[str, Any]:
        return self._show(message_id, message, edited=True)

    async def delete_message(self, chat: str, message_id: int) -> None:
        console.print(f"[dim]#{message_id} deleted[/dim]")

    async def answer_callback(self, callback_id: str, text: Optional[str] = None, alert: bool = False) -> None:
        if text:
            console.print(f"[red]{text}[/red]" if alert else text)

    async def set_commands(self, commands: List[Tuple[str, str]]) -> None:
        for command, description in commands:
            console.print(f"[green]{command}[/green] - {description}")


def parse_line(line: str, ids: "itertools.count") -> FlowEvent:
    if line.startswith("!"):
        return FlowEvent.callback(line[1:], callback_id=str(next(ids)), subject=SUBJECT)
    if line.startswith("~"):
        ref, _, text = line[1:].partition(" ")
        return FlowEvent.edit(text, message_id=int(ref), subject=SUBJECT)
    message_id = next(ids)
    console.print(f"[dim]your message #{message_id}[/dim]")
    return FlowEvent.message(line, message_id=message_id, subject=SUBJECT)


async def _loop(dispatcher: FlowDispatcher, ids: "itertools.count") -> None:
    await dispatcher.register_commands()
    while True:
        try:
            line = console.input("[bold]> [/bold]").strip()
        except EOFError:
            break
        if line == ":q":
            break
        if not line:
            continue
        try:
            event = parse_line(line, ids)
        except ValueError:
            console.print("[red]Usage: ~ID text[/red]")
            continue
        result = await dispatcher.handle(event)
        console.print(f"[dim]{result.outcome.value}[/dim]")


def _run(name: str, root: Any, state_dir: str, debug: bool) -> None:
    setup_logging(level="DEBUG" if debug else "WARNING", log_format="text")
    # one directory per demo, their root flows differ
    store = FileStateStore(os.path.join(state_dir, name))
    ids = itertools.count(1)
    dispatcher = FlowDispatcher(ConsoleTransport(ids), root, store=store, debug=debug)
    asyncio.run(_loop(dispatcher, ids))
    if debug and dispatcher.registry.latest() is not None:
        console.print(render_state(dispatcher.registry.latest()))


STATE_DIR_OPTION = typer.Option(DEFAULT_STATE_DIR, "--dir", "-d", envvar="REPLAYFLOW_STATE_DIR")
DEBUG_OPTION = typer.Option(False, "--debug", help="Keep full traces and print the last tree on exit")


@app.command("counter")
def counter_command(state_dir: str = STATE_DIR_OPTION, debug: bool = DEBUG_OPTION):
    """Counter with Increment / Add 10 / Double buttons. Start with /start."""
    _run("counter", [Command("/start", "Start a new counter", counter())], state_dir, debug)


@app.command("todo")
def todo_command(state_dir: str = STATE_DIR_OPTION, debug: bool = DEBUG_OPTION):
    """To-do list: send text to add, /checkN to tick off."""
    _run("todo", todo(TodoLists()), state_dir, debug)


@app.command("blackjack")
def blackjack_command(state_dir: str = STATE_DIR_OPTION, debug: bool = DEBUG_OPTION):
    """Blackjack against the dealer. Start with /new, see /stats."""
    scoreboard = Scoreboard()
    _run(
        "blackjack",
        [
            Command("/new", "Start a new game", blackjack(scoreboard, dealer_delay=0.5)),
            Command("/stats", "Show play statistics", stats(scoreboard)),
        ],
        state_dir,
        debug,
    )

