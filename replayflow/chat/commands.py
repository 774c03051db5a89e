"""
Command routing root flow.

A new command text arriving mid-conversation abandons whatever the
previous command was waiting for and starts the new one.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Sequence

from ..core.events import EventKind
from ..core.flow import Flow


@dataclass(frozen=True)
class Command:
    command: str
    description: str
    flow: Flow


def command_router(commands: Sequence[Command]) -> Flow:
    """
    Build the "root" flow dispatching on command texts like "/start".

    Non-command messages received while idle are ignored.
    """
    by_name: Dict[str, Command] = {c.command: c for c in commands}

    async def handler(run: Any) -> Any:
        event = run.intercept()
        if event.kind == EventKind.MESSAGE and event.text in by_name:
            run.reset()

        message = await run.prompt()
        command = by_name.get(message.text)
        if command is not None:
            return await run.subflow(command.flow)
        return None

    return Flow("root", handler)


def command_menu(commands: Sequence[Command]) -> List[tuple]:
    return [(c.command, c.description) for c in commands]
