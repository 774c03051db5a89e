"""
Flow descriptor: the unit of composition.
"""

from dataclasses import dataclass
from typing import Any, Awaitable, Callable

# Handler signature: async (run_context) -> JSON value
Handler = Callable[[Any], Awaitable[Any]]


@dataclass(frozen=True)
class Flow:
    """
    Immutable pairing of a stable id and an async handler.

    The id is compared against the recorded continuation on every replay,
    so it must not change for a flow invoked at the same position.

    Usage:
        async def greet(run):
            return "hi"

        await run.subflow(Flow("greet", greet))
    """
    id: str
    handler: Handler


def flow(flow_id: str) -> Callable[[Handler], Flow]:
    """
    Decorator turning an async handler into a Flow.

    Example:
        @flow("ask-name")
        async def ask_name(run):
            return (await run.prompt()).text
    """

    def wrap(handler: Handler) -> Flow:
        return Flow(id=flow_id, handler=handler)

    return wrap
