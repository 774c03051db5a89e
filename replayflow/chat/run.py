"""
Chat-flavoured run context.

Wraps every outbound side effect in a subflow so that replays never send
twice, and implements waiting for input on top of consume/intercept/
interrupt/set/get.
"""

import json
from typing import Any, Awaitable, Callable, Dict, Optional, Sequence, Union

from ..core.context import RunContext
from ..core.events import EventKind, FlowEvent
from ..core.flow import Flow
from .transport import Button, ChatTransport, OutboundMessage

DEFAULT_AWAIT_KINDS = (EventKind.CALLBACK, EventKind.MESSAGE)


def edited_key(message_id: Any) -> str:
    return f"edited-message-{message_id}"


class ChatFlowRun(RunContext):
    """
    RunContext bound to a transport and a chat.

    Usage:
        run = ChatFlowRun(transport, "42", event, stored_blob)
        result = await execute(run, root)
    """

    def __init__(
        self,
        transport: ChatTransport,
        chat: str,
        event: FlowEvent,
        state: Any = None,
        debug: bool = False,
        clock: Optional[Any] = None,
    ) -> None:
        super().__init__(event, state, debug=debug, clock=clock)
        self.transport = transport
        self.chat = chat

    async def memo(self, func: Callable[[], Awaitable[Any]]) -> Any:
        """Run func once and replay its result afterwards (random values, API reads)."""

        async def handler(run: "ChatFlowRun") -> Any:
            return await func()

        return await self.subflow(Flow("memo", handler))

    async def send(
        self,
        content: Union[str, Dict[str, Any]],
        replace: Optional[int] = None,
        reply: Optional[int] = None,
        buttons: Optional[Sequence[Sequence[Button]]] = None,
        parse_mode: Optional[str] = None,
        disable_preview: bool = False,
    ) -> Dict[str, Any]:
        """
        Send a message, or edit message ``replace`` in place.

        Returns the transport's message dict.
        """
        message = OutboundMessage.build(
            content, buttons=buttons, parse_mode=parse_mode, reply_to=reply, disable_preview=disable_preview
        )

        async def handler(run: "ChatFlowRun") -> Dict[str, Any]:
            if replace is not None:
                return await run.transport.edit_message(run.chat, replace, message)
            return await run.transport.send_message(run.chat, message)

        return await self.subflow(Flow("send", handler))

    async def delete(self, message_id: int) -> None:
        async def handler(run: "ChatFlowRun") -> None:
            await run.transport.delete_message(run.chat, message_id)

        await self.subflow(Flow("delete", handler))

    async def input(
        self,
        message: Optional[str] = None,
        delete: bool = False,
        watch: bool = False,
        await_kinds: Sequence[str] = DEFAULT_AWAIT_KINDS,
    ) -> FlowEvent:
        """
        Wait for the next event of one of ``await_kinds``.

        Args:
            message: Prompt to send before waiting
            delete: Delete the user's message once received
            watch: If the received message is edited before the flow moves
                on, return the edited version instead
            await_kinds: Event kinds that satisfy the wait
        """
        awaited = tuple(await_kinds)

        async def handler(run: "ChatFlowRun") -> Dict[str, Any]:
            if message is not None:
                await run.send(message)

            event = run.consume()
            if event.kind not in awaited:
                run.interrupt()

            if event.kind == EventKind.MESSAGE and delete and event.message_id is not None:
                await run.transport.delete_message(run.chat, event.message_id)

            return event.to_dict()

        result = FlowEvent.from_dict(await self.subflow(Flow("input", handler)))

        if result.kind == EventKind.CALLBACK or not watch:
            return result

        key = edited_key(result.message_id)
        current = self.intercept()
        if current.kind == EventKind.EDIT and current.message_id == result.message_id:
            self.set(key, json.dumps(current.to_dict()))
            self.interrupt()

        saved = self.get(key)
        return result if saved is None else FlowEvent.from_dict(json.loads(saved))

    async def prompt(self, message: Optional[str] = None, delete: bool = False, watch: bool = False) -> FlowEvent:
        """Wait for a plain message."""
        return await self.input(message=message, delete=delete, watch=watch, await_kinds=(EventKind.MESSAGE,))

    async def callback(self, message: Optional[str] = None) -> FlowEvent:
        """Wait for a button press."""
        return await self.input(message=message, await_kinds=(EventKind.CALLBACK,))
