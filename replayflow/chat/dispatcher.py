"""
FlowDispatcher: per-subject load -> execute -> save loop.

The dispatcher does not serialize concurrent events of one subject; the
transport must deliver them one at a time.
"""

from typing import Any, Optional, Sequence, Union

from ..core.errors import FlowError
from ..core.events import EventKind, FlowEvent
from ..core.flow import Flow
from ..debug.registry import DebugRegistry
from ..logging_config import get_logger
from ..runner.runner import RunResult, execute
from ..storage.memory_store import InMemoryStateStore
from ..storage.store import StateStore
from .commands import Command, command_menu, command_router
from .run import ChatFlowRun
from .transport import ChatTransport

FAILURE_ALERT = "Something went wrong"


class FlowDispatcher:
    """
    Feeds inbound events to a root flow, one subject at a time.

    Usage:
        dispatcher = FlowDispatcher(transport, [Command("/start", "Start", counter())])
        await dispatcher.register_commands()
        await dispatcher.handle(FlowEvent.message("/start", subject="42"))
    """

    def __init__(
        self,
        transport: ChatTransport,
        root: Union[Flow, Sequence[Command]],
        store: Optional[StateStore] = None,
        debug: bool = False,
        registry: Optional[DebugRegistry] = None,
        clock: Optional[Any] = None,
    ) -> None:
        self.transport = transport
        self.store = store if store is not None else InMemoryStateStore()
        self.debug = debug
        self.registry = registry if registry is not None else DebugRegistry()
        self.clock = clock

        if isinstance(root, Flow):
            self.commands: Sequence[Command] = []
            self.root = root
        else:
            self.commands = list(root)
            self.root = command_router(self.commands)

    async def register_commands(self) -> None:
        if self.commands:
            await self.transport.set_commands(command_menu(self.commands))

    async def handle(self, event: FlowEvent, subject: Optional[str] = None) -> RunResult:
        """
        Process one event for a subject.

        Raises:
            FlowError: If no subject can be determined
            StateStoreError: If loading or saving the continuation fails
        """
        subject = subject or event.subject
        if subject is None:
            raise FlowError("Could not find subject for event")

        log = get_logger(__name__, subject=subject)
        log.info("Handling %s event", event.kind)

        try:
            stored = self.store.load(subject)
            run = ChatFlowRun(self.transport, subject, event, stored, debug=self.debug, clock=self.clock)
            result = await execute(run, self.root)

            if result.error is not None:
                log.error("Flow failed: %s: %s", result.error["type"], result.error["message"])

            self.store.save(subject, result.serialized())

            if self.debug:
                self.registry.record(result.state)

            if event.kind == EventKind.CALLBACK and event.callback_id is not None:
                if result.error is not None:
                    await self.transport.answer_callback(event.callback_id, FAILURE_ALERT, alert=True)
                else:
                    await self.transport.answer_callback(event.callback_id)
        except Exception:
            log.exception("Error while processing event")
            raise

        log.info("Event processed: %s", result.outcome.value)
        return result
