"""
RunContext: replays and extends a continuation tree for one inbound event.

Handlers call back into the context for everything that must survive a
restart: subflow invocations (memoized), the current event, suspension,
and per-node scratch values. Anything a handler does outside of these
calls runs again on every replay.
"""

from dataclasses import dataclass
from typing import Any, List, Optional, Union

from .canonical import clone
from .clock import SystemClock
from .errors import DeterminismError, FlowStateError, FlowSuspended
from .events import FlowEvent
from .flow import Flow
from .ids import new_root_id
from .state import FlowState


@dataclass
class Frame:
    """One entry of the explicit call stack: a node and its next child index."""
    node: FlowState
    step: int = 0


class RunContext:
    """
    Execution engine for a single event.

    Usage:
        run = RunContext(event, stored_blob)
        result = await execute(run, root_flow)

    The context owns the continuation tree until execute() returns.
    A new context must be created for every event.
    """

    def __init__(
        self,
        event: FlowEvent,
        state: Union[str, FlowState, None] = None,
        debug: bool = False,
        clock: Optional[Any] = None,
    ) -> None:
        """
        Args:
            event: The inbound event being processed
            state: Serialized continuation, a FlowState, or None for a fresh tree
            debug: Keep subflow traces of executed nodes
            clock: Object with now() -> str (default: SystemClock)
        """
        self.event = event
        self.debug = debug
        self.clock = clock or SystemClock()
        self._consumed = False
        self._fault_exc: Optional[BaseException] = None
        self._fault_node: Optional[FlowState] = None

        if isinstance(state, str):
            root = FlowState.from_json(state)
        elif isinstance(state, FlowState):
            root = state
        else:
            root = FlowState(id=new_root_id(), kvs={"created": self.clock.now()})

        self._stack: List[Frame] = [Frame(root)]

    @property
    def state(self) -> FlowState:
        """Root of the continuation tree."""
        if not self._stack:
            raise FlowStateError("Invalid state, stack is empty")
        return self._stack[0].node

    @property
    def depth(self) -> int:
        return len(self._stack)

    def fault_node(self) -> Optional[FlowState]:
        """Innermost node whose handler raised the last handler fault."""
        return self._fault_node

    def interrupt(self) -> None:
        """Stop processing this event; the tree is persisted as-is."""
        raise FlowSuspended()

    def intercept(self) -> FlowEvent:
        """Peek at the current event without spending it."""
        return self.event

    def consume(self) -> FlowEvent:
        """
        Take the current event.

        Only the first call in a pass returns; later calls suspend, since
        the event has already been handed to an earlier waiting point.
        """
        if self._consumed:
            raise FlowSuspended()
        self._consumed = True
        return self.event

    def reset(self) -> None:
        """Drop every recorded child of the current node from the next step on."""
        frame = self._frame()
        del frame.node.subflows[frame.step:]

    def set(self, key: str, value: str) -> None:
        if not isinstance(key, str) or not isinstance(value, str):
            raise TypeError("kvs keys and values must be strings")
        self._frame().node.kvs[key] = value

    def get(self, key: str) -> Optional[str]:
        return self._frame().node.kvs.get(key)

    async def subflow(self, flow: Flow) -> Any:
        """
        Invoke a flow at the next position of the current node.

        Runs the handler unless the recorded child at this position has
        already executed, in which case its stored result is returned.

        Raises:
            DeterminismError: If the recorded child has a different id
        """
        current = self._frame()
        children = current.node.subflows

        if current.step < len(children):
            child = children[current.step]
            if child.id != flow.id:
                raise DeterminismError(
                    f"Non-deterministic flow at position {current.step} of '{current.node.id}': "
                    f"recorded '{child.id}', invoked '{flow.id}'"
                )
        else:
            child = FlowState(id=flow.id)
            children.append(child)

        if not child.executed:
            self._stack.append(Frame(child))
            try:
                # stored and returned values are separate copies
                result = clone(await flow.handler(self))
            except FlowSuspended:
                raise
            except Exception as ex:
                if self._fault_exc is not ex:
                    self._fault_exc = ex
                    self._fault_node = child
                raise
            finally:
                self._stack.pop()

            child.result = result
            child.executed = True
            if not self.debug:
                child.subflows = []

        current.step += 1
        return clone(child.result)

    def _frame(self) -> Frame:
        if not self._stack:
            raise FlowStateError("Invalid state, stack is empty")
        return self._stack[-1]
