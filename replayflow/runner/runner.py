"""
Root driver: advance a continuation tree by one event.

execute() never lets the suspend signal escape and converts handler faults
into a terminal, error-carrying continuation.
"""

import logging
import traceback
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from ..core.context import RunContext
from ..core.errors import FlowSuspended
from ..core.flow import Flow
from ..core.state import FlowState

logger = logging.getLogger(__name__)


class Outcome(str, Enum):
    COMPLETED = "completed"
    SUSPENDED = "suspended"
    FAILED = "failed"


@dataclass(frozen=True)
class RunResult:
    """
    Result of processing one event.

    Fields:
        outcome: Completed, suspended or failed
        state: Root of the updated continuation tree
    """
    outcome: Outcome
    state: FlowState

    @property
    def should_persist(self) -> bool:
        """Only suspended trees are stored; anything else deletes the record."""
        return self.outcome is Outcome.SUSPENDED

    @property
    def error(self) -> Optional[Dict[str, Any]]:
        return self.state.error

    def serialized(self) -> Optional[str]:
        """Blob to hand to StateStore.save (None means delete)."""
        return self.state.to_json() if self.should_persist else None


def describe_error(ex: BaseException) -> Dict[str, Any]:
    """JSON form of an exception stored on continuation nodes."""
    return {
        "type": type(ex).__name__,
        "message": str(ex),
        "traceback": "".join(traceback.format_exception(type(ex), ex, ex.__traceback__)),
    }


async def execute(run: RunContext, root: Flow) -> RunResult:
    """
    Run the root flow against the context's continuation tree.

    Args:
        run: Context bound to the event and the loaded (or fresh) tree
        root: Root flow descriptor

    Returns:
        RunResult; the tree is stamped with kvs["updated"] in all cases
    """
    state = run.state

    try:
        await run.subflow(root)
        state.executed = True
        outcome = Outcome.COMPLETED
    except FlowSuspended:
        logger.debug("Flow %s suspended", state.id)
        outcome = Outcome.SUSPENDED
    except Exception as ex:
        failed = run.fault_node() or state
        error = describe_error(ex)
        failed.error = error
        state.error = dict(error)
        state.executed = True
        outcome = Outcome.FAILED
        logger.error("Flow %s failed in '%s': %s", state.id, failed.id, ex, exc_info=ex)

    state.kvs["updated"] = run.clock.now()
    return RunResult(outcome=outcome, state=state)
