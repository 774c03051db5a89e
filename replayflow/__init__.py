"""
Replayable Conversational Flows

Deterministic, resumable execution of event-driven flows whose progress
survives process restarts through a persisted continuation tree.
"""

__version__ = "0.1.0"

from .core import Flow, FlowEvent, EventKind, FlowState, RunContext
from .runner import Outcome, RunResult, execute

__all__ = [
    "__version__",
    "Flow",
    "FlowEvent",
    "EventKind",
    "FlowState",
    "RunContext",
    "Outcome",
    "RunResult",
    "execute",
]
