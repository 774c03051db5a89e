"""
Core replay primitives.

This module provides the foundational abstractions for resumable flows:
- Flow: Descriptor pairing a stable id with an async handler
- FlowState: Persisted continuation tree
- RunContext: Replays/extends the tree for one event
- FlowEvent: Closed tagged union of inbound events
- Canonical: Deterministic serialization and structural cloning
- Clock: Timestamp source for bookkeeping keys
"""

from .events import EventKind, FlowEvent
from .flow import Flow, flow
from .state import FlowState
from .context import Frame, RunContext
from .canonical import canonicalize, canonical_json_str, clone
from .clock import FixedClock, SystemClock
from .ids import new_root_id
from .errors import DeterminismError, FlowError, FlowStateError, FlowSuspended, StateStoreError

__all__ = [
    "EventKind",
    "FlowEvent",
    "Flow",
    "flow",
    "FlowState",
    "Frame",
    "RunContext",
    "canonicalize",
    "canonical_json_str",
    "clone",
    "FixedClock",
    "SystemClock",
    "new_root_id",
    "DeterminismError",
    "FlowError",
    "FlowStateError",
    "FlowSuspended",
    "StateStoreError",
]
