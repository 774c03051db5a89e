"""
Exception types for the flow engine.
"""


class FlowError(Exception):
    """Base class for engine errors."""
    pass


class DeterminismError(FlowError):
    """Raised when a replayed flow invokes a different subflow than the one recorded."""
    pass


class FlowStateError(FlowError):
    """Raised when a continuation tree is malformed or the frame stack is empty."""
    pass


class StateStoreError(FlowError):
    """Raised when state store operations fail."""
    pass


class FlowSuspended(BaseException):
    """
    Control signal: stop processing the current event and keep the state as-is.

    Not an error. Derives from BaseException so that handler code catching
    Exception does not swallow a suspension by accident.
    """
    pass
